from slowapi import Limiter
from slowapi.util import get_remote_address

# No authentication in this service: limits are per remote address. Multi-instance needs Redis later.
limiter = Limiter(key_func=get_remote_address)
