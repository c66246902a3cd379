from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from brandbook.core.config import get_settings


def create_upload_token(slot_id: str, expire_minutes: int | None = None) -> str:
    """Signed handle for a single blob upload slot."""
    s = get_settings()
    minutes = expire_minutes if expire_minutes is not None else s.upload_url_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"sub": slot_id, "exp": expire, "scope": "upload"}
    return jwt.encode(to_encode, s.upload_token_secret, algorithm=s.upload_token_algorithm)


def decode_upload_token(token: str) -> Optional[str]:
    """Return the upload slot id, or None if the token is invalid or expired."""
    s = get_settings()
    try:
        payload = jwt.decode(token, s.upload_token_secret, algorithms=[s.upload_token_algorithm])
    except JWTError:
        return None
    if payload.get("scope") != "upload":
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None
