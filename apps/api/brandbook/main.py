import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from brandbook.core import get_settings, limiter
from brandbook.db import engine
from brandbook.providers import ChatConfigError, get_chat_provider
from brandbook.routers import ROUTERS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    try:
        provider = get_chat_provider()
    except ChatConfigError as e:
        # Imports still work up to extraction; extract-fields will fail each record with this message
        logger.warning("%s", e)
    else:
        logger.info("Field extraction via %s (%s)", type(provider).__name__, provider.model)
    yield
    await engine.dispose()


app = FastAPI(
    title="Brandbook API",
    description="Brand guidelines records with document import: acquire, extract, review, merge.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ROUTERS:
    app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
