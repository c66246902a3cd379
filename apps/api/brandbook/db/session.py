from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from brandbook.core.config import get_settings


def _build_engine():
    s = get_settings()
    kwargs = {"echo": s.sql_echo}
    if s.db_disable_pool:
        kwargs["poolclass"] = NullPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_async_engine(s.async_database_url, **kwargs)


engine = _build_engine()

# Import records are read back after commit (status, results); keep attributes loaded
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

Base = declarative_base()
