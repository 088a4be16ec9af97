# blomsterlan/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from blomsterlan.config import get_settings


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a thread pool
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args, future=True)


@lru_cache
def get_engine() -> Engine:
    """
    Process-wide engine; each request checks out its own connection from the pool.
    Set BLOMSTERLAN_DATABASE_ECHO=true to see SQL printed in the terminal.
    """
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.database_echo)
