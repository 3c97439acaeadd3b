from __future__ import annotations

from sqlalchemy import Engine, create_engine

from skillbench.settings import settings


def build_engine(database_url: str) -> Engine:
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync routes in a threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


# An empty DATABASE_URL leaves the skills API without a store (503 on every read).
engine: Engine | None = build_engine(settings.database_url) if settings.database_url else None
