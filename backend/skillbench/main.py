from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillbench.api.skills import router as skills_router
from skillbench.db import engine
from skillbench.middleware.error_handler import register_error_handlers
from skillbench.schema import ensure_schema
from skillbench.settings import settings

logger = logging.getLogger(__name__)

app = FastAPI(title="Skillbench API", version="0.1.0")


def init_sentry(dsn: str | None) -> bool:
    if not dsn:
        return False
    try:
        import sentry_sdk

        sentry_sdk.init(dsn=dsn, traces_sample_rate=0.1)
    except Exception as exc:
        # A bad DSN disables error reporting; the API still starts.
        logger.warning("Sentry disabled: %s", exc)
        return False
    return True


init_sentry(settings.sentry_dsn)

allowed_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.include_router(skills_router)


@app.get("/healthz")
def healthz() -> dict:
    return {"ok": True}


@app.on_event("startup")
def _ensure_schema() -> None:
    if engine is None or not settings.skills_auto_create_schema:
        return
    try:
        ensure_schema(engine)
    except Exception as exc:
        # Local dev convenience: don't crash the API if the DB isn't reachable yet.
        # Skills endpoints answer 503 until it is.
        logger.warning("Skipping skills schema bootstrap: %s", exc)
