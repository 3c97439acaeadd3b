"""Shared fixtures for skills API tests."""

from __future__ import annotations

import os

# Set env vars BEFORE importing the app so no real database is touched.
os.environ["DATABASE_URL"] = ""
os.environ["SKILLS_AUTO_CREATE_SCHEMA"] = "false"
os.environ["SKILLS_CATALOG_CACHE_TTL_SECONDS"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.pool import StaticPool

from skillbench.api.skills import get_catalog_cache, get_skill_store
from skillbench.main import app
from skillbench.schema import ensure_schema, seed_catalog
from skillbench.skills.cache import CatalogCache
from skillbench.skills.corpus import corpus_rows
from skillbench.skills.loader import load_validated_catalog
from skillbench.skills.store import SqlAlchemyStore
from skillbench.skills.types import Provenance, SecurityReview, SkillRecord


def memory_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def blank_engine():
    """Empty in-memory SQLite database."""
    eng = memory_engine()
    yield eng
    eng.dispose()


@pytest.fixture()
def engine():
    """In-memory SQLite database holding the full curated corpus."""
    eng = memory_engine()
    ensure_schema(eng)
    seed_catalog(eng, corpus_rows())
    yield eng
    eng.dispose()


@pytest.fixture()
def execute(engine):
    """Run raw SQL against the test database (used to corrupt the corpus)."""

    def _execute(sql: str, **params) -> None:
        with engine.begin() as conn:
            conn.execute(text(sql), params)

    return _execute


@pytest.fixture()
def store(engine):
    return SqlAlchemyStore(engine)


@pytest.fixture()
def catalog(store):
    return load_validated_catalog(store)


@pytest.fixture()
def make_client():
    """Build a TestClient whose skills endpoints read from ``store``."""
    clients: list[TestClient] = []

    def _make(store, cache: CatalogCache | None = None) -> TestClient:
        app.dependency_overrides[get_skill_store] = lambda: store
        app.dependency_overrides[get_catalog_cache] = lambda: cache or CatalogCache(0)
        client = TestClient(app, raise_server_exceptions=False)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client, store):
    return make_client(store)


@pytest.fixture()
def make_skill():
    """Factory for approved skills with no stored embedding."""

    def _make(slug: str, *, summary: str = "", description: str = "", keywords=(), status="approved"):
        return SkillRecord(
            id=f"skill-{slug}",
            slug=slug,
            name=slug.replace("-", " ").title(),
            agent_family="multi",
            summary=summary,
            description=description,
            keywords=tuple(keywords),
            source_url=f"https://example.com/{slug}",
            imported_from="tests",
            provenance=Provenance(
                source_url=f"https://example.com/{slug}",
                repository="example.com",
                imported_from="tests",
                license="MIT",
                last_verified_at="2026-02-14T03:00:00.000Z",
                checksum=f"curated:{slug}",
            ),
            security_review=SecurityReview(
                status=status,
                reviewed_by="tests",
                reviewed_at="2026-02-14T03:00:00.000Z",
                review_method="manual",
                checklist_version="v1",
                notes="",
            ),
        )

    return _make
