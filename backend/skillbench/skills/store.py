from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from sqlalchemy import Connection, Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from skillbench.skills.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class SkillStore(Protocol):
    """Read-only row store the catalog loader depends on."""

    def query_all(self, sql: str, bindings: Mapping[str, Any] | None = None) -> list[Row]: ...

    def list_columns(self, table: str) -> set[str]: ...


class SqlAlchemyStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _connect(self) -> Connection:
        try:
            return self.engine.connect()
        except SQLAlchemyError as exc:
            logger.error("Skills store connection failed: %s", exc)
            raise StoreUnavailableError("could not connect to the skills database") from exc

    def query_all(self, sql: str, bindings: Mapping[str, Any] | None = None) -> list[Row]:
        with self._connect() as conn:
            rows = conn.execute(text(sql), dict(bindings or {})).mappings().all()
        return [dict(row) for row in rows]

    def list_columns(self, table: str) -> set[str]:
        with self._connect() as conn:
            inspector = inspect(conn)
            if not inspector.has_table(table):
                return set()
            return {str(column["name"]) for column in inspector.get_columns(table)}
