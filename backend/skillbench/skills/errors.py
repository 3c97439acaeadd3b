from __future__ import annotations

from typing import Any


class SkillsError(Exception):
    """Base error for the skills API; rendered as ``{"error": code, ...}``."""

    code = "skills_error"
    status_code = 500

    def __init__(self, details: str | None = None, **extra: Any) -> None:
        super().__init__(details or self.code)
        self.details = details
        self.extra = extra

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.details:
            payload["details"] = self.details
        payload.update(self.extra)
        return payload


class InvalidQueryError(SkillsError):
    code = "invalid_task"
    status_code = 400


class MethodNotAllowedError(SkillsError):
    code = "method_not_allowed"
    status_code = 405

    def __init__(self, allow: list[str]) -> None:
        super().__init__(allow=list(allow))
        self.allow = list(allow)

    @property
    def headers(self) -> dict[str, str]:
        return {"Allow": ", ".join(self.allow)}


class CatalogIntegrityError(SkillsError):
    code = "benchmark_integrity_failed"
    status_code = 409


class StoreUnavailableError(SkillsError):
    code = "skills_db_unavailable"
    status_code = 503


class CatalogLoadError(SkillsError):
    code = "skills_catalog_load_failed"
    status_code = 500


class NotFoundError(SkillsError):
    code = "not_found"
    status_code = 404


class SkillNotFoundError(NotFoundError):
    code = "skill_not_found"


class NoMatchError(NotFoundError):
    code = "no_match_found"
