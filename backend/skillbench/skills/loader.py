from __future__ import annotations

import json
import logging
import math
from typing import Any
from urllib.parse import urlparse

from skillbench.skills.embedding import hash_token
from skillbench.skills.errors import CatalogIntegrityError, CatalogLoadError, SkillsError, StoreUnavailableError
from skillbench.skills.integrity import validate
from skillbench.skills.store import Row, SkillStore
from skillbench.skills.types import (
    Provenance,
    SecurityReview,
    SkillBenchmarkRun,
    SkillCatalog,
    SkillRecord,
    SkillScore,
    SkillTask,
)

logger = logging.getLogger(__name__)

EPOCH_TIMESTAMP = "1970-01-01T00:00:00.000Z"

# Optional `skills` columns, selected only when the table has them.
OPTIONAL_SKILL_COLUMNS = ("provenance_json", "security_review_json", "embedding_json")

_BASE_SKILL_COLUMNS = (
    "id",
    "slug",
    "name",
    "agent_family",
    "summary",
    "description",
    "keywords_json",
    "source_url",
    "imported_from",
    "security_status",
    "security_notes",
    "created_at",
    "updated_at",
)

TASKS_SQL = "select id, slug, name, description, category, tags_json from skill_tasks order by name asc"
RUNS_SQL = """
    select id, runner, mode, status, started_at, completed_at, artifact_path, notes
    from skill_benchmark_runs
    order by started_at desc
"""
SCORES_SQL = """
    select
      s.id, s.run_id, s.skill_id, s.task_id, s.agent,
      s.overall_score, s.quality_score, s.security_score, s.speed_score, s.cost_score,
      s.success_rate, s.artifact_path, s.created_at,
      t.slug as task_slug, t.name as task_name
    from skill_task_scores s
    left join skill_tasks t on t.id = s.task_id
    order by s.created_at desc
"""


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_catalog(store: SkillStore) -> SkillCatalog:
    """Read every catalog table and assemble an unvalidated snapshot."""
    try:
        return _read_catalog(store)
    except SkillsError:
        raise
    except Exception as exc:
        logger.exception("Failed to load skills catalog")
        raise CatalogLoadError(f"catalog rows could not be read ({type(exc).__name__})") from exc


def load_validated_catalog(store: SkillStore) -> SkillCatalog:
    catalog = load_catalog(store)
    violation = validate(catalog)
    if violation is not None:
        logger.warning("Skills catalog rejected by integrity gate: %s", violation)
        raise CatalogIntegrityError(violation)
    return catalog


def _read_catalog(store: SkillStore) -> SkillCatalog:
    skill_columns = store.list_columns("skills")
    if not skill_columns:
        raise StoreUnavailableError("skills tables are not provisioned")

    optional = [column for column in OPTIONAL_SKILL_COLUMNS if column in skill_columns]
    logger.debug("Optional skill columns present: %s", optional or "none")
    skill_select = ", ".join([*_BASE_SKILL_COLUMNS, *optional])

    skill_rows = store.query_all(f"select {skill_select} from skills order by name asc")
    task_rows = store.query_all(TASKS_SQL)
    run_rows = store.query_all(RUNS_SQL)
    score_rows = store.query_all(SCORES_SQL)

    catalog = SkillCatalog(
        tasks=tuple(_task_from_row(row) for row in task_rows),
        skills=tuple(_skill_from_row(row) for row in skill_rows),
        runs=tuple(_run_from_row(row) for row in run_rows),
        scores=tuple(_score_from_row(row) for row in score_rows),
    )
    logger.info(
        "Loaded skills catalog tasks=%d skills=%d runs=%d scores=%d",
        len(catalog.tasks),
        len(catalog.skills),
        len(catalog.runs),
        len(catalog.scores),
    )
    return catalog


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------

def _task_from_row(row: Row) -> SkillTask:
    return SkillTask(
        id=string_from(row.get("id")),
        slug=string_from(row.get("slug")),
        name=string_from(row.get("name")),
        description=string_from(row.get("description")),
        category=string_from(row.get("category"), "general"),
        tags=tuple(string_list(row.get("tags_json"))),
    )


def _skill_from_row(row: Row) -> SkillRecord:
    source_url = string_from(row.get("source_url"))
    imported_from = string_from(row.get("imported_from"))
    review = parse_security_review(
        row.get("security_review_json"),
        legacy_status=row.get("security_status"),
        legacy_notes=string_from(row.get("security_notes")),
    )
    return SkillRecord(
        id=string_from(row.get("id")),
        slug=string_from(row.get("slug")),
        name=string_from(row.get("name")),
        agent_family=map_agent_family(row.get("agent_family")),
        summary=string_from(row.get("summary")),
        description=string_from(row.get("description")),
        keywords=tuple(string_list(row.get("keywords_json"))),
        source_url=source_url,
        imported_from=imported_from,
        provenance=parse_provenance(row.get("provenance_json"), source_url, imported_from),
        security_review=review,
        embedding=tuple(number_list(row.get("embedding_json"))),
        created_at=string_from(row.get("created_at")),
        updated_at=string_from(row.get("updated_at")),
    )


def _run_from_row(row: Row) -> SkillBenchmarkRun:
    return SkillBenchmarkRun(
        id=string_from(row.get("id")),
        runner=string_from(row.get("runner")),
        mode=string_from(row.get("mode")),
        status=map_run_status(row.get("status")),
        started_at=string_from(row.get("started_at")),
        completed_at=string_or_none(row.get("completed_at")),
        artifact_path=string_from(row.get("artifact_path")),
        notes=string_from(row.get("notes")),
    )


def _score_from_row(row: Row) -> SkillScore:
    return SkillScore(
        id=string_from(row.get("id")),
        run_id=string_from(row.get("run_id")),
        skill_id=string_from(row.get("skill_id")),
        task_id=string_from(row.get("task_id")),
        task_slug=string_from(row.get("task_slug")),
        task_name=string_from(row.get("task_name")),
        agent=string_from(row.get("agent")),
        overall_score=number_from(row.get("overall_score")),
        quality_score=number_from(row.get("quality_score")),
        security_score=number_from(row.get("security_score")),
        speed_score=number_from(row.get("speed_score")),
        cost_score=number_from(row.get("cost_score")),
        success_rate=number_from(row.get("success_rate")),
        artifact_path=string_from(row.get("artifact_path")),
        created_at=string_from(row.get("created_at")),
    )


def parse_provenance(value: object, source_url: str, imported_from: str) -> Provenance:
    parsed = json_object(value) or {}
    return Provenance(
        source_url=string_from(parsed.get("sourceUrl"), source_url),
        repository=string_from(parsed.get("repository"), repository_from_url(source_url)),
        imported_from=string_from(parsed.get("importedFrom"), imported_from),
        license=string_from(parsed.get("license"), "Unknown"),
        last_verified_at=string_from(parsed.get("lastVerifiedAt"), EPOCH_TIMESTAMP),
        checksum=string_from(parsed.get("checksum"), f"legacy:{hash_token(source_url, 997)}"),
    )


def parse_security_review(value: object, *, legacy_status: object, legacy_notes: str) -> SecurityReview:
    parsed = json_object(value) or {}
    status = parsed.get("status")
    return SecurityReview(
        status=map_security_status(status if status is not None else legacy_status),
        reviewed_by=string_from(parsed.get("reviewedBy"), "unreviewed"),
        reviewed_at=string_from(parsed.get("reviewedAt"), EPOCH_TIMESTAMP),
        review_method=string_from(parsed.get("reviewMethod"), "legacy-column"),
        checklist_version=string_from(parsed.get("checklistVersion"), "unversioned"),
        notes=string_from(parsed.get("notes"), legacy_notes),
    )


def repository_from_url(source_url: str) -> str:
    try:
        parsed = urlparse(source_url)
    except ValueError:
        return "unknown"
    if not parsed.scheme or not parsed.netloc:
        return "unknown"
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parsed.hostname or "unknown"


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

def string_from(value: object, fallback: str = "") -> str:
    if isinstance(value, str):
        return value if value.strip() else fallback
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return fallback


def string_or_none(value: object) -> str | None:
    text = string_from(value)
    return text or None


def number_from(value: object, fallback: float = 0.0) -> float:
    if isinstance(value, bool):
        return fallback
    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback
    return parsed if math.isfinite(parsed) else fallback


def _json_value(value: object) -> Any:
    # Postgres drivers hand back decoded JSON; SQLite hands back text.
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except ValueError:
        return None


def json_object(value: object) -> dict[str, Any] | None:
    parsed = _json_value(value)
    return parsed if isinstance(parsed, dict) else None


def string_list(value: object) -> list[str]:
    parsed = _json_value(value)
    if not isinstance(parsed, list):
        return []
    return [entry for entry in parsed if isinstance(entry, str)]


def number_list(value: object) -> list[float]:
    parsed = _json_value(value)
    if not isinstance(parsed, list):
        return []
    numbers = []
    for entry in parsed:
        if isinstance(entry, bool):
            continue
        number = number_from(entry, math.nan)
        if math.isfinite(number):
            numbers.append(number)
    return numbers


def map_agent_family(value: object) -> str:
    return value if value in ("codex", "claude", "gemini") else "multi"


def map_run_status(value: object) -> str:
    return value if value in ("failed", "running") else "completed"


def map_security_status(value: object) -> str:
    return value if value in ("pending", "rejected") else "approved"
