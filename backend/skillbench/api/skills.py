from __future__ import annotations

import json
import math
from typing import Any

from fastapi import APIRouter, Depends, Request

from skillbench.db import engine
from skillbench.schemas import RecommendationQuery
from skillbench.settings import settings
from skillbench.skills.benchmarks import compute_coverage, group_scores_by_task, summarise_skill
from skillbench.skills.cache import CatalogCache
from skillbench.skills.errors import (
    InvalidQueryError,
    MethodNotAllowedError,
    NoMatchError,
    NotFoundError,
    SkillNotFoundError,
    StoreUnavailableError,
)
from skillbench.skills.loader import load_validated_catalog
from skillbench.skills.ranker import recommend
from skillbench.skills.store import SkillStore, SqlAlchemyStore
from skillbench.skills.types import SkillCatalog

router = APIRouter()

catalog_cache = CatalogCache(ttl_seconds=settings.skills_catalog_cache_ttl_seconds)

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]
_RESOURCE_METHODS: dict[str, list[str]] = {
    "catalog": ["GET"],
    "tasks": ["GET"],
    "scores": ["GET"],
    "benchmarks": ["GET"],
    "recommend": ["GET", "POST"],
}


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_skill_store() -> SkillStore | None:
    if engine is None:
        return None
    return SqlAlchemyStore(engine)


def get_catalog_cache() -> CatalogCache:
    return catalog_cache


def get_catalog(
    store: SkillStore | None = Depends(get_skill_store),
    cache: CatalogCache = Depends(get_catalog_cache),
) -> SkillCatalog:
    """Validated catalog for this request; raises instead of serving a catalog that fails the gate."""
    if store is None:
        raise StoreUnavailableError("skills database is not configured")
    return cache.get(lambda: load_validated_catalog(store))


# ---------------------------------------------------------------------------
# Catalog views
# ---------------------------------------------------------------------------

@router.get("/api/skills")
def list_skills(catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    return {
        "source": catalog.source,
        "skills": [summarise_skill(skill, catalog.scores) for skill in catalog.skills],
        "total": len(catalog.skills),
    }


@router.get("/api/skills/catalog")
def full_catalog(catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    return {
        "source": catalog.source,
        "tasks": [task.to_dict() for task in catalog.tasks],
        "skills": [skill.to_dict() for skill in catalog.skills],
        "runs": [run.to_dict() for run in catalog.runs],
        "scores": [score.to_dict() for score in catalog.scores],
        "coverage": compute_coverage(catalog),
    }


@router.get("/api/skills/tasks")
def list_tasks(catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    return {
        "source": catalog.source,
        "tasks": [task.to_dict() for task in catalog.tasks],
        "total": len(catalog.tasks),
    }


@router.get("/api/skills/scores")
def list_scores(catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    return {
        "source": catalog.source,
        "scores": [score.to_dict() for score in catalog.scores],
        "total": len(catalog.scores),
    }


@router.get("/api/skills/benchmarks")
def list_benchmarks(catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    return {
        "source": catalog.source,
        "runs": [run.to_dict() for run in catalog.runs],
        "scores": [score.to_dict() for score in catalog.scores],
        "total": len(catalog.runs),
        "coverage": compute_coverage(catalog),
    }


# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------

@router.get("/api/skills/recommend")
def recommend_get(request: Request, catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    params = request.query_params
    query = RecommendationQuery(
        task=params.get("task", ""),
        agent=params.get("agent"),
        limit=_number_param(params.get("limit")),
    )
    return _recommendation_response(catalog, query)


@router.post("/api/skills/recommend")
async def recommend_post(request: Request, catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    body = await _json_body(request)
    query = RecommendationQuery(
        task=body.get("task"),
        agent=body.get("agent"),
        limit=body.get("limit"),
    )
    return _recommendation_response(catalog, query)


def _recommendation_response(catalog: SkillCatalog, query: RecommendationQuery) -> dict:
    if not query.has_valid_task:
        raise InvalidQueryError(hint="Provide at least 8 characters.")
    result = recommend(catalog, query)
    if result.best is None:
        raise NoMatchError()
    return {
        "source": catalog.source,
        "query": query.model_dump(),
        "retrievalStrategy": result.strategy,
        "recommendation": result.best.to_dict(),
        "candidates": [entry.to_dict() for entry in result.candidates],
        "benchmarkContext": {
            "runs": len(catalog.runs),
            "taskCoverage": len({score.task_id for score in catalog.scores}),
        },
    }


async def _json_body(request: Request) -> dict[str, Any]:
    # A body that is not a JSON object is treated as an empty query (-> invalid_task).
    try:
        body = json.loads(await request.body() or b"null")
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _number_param(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


# ---------------------------------------------------------------------------
# Skill detail
# ---------------------------------------------------------------------------

@router.get("/api/skills/{id_or_slug}")
def get_skill(id_or_slug: str, catalog: SkillCatalog = Depends(get_catalog)) -> dict:
    skill = catalog.find_skill(id_or_slug)
    if skill is None:
        raise SkillNotFoundError(skill=id_or_slug)
    scores = catalog.scores_for(skill.id)
    return {
        "source": catalog.source,
        "skill": {
            **skill.to_dict(),
            "summaryStats": summarise_skill(skill, catalog.scores),
            "scores": [score.to_dict() for score in scores],
            "byTask": group_scores_by_task(scores),
        },
    }


# ---------------------------------------------------------------------------
# Fallthrough: wrong method on a known resource, or an unknown path
# ---------------------------------------------------------------------------

@router.api_route("/api/skills", methods=_ALL_METHODS, include_in_schema=False)
def skills_root_fallthrough() -> None:
    raise MethodNotAllowedError(["GET"])


@router.api_route("/api/skills/{rest:path}", methods=_ALL_METHODS, include_in_schema=False)
def skills_fallthrough(rest: str) -> None:
    segments = [segment for segment in rest.split("/") if segment]
    if len(segments) != 1:
        raise NotFoundError()
    raise MethodNotAllowedError(_RESOURCE_METHODS.get(segments[0], ["GET"]))
