from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from skillbench.skills.text import clamp
from skillbench.skills.types import SkillCatalog, SkillRecord, SkillScore


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _distinct(values: Iterable[str]) -> list[str]:
    # dict keeps first-seen order
    return list(dict.fromkeys(values))


def average_score(skill_id: str, scores: Iterable[SkillScore], agent: str | None = None) -> float:
    """Mean overall score for a skill, narrowed to ``agent`` when that agent has any rows."""
    skill_scores = [score for score in scores if score.skill_id == skill_id]
    if agent and agent != "any":
        agent_scores = [score for score in skill_scores if score.agent == agent]
        if agent_scores:
            skill_scores = agent_scores
    return _mean([score.overall_score for score in skill_scores])


def benchmark_norm(average: float) -> float:
    return clamp(average / 100, 0.0, 1.0)


def summarise_skill(skill: SkillRecord, all_scores: Iterable[SkillScore]) -> dict[str, Any]:
    scores = [score for score in all_scores if score.skill_id == skill.id]
    overall = [score.overall_score for score in scores]
    return {
        "id": skill.id,
        "slug": skill.slug,
        "name": skill.name,
        "agentFamily": skill.agent_family,
        "summary": skill.summary,
        "sourceUrl": skill.source_url,
        "importedFrom": skill.imported_from,
        "securityStatus": skill.security_status,
        "securityNotes": skill.security_notes,
        "provenance": skill.provenance.to_dict(),
        "securityReview": skill.security_review.to_dict(),
        "averageScore": round(_mean(overall), 2),
        "bestScore": round(max(overall), 2) if overall else 0.0,
        "benchmarkedTasks": len({score.task_id for score in scores}),
        "agentCoverage": _distinct(score.agent for score in scores),
        "updatedAt": skill.updated_at,
    }


def compute_coverage(catalog: SkillCatalog) -> dict[str, Any]:
    return {
        "tasksCovered": len({score.task_id for score in catalog.scores}),
        "skillsCovered": len({score.skill_id for score in catalog.scores}),
        "agentsCovered": _distinct(score.agent for score in catalog.scores),
        "scoreRows": len(catalog.scores),
    }


def group_scores_by_task(scores: Iterable[SkillScore]) -> list[dict[str, Any]]:
    grouped: dict[str, list[SkillScore]] = {}
    for score in scores:
        grouped.setdefault(score.task_id, []).append(score)
    return [
        {
            "taskId": task_id,
            "taskName": rows[0].task_name,
            "taskSlug": rows[0].task_slug,
            "averageScore": round(_mean([row.overall_score for row in rows]), 2),
            "scores": [row.to_dict() for row in rows],
        }
        for task_id, rows in grouped.items()
    ]
