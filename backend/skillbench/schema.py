from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from skillbench.models import Base, Skill, SkillBenchmarkRunRow, SkillTaskRow, SkillTaskScoreRow


def ensure_schema(engine: Engine) -> None:
    """
    Minimal, additive schema guard for local dev.

    Creates the skill catalog tables that are missing and leaves existing ones untouched, so a
    database provisioned before the optional provenance/review/embedding columns keeps working;
    the catalog loader detects those columns at read time.
    """
    Base.metadata.create_all(engine, checkfirst=True)


_ROW_MODELS = {
    "skill_tasks": SkillTaskRow,
    "skills": Skill,
    "skill_benchmark_runs": SkillBenchmarkRunRow,
    "skill_task_scores": SkillTaskScoreRow,
}


def seed_catalog(engine: Engine, rows: Mapping[str, Iterable[Mapping[str, Any]]]) -> dict[str, int]:
    """Upsert catalog rows keyed by table name; re-running with the same rows is a no-op."""
    counts: dict[str, int] = {}
    with Session(engine) as session, session.begin():
        for table, model in _ROW_MODELS.items():
            count = 0
            for row in rows.get(table, ()):
                session.merge(model(**row))
                count += 1
            counts[table] = count
    return counts
