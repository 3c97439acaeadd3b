"""Fail-closed integrity gate for the skills catalog.

Benchmark-backed recommendations are only meaningful when the catalog is
exactly the published corpus: 50 skills, each scored once by each of the three
agents in three real benchmark runs. ``validate`` checks those invariants in a
fixed order and reports the first violation. Nothing here repairs data; a
catalog that fails any check must not be served at all.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from skillbench.skills.types import AGENTS, REAL_BENCHMARK_MODE, SkillCatalog

EXPECTED_SKILLS = 50
EXPECTED_SCORES = 150
EXPECTED_RUNS = 3
EXPECTED_SCORES_PER_AGENT = EXPECTED_SKILLS
BLOCKED_MARKERS = ("fallback", "mock", "synthetic", "seed")


@dataclass(frozen=True)
class ValidCatalog:
    catalog: SkillCatalog


@dataclass(frozen=True)
class IntegrityViolation:
    reason: str


def check_catalog(catalog: SkillCatalog) -> ValidCatalog | IntegrityViolation:
    violation = validate(catalog)
    if violation is not None:
        return IntegrityViolation(violation)
    return ValidCatalog(catalog)


def blocked_marker(value: str) -> str | None:
    lowered = value.lower()
    for marker in BLOCKED_MARKERS:
        if marker in lowered:
            return marker
    return None


def validate(catalog: SkillCatalog) -> str | None:
    if len(catalog.skills) != EXPECTED_SKILLS:
        return f"expected exactly {EXPECTED_SKILLS} skills, found {len(catalog.skills)}"
    if len(catalog.scores) != EXPECTED_SCORES:
        return f"expected exactly {EXPECTED_SCORES} benchmark scores, found {len(catalog.scores)}"
    if len(catalog.runs) != EXPECTED_RUNS:
        return f"expected exactly {EXPECTED_RUNS} benchmark runs, found {len(catalog.runs)}"

    for run in catalog.runs:
        if run.mode != REAL_BENCHMARK_MODE:
            return f"benchmark run '{run.id}' uses mode '{run.mode}'. Only '{REAL_BENCHMARK_MODE}' is allowed"

    task_ids = {task.id for task in catalog.tasks}
    skill_ids = {skill.id for skill in catalog.skills}
    run_ids = {run.id for run in catalog.runs}
    for score in catalog.scores:
        if score.task_id not in task_ids:
            return f"score '{score.id}' references unknown task '{score.task_id}'"
        if score.skill_id not in skill_ids:
            return f"score '{score.id}' references unknown skill '{score.skill_id}'"
        if score.run_id not in run_ids:
            return f"score '{score.id}' references unknown run '{score.run_id}'"

    for run in catalog.runs:
        for field_name, value in (("artifactPath", run.artifact_path), ("notes", run.notes)):
            marker = blocked_marker(value)
            if marker:
                return f"benchmark run '{run.id}' {field_name} contains synthetic marker '{marker}'"
    for score in catalog.scores:
        marker = blocked_marker(score.artifact_path)
        if marker:
            return f"score '{score.id}' artifactPath contains synthetic marker '{marker}'"

    for score in catalog.scores:
        if not score.created_at:
            return f"score '{score.id}' is missing createdAt"

    for score in catalog.scores:
        if score.agent not in AGENTS:
            return f"score '{score.id}' has unsupported raw agent '{score.agent}'"

    agents_by_skill: dict[str, list[str]] = {skill.id: [] for skill in catalog.skills}
    for score in catalog.scores:
        agents_by_skill[score.skill_id].append(score.agent)
    for skill in catalog.skills:
        agents = agents_by_skill[skill.id]
        if len(agents) != len(AGENTS) or set(agents) != set(AGENTS):
            covered = ", ".join(sorted(agents)) or "none"
            return (
                f"skill '{skill.id}' must have exactly one score per agent "
                f"({', '.join(AGENTS)}); found {len(agents)} [{covered}]"
            )

    per_agent = Counter(score.agent for score in catalog.scores)
    for agent in AGENTS:
        if per_agent[agent] != EXPECTED_SCORES_PER_AGENT:
            return f"agent '{agent}' has {per_agent[agent]} scores, expected {EXPECTED_SCORES_PER_AGENT}"

    return None
