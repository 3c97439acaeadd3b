from __future__ import annotations

from dataclasses import replace

import pytest

from skillbench.skills.integrity import (
    IntegrityViolation,
    ValidCatalog,
    blocked_marker,
    check_catalog,
    validate,
)


def _replace_score(catalog, index, **changes):
    scores = list(catalog.scores)
    scores[index] = replace(scores[index], **changes)
    return replace(catalog, scores=tuple(scores))


def _replace_run(catalog, index, **changes):
    runs = list(catalog.runs)
    runs[index] = replace(runs[index], **changes)
    return replace(catalog, runs=tuple(runs))


class TestCuratedCorpus:
    def test_passes(self, catalog):
        assert validate(catalog) is None

    def test_check_catalog_wraps_result(self, catalog):
        assert check_catalog(catalog) == ValidCatalog(catalog)
        broken = replace(catalog, skills=catalog.skills[:-1])
        assert isinstance(check_catalog(broken), IntegrityViolation)


class TestCounts:
    def test_skill_count(self, catalog):
        assert validate(replace(catalog, skills=catalog.skills[:49])) == "expected exactly 50 skills, found 49"

    def test_one_skill_too_many(self, catalog):
        extra = replace(catalog.skills[0], id="skill-extra", slug="extra")
        assert validate(replace(catalog, skills=catalog.skills + (extra,))) == "expected exactly 50 skills, found 51"

    def test_score_count(self, catalog):
        assert validate(replace(catalog, scores=catalog.scores[1:])) == (
            "expected exactly 150 benchmark scores, found 149"
        )

    def test_run_count(self, catalog):
        runs = catalog.runs + (replace(catalog.runs[0], id="bench-extra"),)
        assert validate(replace(catalog, runs=runs)) == "expected exactly 3 benchmark runs, found 4"

    def test_first_violation_wins(self, catalog):
        broken = _replace_run(replace(catalog, skills=catalog.skills[:10]), 0, mode="local")
        assert validate(broken) == "expected exactly 50 skills, found 10"


class TestRuns:
    def test_non_daytona_mode(self, catalog):
        run_id = catalog.runs[1].id
        message = validate(_replace_run(catalog, 1, mode="local"))
        assert message == f"benchmark run '{run_id}' uses mode 'local'. Only 'daytona' is allowed"

    @pytest.mark.parametrize(
        ("field", "value", "marker"),
        [
            ("artifact_path", "benchmarks/runs/mock/codex", "mock"),
            ("notes", "Seed data for local demos", "seed"),
            ("notes", "synthetic fallback rows", "fallback"),
        ],
    )
    def test_blocked_markers_on_runs(self, catalog, field, value, marker):
        message = validate(_replace_run(catalog, 0, **{field: value}))
        assert message is not None
        assert f"synthetic marker '{marker}'" in message


class TestScores:
    @pytest.mark.parametrize(
        ("field", "value", "kind"),
        [
            ("task_id", "task-missing", "task"),
            ("skill_id", "skill-missing", "skill"),
            ("run_id", "bench-missing", "run"),
        ],
    )
    def test_broken_references(self, catalog, field, value, kind):
        score_id = catalog.scores[5].id
        message = validate(_replace_score(catalog, 5, **{field: value}))
        assert message == f"score '{score_id}' references unknown {kind} '{value}'"

    def test_blocked_marker_on_score_artifact(self, catalog):
        message = validate(_replace_score(catalog, 0, artifact_path="artifacts/SYNTHETIC/run.json"))
        assert message.endswith("artifactPath contains synthetic marker 'synthetic'")

    def test_missing_created_at(self, catalog):
        score_id = catalog.scores[3].id
        assert validate(_replace_score(catalog, 3, created_at="")) == f"score '{score_id}' is missing createdAt"

    def test_unsupported_agent(self, catalog):
        message = validate(_replace_score(catalog, 0, agent="codex-plus"))
        assert "unsupported raw agent 'codex-plus'" in message

    def test_duplicate_agent_for_skill(self, catalog):
        index = next(i for i, score in enumerate(catalog.scores) if score.agent == "codex")
        skill_id = catalog.scores[index].skill_id
        message = validate(_replace_score(catalog, index, agent="claude"))
        assert message.startswith(f"skill '{skill_id}' must have exactly one score per agent")
        assert "[claude, claude, gemini]" in message


class TestBlockedMarker:
    def test_case_insensitive(self):
        assert blocked_marker("Fallback run") == "fallback"
        assert blocked_marker("benchmarks/runs/2026-02-15-daytona/codex") is None
