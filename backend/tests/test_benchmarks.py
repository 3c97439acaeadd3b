from __future__ import annotations

from collections import Counter

import pytest

from skillbench.schema import seed_catalog
from skillbench.skills.benchmarks import (
    average_score,
    benchmark_norm,
    compute_coverage,
    group_scores_by_task,
    summarise_skill,
)
from skillbench.skills.corpus import corpus_rows
from skillbench.skills.loader import load_validated_catalog


class TestAggregation:
    def test_average_across_agents(self, catalog):
        scores = catalog.scores_for("skill-ci-security-hardening")
        expected = sum(score.overall_score for score in scores) / 3
        assert average_score("skill-ci-security-hardening", catalog.scores) == pytest.approx(expected)
        assert average_score("skill-ci-security-hardening", catalog.scores, "any") == pytest.approx(expected)

    def test_average_for_agent(self, catalog):
        codex = next(s for s in catalog.scores_for("skill-fastapi-launchpad") if s.agent == "codex")
        assert average_score("skill-fastapi-launchpad", catalog.scores, "codex") == codex.overall_score

    def test_unknown_skill_averages_zero(self, catalog):
        assert average_score("skill-missing", catalog.scores) == 0.0

    def test_benchmark_norm_is_clamped(self):
        assert benchmark_norm(87.5) == pytest.approx(0.875)
        assert benchmark_norm(140) == 1.0
        assert benchmark_norm(-3) == 0.0

    def test_summary(self, catalog):
        skill = catalog.find_skill("ci-security-hardening")
        summary = summarise_skill(skill, catalog.scores)
        overall = [s.overall_score for s in catalog.scores_for(skill.id)]
        assert summary["averageScore"] == round(sum(overall) / 3, 2)
        assert summary["bestScore"] == max(overall)
        assert summary["benchmarkedTasks"] == 1
        assert summary["provenance"]["license"] == "CC-BY-4.0"

    def test_coverage(self, catalog):
        coverage = compute_coverage(catalog)
        assert coverage["tasksCovered"] == 20
        assert coverage["skillsCovered"] == 50
        assert coverage["scoreRows"] == 150

    def test_group_by_task(self, catalog):
        groups = group_scores_by_task(catalog.scores_for("skill-sql-migration-operator"))
        assert len(groups) == 1
        assert groups[0]["taskId"] == "task-sql-migration"
        assert groups[0]["taskName"] == "SQL Migration Rollout"
        assert len(groups[0]["scores"]) == 3


class TestCorpus:
    def test_shape(self):
        rows = corpus_rows()
        assert len(rows["skill_tasks"]) == 20
        assert len(rows["skills"]) == 50
        assert len(rows["skill_benchmark_runs"]) == 3
        assert len(rows["skill_task_scores"]) == 150
        assert Counter(row["agent"] for row in rows["skill_task_scores"]) == {"codex": 50, "claude": 50, "gemini": 50}

    def test_scores_within_bounds(self):
        for row in corpus_rows()["skill_task_scores"]:
            assert 72 <= row["overall_score"] <= 99
            assert 0.7 <= row["success_rate"] <= 0.99

    def test_reseeding_is_idempotent(self, engine, store):
        counts = seed_catalog(engine, corpus_rows())
        assert counts["skills"] == 50
        assert len(load_validated_catalog(store).skills) == 50
