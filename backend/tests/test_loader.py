from __future__ import annotations

import json

import pytest
from sqlalchemy import create_engine, text

from skillbench.models import SkillBenchmarkRunRow, SkillTaskRow, SkillTaskScoreRow
from skillbench.skills.embedding import hash_token
from skillbench.skills.errors import CatalogIntegrityError, CatalogLoadError, StoreUnavailableError
from skillbench.skills.loader import (
    EPOCH_TIMESTAMP,
    load_catalog,
    load_validated_catalog,
    number_list,
    repository_from_url,
    string_list,
)
from skillbench.skills.store import SqlAlchemyStore


LEGACY_SKILLS_DDL = """
    create table skills (
      id text primary key, slug text, name text, agent_family text, summary text,
      description text, keywords_json text, source_url text, imported_from text,
      security_status text, security_notes text, created_at text, updated_at text
    )
"""


@pytest.fixture()
def legacy_store(blank_engine):
    """Database provisioned before provenance/review/embedding columns existed."""
    eng = blank_engine
    for model in (SkillTaskRow, SkillBenchmarkRunRow, SkillTaskScoreRow):
        model.__table__.create(eng)
    with eng.begin() as conn:
        conn.execute(text(LEGACY_SKILLS_DDL))
        conn.execute(
            text(
                "insert into skills values (:id, :slug, :name, :family, :summary, :description, "
                ":keywords, :url, :imported, :status, :notes, :created, :updated)"
            ),
            [
                {
                    "id": "skill-legacy",
                    "slug": "legacy",
                    "name": "Legacy Skill",
                    "family": "copilot",
                    "summary": "Old row",
                    "description": "",
                    "keywords": "not json",
                    "url": "https://github.com/acme/playbooks/tree/main/legacy",
                    "imported": "manual import",
                    "status": "pending",
                    "notes": "awaiting review",
                    "created": "2025-01-01T00:00:00.000Z",
                    "updated": "2025-01-02T00:00:00.000Z",
                },
                {
                    "id": "skill-other",
                    "slug": "other",
                    "name": "Other Skill",
                    "family": "claude",
                    "summary": "",
                    "description": "",
                    "keywords": '["a", 2, "ok"]',
                    "url": "not a url",
                    "imported": "",
                    "status": None,
                    "notes": "",
                    "created": "",
                    "updated": "",
                },
            ],
        )
    return SqlAlchemyStore(eng)


class TestLegacyDefaults:
    def test_missing_optional_columns_use_defaults(self, legacy_store):
        catalog = load_catalog(legacy_store)
        skill = catalog.find_skill("legacy")

        url = "https://github.com/acme/playbooks/tree/main/legacy"
        assert skill.provenance.source_url == url
        assert skill.provenance.repository == "acme/playbooks"
        assert skill.provenance.imported_from == "manual import"
        assert skill.provenance.license == "Unknown"
        assert skill.provenance.last_verified_at == EPOCH_TIMESTAMP
        assert skill.provenance.checksum == f"legacy:{hash_token(url, 997)}"

        assert skill.security_review.status == "pending"
        assert skill.security_review.notes == "awaiting review"
        assert skill.security_review.reviewed_by == "unreviewed"
        assert skill.security_review.reviewed_at == EPOCH_TIMESTAMP
        assert skill.embedding == ()

    def test_unknown_values_are_normalised(self, legacy_store):
        catalog = load_catalog(legacy_store)
        legacy = catalog.find_skill("skill-legacy")
        other = catalog.find_skill("other")

        assert legacy.agent_family == "multi"
        assert legacy.keywords == ()
        assert other.agent_family == "claude"
        assert other.keywords == ("a", "ok")
        assert other.security_status == "approved"
        assert other.provenance.repository == "unknown"

    def test_legacy_catalog_fails_validation(self, legacy_store):
        with pytest.raises(CatalogIntegrityError) as exc_info:
            load_validated_catalog(legacy_store)
        assert "expected exactly 50 skills, found 2" in str(exc_info.value)


class TestCorpusLoad:
    def test_counts(self, catalog):
        assert len(catalog.tasks) == 20
        assert len(catalog.skills) == 50
        assert len(catalog.runs) == 3
        assert len(catalog.scores) == 150
        assert catalog.source == "database"

    def test_ordering(self, catalog):
        names = [skill.name for skill in catalog.skills]
        assert names == sorted(names)
        started = [run.started_at for run in catalog.runs]
        assert started == sorted(started, reverse=True)
        created = [score.created_at for score in catalog.scores]
        assert created == sorted(created, reverse=True)

    def test_scores_carry_task_names(self, catalog):
        score = catalog.scores_for("skill-ci-security-hardening")[0]
        assert score.task_slug == "harden-ci-pipeline"
        assert score.task_name == "Harden CI/CD Pipelines"

    def test_run_mode_is_kept_as_stored(self, store, execute):
        execute("update skill_benchmark_runs set mode = ' DAYTONA ' where id = 'bench-2026-02-15-codex'")
        assert " DAYTONA " in {run.mode for run in load_catalog(store).runs}

        with pytest.raises(CatalogIntegrityError) as exc_info:
            load_validated_catalog(store)
        assert "uses mode ' DAYTONA '" in exc_info.value.details

    def test_score_agent_is_kept_as_stored(self, store, execute):
        execute("update skill_task_scores set agent = 'CODEX' where id = 'score-codex-01'")
        with pytest.raises(CatalogIntegrityError) as exc_info:
            load_validated_catalog(store)
        assert exc_info.value.details == "score 'score-codex-01' has unsupported raw agent 'CODEX'"


class TestStoreFailures:
    def test_missing_tables(self, blank_engine):
        eng = blank_engine
        with pytest.raises(StoreUnavailableError) as exc_info:
            load_catalog(SqlAlchemyStore(eng))
        assert exc_info.value.details == "skills tables are not provisioned"

    def test_unreachable_database(self, tmp_path):
        eng = create_engine(f"sqlite:///{tmp_path / 'missing' / 'skills.db'}")
        with pytest.raises(StoreUnavailableError):
            load_catalog(SqlAlchemyStore(eng))

    def test_unreadable_rows(self, store, execute):
        execute("drop table skill_task_scores")
        with pytest.raises(CatalogLoadError) as exc_info:
            load_catalog(store)
        assert "OperationalError" in exc_info.value.details


class TestCoercion:
    def test_string_list(self):
        assert string_list('["ci", 1, null, "oidc"]') == ["ci", "oidc"]
        assert string_list(["already", "decoded"]) == ["already", "decoded"]
        assert string_list("{}") == []
        assert string_list(None) == []

    def test_number_list(self):
        assert number_list(json.dumps([0.5, "0.25", True, "x", None])) == [0.5, 0.25]
        assert number_list("[") == []

    def test_repository_from_url(self):
        assert repository_from_url("https://github.com/openai/skills/tree/main") == "openai/skills"
        assert repository_from_url("https://flywaydb.org/documentation") == "flywaydb.org"
        assert repository_from_url("") == "unknown"
