from __future__ import annotations

import pytest

from skillbench.skills.embedding import (
    DEFAULT_EMBEDDING_DIM,
    cosine_similarity,
    embed,
    embed_skill,
    hash_token,
    magnitude,
    normalize,
    skill_text,
)
from skillbench.skills.text import jaccard, tokenize


class TestTokenize:
    def test_lowercases_and_splits_on_separators(self):
        assert tokenize("Harden CI/CD pipeline_security-checks") == [
            "harden",
            "ci",
            "cd",
            "pipeline",
            "security",
            "checks",
        ]

    def test_drops_single_characters(self):
        assert tokenize("a b c d e f g") == []

    def test_none_and_empty(self):
        assert tokenize(None) == []
        assert tokenize("   ") == []


class TestJaccard:
    def test_overlap(self):
        assert jaccard({"ci", "security"}, {"ci", "secrets"}) == pytest.approx(1 / 3)

    def test_empty_side_is_zero(self):
        assert jaccard(set(), {"ci"}) == 0.0
        assert jaccard({"ci"}, []) == 0.0


class TestHashing:
    def test_fnv1a_known_values(self):
        # 32-bit FNV-1a of "" is the offset basis, of "a" is 0xe40c292c.
        assert hash_token("", 2**32) == 2166136261
        assert hash_token("a", 2**32) == 0xE40C292C

    def test_bucket_range(self):
        for token in ("ci", "security", "kubernetes", "oidc"):
            assert 0 <= hash_token(token, DEFAULT_EMBEDDING_DIM) < DEFAULT_EMBEDDING_DIM


class TestEmbed:
    def test_dimension_and_unit_length(self):
        vector = embed("harden the ci pipeline")
        assert len(vector) == DEFAULT_EMBEDDING_DIM
        assert magnitude(vector) == pytest.approx(1.0)

    def test_deterministic(self):
        assert embed("Ship FastAPI endpoints") == embed("Ship FastAPI endpoints")

    def test_no_tokens_gives_zero_vector(self):
        vector = embed("a b c")
        assert magnitude(vector) == 0.0

    def test_normalize_leaves_zero_vector(self):
        assert normalize([0.0, 0.0]) == [0.0, 0.0]


class TestCosine:
    def test_identical_vectors(self):
        vector = embed("terraform drift remediation")
        assert cosine_similarity(vector, vector) == pytest.approx(1.0)

    def test_length_mismatch_and_zero_norm(self):
        assert cosine_similarity([1.0, 0.0], [1.0]) == 0.0
        assert cosine_similarity([], []) == 0.0
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_clamped_to_unit_interval(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == 0.0


class TestEmbedSkill:
    def test_computed_from_text_without_stored_embedding(self, make_skill):
        skill = make_skill("sql-migration-operator", summary="Safe migrations", keywords=["sql", "rollback"])
        expected = embed(skill_text(skill.name, skill.summary, skill.description, skill.keywords))
        assert embed_skill(skill) == expected

    def test_stored_embedding_is_normalised(self, catalog):
        skill = catalog.find_skill("ci-security-hardening")
        assert skill.embedding
        assert magnitude(embed_skill(skill)) == pytest.approx(1.0)
