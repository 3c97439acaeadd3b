"""Deterministic feature-hashing text embeddings.

Tokens are hashed with 32-bit FNV-1a into a fixed number of buckets and the
resulting bag-of-buckets vector is L2-normalised. No model weights, no
randomness: the same text gives the same vector on every platform, which is
what lets the seeding script store embeddings that the ranker can reuse.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from skillbench.skills.text import clamp, tokenize

if TYPE_CHECKING:
    from skillbench.skills.types import SkillRecord

DEFAULT_EMBEDDING_DIM = 96

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_UINT32 = 0xFFFFFFFF


def hash_token(token: str, buckets: int) -> int:
    value = _FNV_OFFSET_BASIS
    for char in token:
        value ^= ord(char)
        value = (value * _FNV_PRIME) & _UINT32
    return value % buckets


def magnitude(vector: Sequence[float]) -> float:
    return math.sqrt(sum(value * value for value in vector))


def normalize(vector: Sequence[float]) -> list[float]:
    norm = magnitude(vector)
    if norm == 0:
        return list(vector)
    return [value / norm for value in vector]


def embed(text: str, dims: int = DEFAULT_EMBEDDING_DIM) -> list[float]:
    vector = [0.0] * dims
    for token in tokenize(text):
        vector[hash_token(token, dims)] += 1.0
    return normalize(vector)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if len(a) != len(b) or not a:
        return 0.0
    dot = norm_a = norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return clamp(dot / (math.sqrt(norm_a) * math.sqrt(norm_b)), 0.0, 1.0)


def skill_text(name: str, summary: str, description: str, keywords: Sequence[str]) -> str:
    return " ".join([name, summary, description, *keywords])


def embed_skill(skill: "SkillRecord") -> list[float]:
    """Stored embedding when present, else one computed from the skill text; always normalised."""
    if skill.embedding:
        return normalize(skill.embedding)
    return embed(skill_text(skill.name, skill.summary, skill.description, skill.keywords))
