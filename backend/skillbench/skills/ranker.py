from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass

from skillbench.schemas import RecommendationQuery
from skillbench.skills.benchmarks import average_score, benchmark_norm
from skillbench.skills.embedding import cosine_similarity, embed, embed_skill, magnitude, skill_text
from skillbench.skills.text import clamp, jaccard, tokenize
from skillbench.skills.types import (
    RecommendationEntry,
    RecommendationResult,
    SkillCatalog,
    SkillRecord,
    Strategy,
)

EMBEDDING_CONFIDENCE_MIN = 0.22
EMBEDDING_MARGIN_MIN = 0.03

LEXICAL_SKILL_WEIGHT = 0.65
LEXICAL_TASK_WEIGHT = 0.35
EMBEDDING_LEXICAL_BOOST = 0.15

# strategy -> (retrieval weight, benchmark weight)
FINAL_WEIGHTS: dict[str, tuple[float, float]] = {
    "embedding-first": (0.75, 0.25),
    "lexical-backoff": (0.7, 0.3),
}


@dataclass(frozen=True)
class _Signals:
    skill: SkillRecord
    average_benchmark: float
    benchmark_norm: float
    embedding_similarity: float
    lexical_score: float


def build_task_context(catalog: SkillCatalog) -> dict[str, str]:
    """Text of every task each skill has been benchmarked against, keyed by skill id."""
    task_by_id = {task.id: task for task in catalog.tasks}
    contexts: dict[str, dict[str, None]] = {}
    for score in catalog.scores:
        task = task_by_id.get(score.task_id)
        if task is None:
            continue
        text = " ".join([task.slug, task.name, task.description, *task.tags])
        contexts.setdefault(score.skill_id, {})[text] = None
    return {skill_id: " ".join(texts) for skill_id, texts in contexts.items()}


def lexical_similarity(query_tokens: Set[str], skill: SkillRecord, task_context: str) -> float:
    skill_tokens = tokenize(skill_text(skill.name, skill.summary, skill.description, skill.keywords))
    skill_overlap = jaccard(query_tokens, skill_tokens)
    task_overlap = jaccard(query_tokens, tokenize(task_context))
    return clamp(LEXICAL_SKILL_WEIGHT * skill_overlap + LEXICAL_TASK_WEIGHT * task_overlap, 0.0, 1.0)


def choose_strategy(has_embedding_signal: bool, top1: float, top2: float) -> Strategy:
    """Back off to lexical overlap when the hashed embedding is empty, weak or ambiguous."""
    if not has_embedding_signal:
        return "lexical-backoff"
    if top1 < EMBEDDING_CONFIDENCE_MIN or (top1 - top2) < EMBEDDING_MARGIN_MIN:
        return "lexical-backoff"
    return "embedding-first"


def recommend(catalog: SkillCatalog, query: RecommendationQuery) -> RecommendationResult:
    available = [skill for skill in catalog.skills if skill.security_review.status == "approved"]
    if not available:
        return RecommendationResult(strategy="lexical-backoff", best=None, candidates=[])

    query_embedding = embed(query.task)
    query_tokens = set(tokenize(query.task))
    has_signal = magnitude(query_embedding) > 0
    task_context = build_task_context(catalog)

    signals: list[_Signals] = []
    for skill in available:
        average = average_score(skill.id, catalog.scores, query.agent)
        similarity = cosine_similarity(query_embedding, embed_skill(skill)) if has_signal else 0.0
        signals.append(
            _Signals(
                skill=skill,
                average_benchmark=average,
                benchmark_norm=benchmark_norm(average),
                embedding_similarity=similarity,
                lexical_score=lexical_similarity(query_tokens, skill, task_context.get(skill.id, "")),
            )
        )

    ranked_similarity = sorted((entry.embedding_similarity for entry in signals), reverse=True)
    top1 = ranked_similarity[0] if ranked_similarity else 0.0
    top2 = ranked_similarity[1] if len(ranked_similarity) > 1 else 0.0
    strategy = choose_strategy(has_signal, top1, top2)
    retrieval_weight, benchmark_weight = FINAL_WEIGHTS[strategy]

    entries: list[RecommendationEntry] = []
    for entry in signals:
        if strategy == "lexical-backoff":
            retrieval = entry.lexical_score
        else:
            retrieval = clamp(entry.embedding_similarity + EMBEDDING_LEXICAL_BOOST * entry.lexical_score, 0.0, 1.0)
        final = retrieval_weight * retrieval + benchmark_weight * entry.benchmark_norm
        skill = entry.skill
        entries.append(
            RecommendationEntry(
                skill_id=skill.id,
                slug=skill.slug,
                name=skill.name,
                security_status=skill.security_status,
                source_url=skill.source_url,
                average_benchmark_score=round(entry.average_benchmark, 2),
                embedding_similarity=round(entry.embedding_similarity, 4),
                lexical_score=round(entry.lexical_score, 4),
                final_score=round(final, 4),
                matched_agent=query.agent,
                provenance=skill.provenance,
                security_review=skill.security_review,
            )
        )

    # Total order on the values callers see, so equal inputs always give equal output.
    entries.sort(key=lambda e: (-e.final_score, -e.lexical_score, -e.average_benchmark_score, e.slug))
    candidates = entries[: query.limit]
    return RecommendationResult(
        strategy=strategy,
        best=candidates[0] if candidates else None,
        candidates=candidates,
    )
