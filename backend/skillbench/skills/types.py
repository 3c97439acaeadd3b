from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Agent = Literal["codex", "claude", "gemini"]
AgentFilter = Literal["codex", "claude", "gemini", "any"]
AgentFamily = Literal["codex", "claude", "gemini", "multi"]
SecurityStatus = Literal["approved", "pending", "rejected"]
RunStatus = Literal["completed", "failed", "running"]
Strategy = Literal["embedding-first", "lexical-backoff"]

AGENTS: tuple[str, ...] = ("codex", "claude", "gemini")
REAL_BENCHMARK_MODE = "daytona"


@dataclass(frozen=True)
class SkillTask:
    id: str
    slug: str
    name: str
    description: str
    category: str = "general"
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class Provenance:
    source_url: str
    repository: str
    imported_from: str
    license: str
    last_verified_at: str
    checksum: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceUrl": self.source_url,
            "repository": self.repository,
            "importedFrom": self.imported_from,
            "license": self.license,
            "lastVerifiedAt": self.last_verified_at,
            "checksum": self.checksum,
        }


@dataclass(frozen=True)
class SecurityReview:
    status: SecurityStatus
    reviewed_by: str
    reviewed_at: str
    review_method: str
    checklist_version: str
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "reviewedBy": self.reviewed_by,
            "reviewedAt": self.reviewed_at,
            "reviewMethod": self.review_method,
            "checklistVersion": self.checklist_version,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SkillRecord:
    id: str
    slug: str
    name: str
    agent_family: AgentFamily
    summary: str
    description: str
    keywords: tuple[str, ...]
    source_url: str
    imported_from: str
    provenance: Provenance
    security_review: SecurityReview
    embedding: tuple[float, ...] = ()
    created_at: str = ""
    updated_at: str = ""

    @property
    def security_status(self) -> SecurityStatus:
        return self.security_review.status

    @property
    def security_notes(self) -> str:
        return self.security_review.notes

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "agentFamily": self.agent_family,
            "summary": self.summary,
            "description": self.description,
            "keywords": list(self.keywords),
            "sourceUrl": self.source_url,
            "importedFrom": self.imported_from,
            "securityStatus": self.security_status,
            "securityNotes": self.security_notes,
            "provenance": self.provenance.to_dict(),
            "securityReview": self.security_review.to_dict(),
            "embedding": list(self.embedding),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class SkillBenchmarkRun:
    id: str
    runner: str
    mode: str
    status: RunStatus
    started_at: str
    completed_at: str | None
    artifact_path: str
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "runner": self.runner,
            "mode": self.mode,
            "status": self.status,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "artifactPath": self.artifact_path,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SkillScore:
    id: str
    run_id: str
    skill_id: str
    task_id: str
    task_slug: str
    task_name: str
    agent: str
    overall_score: float
    quality_score: float
    security_score: float
    speed_score: float
    cost_score: float
    success_rate: float
    artifact_path: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "runId": self.run_id,
            "skillId": self.skill_id,
            "taskId": self.task_id,
            "taskSlug": self.task_slug,
            "taskName": self.task_name,
            "agent": self.agent,
            "overallScore": self.overall_score,
            "qualityScore": self.quality_score,
            "securityScore": self.security_score,
            "speedScore": self.speed_score,
            "costScore": self.cost_score,
            "successRate": self.success_rate,
            "artifactPath": self.artifact_path,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class SkillCatalog:
    """One read-only snapshot of tasks, skills, runs and scores."""

    tasks: tuple[SkillTask, ...]
    skills: tuple[SkillRecord, ...]
    runs: tuple[SkillBenchmarkRun, ...]
    scores: tuple[SkillScore, ...]
    source: str = "database"

    def find_skill(self, id_or_slug: str) -> SkillRecord | None:
        for skill in self.skills:
            if skill.id == id_or_slug or skill.slug == id_or_slug:
                return skill
        return None

    def scores_for(self, skill_id: str) -> list[SkillScore]:
        return [score for score in self.scores if score.skill_id == skill_id]


@dataclass(frozen=True)
class RecommendationEntry:
    skill_id: str
    slug: str
    name: str
    security_status: SecurityStatus
    source_url: str
    average_benchmark_score: float
    embedding_similarity: float
    lexical_score: float
    final_score: float
    matched_agent: AgentFilter
    provenance: Provenance
    security_review: SecurityReview

    def to_dict(self) -> dict[str, Any]:
        return {
            "skillId": self.skill_id,
            "slug": self.slug,
            "name": self.name,
            "securityStatus": self.security_status,
            "sourceUrl": self.source_url,
            "averageBenchmarkScore": self.average_benchmark_score,
            "embeddingSimilarity": self.embedding_similarity,
            "lexicalScore": self.lexical_score,
            "finalScore": self.final_score,
            "matchedAgent": self.matched_agent,
            "provenance": self.provenance.to_dict(),
            "securityReview": self.security_review.to_dict(),
        }


@dataclass(frozen=True)
class RecommendationResult:
    strategy: Strategy
    best: RecommendationEntry | None
    candidates: list[RecommendationEntry] = field(default_factory=list)
