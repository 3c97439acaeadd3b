from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    slug: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    agent_family: Mapped[str] = mapped_column(String(16), nullable=False, default="multi")
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    keywords_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    source_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    imported_from: Mapped[str] = mapped_column(Text, nullable=False, default="")
    security_status: Mapped[str] = mapped_column(String(16), nullable=False, default="approved")
    security_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Added after the first corpus import; older databases may not have them.
    provenance_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    security_review_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    embedding_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False, default="")


class SkillTaskRow(Base):
    __tablename__ = "skill_tasks"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    slug: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="general")
    tags_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")


class SkillBenchmarkRunRow(Base):
    __tablename__ = "skill_benchmark_runs"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    runner: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    mode: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="completed")
    started_at: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    completed_at: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    artifact_path: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")


class SkillTaskScoreRow(Base):
    __tablename__ = "skill_task_scores"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    run_id: Mapped[str] = mapped_column(String(128), ForeignKey("skill_benchmark_runs.id"), nullable=False, index=True)
    skill_id: Mapped[str] = mapped_column(String(128), ForeignKey("skills.id"), nullable=False, index=True)
    task_id: Mapped[str] = mapped_column(String(128), ForeignKey("skill_tasks.id"), nullable=False, index=True)
    agent: Mapped[str] = mapped_column(String(16), nullable=False)
    overall_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    quality_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    security_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    speed_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    success_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    artifact_path: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[str] = mapped_column(String(32), nullable=False, default="")
