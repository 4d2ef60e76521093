"""SQLAlchemy ORM models for the suitability assessment data layer.

Column types are kept portable (String ids, generic JSON) so the same models
run on PostgreSQL in production and SQLite for local runs and tests.

Tables:
    applications: applications that can be assessed
    questions   : the shared, read-only question catalog
    assessments : answer sets with lifecycle status
    reports     : generated suitability reports, one per assessment
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all suitability assessment tables."""


class ApplicationRecord(Base):
    """An application registered for assessment.

    Table: applications
    """

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Application identifier (e.g. app1)",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Free-text description",
    )
    tags: Mapped[dict[str, str]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Arbitrary key/value labels such as language or type",
    )


class QuestionRecord(Base):
    """A weighted multiple-choice question in the catalog.

    Options are stored inline as a JSON list of {id, text, points} objects;
    they are never queried independently of their question.

    Table: questions
    """

    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Question identifier (e.g. q1)",
    )
    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Prompt presented to the respondent",
    )
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Grouping label for per-category scoring (e.g. Architecture)",
    )
    weight: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Positive integer multiplier applied to option points",
    )
    options: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered options: [{id, text, points}]",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order of the question within the catalog",
    )


class AssessmentRecord(Base):
    """An answer set for one application.

    Table: assessments
    """

    __tablename__ = "assessments"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Assessment identifier generated at creation",
    )
    application_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Assessed application, validated only at creation time",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the assessment was started",
    )
    answers: Mapped[dict[str, str]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Selected option per question: {question_id: option_id}",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="in_progress",
        comment="Lifecycle status: in_progress | completed",
    )


class ReportRecord(Base):
    """Generated suitability report, keyed 1:1 by assessment.

    Table: reports
    """

    __tablename__ = "reports"

    assessment_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Assessment this report was generated from",
    )
    application_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Assessed application",
    )
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the report was (re)generated",
    )
    total_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Sum of weight x points over answered questions",
    )
    max_possible_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Sum of weight x max option points over the catalog",
    )
    category_scores: Mapped[dict[str, int]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Per-category score: {category: score}",
    )
    recommendations: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered [{category, description, priority}]",
    )
    risks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered [{category, description, severity}]",
    )
    modernization_plan: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered [{order, description, effort}]",
    )
