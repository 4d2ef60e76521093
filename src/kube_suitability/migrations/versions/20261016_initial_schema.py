"""initial: applications, questions, assessments, reports.

Creates the four tables backing the suitability assessment flow. The question
catalog and reports store their nested lists as JSON; assessments store the
answer map as JSON and are overwritten wholesale on update.

Revision ID: ksa_001_initial
Revises:
Create Date: 2026-10-16 00:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "ksa_001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create applications, questions, assessments, and reports."""
    # applications: things that can be assessed
    op.create_table(
        "applications",
        sa.Column("id", sa.String(64), primary_key=True, comment="Application identifier"),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name"),
        sa.Column("description", sa.Text, nullable=False, comment="Free-text description"),
        sa.Column("tags", sa.JSON, nullable=False, comment="Key/value labels"),
    )

    # questions: shared read-only catalog
    op.create_table(
        "questions",
        sa.Column("id", sa.String(64), primary_key=True, comment="Question identifier"),
        sa.Column("text", sa.Text, nullable=False, comment="Prompt presented to the respondent"),
        sa.Column(
            "category",
            sa.String(100),
            nullable=False,
            comment="Grouping label for per-category scoring",
        ),
        sa.Column("weight", sa.Integer, nullable=False, comment="Multiplier for option points"),
        sa.Column("options", sa.JSON, nullable=False, comment="Ordered [{id, text, points}]"),
        sa.Column("position", sa.Integer, nullable=False, comment="Display order"),
    )
    op.create_index("ix_questions_category", "questions", ["category"])

    # assessments: answer sets with lifecycle status
    op.create_table(
        "assessments",
        sa.Column("id", sa.String(64), primary_key=True, comment="Assessment identifier"),
        sa.Column(
            "application_id",
            sa.String(64),
            nullable=False,
            comment="Assessed application",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the assessment was started",
        ),
        sa.Column("answers", sa.JSON, nullable=False, comment="{question_id: option_id}"),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            comment="in_progress | completed",
        ),
    )
    op.create_index("ix_assessments_application_id", "assessments", ["application_id"])

    # reports: one per assessment, replaced on regeneration
    op.create_table(
        "reports",
        sa.Column(
            "assessment_id",
            sa.String(64),
            primary_key=True,
            comment="Assessment this report was generated from",
        ),
        sa.Column(
            "application_id",
            sa.String(64),
            nullable=False,
            comment="Assessed application",
        ),
        sa.Column(
            "generated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the report was (re)generated",
        ),
        sa.Column("total_score", sa.Integer, nullable=False, comment="Achieved weighted score"),
        sa.Column(
            "max_possible_score",
            sa.Integer,
            nullable=False,
            comment="Ceiling for the weighted score",
        ),
        sa.Column("category_scores", sa.JSON, nullable=False, comment="{category: score}"),
        sa.Column("recommendations", sa.JSON, nullable=False, comment="Ordered recommendations"),
        sa.Column("risks", sa.JSON, nullable=False, comment="Ordered risks"),
        sa.Column(
            "modernization_plan",
            sa.JSON,
            nullable=False,
            comment="Ordered [{order, description, effort}]",
        ),
    )
    op.create_index("ix_reports_application_id", "reports", ["application_id"])


def downgrade() -> None:
    """Drop all suitability assessment tables."""
    op.drop_index("ix_reports_application_id", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_assessments_application_id", table_name="assessments")
    op.drop_table("assessments")
    op.drop_index("ix_questions_category", table_name="questions")
    op.drop_table("questions")
    op.drop_table("applications")
