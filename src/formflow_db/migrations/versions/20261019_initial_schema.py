"""Create forms, form_steps and submissions tables.

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "forms",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "theme", JSONB, nullable=False, server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "settings", JSONB, nullable=False, server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("owner_id", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_forms_owner_id", "forms", ["owner_id"])

    op.create_table(
        "form_steps",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column(
            "form_id",
            sa.Text,
            sa.ForeignKey("forms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("step_order", sa.Integer, nullable=False),
        sa.Column(
            "fields", JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"),
        ),
        sa.UniqueConstraint("form_id", "step_order", name="uq_form_step_order"),
    )
    op.create_index("ix_form_steps_form_id", "form_steps", ["form_id"])

    op.create_table(
        "submissions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "form_id",
            sa.Text,
            sa.ForeignKey("forms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("answers", JSONB, nullable=False),
        sa.Column("metadata", JSONB, nullable=False),
        sa.Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_submissions_form_created", "submissions", ["form_id", "created_at"],
    )
    op.create_index(
        "ix_submissions_answers_gin", "submissions", ["answers"], postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("ix_submissions_answers_gin", table_name="submissions")
    op.drop_index("ix_submissions_form_created", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_form_steps_form_id", table_name="form_steps")
    op.drop_table("form_steps")
    op.drop_index("ix_forms_owner_id", table_name="forms")
    op.drop_table("forms")
