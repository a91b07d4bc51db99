"""Initial schema: churches, positions, subjects, users and user collections.

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2025-09-01
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "user_role": ("admin", "worker"),
    "user_gender": ("male", "female"),
    "user_status": ("single", "married", "widowed"),
}


def _enum(name: str) -> sa.types.TypeEngine:
    # PG types are created once up front; tables must not re-create them
    if op.get_bind().dialect.name == "postgresql":
        return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)
    return sa.Enum(*ENUMS[name], name=name)


def _timestamps(index_created: bool = False):
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(),
                  nullable=False, index=index_created),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        "churches",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Integer(), nullable=False),
        sa.Column("longitude", sa.Integer(), nullable=False),
        *_timestamps(index_created=True),
    )
    op.create_table(
        "church_images",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("image", sa.String(1024), nullable=False),
        sa.Column("church_id", sa.Integer(), sa.ForeignKey("churches.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        *_timestamps(),
    )
    op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(index_created=True),
    )
    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(index_created=True),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("firstname", sa.String(100), nullable=True),
        sa.Column("middlename", sa.String(100), nullable=True),
        sa.Column("lastname", sa.String(100), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("gender", _enum("user_gender"), nullable=True),
        sa.Column("contact", sa.String(50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("profile_picture", sa.String(1024), nullable=True),
        sa.Column("role", _enum("user_role"), nullable=False, server_default="worker", index=True),
        sa.Column("status", _enum("user_status"), nullable=True),
        sa.Column("sss", sa.String(50), nullable=True),
        sa.Column("sssimage", sa.String(1024), nullable=True),
        sa.Column("pagibig", sa.String(50), nullable=True),
        sa.Column("pagibigimage", sa.String(1024), nullable=True),
        sa.Column("tin", sa.String(50), nullable=True),
        sa.Column("tinimage", sa.String(1024), nullable=True),
        sa.Column("psn", sa.String(50), nullable=True),
        sa.Column("psnimage", sa.String(1024), nullable=True),
        sa.Column("philhealth", sa.String(50), nullable=True),
        sa.Column("philhealthimage", sa.String(1024), nullable=True),
        sa.Column("church_id", sa.Integer(), sa.ForeignKey("churches.id", ondelete="SET NULL"),
                  nullable=True, index=True),
        sa.Column("position_id", sa.Integer(), sa.ForeignKey("positions.id", ondelete="SET NULL"),
                  nullable=True, index=True),
        *_timestamps(index_created=True),
    )

    op.create_table(
        "user_children",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("firstname", sa.String(100), nullable=False),
        sa.Column("middlename", sa.String(100), nullable=True),
        sa.Column("lastname", sa.String(100), nullable=False),
        sa.Column("birthday", sa.Date(), nullable=False),
        sa.Column("gender", _enum("user_gender"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "user_educational_attainments",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("schoolname", sa.String(255), nullable=False),
        sa.Column("education", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "user_cases",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("where", sa.String(255), nullable=False),
        sa.Column("case", sa.Text(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "user_subjects",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("subject_id", sa.Integer(), sa.ForeignKey("subjects.id"), nullable=False, index=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "subject_id", name="uq_user_subjects_user_subject"),
    )


def downgrade() -> None:
    for table in (
        "user_subjects",
        "user_cases",
        "user_educational_attainments",
        "user_children",
        "users",
        "subjects",
        "positions",
        "church_images",
        "churches",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name in ENUMS:
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
