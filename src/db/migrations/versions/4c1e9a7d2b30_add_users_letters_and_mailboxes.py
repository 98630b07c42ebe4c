"""
Add users, letters and mailbox_entries tables.

Revision ID: 4c1e9a7d2b30
Revises:
Create Date: 2026-10-19 10:02:41.118203
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e9a7d2b30"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_name"), "users", ["name"], unique=False)
    op.create_index(op.f("ix_users_updated_at"), "users", ["updated_at"], unique=False)

    op.create_table(
        "letters",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), nullable=True),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("answered", sa.Boolean(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('carta', 'resposta')", name="ck_letter_kind"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["parent_id"], ["letters.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_letters_author_id"), "letters", ["author_id"], unique=False)
    op.create_index(op.f("ix_letters_recipient_id"), "letters", ["recipient_id"], unique=False)
    op.create_index(op.f("ix_letters_parent_id"), "letters", ["parent_id"], unique=False)
    op.create_index(op.f("ix_letters_updated_at"), "letters", ["updated_at"], unique=False)
    op.create_index("ix_letters_answered_author", "letters", ["answered", "author_id"], unique=False)

    op.create_table(
        "mailbox_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("letter_id", sa.Uuid(), nullable=False),
        sa.Column("folder", sa.String(length=10), nullable=False),
        sa.CheckConstraint("folder IN ('sent', 'received')", name="ck_mailbox_folder"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["letter_id"], ["letters.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_mailbox_entries_user_id"), "mailbox_entries", ["user_id"], unique=False)
    op.create_index(op.f("ix_mailbox_entries_letter_id"), "mailbox_entries", ["letter_id"], unique=False)
    op.create_index("ix_mailbox_user_folder", "mailbox_entries", ["user_id", "folder"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_mailbox_user_folder", table_name="mailbox_entries")
    op.drop_index(op.f("ix_mailbox_entries_letter_id"), table_name="mailbox_entries")
    op.drop_index(op.f("ix_mailbox_entries_user_id"), table_name="mailbox_entries")
    op.drop_table("mailbox_entries")

    op.drop_index("ix_letters_answered_author", table_name="letters")
    op.drop_index(op.f("ix_letters_updated_at"), table_name="letters")
    op.drop_index(op.f("ix_letters_parent_id"), table_name="letters")
    op.drop_index(op.f("ix_letters_recipient_id"), table_name="letters")
    op.drop_index(op.f("ix_letters_author_id"), table_name="letters")
    op.drop_table("letters")

    op.drop_index(op.f("ix_users_updated_at"), table_name="users")
    op.drop_index(op.f("ix_users_name"), table_name="users")
    op.drop_table("users")
