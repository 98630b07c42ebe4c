"""Letter model for original letters and their replies."""
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.mailbox import MailboxEntry
    from models.user import User


class LetterKind(StrEnum):
    """Whether a letter starts a conversation or answers one."""

    ORIGINAL = "carta"
    REPLY = "resposta"


class Letter(Base, UUIDMixin, TimestampMixin):
    """
    Letter model - an original letter in the draw pool or a reply to one.

    answered is true iff replies is non-empty; the letter service keeps the
    two in lockstep. version is bumped by SQLAlchemy on every UPDATE of the
    row and doubles as the optimistic locking token for replies.
    """

    __tablename__ = "letters"

    author_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    # Only set on replies: the author of the parent letter
    recipient_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    parent_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("letters.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    body: Mapped[str] = mapped_column(Text)
    kind: Mapped[str] = mapped_column(String(20), default=LetterKind.ORIGINAL)
    answered: Mapped[bool] = mapped_column(default=False)
    version: Mapped[int] = mapped_column(nullable=False)

    author: Mapped["User"] = relationship(
        back_populates="letters",
        foreign_keys=[author_id],
    )
    parent: Mapped["Letter | None"] = relationship(
        back_populates="replies",
        remote_side="Letter.id",
    )
    replies: Mapped[list["Letter"]] = relationship(
        back_populates="parent",
        order_by="Letter.created_at",
        lazy="selectin",
    )
    mailbox_entries: Mapped[list["MailboxEntry"]] = relationship(
        back_populates="letter",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("kind IN ('carta', 'resposta')", name="ck_letter_kind"),
        # Draw pool lookups filter on answered and exclude the requester
        Index("ix_letters_answered_author", "answered", "author_id"),
    )

    @property
    def reply_ids(self) -> list[UUID]:
        """Ids of replies to this letter, oldest first."""
        return [reply.id for reply in self.replies]
