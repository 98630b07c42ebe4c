"""Mailbox entries linking users to the letters they sent and received."""
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base

if TYPE_CHECKING:
    from models.letter import Letter
    from models.user import User


class MailboxFolder(StrEnum):
    """Which of the user's mailboxes an entry belongs to."""

    SENT = "sent"
    RECEIVED = "received"


class MailboxEntry(Base):
    """
    One letter reference in a user's sent or received mailbox.

    The integer primary key keeps insertion order, so a mailbox reads back in
    the order letters were appended. Rows go away with either the user or
    the letter, so mailboxes never hold dangling references.
    """

    __tablename__ = "mailbox_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    letter_id: Mapped[UUID] = mapped_column(
        ForeignKey("letters.id", ondelete="CASCADE"),
        index=True,
    )
    folder: Mapped[str] = mapped_column(String(10))

    user: Mapped["User"] = relationship(back_populates="mailbox_entries")
    letter: Mapped["Letter"] = relationship(back_populates="mailbox_entries")

    __table_args__ = (
        CheckConstraint("folder IN ('sent', 'received')", name="ck_mailbox_folder"),
        Index("ix_mailbox_user_folder", "user_id", "folder"),
    )
