"""User model for storing registered letter writers."""
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin
from models.mailbox import MailboxEntry, MailboxFolder

if TYPE_CHECKING:
    from models.letter import Letter


class User(Base, UUIDMixin, TimestampMixin):
    """
    User model - login handle, plaintext password and the two mailboxes.

    The password is stored and compared as plaintext. Names are not unique;
    login matches the oldest user with the given name.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), index=True)
    password: Mapped[str] = mapped_column(String(255))
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    age: Mapped[int | None] = mapped_column(nullable=True)

    letters: Mapped[list["Letter"]] = relationship(
        back_populates="author",
        foreign_keys="Letter.author_id",
        cascade="all, delete-orphan",
    )
    mailbox_entries: Mapped[list[MailboxEntry]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=MailboxEntry.id,
        lazy="selectin",
    )

    def _mailbox(self, folder: MailboxFolder) -> list[UUID]:
        return [entry.letter_id for entry in self.mailbox_entries if entry.folder == folder]

    @property
    def sent_letter_ids(self) -> list[UUID]:
        """Ids of letters this user wrote, in submission order."""
        return self._mailbox(MailboxFolder.SENT)

    @property
    def received_letter_ids(self) -> list[UUID]:
        """Ids of replies addressed to this user, in arrival order."""
        return self._mailbox(MailboxFolder.RECEIVED)
