"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDMixin
from models.mailbox import MailboxEntry, MailboxFolder
from models.letter import Letter, LetterKind
from models.user import User

__all__ = [
    "Base",
    "Letter",
    "LetterKind",
    "MailboxEntry",
    "MailboxFolder",
    "TimestampMixin",
    "UUIDMixin",
    "User",
]
