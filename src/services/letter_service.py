"""
Service layer for letters: submission, the random draw, replies and listings.

All functions only flush. The request session commits once at the end, so a
submission (letter + sent mailbox) or a reply (reply + parent + received
mailbox) is persisted entirely or not at all.
"""
import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from models.base import utc_now
from models.letter import Letter, LetterKind
from models.mailbox import MailboxEntry, MailboxFolder
from models.user import User
from services.exceptions import (
    EmptyReplyError,
    InvalidLetterIdsError,
    LetterConflictError,
    LetterNotFoundError,
    NoUnansweredLettersError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


async def get_letter(db: AsyncSession, letter_id: UUID) -> Letter | None:
    """Get a letter by id, or None if it doesn't exist."""
    return await db.get(Letter, letter_id)


async def submit_letter(db: AsyncSession, author_id: UUID, body: str) -> Letter:
    """
    Create an original letter and file it in the author's sent mailbox.

    The body is stored as given; unlike replies, blank letters are accepted.

    Raises:
        UserNotFoundError: If author_id does not resolve to a user.
    """
    author = await db.get(User, author_id)
    if author is None:
        raise UserNotFoundError(author_id)

    letter = Letter(
        author_id=author.id,
        body=body,
        kind=LetterKind.ORIGINAL,
        answered=False,
        replies=[],
    )
    db.add(letter)
    mailbox = await author.awaitable_attrs.mailbox_entries
    mailbox.append(MailboxEntry(letter=letter, folder=MailboxFolder.SENT))
    await db.flush()

    logger.info("Letter %s submitted by user %s", letter.id, author.id)
    return letter


async def draw_unanswered(db: AsyncSession, requester_id: UUID | None) -> Letter:
    """
    Pick one unanswered letter not written by the requester, uniformly at random.

    Drawing does not reserve the letter: it stays in the pool until a reply is
    linked to it, so two users may draw the same letter.

    Raises:
        NoUnansweredLettersError: If no letter is eligible.
    """
    stmt = select(Letter).where(Letter.answered.is_(False))
    if requester_id is not None:
        stmt = stmt.where(Letter.author_id != requester_id)
    result = await db.execute(stmt.order_by(func.random()).limit(1))
    letter = result.scalar_one_or_none()
    if letter is None:
        raise NoUnansweredLettersError()
    return letter


async def reply_to(
    db: AsyncSession,
    parent_id: UUID,
    author_id: UUID,
    body: str | None,
    expected_version: int | None = None,
) -> tuple[Letter, Letter]:
    """
    Reply to a letter and link the reply to the letter and its author's inbox.

    Creates the reply (addressed to the parent's author), marks the parent
    answered with the reply appended to its replies, and files the reply in the
    recipient's received mailbox. Replying to an already answered letter is
    allowed; the reply is appended.

    Args:
        db: Database session.
        parent_id: Letter being answered.
        author_id: User writing the reply.
        body: Reply text; must contain non-whitespace characters.
        expected_version: Version of the parent the client saw. If given and the
            parent has changed since, the reply is rejected.

    Returns:
        Tuple of (reply, updated parent).

    Raises:
        EmptyReplyError: If body is missing or blank. Nothing is written.
        LetterNotFoundError: If parent_id does not resolve.
        UserNotFoundError: If author_id does not resolve.
        LetterConflictError: If the parent changed since expected_version or
            was updated concurrently while this reply was being written.
    """
    if body is None or not body.strip():
        raise EmptyReplyError()

    parent = await db.get(Letter, parent_id)
    if parent is None:
        raise LetterNotFoundError(parent_id)
    if expected_version is not None and parent.version != expected_version:
        logger.warning(
            "Reply to letter %s rejected: expected version %s, found %s",
            parent_id, expected_version, parent.version,
        )
        raise LetterConflictError(parent)

    replier = await db.get(User, author_id)
    if replier is None:
        raise UserNotFoundError(author_id)

    # Everything is loaded before the parent is touched: any query issued
    # after that point would autoflush the versioned UPDATE early.
    recipient = await db.get(User, parent.author_id)
    replies = await parent.awaitable_attrs.replies
    mailbox = await recipient.awaitable_attrs.mailbox_entries if recipient else None

    reply = Letter(
        author_id=replier.id,
        recipient_id=parent.author_id,
        body=body,
        kind=LetterKind.REPLY,
        answered=True,
        replies=[],
    )
    try:
        with db.no_autoflush:
            replies.append(reply)
            parent.answered = True
            parent.updated_at = utc_now()
            if mailbox is not None:
                mailbox.append(MailboxEntry(letter=reply, folder=MailboxFolder.RECEIVED))
        await db.flush()
    except StaleDataError:
        # Another request updated the parent between our read and write
        await db.rollback()
        current = await db.get(Letter, parent_id, populate_existing=True)
        if current is None:
            raise LetterNotFoundError(parent_id) from None
        logger.warning("Concurrent reply to letter %s detected", parent_id)
        raise LetterConflictError(current) from None

    logger.info("Reply %s by user %s linked to letter %s", reply.id, replier.id, parent.id)
    return reply, parent


async def list_letters(db: AsyncSession, author_id: UUID | None = None) -> list[Letter]:
    """Get all letters, or only those written by author_id, oldest first."""
    stmt = select(Letter)
    if author_id is not None:
        stmt = stmt.where(Letter.author_id == author_id)
    result = await db.execute(stmt.order_by(Letter.created_at))
    return list(result.scalars().all())


async def list_received_letters(db: AsyncSession, user_id: UUID) -> list[Letter]:
    """Get all letters addressed to a user, oldest first."""
    result = await db.execute(
        select(Letter)
        .where(Letter.recipient_id == user_id)
        .order_by(Letter.created_at),
    )
    return list(result.scalars().all())


async def list_inbox(db: AsyncSession, user_id: UUID) -> list[Letter]:
    """Get the replies addressed to a user with their authors loaded, oldest first."""
    result = await db.execute(
        select(Letter)
        .where(Letter.recipient_id == user_id, Letter.kind == LetterKind.REPLY)
        .options(selectinload(Letter.author))
        .order_by(Letter.created_at),
    )
    return list(result.scalars().all())


async def delete_letters(db: AsyncSession, letter_ids: list[UUID] | None) -> int:
    """
    Delete letters by id.

    Mailbox entries pointing at the deleted letters are removed with them.
    Replies to a deleted letter keep existing without a parent, and letters
    that lose all their replies go back to unanswered. Unknown ids are ignored.

    Returns:
        Number of letters deleted.

    Raises:
        InvalidLetterIdsError: If letter_ids is missing or empty.
    """
    if not letter_ids:
        raise InvalidLetterIdsError()

    result = await db.execute(select(Letter).where(Letter.id.in_(letter_ids)))
    letters = list(result.scalars().all())
    if not letters:
        return 0

    deleted_ids = {letter.id for letter in letters}
    parent_ids = {letter.parent_id for letter in letters if letter.parent_id is not None}
    owner_result = await db.execute(
        select(MailboxEntry.user_id)
        .where(MailboxEntry.letter_id.in_(deleted_ids))
        .distinct(),
    )
    owner_ids = set(owner_result.scalars().all())

    for letter in letters:
        await db.delete(letter)
    await db.flush()

    await _refresh_mailboxes(db, owner_ids)
    await _sync_answered(db, parent_ids - deleted_ids)

    logger.info("Deleted %d letters", len(letters))
    return len(letters)


async def _refresh_mailboxes(db: AsyncSession, user_ids: Iterable[UUID]) -> None:
    """Reload mailboxes whose entries were removed by a cascade."""
    for user_id in user_ids:
        user = await db.get(User, user_id)
        if user is not None:
            await db.refresh(user, attribute_names=["mailbox_entries"])


async def _sync_answered(db: AsyncSession, letter_ids: Iterable[UUID]) -> None:
    """Recompute answered for letters whose replies were deleted."""
    changed = False
    for letter_id in letter_ids:
        letter = await db.get(Letter, letter_id)
        if letter is None:
            continue
        await db.refresh(letter, attribute_names=["replies"])
        answered = bool(letter.replies)
        if letter.answered != answered:
            letter.answered = answered
            letter.updated_at = utc_now()
            changed = True
    if changed:
        await db.flush()
