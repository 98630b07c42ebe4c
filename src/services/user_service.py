"""Service layer for user registration, profile CRUD and login."""
import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utc_now
from models.letter import Letter
from models.user import User
from schemas.user import UserCreate, UserUpdate
from services import letter_service
from services.exceptions import InvalidPasswordError, UserNotFoundError

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """Register a user with empty mailboxes."""
    user = User(
        name=data.name,
        password=data.password,
        birth_date=data.birth_date,
        age=data.age,
        mailbox_entries=[],
    )
    db.add(user)
    await db.flush()
    logger.info("User %s registered", user.id)
    return user


async def list_users(db: AsyncSession) -> list[User]:
    """Get all users, oldest first."""
    result = await db.execute(select(User).order_by(User.created_at))
    return list(result.scalars().all())


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    """Get a user by id, or None if it doesn't exist."""
    return await db.get(User, user_id)


async def update_user(db: AsyncSession, user_id: UUID, data: UserUpdate) -> User:
    """
    Update the fields present in the request.

    Raises:
        UserNotFoundError: If user_id does not resolve.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    user.updated_at = utc_now()
    await db.flush()
    return user


async def delete_user(db: AsyncSession, user_id: UUID) -> None:
    """
    Delete a user together with the letters they wrote and their mailboxes.

    Replies the user received stay in place with no recipient.

    Raises:
        UserNotFoundError: If user_id does not resolve.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    result = await db.execute(select(Letter.id).where(Letter.author_id == user_id))
    letter_ids = list(result.scalars().all())
    if letter_ids:
        await letter_service.delete_letters(db, letter_ids)

    await db.execute(
        update(Letter)
        .where(Letter.recipient_id == user_id)
        .values(recipient_id=None),
    )
    await db.delete(user)
    await db.flush()
    logger.info("User %s deleted with %d letters", user_id, len(letter_ids))


async def authenticate(db: AsyncSession, name: str, password: str) -> User:
    """
    Log a user in by name and plaintext password.

    Names are not unique; the oldest user with the name is checked.

    Raises:
        UserNotFoundError: If no user has this name.
        InvalidPasswordError: If the password does not match.
    """
    result = await db.execute(
        select(User)
        .where(User.name == name)
        .order_by(User.created_at)
        .limit(1),
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(name)
    if user.password != password:
        logger.info("Failed login for user %s", user.id)
        raise InvalidPasswordError()
    return user
