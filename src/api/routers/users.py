"""User registration, profile and login endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.user import User
from schemas.letter import MessageResponse
from schemas.user import LoginRequest, UserCreate, UserResponse, UserUpdate
from services import user_service
from services.exceptions import InvalidPasswordError, UserNotFoundError

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/usuarios", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Register a new user."""
    return await user_service.create_user(db, data)


@router.get("/usuarios", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_async_session)) -> list[User]:
    """List all users."""
    return await user_service.list_users(db)


@router.get("/usuarios/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get a single user."""
    user = await user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return user


@router.put("/usuarios/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Update a user's profile. Fields left out of the body are kept."""
    try:
        return await user_service.update_user(db, user_id, data)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/usuarios/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Delete a user along with the letters they wrote."""
    try:
        await user_service.delete_user(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Usuário excluído com sucesso")


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Log in by name and password.

    Returns the full user record on success.
    """
    try:
        return await user_service.authenticate(db, data.name, data.password)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidPasswordError as e:
        raise HTTPException(status_code=401, detail=str(e))
