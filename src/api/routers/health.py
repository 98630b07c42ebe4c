"""Liveness and readiness endpoints."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.letter import Letter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Readiness report: store reachability and the size of the draw pool."""

    status: str
    database: str
    unanswered_letters: int | None = None


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Liveness probe used by the web client."""
    return "API funcionando!"


@router.get("/health", response_model=HealthResponse)
async def readiness(db: AsyncSession = Depends(get_async_session)) -> HealthResponse:
    """Report whether the letter store answers, and how many letters await a reply."""
    try:
        pool_size = await db.scalar(
            select(func.count()).select_from(Letter).where(Letter.answered.is_(False)),
        )
    except SQLAlchemyError:
        logger.exception("Letter store unreachable")
        return HealthResponse(status="degraded", database="unhealthy")
    return HealthResponse(status="healthy", database="healthy", unanswered_letters=pool_size)
