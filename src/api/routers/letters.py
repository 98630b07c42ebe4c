"""Letter endpoints: submission, random draw, replies, listings and deletion."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.letter import Letter
from schemas.letter import (
    InboxLetterResponse,
    LetterCreate,
    LetterDeleteRequest,
    LetterResponse,
    MessageResponse,
    ReplyCreate,
    ReplyResponse,
)
from services import letter_service
from services.exceptions import (
    EmptyReplyError,
    InvalidLetterIdsError,
    LetterConflictError,
    LetterNotFoundError,
    NoUnansweredLettersError,
    UserNotFoundError,
)

router = APIRouter(prefix="/api", tags=["letters"])


@router.get("/cartas", response_model=list[LetterResponse])
async def list_letters(
    author_id: UUID | None = Query(default=None, alias="escritor"),
    db: AsyncSession = Depends(get_async_session),
) -> list[Letter]:
    """List the letters a user wrote, or every letter when no writer is given."""
    return await letter_service.list_letters(db, author_id)


@router.get("/cartas-recebidas/{user_id}", response_model=list[LetterResponse])
async def list_received_letters(
    user_id: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> list[Letter]:
    """List the letters addressed to a user."""
    return await letter_service.list_received_letters(db, user_id)


@router.get("/cartas-nao-respondidas", response_model=list[LetterResponse])
async def draw_unanswered_letter(
    requester_id: UUID | None = Query(default=None, alias="escritorId"),
    db: AsyncSession = Depends(get_async_session),
) -> list[Letter]:
    """
    Draw one random unanswered letter written by someone else.

    Returns a list holding the drawn letter. The letter is not reserved.
    """
    try:
        letter = await letter_service.draw_unanswered(db, requester_id)
    except NoUnansweredLettersError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [letter]


@router.post("/cartas/{letter_id}/respostas", response_model=ReplyResponse, status_code=201)
async def reply_to_letter(
    letter_id: UUID,
    data: ReplyCreate,
    db: AsyncSession = Depends(get_async_session),
) -> ReplyResponse:
    """
    Reply to a letter.

    Pass `versao` (the letter's version when it was drawn) to be told with a
    409 if someone replied in the meantime.
    """
    try:
        reply, parent = await letter_service.reply_to(
            db, letter_id, data.author_id, data.body, data.expected_version,
        )
    except EmptyReplyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (LetterNotFoundError, UserNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LetterConflictError as e:
        raise HTTPException(
            status_code=409,
            detail={
                "message": str(e),
                "server_state": LetterResponse.model_validate(e.letter).model_dump(
                    mode="json", by_alias=True,
                ),
            },
        )
    return ReplyResponse(
        reply=LetterResponse.model_validate(reply),
        parent=LetterResponse.model_validate(parent),
    )


@router.post("/cartas", response_model=LetterResponse, status_code=201)
async def submit_letter(
    data: LetterCreate,
    db: AsyncSession = Depends(get_async_session),
) -> Letter:
    """Write a new letter into the pool of unanswered letters."""
    try:
        return await letter_service.submit_letter(db, data.author_id, data.body)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/cartas", response_model=MessageResponse)
async def delete_letters(
    data: LetterDeleteRequest,
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Delete letters by id."""
    try:
        await letter_service.delete_letters(db, data.ids)
    except InvalidLetterIdsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="Cartas excluídas com sucesso.")


@router.get("/caixa-entrada/{user_id}", response_model=list[InboxLetterResponse])
async def get_inbox(
    user_id: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> list[Letter]:
    """List the replies a user received, each with its author's name."""
    return await letter_service.list_inbox(db, user_id)
