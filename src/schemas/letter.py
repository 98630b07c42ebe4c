"""Pydantic schemas for letter endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LetterCreate(BaseModel):
    """Schema for submitting a new letter to the draw pool."""

    model_config = ConfigDict(populate_by_name=True)

    author_id: UUID = Field(alias="escritor")
    # Accepted as-is; only replies reject blank bodies
    body: str = Field(alias="conteudo")


class ReplyCreate(BaseModel):
    """Schema for replying to a letter."""

    model_config = ConfigDict(populate_by_name=True)

    author_id: UUID = Field(alias="escritor")
    body: str | None = Field(default=None, alias="conteudo")
    expected_version: int | None = Field(
        default=None,
        alias="versao",
        description="Version of the letter when it was drawn. If it changed since, "
        "the reply is rejected with 409.",
    )


class LetterDeleteRequest(BaseModel):
    """Schema for bulk letter deletion."""

    ids: list[UUID] | None = None


class LetterBase(BaseModel):
    """Fields shared by all letter responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID = Field(alias="_id")
    recipient_id: UUID | None = Field(alias="destinatario")
    body: str = Field(alias="conteudo")
    kind: str = Field(alias="tipo")
    answered: bool = Field(alias="respondida")
    reply_ids: list[UUID] = Field(alias="respostas")
    version: int = Field(alias="versao")
    created_at: datetime = Field(alias="createdAt")


class LetterResponse(LetterBase):
    """Schema for letter responses."""

    author_id: UUID = Field(alias="escritor")


class LetterAuthor(BaseModel):
    """Author summary embedded in inbox letters."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID = Field(alias="_id")
    name: str = Field(alias="nome")


class InboxLetterResponse(LetterBase):
    """Schema for inbox entries, with the reply's author populated."""

    author: LetterAuthor = Field(alias="escritor")


class ReplyResponse(BaseModel):
    """Schema for the result of replying: the new reply and the updated letter."""

    model_config = ConfigDict(populate_by_name=True)

    reply: LetterResponse = Field(alias="resposta")
    parent: LetterResponse = Field(alias="cartaOriginal")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
