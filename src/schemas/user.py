"""Pydantic schemas for user endpoints."""
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    """Schema for registering a user."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nome", min_length=1)
    password: str = Field(alias="senha", min_length=1)
    birth_date: date | None = Field(default=None, alias="nascimento")
    age: int | None = Field(default=None, alias="idade")


class UserUpdate(BaseModel):
    """
    Schema for updating a user.

    Only the fields present in the request are changed.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="nome", min_length=1)
    password: str | None = Field(default=None, alias="senha", min_length=1)
    birth_date: date | None = Field(default=None, alias="nascimento")
    age: int | None = Field(default=None, alias="idade")

    @field_validator("name", "password")
    @classmethod
    def reject_null(cls, v: str | None) -> str:
        """Name and password may be omitted but never cleared."""
        if v is None:
            raise ValueError("cannot be null")
        return v


class LoginRequest(BaseModel):
    """Schema for logging in by name and password."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nome")
    password: str = Field(alias="senha")


class UserResponse(BaseModel):
    """
    Schema for user responses.

    Includes the plaintext password: login and registration return the full
    user record, which the web client relies on.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID = Field(alias="_id")
    name: str = Field(alias="nome")
    password: str = Field(alias="senha")
    birth_date: date | None = Field(alias="dataNascimento")
    age: int | None = Field(alias="idade")
    sent_letter_ids: list[UUID] = Field(alias="cartasEnviadas")
    received_letter_ids: list[UUID] = Field(alias="cartasRecebidas")
    created_at: datetime = Field(alias="createdAt")
