"""Shared exceptions for service layer operations."""
from uuid import UUID

from models.letter import Letter


class UserNotFoundError(Exception):
    """Raised when a user id or login name does not resolve to a user."""

    def __init__(self, identifier: UUID | str) -> None:
        self.identifier = identifier
        super().__init__("Usuário não encontrado")


class InvalidPasswordError(Exception):
    """Raised when a login name exists but the password does not match."""

    def __init__(self) -> None:
        super().__init__("Senha incorreta")


class LetterNotFoundError(Exception):
    """Raised when a letter id does not resolve to a letter."""

    def __init__(self, letter_id: UUID) -> None:
        self.letter_id = letter_id
        super().__init__("Carta original não encontrada")


class NoUnansweredLettersError(Exception):
    """Raised when the draw pool is empty for the requesting user."""

    def __init__(self) -> None:
        super().__init__("Não há cartas não respondidas disponíveis.")


class EmptyReplyError(Exception):
    """Raised when a reply body is missing, empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Conteúdo da resposta não pode ser vazio.")


class InvalidLetterIdsError(Exception):
    """Raised when a bulk delete payload is not a non-empty list of letter ids."""

    def __init__(self) -> None:
        super().__init__("IDs inválidos ou não fornecidos.")


class LetterConflictError(Exception):
    """
    Raised when a reply targets a letter that changed since the client read it.

    Carries the letter as it is now so the client can decide whether to
    reply anyway.
    """

    def __init__(self, letter: Letter) -> None:
        self.letter = letter
        super().__init__("Esta carta foi modificada desde que você a carregou")
