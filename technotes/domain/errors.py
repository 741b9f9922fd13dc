"""
Errores tipados de la capa de servicio.

Los servicios lanzan estas excepciones; el mapeo a códigos HTTP vive en
`technotes.core.exceptions`.
"""


class NotesError(Exception):
    """Base de los errores de dominio; `message` es seguro para el cliente."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(NotesError):
    default_message = "Not found"


class UnknownActorError(NotFoundError):
    """El usuario que ejecuta la operación no existe."""

    default_message = "User not found"


class ForbiddenError(NotesError):
    default_message = "User does not have necessary permissions"


class InvalidDataError(NotesError):
    default_message = "Invalid note data received"


class NoContentError(NotesError):
    default_message = "No notes found"
