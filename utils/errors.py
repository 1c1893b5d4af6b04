"""
Reservation service error taxonomy.

Every failure raised by the models layer is a ReservationServiceError.
The kind (subclass) is kept for logging and diagnostics; at the HTTP
boundary all kinds collapse into the failing operation's message.
"""


class ReservationServiceError(Exception):
    """Base class for all reservation engine failures."""

    status_code = 500

    def __init__(self, message: str = '', **context):
        super().__init__(message)
        self.message = message
        self.context = context

    @property
    def kind(self) -> str:
        return type(self).__name__


class NotFound(ReservationServiceError):
    """Lake, spot, reservation or competition does not exist."""

    status_code = 404


class InvalidInput(ReservationServiceError):
    """Payload failed validation (name length, phone pattern, ...)."""

    status_code = 400


class DateConflict(ReservationServiceError):
    """A requested date is already blocked on a spot."""

    status_code = 409


class InvalidIdentifier(ReservationServiceError):
    """Identifier does not carry a parseable timestamp segment."""

    status_code = 400


class EncryptionFailure(ReservationServiceError):
    """Field cipher could not encrypt or decrypt a value."""


class PersistenceFailure(ReservationServiceError):
    """Lake document could not be loaded or saved."""
