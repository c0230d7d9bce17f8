"""Domain errors.

Every error raised on purpose by easyalert derives from ``EasyAlertError``.
Each one carries the HTTP status it maps to and a message that is safe to
show to the client; the API layer renders it as ``{"error": message}``.
"""


class EasyAlertError(Exception):
    """Base class for all easyalert errors."""

    status_code: int = 500
    default_message: str = "an unknown error occured"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(EasyAlertError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "invalid input"


class AuthenticationError(EasyAlertError):
    """Missing, malformed or unknown credential."""

    status_code = 401
    default_message = "Invalid credentials."


class RecordNotFound(EasyAlertError):
    """A repository lookup or update matched no record.

    Handlers branch on this; when it escapes unhandled it is a server error.
    """

    default_message = "record does not exist"


class ConflictError(EasyAlertError):
    """A uniqueness constraint was violated."""

    status_code = 400
    default_message = "record already exists"


class InternalError(EasyAlertError):
    """Unexpected failure. The message never carries internal detail."""


class PersistenceError(InternalError):
    """The storage engine failed."""


class RandomSourceError(InternalError):
    """The secure random source could not be read."""

    default_message = "could not generate token"


class HashingError(InternalError):
    """The password hashing primitive failed."""

    default_message = "could not hash password"
