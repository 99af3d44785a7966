"""Application error taxonomy.

Every error carries a machine-readable ``code`` and a human ``message``, and
optionally the underlying ``cause``. Input problems subclass
:class:`ValidationError`; storage problems do not.
"""


class AppError(Exception):
    """Base class for all diary errors."""

    code = "APP_ERROR"
    default_message = "Unexpected application error"

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause


class ValidationError(AppError):
    """Input or invariant violation."""

    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class FutureDateError(ValidationError):
    """Date is after the current local day."""

    code = "FUTURE_DATE_NOT_ALLOWED"
    default_message = "Future date is not allowed"


class ContentTooLongError(ValidationError):
    """Content exceeds the maximum entry length."""

    code = "CONTENT_TOO_LONG"
    default_message = "Content exceeds maximum length (10,000 characters)"


class DuplicateDateEntryError(ValidationError):
    """An entry already exists for the target date."""

    code = "DUPLICATE_DATE_ENTRY"
    default_message = "An entry for this date already exists"


class SaveFailedError(AppError):
    """Raised when a write to the backing store fails."""

    code = "SAVE_FAILED"
    default_message = "Failed to save diary entry"


class FetchFailedError(AppError):
    """Raised when a read fails or a requested entry does not exist."""

    code = "FETCH_FAILED"
    default_message = "Failed to load diary entry"


class LoadFailedError(AppError):
    """Raised when the backing store itself cannot be read."""

    code = "LOAD_FAILED"
    default_message = "Failed to load diary entries"


def is_retryable(error: BaseException) -> bool:
    """True for storage failures where trying again may help."""
    return isinstance(error, (SaveFailedError, FetchFailedError, LoadFailedError))
