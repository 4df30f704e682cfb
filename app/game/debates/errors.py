from app.core.errors import (
    ArenaError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    WindowExpiredError,
)


class DebateError(ArenaError):
    pass


class DebateNotFoundError(DebateError, NotFoundError):
    pass


class DebateInvalidStateError(DebateError, InvalidStateError):
    pass


class AppealError(DebateError):
    pass


class AppealValidationError(AppealError, ValidationError):
    pass


class AppealForbiddenError(AppealError, ForbiddenError):
    pass


class AppealAlreadySubmittedError(AppealError, ConflictError):
    pass


class AppealWindowExpiredError(AppealError, WindowExpiredError):
    pass


class VerdictValidationError(DebateError, ValidationError):
    pass
