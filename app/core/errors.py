class ArenaError(Exception):
    pass


class ValidationError(ArenaError):
    pass


class InvalidStateError(ArenaError):
    pass


class ForbiddenError(ArenaError):
    pass


class NotFoundError(ArenaError):
    pass


class ConflictError(ArenaError):
    pass


class WindowExpiredError(ArenaError):
    pass


class TransientError(ArenaError):
    pass
