from app.core.errors import (
    ArenaError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class TournamentError(ArenaError):
    pass


class TournamentNotFoundError(TournamentError, NotFoundError):
    pass


class TournamentValidationError(TournamentError, ValidationError):
    pass


class TournamentAccessError(TournamentError, ForbiddenError):
    pass


class TournamentClosedError(TournamentError, InvalidStateError):
    pass


class TournamentAlreadyRegisteredError(TournamentError, ConflictError):
    pass


class TournamentFullError(TournamentError, ConflictError):
    pass


class TournamentEloTooLowError(TournamentError, ForbiddenError):
    def __init__(self, *, min_elo: int, user_elo: int) -> None:
        super().__init__(f"Minimum ELO of {min_elo} required (current {user_elo})")
        self.min_elo = min_elo
        self.user_elo = user_elo


class TournamentPositionRequiredError(TournamentError, ValidationError):
    pass


class TournamentPositionFullError(TournamentError, ConflictError):
    def __init__(self, *, position: str, suggested_position: str) -> None:
        super().__init__(f"{position} side is full, choose {suggested_position} instead")
        self.position = position
        self.suggested_position = suggested_position


class TournamentAlreadyStartedError(TournamentError, InvalidStateError):
    pass


class TournamentInsufficientParticipantsError(TournamentError, InvalidStateError):
    pass
