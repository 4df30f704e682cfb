from __future__ import annotations

TOURNAMENT_FORMAT_SINGLE_ELIMINATION = "SINGLE_ELIMINATION"
TOURNAMENT_FORMAT_KING_OF_THE_HILL = "KING_OF_THE_HILL"
TOURNAMENT_FORMAT_CHAMPIONSHIP = "CHAMPIONSHIP"
TOURNAMENT_FORMATS = frozenset(
    {
        TOURNAMENT_FORMAT_SINGLE_ELIMINATION,
        TOURNAMENT_FORMAT_KING_OF_THE_HILL,
        TOURNAMENT_FORMAT_CHAMPIONSHIP,
    }
)

TOURNAMENT_STATUS_UPCOMING = "UPCOMING"
TOURNAMENT_STATUS_REGISTRATION_OPEN = "REGISTRATION_OPEN"
TOURNAMENT_STATUS_IN_PROGRESS = "IN_PROGRESS"
TOURNAMENT_STATUS_COMPLETED = "COMPLETED"
TOURNAMENT_JOINABLE_STATUSES = frozenset(
    {TOURNAMENT_STATUS_UPCOMING, TOURNAMENT_STATUS_REGISTRATION_OPEN}
)

PARTICIPANT_STATUS_REGISTERED = "REGISTERED"
PARTICIPANT_STATUS_ACTIVE = "ACTIVE"
PARTICIPANT_STATUS_ELIMINATED = "ELIMINATED"

POSITION_PRO = "PRO"
POSITION_CON = "CON"
POSITIONS = (POSITION_PRO, POSITION_CON)

ROUND_STATUS_IN_PROGRESS = "IN_PROGRESS"
ROUND_STATUS_COMPLETED = "COMPLETED"

MATCH_STATUS_IN_PROGRESS = "IN_PROGRESS"
MATCH_STATUS_COMPLETED = "COMPLETED"
MATCH_STATUS_BYE = "BYE"

RESEED_METHOD_ELO_BASED = "ELO_BASED"

VALID_BRACKET_SIZES = (4, 8, 16, 32, 64)
MIN_PARTICIPANTS_TO_START = 2
MATCH_DEBATE_TOTAL_ROUNDS = 3
DEFAULT_ROUND_DURATION_HOURS = 24
MISSING_SEED_RANK = 999

KOTH_ELIMINATION_SHARE_PERCENT = 25
KOTH_FINALISTS = 2

ELIMINATION_REASON_LOST_MATCH = "Lost round {round_number} match"
ELIMINATION_REASON_NO_SUBMISSION = "Did not submit an argument for this round"
ELIMINATION_REASON_BOTTOM_SCORE = "Eliminated in round {round_number} (bottom 25% by score)"
ELIMINATION_REASON_FINAL_LOSS = "Lost the final"
ELIMINATION_REASON_NOT_ADVANCED = "Did not advance from round 1 ({position} group ranking)"

FEATURE_KEY_TOURNAMENT_CREATE = "TOURNAMENT_CREATE"

NOTIFICATION_TYPE_TOURNAMENT_CHAMPION = "TOURNAMENT_CHAMPION"
NOTIFICATION_TYPE_TOURNAMENT_COMPLETED = "TOURNAMENT_COMPLETED"
NOTIFICATION_TYPE_TOURNAMENT_STARTED = "TOURNAMENT_STARTED"

RESEED_METHOD_REGISTRATION_ORDER = "REGISTRATION_ORDER"
RESEED_METHODS = frozenset({RESEED_METHOD_ELO_BASED, RESEED_METHOD_REGISTRATION_ORDER})

ADVANCE_OUTCOME_NOOP = "NOOP"
ADVANCE_OUTCOME_WAITING = "WAITING"
ADVANCE_OUTCOME_ADVANCED = "ADVANCED"
ADVANCE_OUTCOME_COMPLETED = "COMPLETED"
