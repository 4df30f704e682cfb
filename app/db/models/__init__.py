from app.db.models.debate_statements import DebateStatement
from app.db.models.debate_verdicts import DebateVerdict
from app.db.models.debates import Debate
from app.db.models.feature_usage_events import FeatureUsageEvent
from app.db.models.ledger_entries import LedgerEntry
from app.db.models.notifications import Notification
from app.db.models.tournament_matches import TournamentMatch
from app.db.models.tournament_participants import TournamentParticipant
from app.db.models.tournament_rounds import TournamentRound
from app.db.models.tournaments import Tournament
from app.db.models.users import User

__all__ = [
    "Debate",
    "DebateStatement",
    "DebateVerdict",
    "FeatureUsageEvent",
    "LedgerEntry",
    "Notification",
    "Tournament",
    "TournamentMatch",
    "TournamentParticipant",
    "TournamentRound",
    "User",
]
