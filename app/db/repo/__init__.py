from app.db.repo.debate_statements_repo import DebateStatementsRepo
from app.db.repo.debate_verdicts_repo import DebateVerdictsRepo
from app.db.repo.debates_repo import DebatesRepo
from app.db.repo.feature_usage_repo import FeatureUsageRepo
from app.db.repo.ledger_repo import LedgerRepo
from app.db.repo.notifications_repo import NotificationsRepo
from app.db.repo.tournament_matches_repo import TournamentMatchesRepo
from app.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from app.db.repo.tournament_rounds_repo import TournamentRoundsRepo
from app.db.repo.tournaments_repo import TournamentsRepo
from app.db.repo.users_repo import UsersRepo

__all__ = [
    "DebateStatementsRepo",
    "DebateVerdictsRepo",
    "DebatesRepo",
    "FeatureUsageRepo",
    "LedgerRepo",
    "NotificationsRepo",
    "TournamentMatchesRepo",
    "TournamentParticipantsRepo",
    "TournamentRoundsRepo",
    "TournamentsRepo",
    "UsersRepo",
]
