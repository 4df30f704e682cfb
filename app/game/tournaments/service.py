from app.game.tournaments.create_join import create_tournament, join_tournament
from app.game.tournaments.lifecycle import advance_tournament
from app.game.tournaments.start import start_tournament

__all__ = [
    "advance_tournament",
    "create_tournament",
    "join_tournament",
    "start_tournament",
]
