from app.game.debates.appeals import submit_appeal
from app.game.debates.lifecycle import advance_debate_round, check_debate_round
from app.game.debates.verdicts import record_debate_verdict

__all__ = [
    "advance_debate_round",
    "check_debate_round",
    "record_debate_verdict",
    "submit_appeal",
]
