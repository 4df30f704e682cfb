from app.workers.tasks.appeals import run_stale_appeal_retry
from app.workers.tasks.debate_rounds import run_debate_round_sweep
from app.workers.tasks.tournaments import (
    run_tournament_auto_start,
    run_tournament_prize_distribution,
    run_tournament_progression,
)
from app.workers.tasks.verdicts import generate_debate_verdict

__all__ = [
    "generate_debate_verdict",
    "run_debate_round_sweep",
    "run_stale_appeal_retry",
    "run_tournament_auto_start",
    "run_tournament_prize_distribution",
    "run_tournament_progression",
]
