from __future__ import annotations

DEFAULT_PRIZE_DISTRIBUTION: dict[str, int] = {"1st": 60, "2nd": 30, "3rd": 10}

PRIZE_LEDGER_ENTRY_TYPE = "TOURNAMENT_PRIZE"
PRIZE_LEDGER_ASSET = "COINS"
PRIZE_LEDGER_SOURCE = "TOURNAMENT"

NOTIFICATION_TYPE_TOURNAMENT_PRIZE = "TOURNAMENT_PRIZE"

PRIZE_NOTIFICATION_TITLES: dict[str, str] = {
    "1st": "🏆 Tournament Victory!",
    "2nd": "🥈 2nd Place!",
    "3rd": "🥉 3rd Place!",
}
