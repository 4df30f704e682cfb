from __future__ import annotations

from datetime import timedelta

DEBATE_STATUS_WAITING = "WAITING"
DEBATE_STATUS_ACTIVE = "ACTIVE"
DEBATE_STATUS_COMPLETED = "COMPLETED"
DEBATE_STATUS_VERDICT_READY = "VERDICT_READY"
DEBATE_STATUS_APPEALED = "APPEALED"

APPEAL_STATUS_PENDING = "PENDING"
APPEAL_STATUS_RESOLVED = "RESOLVED"

APPEAL_REASON_MIN_LENGTH = 50
APPEAL_REASON_MAX_LENGTH = 1000
APPEAL_WINDOW = timedelta(hours=48)
MAX_APPEALS_PER_DEBATE = 1

ROUND_OUTCOME_NOOP = "NOOP"
ROUND_OUTCOME_ADVANCED = "ADVANCED"
ROUND_OUTCOME_COMPLETED = "COMPLETED"

ROUND_REASON_NOT_ACTIVE = "not_active"
ROUND_REASON_NOT_DUE = "not_due_yet"
ROUND_REASON_NO_PARTICIPATION = "no_participation"
ROUND_REASON_NO_STATEMENTS = "no_statements"
ROUND_REASON_FINAL_ROUND = "final_round_elapsed"
ROUND_REASON_DEADLINE_PASSED = "deadline_passed"
ROUND_REASON_ALREADY_HANDLED = "already_handled"

VERDICT_TRIGGER_ROUND_COMPLETED = "ROUND_COMPLETED"
VERDICT_TRIGGER_APPEAL = "APPEAL"
VERDICT_TRIGGER_APPEAL_RETRY = "APPEAL_RETRY"

NOTIFICATION_TYPE_APPEAL_SUBMITTED = "APPEAL_SUBMITTED"
NOTIFICATION_TYPE_VERDICT_READY = "VERDICT_READY"
