from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.engine import URL, make_url

TEST_DB_NAME_RE = re.compile(r"test", re.IGNORECASE)
ALLOWED_LOCAL_HOSTS = frozenset(
    {
        "localhost",
        "127.0.0.1",
        "::1",
        "postgres",
        "db",
        "debate_arena_postgres",
    }
)


@dataclass(frozen=True, slots=True)
class IntegrationDbSafetyResult:
    is_safe: bool
    reason: str
    database_name: str
    host: str


def _database_name(url: URL) -> str:
    return (url.database or "").strip()


def _host(url: URL) -> str:
    return (url.host or "").strip().lower()


# Checked in order; the first failing rule decides the reason.
_SAFETY_RULES: tuple[tuple[Callable[[URL], bool], str], ...] = (
    (
        lambda url: url.get_backend_name() == "postgresql",
        "Integration tests support only PostgreSQL test databases.",
    ),
    (lambda url: bool(_database_name(url)), "Database name is empty."),
    (
        lambda url: TEST_DB_NAME_RE.search(_database_name(url)) is not None,
        "Database name must clearly indicate a test database (contain 'test').",
    ),
    (
        lambda url: _host(url) in ALLOWED_LOCAL_HOSTS,
        "Host is not in allowed local integration-test hosts.",
    ),
)


def assess_integration_db_safety(database_url: str) -> IntegrationDbSafetyResult:
    url = make_url(database_url)
    reason = next((message for rule, message in _SAFETY_RULES if not rule(url)), None)
    return IntegrationDbSafetyResult(
        is_safe=reason is None,
        reason=reason or "ok",
        database_name=_database_name(url),
        host=_host(url),
    )


def assert_safe_integration_db(database_url: str) -> None:
    """Raises unless the URL points at a local PostgreSQL database named like a test DB."""
    result = assess_integration_db_safety(database_url)
    if result.is_safe:
        return

    raise RuntimeError(
        "Refusing to run integration tests with destructive TRUNCATE.\n"
        f"Reason: {result.reason}\n"
        f"Resolved DB: name='{result.database_name}' host='{result.host}'\n"
        "Required: a dedicated local PostgreSQL test database such as 'debate_arena_test'."
    )
