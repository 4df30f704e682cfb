from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from app.db.session import dispose_engine

T = TypeVar("T")


def _job_name(awaitable: Awaitable[object]) -> str:
    return str(getattr(awaitable, "__qualname__", type(awaitable).__name__))


async def _run_with_fresh_db_pool(awaitable: Awaitable[T]) -> T:
    await dispose_engine()
    try:
        with structlog.contextvars.bound_contextvars(job=_job_name(awaitable)):
            return await awaitable
    finally:
        await dispose_engine()


def run_async_job(awaitable: Awaitable[T]) -> T:
    return asyncio.run(_run_with_fresh_db_pool(awaitable))
