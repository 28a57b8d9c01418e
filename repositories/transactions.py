"""
Multi-document transaction helper.

Requires a replica set or sharded cluster; a standalone mongod rejects
transactions.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

R = TypeVar("R")


async def run_in_transaction(
    client: Any, callback: Callable[[Any], Awaitable[R]]
) -> R:
    """Run ``callback(session)`` inside a transaction and return its result.

    ``with_transaction`` commits on success, aborts if the callback raises
    (the exception propagates) and retries on transient transaction errors,
    so the callback must be safe to re-run from the start.
    """
    async with client.start_session() as session:
        return await session.with_transaction(callback)
