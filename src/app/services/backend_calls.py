"""Chamadas a backends externos com timeout limitado.

Timeout vira BackendTimeoutError: a chamada é tratada como falha e segue
a mesma política de falha parcial de um erro explícito.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from utils.errors import BackendTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")


async def bounded_call(
    awaitable: Awaitable[T],
    *,
    operation: str,
    timeout_seconds: float,
) -> T:
    """Aguarda `awaitable` por no máximo `timeout_seconds`."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except TimeoutError as exc:
        raise BackendTimeoutError(operation, timeout_seconds) from exc
