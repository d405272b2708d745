"""Cooperative cancellation and yielding for long-running page loops."""

from __future__ import annotations

import asyncio
from typing import Optional

from .exceptions import OperationCancelledError


class CancellationToken:
    """Flag checked by the engine at every suspension point."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelledError()


def check_cancelled(token: Optional[CancellationToken]) -> None:
    if token is not None:
        token.raise_if_cancelled()


async def checkpoint(
    step: int,
    *,
    every: int,
    delay: float = 0.0,
    token: Optional[CancellationToken] = None,
) -> None:
    """Honour ``token`` and, every ``every`` steps, hand control back to the loop."""

    check_cancelled(token)
    if step % every == 0:
        await asyncio.sleep(delay)
        check_cancelled(token)


__all__ = ["CancellationToken", "check_cancelled", "checkpoint"]
