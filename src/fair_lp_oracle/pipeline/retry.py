"""Transport retry policy for collaborator calls."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import backoff

from ..errors import TransportError
from .context import PipelineContext

T = TypeVar("T")


async def with_transport_retries(
    ctx: PipelineContext,
    label: str,
    call: Callable[[], Awaitable[T]],
) -> T:
    """Await ``call()``, retrying only on ``TransportError``.

    Every other ``FairPriceError`` is terminal and propagates on first raise.
    """
    s = ctx.state.settings
    log = ctx.state.logger

    def _on_backoff(details: Any) -> None:
        log.warning(
            "%s failed (attempt %d of %d): %s",
            label,
            details["tries"],
            s.transport_retries + 1,
            details.get("exception"),
        )

    def _on_giveup(details: Any) -> None:
        log.error(
            "%s failed after %d attempts: %s",
            label,
            details["tries"],
            details.get("exception"),
        )

    @backoff.on_exception(
        backoff.expo,
        TransportError,
        max_tries=s.transport_retries + 1,
        factor=s.transport_backoff_seconds,
        on_backoff=_on_backoff,
        on_giveup=_on_giveup,
    )
    async def _attempt() -> T:
        return await call()

    return await _attempt()
