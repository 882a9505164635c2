"""High-level query orchestration."""

from __future__ import annotations

import asyncio

from ..domain import FairRate
from ..errors import TransportError
from ..state import AppState
from .context import PipelineContext
from .pool import load_pool
from .pricing import price_pool
from .quotes import load_quotes


async def get_fair_price(state: AppState, lp_token: str) -> FairRate:
    """Answer a fair price query for one LP token.

    Sequences the pipeline steps:
    1. Pool state (reserves, decimals, LP supply)
    2. Asset quotes for both reserves
    3. Fair rate computation

    Args:
        state: Application state containing settings and logger
        lp_token: Address of the LP token to price

    Raises:
        FairPriceError: Any failure from a step, unmodified
        TransportError: If the query exceeds ``query_timeout_seconds``
    """
    log = state.logger
    timeout_s = state.settings.query_timeout_seconds

    log.info("Starting fair price query", extra={"lp_token": lp_token})

    ctx = PipelineContext(state=state, lp_token=lp_token)

    async def _run_pipeline() -> None:
        await load_pool(ctx)
        await load_quotes(ctx)
        await price_pool(ctx)

    try:
        if timeout_s is None:
            await _run_pipeline()
        else:
            async with asyncio.timeout(timeout_s):
                await _run_pipeline()
    except asyncio.TimeoutError as exc:
        log.error(
            "Fair price query timed out",
            extra={"lp_token": lp_token, "timeout_seconds": timeout_s},
        )
        raise TransportError(
            f"Fair price query exceeded timeout {timeout_s}s (lp_token={lp_token})\n"
            " N.B. This can be changed via `query_timeout_seconds`."
        ) from exc

    log.info("Fair price query completed", extra={"lp_token": lp_token})
    return ctx.fair_rate_required
