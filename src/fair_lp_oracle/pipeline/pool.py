"""Pool state resolution."""

from __future__ import annotations

from ..adapters import POOL_ADAPTERS
from .context import PipelineContext
from .retry import with_transport_retries


async def load_pool(ctx: PipelineContext) -> None:
    """Resolve the LP token to its pool and record the snapshot.

    Raises:
        PoolNotFound: If the LP token does not resolve to a pool
        TransportError: If the node stays unreachable after retries
    """
    s = ctx.state.settings
    log = ctx.state.logger

    adapter = POOL_ADAPTERS[s.pool_adapter](s)
    log.info("Reading pool state for %s via %s...", ctx.lp_token, adapter.adapter_name)

    snapshot = await with_transport_retries(
        ctx,
        f"Pool read for {ctx.lp_token}",
        lambda: adapter.fetch_snapshot(ctx.lp_token),
    )

    log.debug(
        "Pool %s: base %s=%d (%d dp), quote %s=%d (%d dp), supply=%d",
        snapshot.lp_token,
        snapshot.reserve_base.asset,
        snapshot.reserve_base.amount,
        snapshot.reserve_base.decimals,
        snapshot.reserve_quote.asset,
        snapshot.reserve_quote.amount,
        snapshot.reserve_quote.decimals,
        snapshot.total_lp_supply,
    )
    ctx.snapshot = snapshot
