"""Fair rate computation step."""

from __future__ import annotations

from ..pricing import compute_fair_rate
from .context import PipelineContext


async def price_pool(ctx: PipelineContext) -> None:
    """Run the fair price calculator on the collected snapshot and quotes."""
    log = ctx.state.logger
    base_quote, quote_quote = ctx.quotes_required

    fair_rate = compute_fair_rate(ctx.snapshot_required, base_quote, quote_quote)
    log.info(
        "Fair rate for %s: %s (last updated %d)",
        fair_rate.lp_token,
        fair_rate.rate,
        fair_rate.last_updated,
    )
    ctx.fair_rate = fair_rate
