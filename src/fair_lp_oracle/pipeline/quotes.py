"""External price retrieval for the pool's two assets."""

from __future__ import annotations

import asyncio

from ..adapters import PRICE_FEEDS
from ..domain import AssetQuote
from ..errors import PriceUnavailable
from .context import PipelineContext
from .retry import with_transport_retries


async def _fetch_quote(ctx: PipelineContext, asset: str) -> AssetQuote:
    s = ctx.state.settings
    feed_settings = s.price_feed_for(asset)
    if feed_settings is None:
        raise PriceUnavailable(f"No price feed configured for asset {asset}")

    feed = PRICE_FEEDS[feed_settings.source](s)
    ctx.state.logger.debug(
        "Fetching %s price for %s from feed %s",
        feed.feed_name,
        asset,
        feed_settings.feed,
    )
    return await with_transport_retries(
        ctx,
        f"{feed.feed_name} quote for {asset}",
        lambda: feed.fetch_quote(asset, feed_settings),
    )


async def load_quotes(ctx: PipelineContext) -> None:
    """Fetch both asset quotes concurrently.

    Raises:
        PriceUnavailable: If an asset has no configured feed or no usable price
        StalePrice: If a quote is older than the configured maximum age
        TransportError: If a feed stays unreachable after retries
    """
    snapshot = ctx.snapshot_required
    log = ctx.state.logger

    log.info(
        "Fetching prices for %s and %s...",
        snapshot.reserve_base.asset,
        snapshot.reserve_quote.asset,
    )
    base_quote, quote_quote = await asyncio.gather(
        _fetch_quote(ctx, snapshot.reserve_base.asset),
        _fetch_quote(ctx, snapshot.reserve_quote.asset),
    )

    ctx.base_quote = base_quote
    ctx.quote_quote = quote_quote
