from __future__ import annotations

from dataclasses import dataclass

from ..domain import AssetQuote, FairRate, PoolSnapshot
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    lp_token: str
    snapshot: PoolSnapshot | None = None
    base_quote: AssetQuote | None = None
    quote_quote: AssetQuote | None = None
    fair_rate: FairRate | None = None

    @property
    def snapshot_required(self) -> PoolSnapshot:
        if self.snapshot is None:
            raise RuntimeError(
                "Pool snapshot has not been set. Ensure load_pool() is called before accessing this property."
            )
        return self.snapshot

    @property
    def quotes_required(self) -> tuple[AssetQuote, AssetQuote]:
        if self.base_quote is None or self.quote_quote is None:
            raise RuntimeError(
                "Asset quotes have not been set. Ensure load_quotes() is called before accessing this property."
            )
        return self.base_quote, self.quote_quote

    @property
    def fair_rate_required(self) -> FairRate:
        if self.fair_rate is None:
            raise RuntimeError(
                "Fair rate has not been set. Ensure price_pool() is called before accessing this property."
            )
        return self.fair_rate
