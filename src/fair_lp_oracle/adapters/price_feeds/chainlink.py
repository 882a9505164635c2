from __future__ import annotations

import asyncio
import logging

import requests
from eth_typing import URI
from web3 import Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    ProviderConnectionError,
    Web3Exception,
    Web3RPCError,
)

from ...abi import load_aggregator_abi
from ...domain import AssetQuote
from ...errors import PriceUnavailable, TransportError
from ...settings import OracleSettings, PriceFeedSettings
from .base import BasePriceFeed

logger = logging.getLogger(__name__)


class ChainlinkPriceFeed(BasePriceFeed):
    """Reads Chainlink aggregators through ``latestRoundData``."""

    def __init__(self, config: OracleSettings):
        super().__init__(config)
        self.block_identifier = config.block_number or "latest"
        self.w3 = Web3(Web3.HTTPProvider(URI(config.rpc_endpoint)))

    @property
    def feed_name(self) -> str:
        return "chainlink"

    def _read_round(self, aggregator_address: str) -> tuple[int, int, int]:
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(aggregator_address),
            abi=load_aggregator_abi(),
        )
        _, answer, _, updated_at, _ = contract.functions.latestRoundData().call(
            block_identifier=self.block_identifier
        )
        decimals = contract.functions.decimals().call(
            block_identifier=self.block_identifier
        )
        return int(answer), int(decimals), int(updated_at)

    async def fetch_quote(self, asset: str, feed: PriceFeedSettings) -> AssetQuote:
        """Fetch the latest aggregator answer for ``asset``.

        Raises:
            PriceUnavailable: If the aggregator reverts, is not an aggregator,
                reports a non-positive answer, or its address is malformed.
            StalePrice: If ``updatedAt`` is older than the maximum age.
            TransportError: If the RPC endpoint cannot be reached or answers
                with a JSON-RPC error.
        """
        try:
            answer, decimals, updated_at = await asyncio.to_thread(
                self._read_round, feed.feed
            )
        except (ContractLogicError, BadFunctionCallOutput) as exc:
            raise PriceUnavailable(
                f"Chainlink aggregator {feed.feed} for {asset} could not be read: {exc}"
            ) from exc
        except (ProviderConnectionError, Web3RPCError, requests.RequestException) as exc:
            raise TransportError(
                f"RPC request to Chainlink aggregator {feed.feed} failed: {exc}"
            ) from exc
        except ValueError as exc:
            raise PriceUnavailable(
                f"Invalid Chainlink aggregator address {feed.feed} for {asset}: {exc}"
            ) from exc
        except Web3Exception as exc:
            raise TransportError(
                f"RPC request to Chainlink aggregator {feed.feed} failed: {exc}"
            ) from exc

        logger.debug(
            "Chainlink %s: answer=%d decimals=%d updatedAt=%d",
            asset,
            answer,
            decimals,
            updated_at,
        )

        if answer <= 0:
            raise PriceUnavailable(
                f"Chainlink aggregator {feed.feed} returned non-positive answer {answer} for {asset}"
            )

        quote = AssetQuote(
            asset=asset,
            unit_price=answer,
            decimals=decimals,
            as_of=updated_at,
            source=self.feed_name,
        )
        return self.validate_quote(quote)
