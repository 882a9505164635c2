from __future__ import annotations

import asyncio

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

from ...abi import load_erc20_abi, load_uniswap_v2_pair_abi
from ...domain import AssetReserve, PoolSnapshot
from ...errors import PoolNotFound, TransportError
from ...logger import get_logger
from ...settings import OracleSettings
from .base import BasePoolAdapter

logger = get_logger(__name__)


class UniswapV2PoolAdapter(BasePoolAdapter):
    """Reads Uniswap V2 style pairs, where the LP token is the pair contract."""

    def __init__(self, config: OracleSettings):
        super().__init__(config)
        self.base_token_index = config.base_token_index
        self.block_identifier = config.block_number or "latest"
        self.w3 = Web3(Web3.HTTPProvider(URI(config.rpc_endpoint)))

    @property
    def adapter_name(self) -> str:
        return "uniswap_v2"

    def _token_decimals(self, token: str) -> int:
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(token), abi=load_erc20_abi()
        )
        return int(
            contract.functions.decimals().call(block_identifier=self.block_identifier)
        )

    def _read_pair(self, pair_address: str) -> PoolSnapshot:
        checksum_pair = Web3.to_checksum_address(pair_address)
        code = self.w3.eth.get_code(checksum_pair, block_identifier=self.block_identifier)
        if not code:
            raise PoolNotFound(f"No contract deployed at LP token {pair_address}")

        pair = self.w3.eth.contract(address=checksum_pair, abi=load_uniswap_v2_pair_abi())
        call = {"block_identifier": self.block_identifier}

        tokens = [
            pair.functions.token0().call(**call),
            pair.functions.token1().call(**call),
        ]
        reserve0, reserve1, _ = pair.functions.getReserves().call(**call)
        total_supply = int(pair.functions.totalSupply().call(**call))
        reserves = [int(reserve0), int(reserve1)]
        decimals = [self._token_decimals(token) for token in tokens]

        base, quote = self.base_token_index, 1 - self.base_token_index
        return PoolSnapshot(
            lp_token=checksum_pair,
            reserve_base=AssetReserve(
                asset=tokens[base], amount=reserves[base], decimals=decimals[base]
            ),
            reserve_quote=AssetReserve(
                asset=tokens[quote], amount=reserves[quote], decimals=decimals[quote]
            ),
            total_lp_supply=total_supply,
        )

    async def fetch_snapshot(self, lp_token: str) -> PoolSnapshot:
        try:
            snapshot = await asyncio.to_thread(self._read_pair, lp_token)
        except (ContractLogicError, BadFunctionCallOutput) as exc:
            raise PoolNotFound(
                f"LP token {lp_token} does not implement the Uniswap V2 pair interface: {exc}"
            ) from exc
        except (ProviderConnectionError, Web3RPCError, requests.RequestException) as exc:
            raise TransportError(
                f"RPC request for LP token {lp_token} failed: {exc}"
            ) from exc
        except ValueError as exc:
            # Web3.to_checksum_address rejects malformed addresses
            raise PoolNotFound(f"Invalid LP token address {lp_token}: {exc}") from exc
        except Web3Exception as exc:
            raise TransportError(
                f"RPC request for LP token {lp_token} failed: {exc}"
            ) from exc

        logger.debug(
            "Pair %s: reserves=(%d, %d) supply=%d",
            snapshot.lp_token,
            snapshot.reserve_base.amount,
            snapshot.reserve_quote.amount,
            snapshot.total_lp_supply,
        )
        return snapshot
