"""Pricing constants and well-known contract addresses."""

from typing import Optional, TypedDict

# Largest token or price precision accepted by the calculator
MAX_DECIMALS = 18

# Precision every quote is rescaled to before pricing
PRICE_DECIMALS = 18


class NetworkAssets(TypedDict):
    USDC: Optional[str]
    WETH: Optional[str]


ETH_MAINNET_ASSETS: NetworkAssets = {
    "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
}

# Chainlink USD aggregators on mainnet
PRICE_FEED_ETH_USD = "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419"
PRICE_FEED_USDC_USD = "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6"

# Uniswap V2 USDC/WETH pair, used by integration tests
UNISWAP_V2_USDC_WETH = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"

DEFAULT_MAINNET_RPC_URL = "https://eth.drpc.org"
DEFAULT_PYTH_HERMES_ENDPOINT = "https://hermes.pyth.network"

# HTTP timeout for Pyth Hermes requests, seconds
HTTP_TIMEOUT = 5.0
