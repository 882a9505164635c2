"""Manipulation-resistant fair pricing for AMM liquidity-pool share tokens."""
