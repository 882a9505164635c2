from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import PoolSnapshot
from ...settings import OracleSettings


class BasePoolAdapter(ABC):
    """Abstract base class for pool state providers."""

    def __init__(self, config: OracleSettings):
        """Initialize the adapter with configuration."""
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_snapshot(self, lp_token: str) -> PoolSnapshot:
        """Resolve ``lp_token`` to its pool and read reserves and LP supply.

        Raises:
            PoolNotFound: If ``lp_token`` does not resolve to a readable pool.
            TransportError: If the backing node cannot be reached.
        """
        ...
