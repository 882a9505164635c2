"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .settings import OracleSettings


@dataclass
class AppState:
    """Settings and logger shared by one CLI invocation.

    Passed into the query pipeline instead of module globals; the pricing
    core never sees it.
    """

    settings: OracleSettings
    logger: logging.Logger
