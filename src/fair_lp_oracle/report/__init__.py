from __future__ import annotations

from .formatter import format_error_panel, format_fair_rate_table
from .serializer import dumps, fair_rate_to_dict

__all__ = ["dumps", "fair_rate_to_dict", "format_error_panel", "format_fair_rate_table"]
