"""Error helpers for power-law fits."""

from __future__ import annotations

from .data_errors import handle_invalid_input, handle_no_input
from .replica_errors import record_replica_failure

__all__ = [
    "handle_invalid_input",
    "handle_no_input",
    "record_replica_failure",
]
