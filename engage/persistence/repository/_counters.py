"""Shared SQL for relative counter updates."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Table, func


def counter_deltas(
    table: Table, deltas: Mapping[str, int], allowed: frozenset[str]
) -> dict[str, Any]:
    """Build ``col = greatest(col + delta, 0)`` assignments for an UPDATE.

    Args:
        table: Table holding the counters
        deltas: Counter name to signed delta
        allowed: Counter columns that may be adjusted

    Returns:
        Values mapping for ``update().values(...)``

    Raises:
        ValueError: If a delta names a column that is not a counter
    """
    unknown = set(deltas) - allowed
    if unknown:
        raise ValueError(f"Unknown counters: {sorted(unknown)}")
    return {
        name: func.greatest(table.c[name] + delta, 0)
        for name, delta in deltas.items()
        if delta
    }
