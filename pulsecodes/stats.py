"""Per-frame brightness statistics for a code table.

The brightness histogram counts, for every frame, how many LEDs are
bright in it. Its maximum is the worst-case simultaneous brightness the
optimizer tries to minimize.
"""

from __future__ import annotations

import math

import numpy as np


def _as_array(table: list[list[int]]) -> np.ndarray:
    lengths = {len(row) for row in table}
    if len(lengths) > 1:
        raise ValueError(f"Codewords must all have the same length, got {sorted(lengths)}")
    return np.asarray(table, dtype=np.int64)


def column_sums(table: list[list[int]], n_rows: int | None = None) -> list[int]:
    """Brightness histogram of a table.

    Args:
        table: Code table (list of equal-length codewords).
        n_rows: Only count the first n_rows rows. None counts all rows.

    Returns:
        One count per frame. Empty if the table is empty.

    Raises:
        ValueError: If the codewords differ in length.
    """
    if not table:
        return []
    rows = table if n_rows is None else table[:n_rows]
    if not rows:
        return [0] * len(table[0])
    arr = _as_array(rows)
    return [int(v) for v in np.count_nonzero(arr, axis=0)]


def max_brightness(histogram: list[int]) -> int:
    """Worst-case number of LEDs bright in one frame (0 if empty)."""
    return max(histogram, default=0)


def min_brightness(histogram: list[int]) -> int:
    """Fewest LEDs bright in any one frame (0 if empty)."""
    return min(histogram, default=0)


def theoretical_minimum(table: list[list[int]]) -> int:
    """Lower bound on the worst-case brightness over all rotations.

    Every bright frame has to land in some column, so at least
    ceil(total ones / codeword length) LEDs share the busiest frame no
    matter how the rows are rotated.
    """
    if not table or not table[0]:
        return 0
    total_ones = int(np.count_nonzero(_as_array(table)))
    return math.ceil(total_ones / len(table[0]))
