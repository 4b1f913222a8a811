"""Phase-offset (stride) optimization for a code table.

Every LED may start its codeword at any frame without changing its
identity, so each row of the table can be rotated freely. The goal is
to choose rotations that keep the busiest frame (the peak of the
brightness histogram) as low as possible.

Modes:
- fixed stride: row i is shifted right by i * stride frames.
- greedy placement: rows are placed one at a time, each at the rotation
  with the lowest peak over itself and the rows above it.
- refinement: each row in turn is re-rotated against the whole table,
  minimizing the peak and then raising the floor (the quietest frame) to
  level the histogram. Repeated a caller-chosen number of rounds.

Each row decision starts from the row's current rotation, so choosing a
rotation never raises the peak that decision is scored on. The search is
deterministic but heuristic; it does not guarantee the global optimum.
"""

from __future__ import annotations

import numpy as np
import structlog

from .bits import rotate_left
from .stats import column_sums, max_brightness, min_brightness

logger = structlog.get_logger(__name__)

# Which rotation wins when two candidates score the same
TIE_LARGEST = "largest"
TIE_SMALLEST = "smallest"

TIE_BREAKS = (TIE_LARGEST, TIE_SMALLEST)


def _check_tie_break(tie_break: str) -> None:
    if tie_break not in TIE_BREAKS:
        valid = ", ".join(TIE_BREAKS)
        raise ValueError(f"Unknown tie break '{tie_break}'. Valid tie breaks: {valid}")


def _bright(row: list[int]) -> np.ndarray:
    return (np.asarray(row) != 0).astype(np.int64)


def heaviest_first(table: list[list[int]]) -> None:
    """Reverse the table in place.

    Compact tables are built lightest first, so this puts the heaviest
    codewords at the top where they are placed before the lighter ones.
    """
    table.reverse()


def apply_fixed_stride(table: list[list[int]], stride: int) -> None:
    """Shift row i right by (i * stride) mod length frames, in place.

    Raises:
        ValueError: If stride is negative.
    """
    if stride < 0:
        raise ValueError(f"stride must be non-negative, got {stride}")
    if not table:
        return

    length = len(table[0])
    for i in range(1, len(table)):
        shift = (i * stride) % length
        table[i] = rotate_left(table[i], length - shift)


def place_row(table: list[list[int]], i: int, tie_break: str = TIE_LARGEST) -> int:
    """Rotate row i to minimize the peak over rows 0..i.

    Rows below i are ignored. At equal peaks the larger rotation wins
    with TIE_LARGEST, the smaller with TIE_SMALLEST.

    Returns:
        Number of left-rotation steps applied to row i.
    """
    _check_tie_break(tie_break)
    current = table[i]
    above = np.asarray(column_sums(table, i), dtype=np.int64)

    best_peak = 0
    best_rotation = 0
    for j in range(len(current)):
        peak = int((above + _bright(rotate_left(current, j))).max())
        if j == 0:
            best_peak = peak
            continue
        if peak < best_peak or (peak == best_peak and tie_break == TIE_LARGEST):
            best_peak = peak
            best_rotation = j

    table[i] = rotate_left(current, best_rotation)
    return best_rotation


def greedy_optimum_stride(table: list[list[int]], tie_break: str = TIE_LARGEST) -> None:
    """Greedy single-pass placement: row 0 stays put, rows 1.. are placed in order."""
    if not table:
        return
    for i in range(1, len(table)):
        place_row(table, i, tie_break=tie_break)

    logger.debug(
        "greedy_stride_placed",
        rows=len(table),
        peak=max_brightness(column_sums(table)),
    )


def _improves(
    peak: int,
    floor: int,
    best_peak: int,
    best_floor: int,
    level: bool,
    tie_break: str,
) -> bool:
    if peak != best_peak:
        return peak < best_peak
    if level and floor != best_floor:
        return floor > best_floor
    return tie_break == TIE_LARGEST


def refine_row(
    table: list[list[int]],
    i: int,
    level: bool = True,
    tie_break: str = TIE_LARGEST,
) -> int:
    """Re-rotate row i against the rest of the table.

    Candidates are scored on the whole-table histogram: a lower peak
    always wins; at equal peaks a higher floor wins when *level* is set;
    remaining ties go to the larger (TIE_LARGEST) or smaller
    (TIE_SMALLEST) rotation.

    Returns:
        Number of left-rotation steps applied to row i.
    """
    _check_tie_break(tie_break)
    current = table[i]
    others = np.asarray(column_sums(table), dtype=np.int64) - _bright(current)

    best_peak = best_floor = 0
    best_rotation = 0
    for j in range(len(current)):
        hist = (others + _bright(rotate_left(current, j))).tolist()
        peak, floor = max_brightness(hist), min_brightness(hist)
        if j == 0 or _improves(peak, floor, best_peak, best_floor, level, tie_break):
            best_peak, best_floor = peak, floor
            best_rotation = j

    table[i] = rotate_left(current, best_rotation)
    return best_rotation


def greedy_reduce_overlaps(
    table: list[list[int]],
    level: bool = True,
    tie_break: str = TIE_LARGEST,
) -> None:
    """One refinement round: refine every row once, top to bottom."""
    for i in range(len(table)):
        refine_row(table, i, level=level, tie_break=tie_break)


def optimize_strides(
    table: list[list[int]],
    stride: int = -1,
    rounds: int = 20,
    level: bool = True,
    tie_break: str = TIE_LARGEST,
) -> None:
    """Choose per-row rotations in place.

    Args:
        table: Code table, already in placement order.
        stride: Fixed stride when >= 0; negative selects greedy placement.
        rounds: Number of refinement rounds after the initial layout.
        level: Use the floor-raising secondary objective during refinement.
        tie_break: TIE_LARGEST or TIE_SMALLEST.

    Raises:
        ValueError: If rounds is negative or tie_break is unknown.
    """
    if rounds < 0:
        raise ValueError(f"rounds must be non-negative, got {rounds}")
    _check_tie_break(tie_break)
    if not table:
        return

    if stride >= 0:
        apply_fixed_stride(table, stride)
    else:
        greedy_optimum_stride(table, tie_break=tie_break)

    for round_idx in range(rounds):
        greedy_reduce_overlaps(table, level=level, tie_break=tie_break)
        logger.debug(
            "refinement_round",
            round=round_idx + 1,
            peak=max_brightness(column_sums(table)),
        )

    logger.info(
        "strides_optimized",
        rows=len(table),
        mode="fixed" if stride >= 0 else "greedy",
        stride=stride,
        rounds=rounds,
        peak=max_brightness(column_sums(table)),
    )
