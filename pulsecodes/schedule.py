"""End-to-end schedule generation.

build table -> baseline histogram -> heaviest rows first -> stride
optimization -> final histogram -> theoretical lower bound.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .bits import PARITY_EVEN, PARITY_NAMES
from .stats import column_sums, max_brightness, theoretical_minimum
from .stride import TIE_LARGEST, heaviest_first, optimize_strides
from .table import ENCODING_COMPACT, ENCODING_SIMPLE, build_table

logger = structlog.get_logger(__name__)

ERROR_INSUFFICIENT_BITS = "insufficient_bit_budget"
ERROR_COMPACT_EXHAUSTED = "compact_encoding_exhausted"

# Command-line and service defaults
DEFAULT_LEDS = 40
DEFAULT_BITS = 10
DEFAULT_ROUNDS = 20


@dataclass
class ScheduleResult:
    """Code table and brightness report for one run.

    Attributes:
        leds: Requested number of LEDs.
        bits: Bit budget.
        encoding: ENCODING_SIMPLE or ENCODING_COMPACT.
        parity: Parity constraint used for compact encoding.
        stride: Fixed stride, or negative for greedy placement.
        rounds: Refinement rounds run.
        unshifted: Table as built, before reordering and rotation.
        baseline_histogram: Brightness histogram of the unshifted table.
        shifted: Table after reordering and rotation (row order is the
            final LED assignment).
        final_histogram: Brightness histogram of the shifted table.
        theoretical_minimum: Lower bound on any achievable peak.
        error: ERROR_* code if the table could not be built, else None.
    """

    leds: int
    bits: int
    encoding: str
    parity: int
    stride: int
    rounds: int
    unshifted: list[list[int]] = field(default_factory=list)
    baseline_histogram: list[int] = field(default_factory=list)
    shifted: list[list[int]] = field(default_factory=list)
    final_histogram: list[int] = field(default_factory=list)
    theoretical_minimum: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the table was built."""
        return self.error is None

    @property
    def baseline_max(self) -> int:
        return max_brightness(self.baseline_histogram)

    @property
    def final_max(self) -> int:
        return max_brightness(self.final_histogram)

    @property
    def codeword_length(self) -> int:
        return len(self.shifted[0]) if self.shifted else 0


def generate_schedule(
    leds: int = DEFAULT_LEDS,
    bits: int = DEFAULT_BITS,
    encoding: str = ENCODING_COMPACT,
    parity: int = PARITY_EVEN,
    stride: int = -1,
    rounds: int = DEFAULT_ROUNDS,
    level: bool = True,
    tie_break: str = TIE_LARGEST,
) -> ScheduleResult:
    """Build a code table for *leds* LEDs and optimize its phase offsets.

    Args:
        leds: Number of LEDs to identify.
        bits: Data-bit budget (simple) or codeword length (compact).
        encoding: ENCODING_SIMPLE or ENCODING_COMPACT.
        parity: Parity constraint for compact encoding.
        stride: Fixed stride when >= 0; negative for greedy placement.
        rounds: Refinement rounds after the initial layout.
        level: Raise the histogram floor as a secondary objective.
        tie_break: Rotation preferred on ties (TIE_LARGEST/TIE_SMALLEST).

    Returns:
        ScheduleResult. When the table cannot be built its tables are
        empty and error is set; no exception is raised for that case.

    Raises:
        ValueError: If encoding, parity, rounds or tie_break is invalid.
    """
    result = ScheduleResult(
        leds=leds,
        bits=bits,
        encoding=encoding,
        parity=parity,
        stride=stride,
        rounds=rounds,
    )

    table = build_table(leds, bits, encoding, parity)
    if not table:
        result.error = (
            ERROR_INSUFFICIENT_BITS if encoding == ENCODING_SIMPLE else ERROR_COMPACT_EXHAUSTED
        )
        logger.warning(
            "schedule_failed",
            error=result.error,
            leds=leds,
            bits=bits,
            encoding=encoding,
            parity=PARITY_NAMES.get(parity, parity),
        )
        return result

    result.unshifted = [list(row) for row in table]
    result.baseline_histogram = column_sums(table)

    heaviest_first(table)
    optimize_strides(table, stride=stride, rounds=rounds, level=level, tie_break=tie_break)

    result.shifted = table
    result.final_histogram = column_sums(table)
    result.theoretical_minimum = theoretical_minimum(table)

    logger.info(
        "schedule_generated",
        leds=leds,
        bits=bits,
        encoding=encoding,
        codeword_length=result.codeword_length,
        baseline_max=result.baseline_max,
        final_max=result.final_max,
        theoretical_minimum=result.theoretical_minimum,
    )
    return result
