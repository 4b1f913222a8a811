"""Code table construction.

Builds the list of codewords (one per LED, index = LED) in either the
simple framed encoding or the compact rotation-distinct encoding.

Construction is all-or-nothing: when the bit budget cannot address the
requested number of LEDs an empty table is returned and a warning is
logged. Callers check for emptiness; nothing is raised for this case.
"""

from __future__ import annotations

import structlog

from .bits import PARITY_NAMES, frame_codeword, parity_allows
from .necklace import necklace_count, rotation_classes

logger = structlog.get_logger(__name__)

ENCODING_SIMPLE = "simple"
ENCODING_COMPACT = "compact"

ENCODINGS = (ENCODING_SIMPLE, ENCODING_COMPACT)


def build_simple_table(leds: int, bits: int) -> list[list[int]]:
    """Frame identifiers 0..leds-1 with the self-clocking layout.

    Returns:
        Table of leds codewords of length 2 * (bits + 3), or an empty
        list if any identifier does not fit in *bits* data bits.
    """
    if leds <= 0:
        return []

    table: list[list[int]] = []
    for identifier in range(leds):
        codeword = frame_codeword(identifier, bits)
        if not codeword:
            logger.warning(
                "insufficient_bit_budget",
                leds=leds,
                bits=bits,
                first_unencodable=identifier,
            )
            return []
        table.append(codeword)

    logger.debug("simple_table_built", leds=leds, bits=bits, length=len(table[0]))
    return table


def build_compact_table(leds: int, bits: int, parity: int) -> list[list[int]]:
    """Collect rotation-distinct codewords, lightest weight first.

    Weight classes 1..bits are visited in ascending order, skipping
    weights the parity constraint rejects. Codewords are taken in
    enumeration order and collection stops as soon as there are *leds*
    of them, even part way through a weight class.

    Returns:
        Table of leds codewords of length *bits*, or an empty list if all
        eligible weight classes together have fewer than leds codewords.
    """
    if leds <= 0:
        return []

    table: list[list[int]] = []
    for ones in range(1, bits + 1):
        if not parity_allows(parity, ones):
            continue
        for codeword in rotation_classes(bits, ones):
            table.append(codeword)
            if len(table) == leds:
                logger.debug(
                    "compact_table_built",
                    leds=leds,
                    bits=bits,
                    parity=PARITY_NAMES[parity],
                    max_weight=ones,
                )
                return table

    logger.warning(
        "compact_encoding_exhausted",
        leds=leds,
        bits=bits,
        parity=PARITY_NAMES[parity],
        available=len(table),
    )
    return []


def compact_capacity(bits: int, parity: int) -> int:
    """How many LEDs compact encoding can address with *bits* frames."""
    return sum(
        necklace_count(bits, ones)
        for ones in range(1, bits + 1)
        if parity_allows(parity, ones)
    )


def build_table(leds: int, bits: int, encoding: str, parity: int) -> list[list[int]]:
    """Build a code table in the requested encoding.

    Args:
        leds: Number of LEDs to identify.
        bits: Data-bit budget (simple) or codeword length (compact).
        encoding: ENCODING_SIMPLE or ENCODING_COMPACT.
        parity: Parity constraint, used by compact encoding only.

    Returns:
        The code table, or an empty list if it cannot be built.

    Raises:
        ValueError: If encoding is not recognized.
    """
    if encoding not in ENCODINGS:
        valid = ", ".join(ENCODINGS)
        raise ValueError(f"Unknown encoding '{encoding}'. Valid encodings: {valid}")

    if leds >= 1 << bits:
        logger.warning("not_enough_bits", leds=leds, bits=bits)

    if encoding == ENCODING_SIMPLE:
        return build_simple_table(leds, bits)
    return build_compact_table(leds, bits, parity)
