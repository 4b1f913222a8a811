"""Bit helpers and the framed codeword layout for simple encoding.

A codeword is a list of 0s and 1s, one entry per camera frame
(1 = LED bright, 0 = LED dark). Rotating a codeword changes the frame
where it starts but not which LED it identifies.
"""

from __future__ import annotations

# Parity constraints (numbering matches the command-line flag values)
PARITY_NONE = 0
PARITY_ODD = 1
PARITY_EVEN = 2

PARITY_NAMES: dict[int, str] = {
    PARITY_NONE: "none",
    PARITY_ODD: "odd",
    PARITY_EVEN: "even",
}

PARITY_BY_NAME: dict[str, int] = {v: k for k, v in PARITY_NAMES.items()}

BRIGHT_CHAR = "*"
DARK_CHAR = "."


def has_odd_parity(n: int) -> bool:
    """True if *n* has an odd number of set bits."""
    parity = False
    while n:
        parity = not parity
        n &= n - 1
    return parity


def parity_allows(parity: int, weight: int) -> bool:
    """Check whether codewords of *weight* ones satisfy the parity constraint.

    Raises:
        ValueError: If parity is not one of PARITY_NONE/ODD/EVEN.
    """
    if parity not in PARITY_NAMES:
        valid = ", ".join(f"{k} ({v})" for k, v in PARITY_NAMES.items())
        raise ValueError(f"Unknown parity {parity!r}. Valid parities: {valid}")
    if parity == PARITY_ODD:
        return weight % 2 == 1
    if parity == PARITY_EVEN:
        return weight % 2 == 0
    return True


def frame_codeword(identifier: int, bits: int) -> list[int]:
    """Build the framed, self-clocking codeword for an LED identifier.

    Layout (two frames per symbol):
    - [1, 1]: start of frame
    - [0, p]: p = 1 if the identifier has odd parity
    - [0, b]: one pair per data bit, MSB first
    - [0, 0]: stop

    Args:
        identifier: Non-negative LED identifier.
        bits: Number of data bits.

    Returns:
        Codeword of length 2 * (bits + 3), or an empty list if the
        identifier does not fit in *bits* data bits.

    Raises:
        ValueError: If identifier is negative or bits is not positive.
    """
    if identifier < 0:
        raise ValueError(f"identifier must be non-negative, got {identifier}")
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    if identifier >= 1 << bits:
        return []

    codeword = [1, 1, 0, 1 if has_odd_parity(identifier) else 0]
    for i in range(bits - 1, -1, -1):
        codeword.extend((0, (identifier >> i) & 1))
    codeword.extend((0, 0))
    return codeword


def rotate_left(row: list[int], steps: int) -> list[int]:
    """Cyclically rotate *row* so that element *steps* becomes the first."""
    if not row:
        return []
    k = steps % len(row)
    return row[k:] + row[:k]


def codeword_to_string(row: list[int]) -> str:
    """Render a codeword as '*' (bright) and '.' (dark) characters."""
    return "".join(BRIGHT_CHAR if v else DARK_CHAR for v in row)
