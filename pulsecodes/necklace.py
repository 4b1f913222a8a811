"""Rotation-distinct codewords of a fixed weight.

A tracker that may start reading an LED's pulse train at any frame
cannot tell a codeword from its cyclic rotations, so each weight class
is reduced to one representative per rotation class (a binary necklace).

Enumeration order: ones are placed left to right at strictly increasing
positions, i.e. position combinations in lexicographic order. The first
candidate of each rotation class in that order is its representative,
so results are stable across runs.
"""

from __future__ import annotations

import math
from itertools import combinations

import structlog

from .bits import rotate_left

logger = structlog.get_logger(__name__)


def _all_rotations(row: list[int]) -> set[tuple[int, ...]]:
    return {tuple(rotate_left(row, r)) for r in range(len(row))}


def rotation_classes(bits: int, ones: int) -> list[list[int]]:
    """Enumerate one codeword per rotation class of the given weight.

    Args:
        bits: Codeword length.
        ones: Number of bright frames in every returned codeword.

    Returns:
        Representatives in enumeration order. A single all-zero codeword
        when ones is 0; an empty list when ones is out of range.
    """
    if bits <= 0 or ones < 0 or ones > bits:
        return []

    accepted: list[list[int]] = []
    seen: set[tuple[int, ...]] = set()

    for positions in combinations(range(bits), ones):
        candidate = [0] * bits
        for p in positions:
            candidate[p] = 1
        if tuple(candidate) in seen:
            continue
        accepted.append(candidate)
        seen |= _all_rotations(candidate)

    logger.debug("rotation_classes_built", bits=bits, ones=ones, count=len(accepted))
    return accepted


def _euler_phi(n: int) -> int:
    result = n
    p = 2
    m = n
    while p * p <= m:
        if m % p == 0:
            while m % p == 0:
                m //= p
            result -= result // p
        p += 1
    if m > 1:
        result -= result // m
    return result


def necklace_count(bits: int, ones: int) -> int:
    """Number of binary necklaces of length *bits* with *ones* ones.

    Equals len(rotation_classes(bits, ones)) without enumerating them.
    """
    if bits <= 0 or ones < 0 or ones > bits:
        return 0
    g = math.gcd(bits, ones)
    total = 0
    for d in range(1, g + 1):
        if g % d == 0:
            total += _euler_phi(d) * math.comb(bits // d, ones // d)
    return total // bits
