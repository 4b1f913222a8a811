#!/usr/bin/env python3
"""Basic usage example for pulsecodes.

Builds LED code tables in both encodings, optimizes their phase offsets
and prints how close the result gets to the theoretical bound.

Usage:
    python examples/basic_usage.py
"""

import sys
import os

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pulsecodes.bits import PARITY_EVEN, PARITY_NONE, PARITY_ODD
from pulsecodes.renderer import render_grid, render_histogram, render_svg
from pulsecodes.schedule import generate_schedule
from pulsecodes.table import ENCODING_SIMPLE, compact_capacity


def example_compact_table():
    """Default run: 40 LEDs, 10 frames, even parity, greedy strides."""
    print("=" * 60)
    print("Example 1: Compact Encoding, Greedy Strides")
    print("=" * 60)

    result = generate_schedule()
    print(f"  LEDs:              {result.leds}")
    print(f"  Codeword length:   {result.codeword_length}")
    print(f"  Peak before:       {result.baseline_max}")
    print(f"  Peak after:        {result.final_max}")
    print(f"  Theoretical bound: {result.theoretical_minimum}")
    print(f"  Histogram:         {render_histogram(result.final_histogram)}")
    print()


def example_simple_table():
    """Framed, self-clocking codewords for 8 LEDs."""
    print("=" * 60)
    print("Example 2: Simple Encoding")
    print("=" * 60)

    result = generate_schedule(leds=8, bits=3, encoding=ENCODING_SIMPLE, rounds=5)
    print(render_grid(result.shifted))
    print(f"  Peak after: {result.final_max} (bound {result.theoretical_minimum})")
    print()


def example_capacity():
    """How many LEDs each parity setting can address."""
    print("=" * 60)
    print("Example 3: Compact Capacity by Parity")
    print("=" * 60)

    for bits in (6, 8, 10, 12):
        none = compact_capacity(bits, PARITY_NONE)
        odd = compact_capacity(bits, PARITY_ODD)
        even = compact_capacity(bits, PARITY_EVEN)
        print(f"  {bits:2d} frames: none={none:4d}  odd={odd:4d}  even={even:4d}")
    print()


def example_refinement_rounds():
    """Peak brightness as refinement rounds increase."""
    print("=" * 60)
    print("Example 4: Refinement Rounds")
    print("=" * 60)

    for rounds in (0, 1, 5, 20):
        result = generate_schedule(leds=60, bits=12, rounds=rounds)
        print(
            f"  rounds={rounds:2d}: peak={result.final_max:2d} "
            f"bound={result.theoretical_minimum:2d}"
        )
    svg = render_svg(result.shifted, cell=8)
    print(f"  SVG length: {len(svg)} chars")
    print()


if __name__ == "__main__":
    example_compact_table()
    example_simple_table()
    example_capacity()
    example_refinement_rounds()
    print("All examples completed successfully.")
