"""Command-line entry point: print the code table report.

Usage:
    python -m pulsecodes [--simple-encoding] [--parity N] [--stride N]
                         [--stride-optimize N] [--leds N] [--bits N] [--csv]

Exit codes: 0 on success, 2 for invalid parameters, 3 when the table
cannot be built with the given bit budget.
"""

from __future__ import annotations

import argparse
import logging
import sys

import structlog
from pydantic import ValidationError

from .bits import PARITY_BY_NAME, PARITY_NAMES
from .models import ScheduleRequest
from .renderer import render_report
from .schedule import DEFAULT_BITS, DEFAULT_LEDS, DEFAULT_ROUNDS, generate_schedule
from .stride import TIE_BREAKS, TIE_LARGEST

logger = structlog.get_logger(__name__)

EXIT_INVALID_PARAMETER = 2
EXIT_CONSTRUCTION_FAILED = 3

# Request fields whose flag name differs from the field name
FIELD_FLAGS = {
    "rounds": "--stride-optimize",
    "level": "--no-level",
    "encoding": "--simple-encoding",
}


def _parity(value: str) -> str:
    """Accept a parity name or its numeric flag value (0 none, 1 odd, 2 even)."""
    if value.isdigit() and int(value) in PARITY_NAMES:
        return PARITY_NAMES[int(value)]
    if value.lower() in PARITY_BY_NAME:
        return value.lower()
    raise argparse.ArgumentTypeError(
        f"invalid parity {value!r}: use 0/none, 1/odd or 2/even"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pulsecodes",
        description="Generate LED identifier codes and optimize their phase offsets.",
    )
    parser.add_argument(
        "--simple-encoding",
        action="store_true",
        help="use the framed simple encoding (default: compact encoding)",
    )
    parser.add_argument(
        "--parity",
        type=_parity,
        default="even",
        help="compact encoding only: even (2), odd (1) or no (0) parity (default: even)",
    )
    parser.add_argument(
        "--stride",
        type=int,
        default=-1,
        help="frames to shift between LEDs (default: optimize)",
    )
    parser.add_argument(
        "--stride-optimize",
        type=int,
        default=DEFAULT_ROUNDS,
        metavar="N",
        help=f"refinement rounds for the strides (default: {DEFAULT_ROUNDS})",
    )
    parser.add_argument(
        "--leds",
        type=int,
        default=DEFAULT_LEDS,
        help=f"number of LEDs to encode (default: {DEFAULT_LEDS})",
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=DEFAULT_BITS,
        help=f"bits to use for encoding (default: {DEFAULT_BITS})",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="also print the shifted table as comma-separated values",
    )
    parser.add_argument(
        "--no-level",
        action="store_true",
        help="do not level the histogram floor during refinement",
    )
    parser.add_argument(
        "--tie-break",
        choices=TIE_BREAKS,
        default=TIE_LARGEST,
        help="rotation preferred when candidates score the same (default: largest)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return parser


def configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        request = ScheduleRequest(
            leds=args.leds,
            bits=args.bits,
            encoding="simple" if args.simple_encoding else "compact",
            parity=args.parity,
            stride=max(args.stride, -1),
            rounds=args.stride_optimize,
            level=not args.no_level,
            tie_break=args.tie_break,
        )
    except ValidationError as e:
        for err in e.errors():
            field_name = ".".join(str(p) for p in err["loc"])
            flag = FIELD_FLAGS.get(field_name, "--" + field_name.replace("_", "-"))
            print(f"invalid {flag}: {err['msg']}", file=sys.stderr)
        return EXIT_INVALID_PARAMETER

    logger.debug(
        "cli_request",
        leds=request.leds,
        bits=request.bits,
        encoding=request.encoding,
        parity=request.parity,
    )

    result = generate_schedule(
        leds=request.leds,
        bits=request.bits,
        encoding=request.encoding,
        parity=request.parity_code,
        stride=request.stride,
        rounds=request.rounds,
        level=request.level,
        tie_break=request.tie_break,
    )
    if not result.ok:
        print(
            f"Could not construct table with {request.bits} bits for {request.leds} LEDs.",
            file=sys.stderr,
        )
        return EXIT_CONSTRUCTION_FAILED

    sys.stdout.write(render_report(result, include_csv=args.csv))
    return 0
