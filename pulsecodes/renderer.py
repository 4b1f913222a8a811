"""Text, CSV, SVG and PNG rendering of code tables.

Text output follows the classic report layout:
- one line per LED: "  3: *..*.." ('*' bright, '.' dark)
- histogram counts right-aligned in 3-character columns

The SVG view draws the table as a grid (rows = LEDs, columns = frames)
with the brightness histogram as a bar strip underneath, so crowded
frames stand out.
"""

from __future__ import annotations

import csv
import io

import structlog

from .bits import codeword_to_string
from .schedule import ScheduleResult
from .stats import column_sums

logger = structlog.get_logger(__name__)

BRIGHT_COLOR = "#2D3748"
DARK_COLOR = "#EDF2F7"
PEAK_COLOR = "#C53030"
BAR_COLOR = "#718096"


def render_grid(table: list[list[int]]) -> str:
    """Render a table as numbered '*'/'.' rows."""
    return "\n".join(f"{i:3d}: {codeword_to_string(row)}" for i, row in enumerate(table))


def render_histogram(histogram: list[int]) -> str:
    """Render a histogram as 3-wide right-aligned counts."""
    return "".join(f"{count:3d}" for count in histogram)


def render_csv(table: list[list[int]]) -> str:
    """Render a table as comma-separated 1/0 values, one row per line.

    Every value is followed by a comma, including the last one in a row.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    for row in table:
        writer.writerow([1 if v else 0 for v in row] + [""])
    return buf.getvalue()


def _render_stats(table: list[list[int]], histogram: list[int], peak: int) -> list[str]:
    return [
        render_grid(table),
        "Histogram of high LEDs per time step:",
        render_histogram(histogram),
        "",
        f"Maximum brightness: {peak}",
    ]


def render_report(result: ScheduleResult, include_csv: bool = False) -> str:
    """Render the full text report for a schedule.

    Args:
        result: A successful ScheduleResult.
        include_csv: Append the shifted table as CSV.

    Raises:
        ValueError: If the result carries an error.
    """
    if not result.ok:
        raise ValueError(f"Cannot render a failed schedule: {result.error}")

    lines = ["Unshifted table: "]
    lines.extend(_render_stats(result.unshifted, result.baseline_histogram, result.baseline_max))
    lines.append("Shifted table: ")
    lines.extend(_render_stats(result.shifted, result.final_histogram, result.final_max))
    lines.append("")
    lines.append(f"Theoretical minimum for packing this many 1's: {result.theoretical_minimum}")

    if include_csv:
        lines.append("Shifted table: ")
        lines.append(render_csv(result.shifted).rstrip("\n"))

    return "\n".join(lines) + "\n"


def render_svg(table: list[list[int]], cell: int = 16) -> str:
    """Render a table and its brightness histogram as an SVG string.

    Args:
        table: Code table to draw.
        cell: Cell edge length in pixels.

    Returns:
        Complete SVG document as a string.

    Raises:
        ValueError: If the table is empty or cell is not positive.
    """
    if not table:
        raise ValueError("Cannot render an empty table")
    if cell <= 0:
        raise ValueError(f"cell must be positive, got {cell}")

    rows = len(table)
    cols = len(table[0])
    histogram = column_sums(table)
    peak = max(histogram)

    bar_height = cell * 4
    width = cols * cell
    height = rows * cell + cell // 2 + bar_height

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}">',
        f'  <rect width="{width}" height="{height}" fill="white"/>',
    ]

    for r, row in enumerate(table):
        for c, value in enumerate(row):
            fill = BRIGHT_COLOR if value else DARK_COLOR
            svg_parts.append(
                f'  <rect x="{c * cell}" y="{r * cell}" '
                f'width="{cell - 1}" height="{cell - 1}" '
                f'fill="{fill}" class="{"bright" if value else "dark"}"/>'
            )

    # Histogram strip: bar height proportional to count, peak frames highlighted
    base_y = rows * cell + cell // 2 + bar_height
    for c, count in enumerate(histogram):
        if count == 0:
            continue
        h = bar_height * count / peak
        fill = PEAK_COLOR if count == peak else BAR_COLOR
        svg_parts.append(
            f'  <rect x="{c * cell}" y="{base_y - h:.1f}" '
            f'width="{cell - 1}" height="{h:.1f}" '
            f'fill="{fill}" class="histogram-bar"/>'
        )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug("svg_rendered", rows=rows, cols=cols, peak=peak, cell=cell)
    return svg_content


def render_png(table: list[list[int]], cell: int = 16) -> bytes:
    """Render a table as a PNG image.

    Generates SVG first, then converts to PNG via CairoSVG.
    """
    import cairosvg

    svg = render_svg(table, cell)
    png_bytes = cairosvg.svg2png(bytestring=svg.encode("utf-8"))

    logger.debug("png_rendered", rows=len(table), cell=cell, bytes=len(png_bytes))
    return png_bytes
