"""Pulse code microservice -- FastAPI application.

Endpoints:
    POST /schedule       -- Build and optimize a code table (JSON)
    POST /schedule/text  -- Same, as the plain-text report
    POST /schedule/svg   -- Same, shifted table as an SVG grid
    POST /schedule/png   -- Same, shifted table as a PNG grid
    GET  /health         -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from . import __version__
from .models import HealthResponse, ScheduleRequest, ScheduleResponse
from .renderer import render_png, render_report, render_svg
from .schedule import ScheduleResult, generate_schedule

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

MAX_CELL = 128

app = FastAPI(
    title="pulsecodes",
    description="Temporal LED identifier codes with optimized phase offsets",
    version=__version__,
)


def _run(request: ScheduleRequest) -> ScheduleResult:
    """Generate a schedule, turning infeasibility into HTTP 422."""
    try:
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
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("schedule_failed_unexpectedly", error=str(e))
        raise HTTPException(status_code=500, detail="Schedule generation failed")

    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail=f"Could not construct table with {request.bits} bits "
            f"for {request.leds} LEDs ({result.error})",
        )
    return result


@app.post("/schedule", response_model=ScheduleResponse)
async def schedule(request: ScheduleRequest) -> ScheduleResponse:
    """Build a code table and optimize its strides."""
    return ScheduleResponse.from_result(_run(request))


@app.post("/schedule/text", response_class=PlainTextResponse)
async def schedule_text(request: ScheduleRequest, csv: bool = False) -> PlainTextResponse:
    """Plain-text report, optionally followed by the shifted table as CSV."""
    result = _run(request)
    return PlainTextResponse(render_report(result, include_csv=csv))


@app.post(
    "/schedule/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "SVG grid of the shifted table"},
        422: {"description": "Invalid input or infeasible table"},
    },
)
async def schedule_svg(
    request: ScheduleRequest,
    cell: int = Query(default=16, ge=1, le=MAX_CELL, description="Cell edge length in pixels"),
) -> Response:
    """Shifted table and its histogram as an SVG image."""
    result = _run(request)
    try:
        svg_content = render_svg(result.shifted, cell=cell)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(content=svg_content, media_type="image/svg+xml")


@app.post(
    "/schedule/png",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG grid of the shifted table"},
        422: {"description": "Invalid input or infeasible table"},
    },
)
async def schedule_png(
    request: ScheduleRequest,
    cell: int = Query(default=16, ge=1, le=MAX_CELL, description="Cell edge length in pixels"),
) -> Response:
    """Shifted table and its histogram as a PNG image."""
    result = _run(request)
    try:
        png_bytes = render_png(result.shifted, cell=cell)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")
    return Response(content=png_bytes, media_type="image/png")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="pulsecodes",
        version=__version__,
    )
