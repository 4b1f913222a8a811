"""Request / response models shared by the HTTP service and the CLI.

Parameter validation happens here, before any table is built.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .bits import PARITY_BY_NAME, PARITY_NAMES
from .schedule import DEFAULT_BITS, DEFAULT_LEDS, DEFAULT_ROUNDS, ScheduleResult
from .stride import TIE_LARGEST


class ScheduleRequest(BaseModel):
    """Parameters for generating a code table and its stride schedule."""

    leds: int = Field(
        default=DEFAULT_LEDS,
        ge=1,
        le=4096,
        description="Number of LEDs to identify",
    )
    bits: int = Field(
        default=DEFAULT_BITS,
        ge=1,
        le=32,
        description="Data bits (simple encoding) or frames per codeword (compact encoding)",
    )
    encoding: Literal["simple", "compact"] = Field(
        default="compact",
        description="simple: framed codeword per identifier; compact: rotation-distinct codewords",
    )
    parity: Literal["none", "odd", "even"] = Field(
        default="even",
        description="Compact encoding only: restrict codeword weights to odd or even (0 none, 1 odd, 2 even)",
    )
    stride: int = Field(
        default=-1,
        ge=-1,
        description="Frames to shift between LEDs; -1 selects greedy optimization",
        examples=[-1, 0, 3],
    )
    rounds: int = Field(
        default=DEFAULT_ROUNDS,
        ge=0,
        le=1000,
        description="Refinement rounds after the initial layout",
    )
    level: bool = Field(
        default=True,
        description="Raise the quietest frame as a secondary objective during refinement",
    )
    tie_break: Literal["largest", "smallest"] = Field(
        default=TIE_LARGEST,
        description="Rotation preferred when candidates score the same",
    )

    @field_validator("parity", mode="before")
    @classmethod
    def _parity_from_number(cls, value: object) -> object:
        """Accept the numeric flag values 0/1/2 as well as the names."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.isdigit():
            value = int(value)
        if isinstance(value, int):
            return PARITY_NAMES.get(value, value)
        return value

    @property
    def parity_code(self) -> int:
        return PARITY_BY_NAME[self.parity]


class ScheduleResponse(BaseModel):
    """Response body for /schedule."""

    leds: int
    bits: int
    encoding: str
    parity: str
    codeword_length: int
    unshifted: list[list[int]]
    baseline_histogram: list[int]
    baseline_max: int
    shifted: list[list[int]]
    final_histogram: list[int]
    final_max: int
    theoretical_minimum: int

    @classmethod
    def from_result(cls, result: ScheduleResult) -> ScheduleResponse:
        return cls(
            leds=result.leds,
            bits=result.bits,
            encoding=result.encoding,
            parity=PARITY_NAMES[result.parity],
            codeword_length=result.codeword_length,
            unshifted=result.unshifted,
            baseline_histogram=result.baseline_histogram,
            baseline_max=result.baseline_max,
            shifted=result.shifted,
            final_histogram=result.final_histogram,
            final_max=result.final_max,
            theoretical_minimum=result.theoretical_minimum,
        )


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str
