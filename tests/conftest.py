"""Shared fixtures for pulsecodes tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI reconfigures structlog to write to the captured stderr."""
    yield
    structlog.reset_defaults()


def cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def are_rotations(a: list[int], b: list[int]) -> bool:
    """True if *b* is a cyclic rotation of *a* (or equal to it)."""
    if len(a) != len(b):
        return False
    if not a:
        return True
    return any(b == a[k:] + a[:k] for k in range(len(a)))
