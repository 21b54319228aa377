"""Exception types raised by the tooltip core."""
from __future__ import annotations

from typing import NoReturn


class TooltipError(Exception):
    """Base class for tooltip failures."""


class TooltipConfigError(TooltipError, ValueError):
    """Configuration violates a construction-time contract."""


class UnsupportedDirectionError(TooltipError, AssertionError):
    """A value outside the four tooltip directions reached a per-direction branch."""


class TooltipStateError(TooltipError, RuntimeError):
    """show()/close() called in a lifecycle state that does not allow it."""


def unsupported_direction(direction: object) -> NoReturn:
    raise UnsupportedDirectionError(f"Unsupported tooltip direction: {direction!r}")
