"""Errors raised while driving the SOL portal."""

from __future__ import annotations

__all__ = ["NavigationError", "ReportUnavailableError", "RvieError"]


class RvieError(Exception):
    """Base class for fatal extraction errors."""


class NavigationError(RvieError):
    """A required portal control never became available within its wait budget."""


class ReportUnavailableError(RvieError):
    """The preliminary sales register table never appeared."""
