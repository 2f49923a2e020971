"""Structured errors for rule construction and the HTML placement layer.

The comparison path itself never raises; these are for callers that build
rules by hand, parse in strict mode, or ask the HTML service for a
container that is not there.
"""

from __future__ import annotations
from typing import Any


class SortingError(Exception):
    """Base class for sorting related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class RuleError(SortingError, ValueError):
    """Raised for invalid rule declarations."""


class RuleSyntaxError(RuleError):
    """Raised by strict parsing when a clause cannot be read unambiguously."""

    def __init__(self, message: str, *, clause: str, index: int):
        super().__init__(
            f"{message} (clause {index}: {clause!r})",
            context={"clause": clause, "index": index},
        )
        self.clause = clause
        self.index = index


class ContainerNotFoundError(SortingError):
    """Raised when the container selector matches nothing in the document."""
