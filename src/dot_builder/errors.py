"""Exceptions raised while constructing a DOT model."""

from __future__ import annotations


class DotError(Exception):
    """Base class for dot-builder errors."""


class InvalidAttributeError(DotError, ValueError):
    """Raised when an attribute name or value is not accepted by a table."""


class StructureError(DotError, TypeError):
    """Raised when statements or edge endpoints are wired together incorrectly."""


class InvalidIdentifierError(DotError, ValueError):
    """Raised when a node name or port cannot be used as a DOT identifier."""
