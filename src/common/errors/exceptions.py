"""Exception types raised by opt-in strict code paths."""

from __future__ import annotations

from typing import Any, Sequence


class SchemaDesignerError(Exception):
    """Base class for schema designer errors."""


class SchemaParseError(SchemaDesignerError):
    """Raised by strict-mode parsing when the input produced diagnostics."""

    def __init__(self, issues: Sequence[Any]):
        """Store the issues and build a summary message."""
        self.issues = list(issues)
        if self.issues:
            first = self.issues[0]
            summary = getattr(first, "message", str(first))
            message = f"{len(self.issues)} parse issue(s); first: {summary}"
        else:
            message = "DDL parse failed"
        super().__init__(message)
