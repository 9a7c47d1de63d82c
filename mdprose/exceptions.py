from typing import Any


class MarkdownProcessError(Exception):
    """Base exception for all conversion errors."""

    def __init__(self, message: str):
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for diagnostics."""
        return {"detail": str(self)}


class UnmappedNodeError(MarkdownProcessError):
    """Raised when no registered rule claims a source node's type."""

    def __init__(self, node_type: str, node_dump: str, *, message: str | None = None):
        super().__init__(message or f"Can't find the rule for node: {node_type!r} with {node_dump}")
        self.node_type = node_type
        self.node_dump = node_dump

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "node_type": self.node_type, "node": self.node_dump}


class NestingTooDeepError(MarkdownProcessError):
    """Raised when resolution goes deeper than the configured max_depth."""

    def __init__(self, max_depth: int, *, message: str | None = None):
        super().__init__(message or f"Source tree nesting exceeds max_depth={max_depth}")
        self.max_depth = max_depth

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "max_depth": self.max_depth}
