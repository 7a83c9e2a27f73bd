# doublegraph/core/errors.py
from __future__ import annotations

from typing import Optional


class GraphError(Exception):
    """Base exception for doublegraph errors."""

    def get_suggestion(self) -> Optional[str]:
        """Return actionable suggestion for resolving the error."""
        return None


class MalformedAdjacencyError(GraphError, ValueError):
    """Raised when an adjacency relation references vertices that are not among its keys."""

    def get_suggestion(self) -> str:
        return "Add every referenced neighbour as a key (an empty neighbour set is fine)"


class VertexNotFoundError(GraphError, KeyError):
    """Raised when a vertex is not part of the graph."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class DisconnectedGraphError(GraphError):
    """Raised when an operation needs a connected graph."""

    def get_suggestion(self) -> str:
        return "Split the graph with ccs() and linearise each component"


class InvalidArrangementError(GraphError, ValueError):
    """Raised when an ordering is not a permutation of the graph's vertices."""
