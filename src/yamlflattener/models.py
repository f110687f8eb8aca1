"""Pydantic result models for the yamlflattener package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from yamlflattener.ordered import OrderedResult


class FlattenResult(BaseModel):
    """Output of one flatten operation.

    ``entries`` holds the ordered ``path -> value`` pairs; the remaining
    fields are statistics filled in by the traversal and the router.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    entries: OrderedResult
    total_keys: int
    max_depth: int
    source: str | None = None
    processing_time_seconds: float = 0.0

    def pairs(self) -> list[tuple[str, str]]:
        """Return the flattened pairs in document order."""
        return self.entries.items()

    def to_dict(self) -> dict[str, str]:
        """Return an unordered ``path -> value`` dict."""
        return self.entries.to_dict()
