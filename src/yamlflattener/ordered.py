"""Insertion-ordered result container for flattened key paths.

``OrderedResult`` pairs an append-only list of keys with a hash index from
key to value.  Lookups and updates are O(1); iteration always follows first
insertion order.  Callers see it through the read-only ``Mapping`` protocol.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class OrderedResult(Mapping[str, str]):
    """Flattened ``path -> value`` pairs in document order.

    A later :meth:`set` on an existing key replaces the value without moving
    the key.  Once :meth:`freeze` has been called the container rejects
    further writes.
    """

    __slots__ = ("_keys", "_values", "_frozen")

    def __init__(self) -> None:
        self._keys: list[str] = []
        self._values: dict[str, str] = {}
        self._frozen = False

    def set(self, key: str, value: str) -> None:
        """Add *key* or update its value, keeping its original position."""
        if self._frozen:
            raise TypeError("OrderedResult is frozen and cannot be modified")
        if key not in self._values:
            self._keys.append(key)
        self._values[key] = value

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {self._values[k]!r}" for k in self._keys)
        return f"OrderedResult({{{pairs}}})"

    # ------------------------------------------------------------------
    # Consumption shapes
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:  # type: ignore[override]
        """Return all keys in insertion order."""
        return list(self._keys)

    def items(self) -> list[tuple[str, str]]:  # type: ignore[override]
        """Return ``(key, value)`` pairs in insertion order."""
        return [(k, self._values[k]) for k in self._keys]

    def to_dict(self) -> dict[str, str]:
        """Project to a plain ``dict`` for callers that do not need order."""
        return dict(self._values)
