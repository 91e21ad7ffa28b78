"""Read-only, case-insensitive mapping for structured log properties."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class PropertyMap(Mapping[str, Any]):
    """Structured log properties keyed case-insensitively.

    Later pairs for the same key (ignoring case) replace earlier ones, and the
    key keeps the casing of the last write.
    """

    __slots__ = ("_items",)

    def __init__(self, pairs: Iterable[tuple[str, Any]] = ()) -> None:
        items: dict[str, tuple[str, Any]] = {}
        for key, value in pairs:
            folded = key.casefold()
            # Re-insert so iteration follows the position of the last write
            items.pop(folded, None)
            items[folded] = (key, value)
        self._items = items

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._items[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._items

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(other) != len(self):
            return False
        return all(key in self and self[key] == value for key, value in other.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyMap({dict(self.items())!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict copy preserving original key casing."""
        return dict(self.items())


EMPTY_PROPERTIES = PropertyMap()
