"""Ordered, multi-valued query parameters (URLSearchParams semantics)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from urllib.parse import parse_qsl


class QueryParams:
    """Immutable sequence of ``(key, value)`` pairs in URL order.

    Keys may repeat; ``get`` returns the first value, ``get_all`` every value.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple((str(k), str(v)) for k, v in pairs)

    @classmethod
    def parse(cls, query: str) -> QueryParams:
        """Parse a raw query string; a leading ``?`` and blank values are kept as-is."""
        return cls(parse_qsl(query.removeprefix("?"), keep_blank_values=True))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | Sequence[str]]) -> QueryParams:
        pairs: list[tuple[str, str]] = []
        for key, value in mapping.items():
            if isinstance(value, str):
                pairs.append((key, value))
            else:
                pairs.extend((key, v) for v in value)
        return cls(pairs)

    def has(self, key: str) -> bool:
        return any(k == key for k, _ in self._pairs)

    def get(self, key: str) -> str | None:
        return next((v for k, v in self._pairs if k == key), None)

    def get_all(self, key: str) -> list[str]:
        return [v for k, v in self._pairs if k == key]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._pairs == other._pairs

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        return f"QueryParams({list(self._pairs)!r})"
