"""Read-only multi-valued string mappings.

``Headers`` and ``QueryParams`` share this base: values are grouped by
key once at construction, ``[key]`` returns the first value and
``get_list`` returns all of them in arrival order.
"""

from collections.abc import Iterable, Iterator, Mapping


class MultiMap(Mapping[str, str]):
    """Immutable ``key -> [values]`` mapping exposed as ``Mapping[str, str]``."""

    __slots__ = ("_values",)

    _values: dict[str, list[str]]

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for key, value in pairs:
            values.setdefault(self._normalize(key), []).append(value)
        object.__setattr__(self, "_values", values)

    @staticmethod
    def _normalize(key: str) -> str:
        return key

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._values[self._normalize(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._values.items())
        return f"{type(self).__name__}({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._values.get(self._normalize(key))
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(self._normalize(key), ()))
