"""Request headers, keyed case-insensitively."""

from collections.abc import Mapping

from reroute.http.multimap import MultiMap


class Headers(MultiMap):
    """Immutable, case-insensitive HTTP headers.

    Built from the raw ASGI byte pairs; names are lower-cased and values
    decoded as latin-1 once, up front.
    """

    __slots__ = ()

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        super().__init__((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower()

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls(
            tuple(
                (name.encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )
