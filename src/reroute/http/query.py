"""Query strings: parsed request parameters and the encoder links use."""

from collections.abc import Iterable, Mapping
from urllib.parse import parse_qsl, urlencode

from reroute.http.multimap import MultiMap

# What link helpers accept as a query: {"a": "1"} or {"a": ["1", "2"]}
QueryValues = Mapping[str, str | Iterable[str]]


def encode_query(query: QueryValues | None) -> str:
    """Encode *query* as a query string with keys in sorted order.

    Multi-valued entries are repeated (``a=1&a=2``). ``None`` or an empty
    mapping encodes to ``""``.
    """
    if not query:
        return ""
    pairs: list[tuple[str, str]] = []
    for key in sorted(query):
        values = query[key]
        if isinstance(values, str):
            pairs.append((key, values))
        else:
            pairs.extend((key, v) for v in values)
    return urlencode(pairs)


class QueryParams(MultiMap):
    """Immutable query string parameters. Blank values are kept."""

    __slots__ = ("_raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw
