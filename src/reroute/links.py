"""Link helpers — URLs built from route patterns.

``url()`` and ``abs_url()`` compose a pattern with its parameter and add a
query string. A ``Linker`` hides whether the links it makes are absolute::

    ln = HostLinker(request, use_https=True)
    friend = Link("urn:myvocab:friend", ln.url(routes.friends, friend_id))
    friends = Link(
        "urn:myvocab:friend-list",
        ln.url(routes.friends, "", {"maxValues": "10", "sortBy": "relevance"}),
    )
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from reroute.http.query import QueryValues, encode_query
from reroute.http.request import Request
from reroute.patterns import compose

# Characters left unescaped in URL paths
_PATH_SAFE = "/:@!$&'()*+,;="


def _path_query(pattern: str, param: str, query: QueryValues | None) -> str:
    path = quote(compose(pattern, param), safe=_PATH_SAFE)
    qs = encode_query(query)
    if qs:
        return f"{path}?{qs}"
    return path


def url(pattern: str, param: str, query: QueryValues | None = None) -> str:
    """Relative URL for *pattern* with parameter *param* and *query*.

    The composed path is percent-encoded where a URL path requires it.
    """
    return _path_query(pattern, param, query)


def abs_url(
    https: bool,
    host: str,
    pattern: str,
    param: str,
    query: QueryValues | None = None,
) -> str:
    """Like ``url`` but absolute, on *host*. Uses ``http`` unless *https*."""
    scheme = "https" if https else "http"
    return f"{scheme}://{host}{_path_query(pattern, param, query)}"


@dataclass(frozen=True, slots=True)
class Link:
    """A typed hyperlink for API payloads."""

    rel: str
    href: str

    def to_dict(self) -> dict[str, str]:
        return {"rel": self.rel, "href": self.href}


@runtime_checkable
class Linker(Protocol):
    """Anything that makes URLs from patterns.

    The returned URL may or may not be absolute.
    """

    def url(self, pattern: str, param: str, query: QueryValues | None = None) -> str: ...


class FuncLinker:
    """Adapt a ``(pattern, param, query)`` function to ``Linker``.

    ``FuncLinker(url)`` makes relative links.
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[str, str, QueryValues | None], str]) -> None:
        self._func = func

    def url(self, pattern: str, param: str, query: QueryValues | None = None) -> str:
        return self._func(pattern, param, query)


class HostLinker:
    """Absolute links on the host a request was sent to."""

    __slots__ = ("request", "use_https")

    def __init__(self, request: Request, use_https: bool = False) -> None:
        self.request = request
        self.use_https = use_https

    def url(self, pattern: str, param: str, query: QueryValues | None = None) -> str:
        return abs_url(self.use_https, self.request.host, pattern, param, query)
