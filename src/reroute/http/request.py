"""Immutable HTTP request.

Frozen metadata with async body access. Handlers receive one of these;
the host mux reads ``host`` and ``path`` to pick the handler.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from reroute._internal.asgi import Receive, Scope
from reroute.http.headers import Headers
from reroute.http.query import QueryParams


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata is frozen at creation. Body is read asynchronously via
    ``.body()`` or ``.text()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = _no_body

    # Private: mutable cache for the body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def host(self) -> str:
        """The ``Host`` header, falling back to the server address.

        May include a port (``example.com:8080``).
        """
        host = self.headers.get("host")
        if host:
            return host
        if self.server is not None:
            name, port = self.server
            return name if port in (80, 443) else f"{name}:{port}"
        return ""

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body. Cached after the first call."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @classmethod
    def build(cls, path: str, *, method: str = "GET", host: str = "") -> Request:
        """Create a body-less request, for matching outside a server.

        ``Request.build("/users/42", host="example.com")``
        """
        path_part, _, query_string = path.partition("?")
        headers = Headers.from_dict({"host": host} if host else {})
        return cls(
            method=method.upper(),
            path=path_part,
            headers=headers,
            query=QueryParams(query_string.encode("latin-1")),
        )
