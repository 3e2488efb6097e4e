"""Async test client for reroute muxes.

Sends requests through the ASGI interface directly, with no HTTP involved,
and returns the same ``Response`` type handlers produce.
"""

from typing import Any

from reroute._internal.asgi import Scope
from reroute.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for any reroute ASGI app.

    Usage::

        async with TestClient(mux) as client:
            response = await client.get("/hello/world")
            assert response.status == 200
    """

    __slots__ = ("app", "host")

    def __init__(self, app: Any, *, host: str = "testserver") -> None:
        self.app = app
        self.host = host

    async def __aenter__(self) -> "TestClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, host=host, headers=headers)

    async def head(self, path: str, *, host: str | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, host=host)

    async def post(
        self,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, host=host, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = path.partition("?")

        raw_headers: list[tuple[bytes, bytes]] = [
            (b"host", (host or self.host).encode("latin-1")),
        ]
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: Scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                chunk = message.get("body", b"")
                if chunk:
                    response_body_parts.append(chunk)

        await self.app(scope, receive, send)

        content_type = "text/plain; charset=utf-8"
        headers_out: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name = name_b.decode("latin-1")
            value = value_b.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                headers_out.append((name, value))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(headers_out),
        )
