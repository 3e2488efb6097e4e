"""Host multiplexer — prefix-pattern routing with host-specific patterns.

Patterns name either a single path or a subtree:

- ``/about`` matches exactly ``/about``;
- ``/users/`` matches ``/users/`` and every path below it;
- ``example.com/`` matches only requests whose ``Host`` is
  ``example.com``.

The longest matching pattern wins and host-qualified patterns take
precedence over path-only ones. A request for ``/users`` is redirected
to ``/users/`` when only the subtree is registered, and unclean paths
(``/a/../b``, ``//b``) are redirected to their cleaned form.

``HostMux`` is an ASGI application::

    mux = HostMux()

    @mux.route("/hello/")
    def hello(request):
        _, pattern = mux.handler(request)
        return f"hello {decompose(pattern, request.path)}"
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from reroute._internal.asgi import Receive, Scope, Send
from reroute._internal.invoke import invoke
from reroute._internal.types import Handler
from reroute.config import MuxConfig
from reroute.errors import ConfigurationError
from reroute.http.request import Request
from reroute.http.response import Redirect, Response, not_found
from reroute.patterns import decompose
from reroute.server.sender import send_response

logger = logging.getLogger("reroute.mux")


def clean_path(path: str) -> str:
    """Return the canonical form of *path*.

    Removes ``.`` and ``..`` elements and repeated slashes, roots the path
    at ``/`` and keeps a trailing slash.
    """
    if not path:
        return "/"
    if path[0] != "/":
        path = "/" + path
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    cleaned = "/" + "/".join(parts)
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


def strip_port(host: str) -> str:
    """Drop a ``:port`` suffix from a host, keeping IPv6 brackets intact."""
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end >= 0 else host
    name, _, _ = host.partition(":")
    return name


def _redirect_handler(url: str) -> Handler:
    def redirect(request: Request) -> Redirect:
        return Redirect(url, status=301)

    return redirect


def _not_found_handler(request: Request) -> Response:
    return not_found()


def _to_response(result: Any) -> Response:
    if isinstance(result, Response):
        return result
    if isinstance(result, Redirect):
        return result.to_response()
    if isinstance(result, str | bytes):
        return Response(result)
    msg = f"Handler returned unsupported type {type(result).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class _Entry:
    pattern: str
    handler: Handler


class HostMux:
    """HTTP request multiplexer.

    Thread safety:
        Registration and lookup share one lock, so handlers may be
        registered from several threads while requests are being served.
    """

    __slots__ = ("_entries", "_has_hosts", "_lock", "_subtrees", "config")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.config: MuxConfig = config or MuxConfig()
        self._lock = threading.Lock()
        self._entries: dict[str, _Entry] = {}
        # Subtree patterns, longest first
        self._subtrees: list[_Entry] = []
        self._has_hosts = False

    # -- Registration --

    def handle(self, pattern: str, handler: Handler) -> None:
        """Register *handler* for *pattern*.

        Raises ``ConfigurationError`` for an empty pattern, a missing
        handler, or a pattern that is already registered.
        """
        if not pattern:
            msg = "Invalid pattern: empty string."
            raise ConfigurationError(msg)
        if handler is None:
            msg = f"Missing handler for pattern {pattern!r}."
            raise ConfigurationError(msg)

        with self._lock:
            if pattern in self._entries:
                msg = f"Multiple registrations for {pattern!r}."
                raise ConfigurationError(msg)
            entry = _Entry(pattern, handler)
            self._entries[pattern] = entry
            if pattern.endswith("/"):
                self._subtrees.append(entry)
                self._subtrees.sort(key=lambda e: len(e.pattern), reverse=True)
            if pattern[0] != "/":
                self._has_hosts = True

        logger.debug("Registered %r -> %s", pattern, getattr(handler, "__name__", handler))

    def handle_func(self, pattern: str, handler: Callable[..., Any]) -> None:
        """Alias of ``handle`` for plain functions."""
        self.handle(pattern, handler)

    def route(self, pattern: str) -> Callable[[Handler], Handler]:
        """Register a handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.handle(pattern, func)
            return func

        return decorator

    @property
    def patterns(self) -> list[str]:
        """Registered patterns in registration order."""
        with self._lock:
            return list(self._entries)

    # -- Matching --

    def handler(self, request: Request) -> tuple[Handler, str]:
        """Return the handler for *request* and the pattern it matched.

        Always returns a handler: redirects and the 404 handler stand in
        when no registered handler applies. The pattern is ``""`` for a
        404.
        """
        host = strip_port(request.host)
        path = clean_path(request.path) if self.config.clean_paths else request.path
        query = request.query.raw.decode("latin-1")

        with self._lock:
            if self.config.redirect_trailing_slash and self._should_redirect(host, path):
                target = path + "/"
                return _redirect_handler(_with_query(target, query)), target

            if path != request.path:
                _, pattern = self._lookup(host, path)
                return _redirect_handler(_with_query(path, query)), pattern

            return self._lookup(host, request.path)

    def param(self, request: Request) -> str:
        """Return the path parameter of *request* under its matched pattern."""
        _, pattern = self.handler(request)
        return decompose(pattern, request.path)

    def _should_redirect(self, host: str, path: str) -> bool:
        """True if *path* is only registered as a subtree.

        MUST only be called while holding _lock.
        """
        candidates = [path, host + path]
        if any(c in self._entries for c in candidates):
            return False
        if not path:
            return False
        return any(c + "/" in self._entries for c in candidates)

    def _lookup(self, host: str, path: str) -> tuple[Handler, str]:
        """MUST only be called while holding _lock."""
        entry = None
        if self._has_hosts:
            entry = self._match(host + path)
        if entry is None:
            entry = self._match(path)
        if entry is None:
            return _not_found_handler, ""
        return entry.handler, entry.pattern

    def _match(self, path: str) -> _Entry | None:
        entry = self._entries.get(path)
        if entry is not None:
            return entry
        for candidate in self._subtrees:
            if path.startswith(candidate.pattern):
                return candidate
        return None

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.respond(request)
        await send_response(response, send, head=request.method == "HEAD")

    async def respond(self, request: Request) -> Response:
        """Dispatch *request* to its handler and return the response."""
        handler, pattern = self.handler(request)
        try:
            result = await invoke(handler, request, threaded=self.config.threaded_handlers)
            return _to_response(result)
        except Exception:
            logger.exception("Handler for %r failed on %s %s", pattern, request.method, request.path)
            return Response("500 internal server error\n", status=500)


def _with_query(path: str, query: str) -> str:
    if query:
        return f"{path}?{query}"
    return path


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
