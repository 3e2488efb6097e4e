"""ServeMux — a HostMux that remembers what it serves.

Drop-in replacement for ``HostMux`` with one addition: every pattern
registered through it is recorded, so the mux can be checked against a
route record::

    @dataclass
    class Routes:
        sessions: str = route("/v1/sessions/")
        users: str = route("/v1/users/")

    routes = fill_routes(Routes())
    mux = ServeMux()
    mux.handle(routes.sessions, sessions)
    mux.handle(routes.users, users)

    err = mux.check_reverse(routes)   # None, or a RouteCheckError
    mux.check(routes)                 # prints a report, SystemExit(1) on failure

Registration and dispatch are delegated to the wrapped ``HostMux``
unchanged; matching rules live there only.
"""

import logging
import sys
import threading
from collections.abc import Callable
from typing import Any, TextIO

from reroute._internal.asgi import Receive, Scope, Send
from reroute._internal.types import Handler
from reroute.checker import check_reverse
from reroute.config import CheckConfig, MuxConfig
from reroute.errors import (
    InvalidRecordError,
    IrreversibleRoutes,
    NonExistentRoutes,
    RouteCheckError,
)
from reroute.http.request import Request
from reroute.http.response import Response
from reroute.mux import HostMux

logger = logging.getLogger("reroute.check")


class ServeMux:
    """A recording wrapper around ``HostMux``.

    Thread safety:
        The recorded pattern list is guarded by its own lock. The lock is
        held for each append and for the snapshot taken by a check, never
        across the call into the host mux (which has its own lock). A
        check therefore sees every registration that completed before it
        and none of the half-done ones.
    """

    __slots__ = ("_lock", "_mux", "_patterns")

    def __init__(self, config: MuxConfig | None = None) -> None:
        # Private host mux: every pattern it serves went through handle()
        self._mux = HostMux(config)
        self._lock = threading.Lock()
        self._patterns: list[str] = []

    @property
    def config(self) -> MuxConfig:
        return self._mux.config

    # -- Registration --

    def handle(self, pattern: str, handler: Handler) -> None:
        """Register *handler* for *pattern* and record the pattern.

        ``ConfigurationError`` from the host mux propagates unchanged, and
        a rejected pattern is not recorded.
        """
        self._mux.handle(pattern, handler)
        with self._lock:
            self._patterns.append(pattern)

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
        """Sorted snapshot of the recorded patterns."""
        with self._lock:
            return sorted(self._patterns)

    # -- Delegated matching and dispatch --

    def handler(self, request: Request) -> tuple[Handler, str]:
        """Return the handler for *request* and the pattern it matched."""
        return self._mux.handler(request)

    def param(self, request: Request) -> str:
        """Return the path parameter of *request* under its matched pattern."""
        return self._mux.param(request)

    async def respond(self, request: Request) -> Response:
        """Dispatch *request* and return the response."""
        return await self._mux.respond(request)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        await self._mux(scope, receive, send)

    # -- Reverse-route checks --

    def check_reverse(self, record: Any) -> RouteCheckError | None:
        """Check that *record* is a reverse map for the routes served here.

        *record* must be a dataclass instance (or a weak reference to one)
        whose fields all hold strings. Returns ``None`` when every served
        pattern is named by a field and every field names a served
        pattern. Otherwise returns, without raising:

        - ``InvalidRecordError`` if *record* has the wrong shape;
        - ``NonExistentRoutes`` if fields name unregistered patterns;
        - ``IrreversibleRoutes`` if served patterns have no field.
        """
        with self._lock:
            snapshot = sorted(self._patterns)
        return check_reverse(snapshot, record)

    def check(
        self,
        record: Any,
        config: CheckConfig | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        """Check *record*, print a report and exit on failure.

        Patterns in ``config.tolerate`` may go unreferenced. With
        ``config.strict`` off, other irreversible routes only warn.
        Raises ``SystemExit(1)`` if the check fails.
        """
        config = config or CheckConfig()
        out = stream or sys.stdout
        err = self.check_reverse(record)

        if isinstance(err, IrreversibleRoutes):
            remaining = tuple(r for r in err.routes if r not in config.tolerate)
            tolerated = len(err.routes) - len(remaining)
            if tolerated:
                logger.info("Tolerating %d unreferenced route(s)", tolerated)
            err = IrreversibleRoutes(remaining) if remaining else None
            if err is not None and not config.strict:
                logger.warning("%s", err)
                print(f"warning: {err}", file=out)
                err = None

        checked = len(self.patterns)
        if err is None:
            print(f"Checked {checked} routes. No issues found.", file=out)
            return

        if isinstance(err, NonExistentRoutes):
            logger.error("%s", err)
        elif isinstance(err, InvalidRecordError):
            logger.error("Invalid route record: %s", err)
        else:
            logger.warning("%s", err)
        print(f"Checked {checked} routes.", file=out)
        print(f"error: {err}", file=out)
        raise SystemExit(1)
