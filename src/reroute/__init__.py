"""Reroute — reverse routes for prefix-pattern HTTP multiplexers.

Build paths from the same patterns you register handlers with, and check
at startup that every served route has a name and every name is served.

Basic usage::

    from dataclasses import dataclass
    from reroute import ServeMux, compose, decompose, fill_routes, route

    @dataclass
    class Routes:
        users: str = route("/v1/users/")

    routes = fill_routes(Routes())
    mux = ServeMux()

    @mux.route(routes.users)
    def user(request):
        user_id = mux.param(request)
        return compose(routes.users, user_id)

    mux.check(routes)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CheckConfig",
    "ConfigurationError",
    "HostLinker",
    "HostMux",
    "InvalidRecordError",
    "IrreversibleRoutes",
    "Link",
    "MuxConfig",
    "NonExistentRoutes",
    "Redirect",
    "Request",
    "RerouteError",
    "Response",
    "RouteCheckError",
    "ServeMux",
    "abs_url",
    "compose",
    "decompose",
    "fill_routes",
    "route",
    "url",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import reroute`` fast while providing a clean top-level API.
    """
    if name == "ServeMux":
        from reroute.registry import ServeMux

        return ServeMux

    if name == "HostMux":
        from reroute.mux import HostMux

        return HostMux

    if name in ("CheckConfig", "MuxConfig"):
        from reroute import config as _config

        return getattr(_config, name)

    if name in ("compose", "decompose"):
        from reroute import patterns as _patterns

        return getattr(_patterns, name)

    if name in ("fill_routes", "route"):
        from reroute import records as _records

        return getattr(_records, name)

    if name in ("HostLinker", "Link", "abs_url", "url"):
        from reroute import links as _links

        return getattr(_links, name)

    if name in ("Request", "Response", "Redirect"):
        from reroute import http as _http

        return getattr(_http, name)

    if name in (
        "ConfigurationError",
        "InvalidRecordError",
        "IrreversibleRoutes",
        "NonExistentRoutes",
        "RerouteError",
        "RouteCheckError",
    ):
        from reroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
