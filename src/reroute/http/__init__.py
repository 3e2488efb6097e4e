"""HTTP primitives used by the host mux and its handlers."""

from reroute.http.headers import Headers
from reroute.http.multimap import MultiMap
from reroute.http.query import QueryParams
from reroute.http.request import Request
from reroute.http.response import Redirect, Response

__all__ = ["Headers", "MultiMap", "QueryParams", "Redirect", "Request", "Response"]
