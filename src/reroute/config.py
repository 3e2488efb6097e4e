"""Mux and check configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Host multiplexer configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MuxConfig(threaded_handlers=True)
    """

    # Redirect /tree to /tree/ when only the subtree pattern is registered
    redirect_trailing_slash: bool = True

    # Redirect requests for unclean paths (/a/../b, //a) to the cleaned path
    clean_paths: bool = True

    # Run plain ``def`` handlers in a worker thread instead of on the loop
    threaded_handlers: bool = False


@dataclass(frozen=True, slots=True)
class CheckConfig:
    """Policy applied by ``ServeMux.check()`` and ``reroute check``.

    ``tolerate`` lists registered patterns that are expected to have no
    reference (health checks, metrics endpoints). With ``strict=False``
    the remaining irreversible routes are logged as warnings instead of
    failing the check. Non-existent routes always fail.
    """

    tolerate: frozenset[str] = frozenset()
    strict: bool = True
