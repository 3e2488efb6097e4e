"""Reroute exception hierarchy.

Shared across the host mux, the registry, the checker and the record
helpers so every module raises and catches the same types.

Reverse-route check outcomes are exceptions too, but ``check_reverse``
returns them instead of raising. Callers pick the policy::

    err = mux.check_reverse(routes)
    if isinstance(err, NonExistentRoutes):
        raise err
    if isinstance(err, IrreversibleRoutes):
        logger.warning("%s", err)
"""

from collections.abc import Iterator
from dataclasses import dataclass


class RerouteError(Exception):
    """Base for all reroute-specific errors."""


class ConfigurationError(RerouteError):
    """Raised when a route registration is invalid.

    Empty patterns, missing handlers and duplicate registrations are
    rejected by the host mux at registration time.
    """


class RouteCheckError(RerouteError):
    """Base for the outcomes of a reverse-route check."""


class InvalidRecordError(RouteCheckError):
    """The reference record does not have the required shape.

    Either it is not a dataclass instance, one of its fields does not hold
    a string, or it is a null reference. Distinct from both route-mismatch
    outcomes: the record type has to be fixed, retrying will not help.
    """


@dataclass(frozen=True, slots=True)
class _RouteListError(RouteCheckError):
    routes: tuple[str, ...]

    _label = "routes"

    def __str__(self) -> str:
        quoted = ", ".join(f"{r!r}" for r in self.routes)
        return f"{self._label}: [{quoted}]"

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.routes)


class IrreversibleRoutes(_RouteListError):
    """Registered patterns that no field of the reference record names.

    These routes can be matched but not composed by name. Often
    intentional (health checks, metrics), so callers may tolerate them.
    """

    _label = "irreversible routes"


class NonExistentRoutes(_RouteListError):
    """Referenced patterns that were never registered.

    Links built from these point at nothing the server serves. Always
    reported ahead of irreversible routes.
    """

    _label = "non-existent routes"
