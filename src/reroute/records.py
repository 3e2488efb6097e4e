"""Route records — dataclasses whose fields name route patterns.

A route record is a plain dataclass with string fields, one per route the
application links to. The same record drives registration, reverse-route
checks and link building::

    @dataclass
    class Routes:
        sessions: str = route("/v1/sessions/")
        users: str = route("/v1/users/")

    routes = fill_routes(Routes(users="/v2/users/"))
    mux.handle(routes.sessions, sessions_handler)
    mux.handle(routes.users, users_handler)
    assert mux.check_reverse(routes) is None

Shape rules shared by ``fill_routes`` and the reverse-route checker:

- ``None`` is a null reference; ``weakref.ref`` objects are followed,
  and a dead reference is a null reference too.
- After dereferencing, the value must be a dataclass instance.
- Every field must hold a ``str``.

Anything else is an ``InvalidRecordError``.
"""

import dataclasses
import weakref
from typing import Any

from reroute.errors import InvalidRecordError

# Field metadata key holding a route's default pattern
METADATA_KEY = "route"


def route(pattern: str) -> Any:
    """Declare a route field whose pattern defaults to *pattern*.

    The field itself defaults to ``""``; ``fill_routes`` copies the pattern
    in, so an explicitly passed value always wins.
    """
    return dataclasses.field(default="", metadata={METADATA_KEY: pattern})


def deref(value: Any) -> Any:
    """Follow weak references until a non-reference value is reached.

    Raises ``InvalidRecordError`` for ``None`` or a dead reference.
    """
    while isinstance(value, weakref.ReferenceType):
        value = value()
        if value is None:
            msg = "dead reference"
            raise InvalidRecordError(msg)
    if value is None:
        msg = "null record"
        raise InvalidRecordError(msg)
    return value


def _record(value: Any) -> Any:
    record = deref(value)
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        msg = f"not a route record: {type(record).__name__}"
        raise InvalidRecordError(msg)
    return record


def record_fields(value: Any) -> list[tuple[str, str]]:
    """Return ``(name, pattern)`` pairs of a route record in field order."""
    record = _record(value)
    pairs: list[tuple[str, str]] = []
    for f in dataclasses.fields(record):
        current = getattr(record, f.name)
        if not isinstance(current, str):
            msg = f"non-string field {f.name!r} ({type(current).__name__})"
            raise InvalidRecordError(msg)
        pairs.append((f.name, current))
    return pairs


def fill_routes(value: Any) -> Any:
    """Fill every empty field of a route record from its ``route()`` default.

    Fields that already hold a pattern are left alone. Returns the
    dereferenced record, mutated in place.

    Raises ``InvalidRecordError`` if the record is malformed, is frozen,
    or has an empty field with no default.
    """
    record = _record(value)
    params = getattr(type(record), "__dataclass_params__", None)
    if params is not None and params.frozen:
        msg = f"frozen route record: {type(record).__name__}"
        raise InvalidRecordError(msg)

    for f in dataclasses.fields(record):
        current = getattr(record, f.name)
        if not isinstance(current, str):
            msg = f"non-string field {f.name!r} ({type(current).__name__})"
            raise InvalidRecordError(msg)
        if current:
            continue
        default = f.metadata.get(METADATA_KEY, "")
        if not default:
            msg = f"empty field with no route default {f.name!r}"
            raise InvalidRecordError(msg)
        setattr(record, f.name, default)
    return record
