"""Reverse-route checks — registered patterns vs. a route record.

Compares the patterns a mux serves against the patterns named by a route
record and reports the asymmetric difference:

- a registered pattern no field names is *irreversible*: it can be
  matched but never composed by name;
- a field naming a pattern nobody registered is *non-existent*: links
  built from it lead nowhere.

Both sides are sorted and merged in one linear pass, so the reported
lists are deterministic and sorted regardless of registration or field
order. Non-existent routes win when both kinds are present; the two are
never merged into one report.
"""

import logging
from collections.abc import Iterable
from typing import Any

from reroute.errors import (
    InvalidRecordError,
    IrreversibleRoutes,
    NonExistentRoutes,
    RouteCheckError,
)
from reroute.records import record_fields

logger = logging.getLogger("reroute.check")


def _unique_sorted(values: Iterable[str]) -> list[str]:
    return sorted(set(values))


def diff_routes(
    registered: Iterable[str],
    references: Iterable[str],
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Merge-diff two pattern collections.

    Returns ``(irreversible, nonexistent)``: patterns only in *registered*
    and patterns only in *references*, each sorted. Duplicates collapse.
    """
    pats = _unique_sorted(registered)
    refs = _unique_sorted(references)

    irreversible: list[str] = []
    nonexistent: list[str] = []
    i, j = 0, 0
    n, m = len(pats), len(refs)
    while i < n and j < m:
        if pats[i] < refs[j]:
            irreversible.append(pats[i])
            i += 1
        elif pats[i] > refs[j]:
            nonexistent.append(refs[j])
            j += 1
        else:
            i += 1
            j += 1
    irreversible.extend(pats[i:])
    nonexistent.extend(refs[j:])
    return tuple(irreversible), tuple(nonexistent)


def check_reverse(registered: Iterable[str], record: Any) -> RouteCheckError | None:
    """Check that *record* is a reverse map for the *registered* patterns.

    Returns ``None`` on success, otherwise one of:

    - ``InvalidRecordError``: *record* is not a route record;
    - ``NonExistentRoutes``: fields naming unregistered patterns;
    - ``IrreversibleRoutes``: registered patterns no field names.

    The outcome is returned, not raised.
    """
    try:
        fields = record_fields(record)
    except InvalidRecordError as exc:
        logger.debug("Reverse check rejected record: %s", exc)
        return exc

    irreversible, nonexistent = diff_routes(registered, (p for _, p in fields))
    if nonexistent:
        return NonExistentRoutes(nonexistent)
    if irreversible:
        return IrreversibleRoutes(irreversible)
    return None
