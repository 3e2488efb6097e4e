"""``reroute check`` — reverse-route validation command.

Resolves a ServeMux and a route record, runs ``ServeMux.check()`` and
prints the report. Exits with code 1 if the check fails.
"""

import argparse
import sys

from reroute.cli._resolve import resolve, resolve_mux
from reroute.config import CheckConfig


def run_check(args: argparse.Namespace) -> None:
    """Check ``args.routes`` against the patterns served by ``args.mux``."""
    try:
        mux = resolve_mux(args.mux)
        record = resolve(args.routes, "routes")
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = CheckConfig(tolerate=frozenset(args.tolerate), strict=not args.lenient)
    mux.check(record, config)
