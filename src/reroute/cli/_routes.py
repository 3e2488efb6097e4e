"""``reroute routes`` — list registered patterns."""

import argparse
import sys

from reroute.cli._resolve import resolve_mux
from reroute.patterns import host_path, is_parametric


def run_routes(args: argparse.Namespace) -> None:
    """Print the patterns registered on ``args.mux``, sorted."""
    try:
        mux = resolve_mux(args.mux)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    patterns = mux.patterns
    if not patterns:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for pattern in patterns:
        host, _ = host_path(pattern)
        kind = "subtree" if is_parametric(pattern) else "exact"
        rows.append((pattern, kind, host or "*"))

    width = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    fmt = f"{{:<{width}}}  {{:<7}}  {{}}"
    print(fmt.format("PATTERN", "KIND", "HOST"))
    print("-" * min(width + 20, 80))
    for row in rows:
        print(fmt.format(*row))
