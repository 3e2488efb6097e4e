"""Reroute CLI — reverse-route checks and route listing.

Entry point registered as ``reroute`` in ``pyproject.toml``::

    [project.scripts]
    reroute = "reroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``reroute`` command."""
    parser = argparse.ArgumentParser(
        prog="reroute",
        description="Reroute — reverse routes for prefix-pattern HTTP muxes.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log check details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- reroute check ----------------------------------------------------
    check_parser = subparsers.add_parser(
        "check",
        help="Check a route record against the routes a mux serves",
    )
    check_parser.add_argument("mux", help="Import string of the ServeMux (e.g. myapp:mux)")
    check_parser.add_argument(
        "routes",
        help="Import string of the route record (e.g. myapp:routes)",
    )
    check_parser.add_argument(
        "--tolerate",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Pattern allowed to go unreferenced (repeatable)",
    )
    check_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Only warn about unreferenced routes",
    )

    # -- reroute routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered patterns")
    routes_parser.add_argument("mux", help="Import string of the ServeMux (e.g. myapp:mux)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "check":
        from reroute.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from reroute.cli._routes import run_routes

        run_routes(args)
