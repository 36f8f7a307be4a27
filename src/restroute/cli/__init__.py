"""restroute CLI — route table inspection.

Entry point registered as ``restroute`` in ``pyproject.toml``::

    [project.scripts]
    restroute = "restroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``restroute`` command."""
    parser = argparse.ArgumentParser(
        prog="restroute",
        description="restroute — route registry and dispatcher for JSON APIs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- restroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from restroute.cli._routes import run_routes

        run_routes(args)
