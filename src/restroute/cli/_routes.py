"""``restroute routes`` — list registered routes.

Resolves an import string to a RestApp and prints its routes in
registration order, which is also the order they are matched in.
"""

import argparse
import sys

from restroute.cli._resolve import resolve_app
from restroute.errors import ConfigurationError
from restroute.routing.pattern import join_path


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / PERMISSION / HANDLER table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        app._ensure_frozen()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    if not app.base_route:
        print("Base route is empty; routing is disabled.", file=sys.stderr)

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        path = "/" + join_path(app.base_route, route.path)
        handler_name = route.handler_name
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, path, route.permission or "-", handler_name))

    headers = ("METHOD", "PATH", "PERMISSION", "HANDLER")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
