"""``wren routes`` — print the compiled route table."""

import argparse
import sys

from wren.cli._resolve import resolve_app
from wren.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATTERN and HANDLER for every route, in registration order."""
    try:
        app = resolve_app(args.app)
        routes = app.routes
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.method, route.pattern, getattr(route.handler, "__name__", repr(route.handler)))
        for route in routes
    ]
    width_method = max(6, *(len(r[0]) for r in rows))
    width_pattern = max(7, *(len(r[1]) for r in rows))

    fmt = f"{{:<{width_method}}}  {{:<{width_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = width_method + width_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
