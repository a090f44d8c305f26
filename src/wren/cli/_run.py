"""``wren run`` — start the server for an app import string."""

import argparse
import sys

from wren.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; ``--host``/``--port`` override config."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run(args.host, args.port, app_path=args.app)
