#!/usr/bin/env python3
"""
Run the Dots and Boxes room server.

Usage:
    python scripts/serve.py
    python scripts/serve.py --port 8000 --debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotsboxes.config import LOG_LEVEL, SERVER_HOST, SERVER_PORT  # noqa: E402
from dotsboxes.server import create_app  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the Dots and Boxes room server")
    parser.add_argument("--host", type=str, default=SERVER_HOST, help=f"Bind address (default: {SERVER_HOST})")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help=f"Port (default: {SERVER_PORT})")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    app = create_app()
    print("\n=== Dots and Boxes ===")
    print(f"Room API at http://{args.host}:{args.port}/api/rooms\n")
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
