"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Command-line entry point: ``python -m bravemcp`` or ``brave-mcp``.
"""

from __future__ import annotations

import argparse
import logging

from .app import build_server
from .settings import TOOL_VARIANTS, BraveSettings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Brave Search MCP server")
    parser.add_argument("--host", type=str, default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument(
        "--variant",
        choices=TOOL_VARIANTS,
        default=None,
        help="Tool shape to expose (default: BRAVE_TOOL_VARIANT or 'results')",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = BraveSettings.from_env().with_overrides(
        host=args.host,
        port=args.port,
        tool_variant=args.variant,
    )
    build_server(settings).run()


if __name__ == "__main__":
    main()
