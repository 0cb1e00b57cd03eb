"""Command-line entry point: ``canvasmap --token ... [--host] [--port]``."""

from __future__ import annotations

import argparse
import sys

import uvicorn

from canvasmap.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="canvasmap",
        description="Serve Miro board commands and frame spatial maps over HTTP",
    )
    parser.add_argument("-t", "--token", help="Miro OAuth token (overrides MIRO_OAUTH_TOKEN)")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    token = args.token or settings.miro_oauth_token
    if not token:
        print(
            "Error: Miro OAuth token is required. Provide it via MIRO_OAUTH_TOKEN "
            "environment variable or --token argument",
            file=sys.stderr,
        )
        return 1
    settings.miro_oauth_token = token

    from canvasmap.main import app

    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.canvasmap_log_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
