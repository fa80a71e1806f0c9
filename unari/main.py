"""Entry point: `unari serve` (SSH server) or `unari local` (Textual app)."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from functools import partial
from pathlib import Path

from unari.config import load_settings
from unari.fetch import fetch_menus
from unari.menu_app import MenuApp
from unari.server import serve

logger = logging.getLogger("unari")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(log_path: str | None, verbose: bool = False) -> None:
    """Log to `log_path` when given (the terminal belongs to the UI), else stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    if log_path:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="unari", description="Unicafe menus in the terminal.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    ap.add_argument("--env-file", default=None, help="Path to a .env file (default: search from cwd)")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", help="Serve the dashboard over SSH (HOST/PORT from env)")
    sub.add_parser("local", help="Run the dashboard in this terminal")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except ValueError as exc:
        configure_logging(None, args.verbose)
        logger.error("invalid configuration: %s", exc)
        return 1

    if args.command == "local":
        configure_logging(settings.log_path, args.verbose)
        MenuApp(fetcher=partial(fetch_menus, settings.api_url)).run()
        return 0

    configure_logging(None, args.verbose)
    try:
        asyncio.run(serve(settings))
    except OSError as exc:
        logger.error("could not start server: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
