"""Entry point: python -m chrono_backlinks [--vault DIR] [--port N] ..."""

import argparse
from pathlib import Path
from typing import Optional

import uvicorn

from .config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrono-backlinks",
        description="Serve chronological backlink ordering for a note vault",
    )
    parser.add_argument("--vault", type=Path, help="vault directory (default: CHRONO_VAULT_DIR or cwd)")
    parser.add_argument("--host", help=f"bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, help=f"port (default: {settings.port})")
    parser.add_argument("--ascending", action="store_true", help="oldest backlinks first")
    parser.add_argument("--trace", action="store_true", help="log how each backlink was dated")
    parser.add_argument("--reload", action="store_true", help="restart on code changes")
    return parser


def apply_args(args: argparse.Namespace) -> None:
    """Fold command-line overrides into the runtime settings."""
    if args.vault is not None:
        settings.vault_dir = args.vault.expanduser().resolve()
    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.ascending:
        settings.sort_descending = False
    if args.trace:
        settings.debug_mode = True
    if args.reload:
        settings.debug = True


def main(argv: Optional[list[str]] = None):
    apply_args(build_parser().parse_args(argv))
    uvicorn.run(
        "chrono_backlinks.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
