"""Cookieseal entry point.

Serves the login/logout API with uvicorn.
"""

import argparse
import logging

from cookieseal import __version__
from cookieseal.config import get_settings
from cookieseal.logging_setup import setup_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cookieseal",
        description="Stateless signed session cookies over a small FastAPI app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cookieseal                         Serve on the configured host/port
  cookieseal --port 9000             Serve on another port
  cookieseal --log-level DEBUG       Log why individual tokens are rejected
""",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: from settings)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: from settings)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: from settings)",
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(level=args.log_level or settings.log_level)

    import uvicorn

    from cookieseal.api import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(f"Serving on http://{host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
