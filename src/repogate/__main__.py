"""repogate entry point.

Usage:
  repogate                      Serve on HOST:PORT from the environment
  repogate --port 8080          Override the listen port
  repogate --dev                Auto-reload on code changes
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from repogate import __version__
from repogate.config import Settings
from repogate.errors import ConfigurationError
from repogate.logging_setup import setup_logging

setup_logging(level="INFO")
logger = logging.getLogger("repogate.main")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="repogate",
        description="GitHub OAuth login and allow-listed repository proxy",
    )
    parser.add_argument("--host", help="Bind address (default: HOST or 127.0.0.1)")
    parser.add_argument("--port", "-p", type=int, help="Listen port (default: PORT or 3000)")
    parser.add_argument("--dev", action="store_true", help="Enable auto-reload")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args()

    overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        logger.error("Invalid configuration:\n%s", e)
        sys.exit(1)

    setup_logging(level=settings.log_level)

    from repogate.api.serve import create_app, run_server

    app = None
    if not args.dev:
        try:
            app = create_app(settings)
        except ConfigurationError as e:
            logger.error("%s", e)
            sys.exit(1)

    logger.info("%s listening on http://%s:%d", settings.app_name, settings.host, settings.port)
    run_server(settings, app=app, dev=args.dev)


if __name__ == "__main__":
    main()
