"""
CLI entry point for the dashboard backend.

Usage:
    # Create tables in the configured database
    python -m cvmbot.cli init-db

    # Create tables and insert the basic plan and default flags
    python -m cvmbot.cli init-db --seed

    # Serve the API
    python -m cvmbot.cli serve --port 8000
"""

import argparse
import logging

from sqlalchemy import create_engine

from cvmbot.core.config import settings
from cvmbot.domain.dashboard.activation import utc_now
from cvmbot.infrastructure.dashboard.schema import create_schema, seed_defaults
from cvmbot.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_init_db(args: argparse.Namespace) -> None:
    """Create the dashboard schema, optionally seeding defaults."""
    engine = create_engine(args.database_url or settings.get_database_url())
    logger.info(
        "Initialising schema on %s", engine.url.render_as_string(hide_password=True)
    )
    try:
        create_schema(engine)
        if args.seed:
            seed_defaults(engine, settings.basic_plan_name, utc_now())
    finally:
        engine.dispose()


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI application under uvicorn."""
    import uvicorn

    logger.info("Starting dashboard API at http://%s:%d", args.host, args.port)
    uvicorn.run("cvmbot.main:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
    parser = argparse.ArgumentParser(description="CVM bot dashboard CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create the dashboard schema")
    init_parser.add_argument(
        "--database-url",
        default=None,
        dest="database_url",
        help="SQLAlchemy URL (defaults to DATABASE_URL / POSTGRES_* settings)",
    )
    init_parser.add_argument(
        "--seed", action="store_true",
        help="Insert the basic plan and default feature flags",
    )
    init_parser.set_defaults(func=cmd_init_db)

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default 8000)")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    configure_logging(level=settings.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
