"""
main.py
-------
Entry point for the prison records API.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the Flask application around the shared Database.
    - Close the pool when the server stops.
"""

from typing import Optional

from flask import Flask

from config import API_HOST, API_PORT, API_PREFIX
from db.connection import Database
from db.init_db import create_tables
from handlers.cell_block_handler import cell_block_blueprint
from handlers.cell_handler import cell_blueprint
from handlers.context import EXTENSION_KEY, AppContext
from handlers.parole_handler import parole_blueprint
from handlers.prisoner_handler import prisoner_blueprint
from handlers.report_handler import report_blueprint
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(db: Database, context: Optional[AppContext] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        db: The initialized Database every repository will use.
        context: Prebuilt repositories and services; built from ``db`` when omitted.
    """
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = context or AppContext.build(db)

    for blueprint in (
        prisoner_blueprint,
        cell_block_blueprint,
        cell_blueprint,
        parole_blueprint,
        report_blueprint,
    ):
        app.register_blueprint(blueprint, url_prefix=API_PREFIX)
    return app


def main() -> None:
    """Initialize the database and serve the API."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    db = Database()
    db.initialize()
    create_tables(db)

    # ── 2. Serve ──────────────────────────────────────────
    app = create_app(db)
    logger.info(f"Prison records API running on {API_HOST}:{API_PORT}{API_PREFIX}")
    try:
        app.run(host=API_HOST, port=API_PORT, threaded=True)
    finally:
        # ── 3. Cleanup on shutdown ────────────────────────
        db.close()
        logger.info("Prison records API stopped.")


if __name__ == "__main__":
    main()
