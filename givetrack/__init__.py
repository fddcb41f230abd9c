# givetrack/__init__.py
import logging
import os

import click
from dotenv import load_dotenv
from flask import Flask, jsonify

from givetrack.routes import campaigns, core, donations_bp, orgs
from givetrack.utils.db import database_url, init_db, init_engine
from givetrack.utils.errors import GivetrackError

load_dotenv(dotenv_path=".env")

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(test_config: dict | None = None):
    app = Flask(__name__)
    app.url_map.strict_slashes = False

    app.config.from_mapping(
        DATABASE_URL=database_url(),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        RATE_LIMIT_ENABLED=os.getenv("RATE_LIMIT_ENABLED", "1") == "1",
        RATE_LIMIT_DONATIONS_PER_MINUTE=int(
            os.getenv("RATE_LIMIT_DONATIONS_PER_MINUTE", "30")
        ),
    )
    if test_config:
        app.config.update(test_config)

    _configure_logging(app.config["LOG_LEVEL"])
    init_engine(app.config["DATABASE_URL"])

    @app.errorhandler(GivetrackError)
    def handle_domain_error(e: GivetrackError):
        logger.warning("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def handle_method(e):
        return jsonify({"error": "method not allowed"}), 405

    @app.cli.command("init-db")
    def init_db_command():
        """Create the tables directly (local use; production runs alembic)."""
        init_db()
        click.echo("Initialized the database.")

    app.register_blueprint(core)
    app.register_blueprint(orgs)
    app.register_blueprint(campaigns)
    app.register_blueprint(donations_bp)

    return app
