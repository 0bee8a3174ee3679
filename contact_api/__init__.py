# contact_api/__init__.py
import logging
import os
from flask import Flask, jsonify
from dotenv import load_dotenv

from contact_api.config import ContactSettings
from contact_api.routes import core, contact_bp
from contact_api.services.contact_service import ContactHandler, utc_now
from contact_api.utils.email_sender import mailer_from_env

load_dotenv(dotenv_path=".env")


def _configure_logging(app):
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.logger.setLevel(level)


def create_app(mailer=None, clock=None, settings=None):
    """
    Build the contact API. mailer/clock/settings default to the environment;
    pass them in to run against test doubles.
    """
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    _configure_logging(app)

    settings = settings or ContactSettings.from_env()
    if mailer is None:
        # EmailConfigError here means the deploy is missing provider credentials
        mailer = mailer_from_env()
    app.extensions["contact_handler"] = ContactHandler(
        mailer=mailer, settings=settings, clock=clock or utc_now
    )
    app.logger.info(
        "contact api ready provider=%s notify_to=%s",
        mailer.provider,
        ",".join(settings.notify_to),
    )

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    app.register_blueprint(core)
    app.register_blueprint(contact_bp)
    return app
