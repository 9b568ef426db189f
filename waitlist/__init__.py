# waitlist/__init__.py

import logging
from flask import Flask
from flask.logging import default_handler
from .config import Config


def create_app(config_class=Config, store=None):
    """
    Builds the Flask application.

    `config_class` is read once here; the Supabase store is created from
    it (unless `store` is given) and shared by every request.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Configure logging
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)
    app.logger.removeHandler(default_handler)
    if not app.logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s')
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)

    from .errors import register_error_handlers
    from .cors import init_cors
    from .store import init_store

    register_error_handlers(app)
    init_cors(app)
    init_store(app, store)

    # --- REGISTER BLUEPRINTS ---
    # Same URLs as the serverless deployment: /api/join, /api/status, ...
    from .api.entries import bp as entries_bp
    from .api.health import bp as health_bp

    app.register_blueprint(entries_bp, url_prefix='/api')
    app.register_blueprint(health_bp, url_prefix='/api')

    return app
