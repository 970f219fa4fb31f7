"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from loguru import logger

from .config import BaseConfig
from .db.session import db
from .api.health.routes import bp as health_bp
from .api.users.routes import bp as users_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .integrations.supabase_client import supabase_ext
from .log import configure_logging


def create_tables() -> None:
    """Create the schema on the configured engine (dev setups only)."""
    from .db.base import Base
    from .db.models import user  # noqa: F401

    assert db.engine is not None, "DB engine is not initialized"
    Base.metadata.create_all(db.engine)


def create_app(config_class: type[BaseConfig] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class or BaseConfig())
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    CORS(app, resources={r"/usuarios*": {"origins": app.config["FRONTEND_ORIGIN"]}})

    # Init extensions
    db.init_app(app)
    supabase_ext.init_app(app)
    if app.config.get("CREATE_TABLES"):
        create_tables()

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/health")
    app.register_blueprint(users_bp, url_prefix="/usuarios")
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)
    logger.info("app ready, store backend: {}", app.config.get("USER_REPO_BACKEND"))
    return app
