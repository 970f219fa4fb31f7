"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

import atexit
from typing import Any, Dict

from flask import Flask
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool


def engine_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """Pool and timeout options for the configured driver."""
    url = make_url(config["DATABASE_URL"])
    timeout = float(config.get("STORE_TIMEOUT_SECONDS", 5))

    if url.get_backend_name() == "sqlite":
        opts: Dict[str, Any] = {
            "connect_args": {"check_same_thread": False, "timeout": timeout},
        }
        if url.database in (None, "", ":memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            opts["poolclass"] = StaticPool
        return opts

    opts = {
        "pool_size": config.get("POOL_SIZE", 10),
        "max_overflow": config.get("MAX_OVERFLOW", 20),
        "pool_timeout": config.get("POOL_TIMEOUT", timeout),
        "pool_recycle": config.get("POOL_RECYCLE", 1800),
    }
    if url.get_backend_name() == "postgresql":
        opts["connect_args"] = {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return opts


class Database:
    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]
        self._exit_hook = False

    def init_app(self, app: Flask) -> None:
        if self.engine is not None:
            self.dispose()

        self.engine = create_engine(
            app.config["DATABASE_URL"],
            echo=app.config.get("SQL_ECHO", False),
            pool_pre_ping=True,
            future=True,
            **engine_options(app.config),
        )
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )
        if not self._exit_hook:
            atexit.register(self.dispose)
            self._exit_hook = True
        logger.info("database engine ready: {}", self.engine.url.render_as_string(hide_password=True))

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def dispose(self) -> None:
        if self.Session is not None:
            self.Session.remove()
        if self.engine is not None:
            self.engine.dispose()


db = Database()
