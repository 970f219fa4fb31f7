"""Create all tables for a quick dev setup (NOT for production)."""
from __future__ import annotations

from loguru import logger

from cadastro import create_app, create_tables


def main() -> None:
    app = create_app()
    with app.app_context():
        create_tables()
        logger.info("Tables created.")


if __name__ == "__main__":
    main()
