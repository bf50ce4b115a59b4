"""Create every table on the configured database."""

from chat_geo.core.logging import configure_logging
from chat_geo.db.session import create_tables, engine


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    configure_logging()
    init_db()
    print(f"Database initialized at {engine.url.render_as_string(hide_password=True)}.")
