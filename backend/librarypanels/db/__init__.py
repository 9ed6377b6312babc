"""Database connections package."""

from librarypanels.db.migrations import Migration, add_migrations, run_migrations
from librarypanels.db.postgres import engine, get_session, init_db

__all__ = ["get_session", "init_db", "engine", "Migration", "add_migrations", "run_migrations"]
