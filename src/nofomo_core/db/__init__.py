"""Database layer: engine factory, ORM base."""

from nofomo_core.db.base import Base
from nofomo_core.db.engine import create_db_engine

__all__ = ["Base", "create_db_engine"]
