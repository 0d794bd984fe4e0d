"""Database engine factory."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url


def _ensure_psycopg_driver(url: str) -> str:
    """Rewrite postgresql:// to postgresql+psycopg:// for psycopg v3."""
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def _ensure_sqlite_parent(url: str) -> None:
    """Create the directory holding a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(url: str, **kwargs) -> Engine:
    """Create an engine for *url*, preparing the backing medium if needed.

    Unlike a module-level engine, the caller owns the returned object and
    must ``dispose()`` it.
    """
    url = _ensure_psycopg_driver(url)
    _ensure_sqlite_parent(url)
    if make_url(url).get_backend_name() == "sqlite":
        # Appends run in worker threads, not the thread that opened the pool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, _rec):
            # WAL lets readers proceed while an append is in flight
            dbapi_conn.execute("PRAGMA journal_mode=WAL")
            dbapi_conn.execute("PRAGMA busy_timeout=5000")

    return engine
