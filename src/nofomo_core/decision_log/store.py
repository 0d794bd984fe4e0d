"""Append-only decision log backed by a SQL table.

Each append is one INSERT committed on its own, so a crash while writing an
entry can lose only that entry. Read order is storage order (autoincrement
id), newest first.

Known limitation: with several processes appending to the same database,
entries from different writers are ordered by whichever INSERT committed
first, not by their ``createdAt`` values.
"""

from __future__ import annotations

import threading
from collections import Counter

import structlog
from pydantic import ValidationError
from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from nofomo_core.db.base import Base
from nofomo_core.db.engine import create_db_engine
from nofomo_core.db.tables.decision_log import DecisionLogRow
from nofomo_core.models import DecisionLogEntry

log = structlog.get_logger("decision_log")

MIN_READ_LIMIT = 1
MAX_READ_LIMIT = 500


class DecisionLogError(Exception):
    """The decision log could not be written or read."""


def clamp_limit(limit: int, max_limit: int = MAX_READ_LIMIT) -> int:
    """Clamp a requested page size into [1, max_limit]."""
    return max(MIN_READ_LIMIT, min(limit, max_limit))


class DecisionLogStore:
    """Handle on the decision log. Open once at startup, close at shutdown."""

    def __init__(self, url: str, max_read_limit: int = MAX_READ_LIMIT) -> None:
        self.url = url
        self.max_read_limit = min(max_read_limit, MAX_READ_LIMIT)
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None
        self._write_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> DecisionLogStore:
        """Connect and create the table if absent. Safe to call repeatedly."""
        if self._engine is None:
            try:
                engine = create_db_engine(self.url)
                Base.metadata.create_all(engine, tables=[DecisionLogRow.__table__])
            except (SQLAlchemyError, OSError) as exc:
                raise DecisionLogError(f"cannot open decision log: {exc}") from exc
            self._engine = engine
            self._sessions = sessionmaker(bind=engine)
            log.info("decision_log_opened", backend=engine.dialect.name)
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
            log.info("decision_log_closed")

    def __enter__(self) -> DecisionLogStore:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _session(self) -> Session:
        if self._sessions is None:
            raise DecisionLogError("decision log is not open; call open() first")
        return self._sessions()

    def append(self, entry: DecisionLogEntry) -> None:
        """Write exactly one entry. Raises DecisionLogError on failure."""
        row = DecisionLogRow(
            request_id=entry.request_id,
            symbol=entry.symbol,
            direction=entry.direction,
            action=entry.decision.action,
            created_at=entry.created_at,
            payload=entry.to_payload(),
        )
        with self._write_lock:
            session = self._session()
            try:
                session.add(row)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise DecisionLogError(f"append failed: {exc}") from exc
            finally:
                session.close()

    def read(self, limit: int = 50) -> list[DecisionLogEntry]:
        """Return up to *limit* most recent entries, newest first.

        *limit* is clamped to [1, max_read_limit]; this never errors on
        an out-of-range limit.
        """
        limit = clamp_limit(limit, self.max_read_limit)
        session = self._session()
        try:
            rows = session.execute(
                select(DecisionLogRow.id, DecisionLogRow.payload)
                .order_by(DecisionLogRow.id.desc())
                .limit(limit)
            ).all()
        except SQLAlchemyError as exc:
            raise DecisionLogError(f"read failed: {exc}") from exc
        finally:
            session.close()

        entries = []
        for row_id, payload in rows:
            try:
                entries.append(DecisionLogEntry.model_validate(payload))
            except ValidationError as exc:
                log.warning("decision_log_row_unreadable", row_id=row_id, error=str(exc))
        return entries

    def summary(self, limit: int = 50) -> dict[str, int]:
        """Action counts over the *limit* most recent entries."""
        limit = clamp_limit(limit, self.max_read_limit)
        session = self._session()
        try:
            actions = session.execute(
                select(DecisionLogRow.action)
                .order_by(DecisionLogRow.id.desc())
                .limit(limit)
            ).scalars().all()
        except SQLAlchemyError as exc:
            raise DecisionLogError(f"summary failed: {exc}") from exc
        finally:
            session.close()

        counts = Counter(actions)
        return {
            "count": len(actions),
            "allow": counts.get("ALLOW", 0),
            "warn": counts.get("WARN", 0),
            "block": counts.get("BLOCK", 0),
        }

    def ping(self) -> int:
        """Readability check; returns how many entries a 1-row read yields."""
        return len(self.read(1))
