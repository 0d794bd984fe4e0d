"""SQLAlchemy ORM model for the append-only decision log."""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from nofomo_core.db.base import Base


class DecisionLogRow(Base):
    """One decision per row. Rows are inserted once and never updated.

    ``payload`` holds the full camelCase entry so a row stays readable even
    after scoring weights or the entry schema change; the scalar columns are
    copies for filtering and ordering.
    """

    __tablename__ = "decision_log"

    # BigInteger on PostgreSQL, INTEGER on SQLite so autoincrement works there
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True,
    )
    request_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    direction: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
