"""User ORM — local accounts that may call the gateway.

Invariants:
    - uid is the integer primary key every per-viewer row is scoped by
    - nickname is unique (screen-name lookups resolve through it)

Design Decisions:
    - Profile kept in its own table: hide_friends and about change independently
      of account data (ADR: mirrors the federated store's layout)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from gateway.db.base import Base


class User(Base):
    """Local account."""
    __tablename__ = "users"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True)
    nickname: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
