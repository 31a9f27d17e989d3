"""Notification ORM — per-owner notices (replies, mentions, intros).

Invariants:
    - otype == "item" means iid references an item of the same owner
    - seen flips false -> true only (notification/seen)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from gateway.db.base import Base


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    photo: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    msg: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    iid: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    otype: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    verb: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    seen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
