"""Contact ORM — relationship records and public (global) identities.

Invariants:
    - id is a strictly increasing integer: it is the cursor sort key
    - uid == 0 marks a public contact; its id is the global id of every local
      contact sharing the same nurl
    - rel holds Relation values (0 nothing, 1 follower, 2 sharing, 3 friend)

Design Decisions:
    - (uid, rel, id) index: every relationship page filters on uid + rel and
      orders/bounds on id
    - nurl indexed: local -> global id translation joins on it
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from gateway.db.base import Base


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (
        Index("ix_contacts_uid_rel_id", "uid", "rel", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uid: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    is_self: Mapped[bool] = mapped_column(
        "self", Boolean, nullable=False, default=False,
    )
    nick: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    nurl: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", index=True,
    )
    addr: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    network: Mapped[str] = mapped_column(String(4), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    about: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avatar: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    rel: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pending: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
