"""Mail ORM — direct messages, one row per mailbox owner.

Invariants:
    - contact_id is the correspondent's contact in the owner's contact space
    - from_url == owner's profile URL marks an outgoing (sent) message
    - parent_uri groups a conversation; a thread starter's parent_uri is its uri
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from gateway.db.base import Base


class Mail(Base):
    __tablename__ = "mails"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    contact_id: Mapped[int] = mapped_column(Integer, nullable=False)
    from_url: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    from_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    from_photo: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    seen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reply: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    uri: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    parent_uri: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
