"""Profile ORM — public profile settings of a local account."""

from sqlalchemy import String, Text, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from gateway.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uid: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.uid", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    hide_friends: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    about: Mapped[str] = mapped_column(Text, nullable=False, default="")
    locality: Mapped[str] = mapped_column(String(255), nullable=False, default="")
