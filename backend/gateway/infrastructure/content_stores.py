"""Content Stores — SQLAlchemy implementations of the user, status, mail and
notification protocols.

Invariants:
    - Every read is scoped by the owner's uid (no cross-account leakage)
    - Mutations commit immediately; the session manager rolls back on error
    - Mail boxes are newest-first; notifications unseen-first then newest-first

Design Decisions:
    - One small class per protocol: handlers receive exactly the store they need
      (ADR: ExMA no god objects)
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.core.domain_types import MailBox
from gateway.core.repository_protocols import MailQuery, NewMail
from gateway.models.contact import Contact
from gateway.models.item import Item
from gateway.models.mail import Mail
from gateway.models.notification import Notification
from gateway.models.profile import Profile
from gateway.models.saved_search import SavedSearch
from gateway.models.user import User

logger = logging.getLogger(__name__)


class SqlUserStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, uid: int) -> User | None:
        return await self.db.get(User, uid)

    async def get_by_nickname(self, nickname: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.nickname == nickname)
        )
        return result.scalar_one_or_none()

    async def get_profile(self, uid: int) -> Profile | None:
        result = await self.db.execute(
            select(Profile).where(Profile.uid == uid)
        )
        return result.scalar_one_or_none()

    async def saved_searches(self, uid: int) -> list[SavedSearch]:
        result = await self.db.execute(
            select(SavedSearch)
            .where(SavedSearch.uid == uid)
            .order_by(SavedSearch.id.asc())
        )
        return list(result.scalars().all())


class SqlStatusStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_owned(self, uid: int, item_id: int) -> Item | None:
        result = await self.db.execute(
            select(Item)
            .where(Item.id == item_id)
            .where(Item.uid == uid)
            .where(Item.deleted.is_(False))
        )
        return result.scalar_one_or_none()

    async def set_starred(self, item: Item, starred: bool) -> Item:
        item.starred = starred
        await self.db.commit()
        return item

    async def list_starred(
        self, uid: int, since_id: int, max_id: int, offset: int, limit: int,
    ) -> list[Item]:
        query = (
            select(Item)
            .where(Item.uid == uid)
            .where(Item.starred.is_(True))
            .where(Item.deleted.is_(False))
            .where(Item.id > since_id)
        )
        if max_id > 0:
            query = query.where(Item.id <= max_id)
        result = await self.db.execute(
            query.order_by(Item.id.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def latest_by_author(self, uid: int, author_id: int) -> Item | None:
        result = await self.db.execute(
            select(Item)
            .where(Item.uid == uid)
            .where(Item.author_id == author_id)
            .where(Item.deleted.is_(False))
            .order_by(Item.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count_by_author(self, uid: int, author_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Item.id))
            .where(Item.uid == uid)
            .where(Item.author_id == author_id)
            .where(Item.deleted.is_(False))
        )
        return int(result.scalar_one())

    async def count_starred(self, uid: int) -> int:
        result = await self.db.execute(
            select(func.count(Item.id))
            .where(Item.uid == uid)
            .where(Item.starred.is_(True))
            .where(Item.deleted.is_(False))
        )
        return int(result.scalar_one())


class SqlMailStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def select_box(self, uid: int, query: MailQuery) -> list[Mail]:
        stmt = (
            select(Mail)
            .join(Contact, Contact.id == Mail.contact_id)
            .where(Mail.uid == uid)
            .where(Mail.id > query.since_id)
        )
        if query.box == MailBox.SENTBOX:
            stmt = stmt.where(Mail.from_url == query.own_url)
        elif query.box == MailBox.INBOX:
            stmt = stmt.where(Mail.from_url != query.own_url)
        elif query.box == MailBox.CONVERSATION:
            stmt = stmt.where(Mail.parent_uri == (query.parent_uri or ""))

        if query.max_id > 0:
            stmt = stmt.where(Mail.id <= query.max_id)
        if query.contact_id is not None:
            stmt = stmt.where(Mail.contact_id == query.contact_id)
        elif query.screen_name:
            stmt = stmt.where(Contact.nick == query.screen_name)

        result = await self.db.execute(
            stmt.order_by(Mail.id.desc())
            .offset(query.offset)
            .limit(query.limit)
        )
        return list(result.scalars().all())

    async def get_owned(
        self, uid: int, mail_id: int, parent_uri: str = "",
    ) -> Mail | None:
        stmt = select(Mail).where(Mail.uid == uid).where(Mail.id == mail_id)
        if parent_uri:
            stmt = stmt.where(Mail.parent_uri == parent_uri)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, mail: Mail) -> bool:
        await self.db.delete(mail)
        await self.db.commit()
        return True

    async def create(self, mail: NewMail) -> Mail | None:
        row = Mail(
            uid=mail.uid,
            contact_id=mail.contact_id,
            from_url=mail.from_url,
            from_name=mail.from_name,
            from_photo=mail.from_photo,
            title=mail.title,
            body=mail.body,
            seen=True,
            reply=bool(mail.reply_to),
            uri=mail.uri,
            parent_uri=mail.reply_to or mail.uri,
        )
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(
            "Direct message stored",
            extra={"viewer_id": mail.uid},
        )
        return row


class SqlNotificationStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for(self, uid: int, limit: int) -> list[Notification]:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.uid == uid)
            .order_by(Notification.seen.asc(), Notification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_owned(self, uid: int, note_id: int) -> Notification | None:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.id == note_id)
            .where(Notification.uid == uid)
        )
        return result.scalar_one_or_none()

    async def mark_seen(self, note: Notification) -> None:
        note.seen = True
        await self.db.commit()
