"""Contact Store — SQLAlchemy implementation of the ContactStore protocol.

Invariants:
    - Relationship conditions always add self=false, deleted=false,
      hidden=false, archive=false and the filter's pending flag
    - select_ids() honors the SelectionPlan exactly: bounds, order, limit
    - Global id of a local contact = smallest public (uid 0) contact id with
      the same nurl; contacts without one are absent from public_ids_for()

Design Decisions:
    - Ids only from select_ids(): pages are resolved to objects later, after the
      local -> global translation (one query per concern)
"""

from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from gateway.core.cursor_pagination import SelectionPlan
from gateway.core.domain_types import PUBLIC_OWNER
from gateway.core.repository_protocols import ContactFilter
from gateway.models.contact import Contact


def _relationship_clauses(condition: ContactFilter) -> list:
    clauses = [
        Contact.uid == condition.owner_uid,
        Contact.rel.in_([int(r) for r in condition.relations]),
        Contact.is_self.is_(False),
        Contact.deleted.is_(False),
        Contact.hidden.is_(False),
        Contact.archive.is_(False),
        Contact.pending.is_(condition.pending),
    ]
    if condition.blocked is not None:
        clauses.append(Contact.blocked.is_(condition.blocked))
    return clauses


class SqlContactStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, condition: ContactFilter) -> int:
        result = await self.db.execute(
            select(func.count(Contact.id)).where(*_relationship_clauses(condition))
        )
        return int(result.scalar_one())

    async def select_ids(
        self, condition: ContactFilter, plan: SelectionPlan,
    ) -> list[int]:
        if plan.empty:
            return []
        query = select(Contact.id).where(*_relationship_clauses(condition))
        if plan.id_above is not None:
            query = query.where(Contact.id > plan.id_above)
        if plan.id_below is not None:
            query = query.where(Contact.id < plan.id_below)
        order = Contact.id.desc() if plan.descending else Contact.id.asc()
        result = await self.db.execute(query.order_by(order).limit(plan.limit))
        return list(result.scalars().all())

    async def get(self, contact_id: int) -> Contact | None:
        return await self.db.get(Contact, contact_id)

    async def get_public(self, public_id: int) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.id == public_id)
            .where(Contact.uid == PUBLIC_OWNER)
        )
        return result.scalar_one_or_none()

    async def public_ids_for(self, local_ids: list[int]) -> dict[int, int]:
        if not local_ids:
            return {}
        public = aliased(Contact)
        result = await self.db.execute(
            select(Contact.id, func.min(public.id))
            .join(public, and_(
                public.nurl == Contact.nurl, public.uid == PUBLIC_OWNER,
            ))
            .where(Contact.id.in_(local_ids))
            .group_by(Contact.id)
        )
        return {local: pub for local, pub in result.all()}

    async def public_for_nurl(self, nurl: str) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.uid == PUBLIC_OWNER)
            .where(Contact.nurl == nurl)
            .order_by(Contact.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def owned_by_nurl(self, owner_uid: int, nurl: str) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.uid == owner_uid)
            .where(Contact.nurl == nurl)
            .where(Contact.deleted.is_(False))
            .order_by(Contact.is_self.desc(), Contact.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def owned_by_nick(self, owner_uid: int, nick: str) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.uid == owner_uid)
            .where(Contact.nick == nick)
            .where(Contact.is_self.is_(False))
            .where(Contact.deleted.is_(False))
            .order_by(Contact.id.asc())
        )
        return list(result.scalars().all())

    async def self_contact(self, uid: int) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.uid == uid)
            .where(Contact.is_self.is_(True))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def search_public(self, term: str) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.uid == PUBLIC_OWNER)
            .where(Contact.deleted.is_(False))
            .where(or_(
                Contact.name == term, Contact.nick == term,
                Contact.url == term, Contact.addr == term,
            ))
            .order_by(Contact.id.asc())
        )
        return list(result.scalars().all())
