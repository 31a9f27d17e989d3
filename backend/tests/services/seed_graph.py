"""Seed helpers — accounts, public contacts and local relationships for service tests."""

from types import SimpleNamespace

from sqlalchemy.ext.asyncio import AsyncSession

from gateway.core.domain_types import Relation
from gateway.core.identity_rules import normalise_link
from gateway.models.contact import Contact
from gateway.models.profile import Profile
from gateway.models.user import User

BASE_URL = "http://localhost"


async def add_public(db: AsyncSession, nick: str, url: str, network: str = "dfrn") -> Contact:
    contact = Contact(
        uid=0, nick=nick, name=nick.title(), url=url, nurl=normalise_link(url),
        addr=f"{nick}@{url.split('/')[2]}", network=network,
    )
    db.add(contact)
    await db.flush()
    return contact


async def add_local(
    db: AsyncSession, owner: int, public: Contact, rel: Relation, **flags,
) -> Contact:
    contact = Contact(
        uid=owner, nick=public.nick, name=public.name, url=public.url,
        nurl=public.nurl, addr=public.addr, network=public.network,
        rel=int(rel), **flags,
    )
    db.add(contact)
    await db.flush()
    return contact


async def add_account(
    db: AsyncSession, uid: int, nick: str, hide_friends: bool = False,
    blocked: bool = False,
) -> SimpleNamespace:
    """User + profile + public contact + self contact, all on BASE_URL."""
    db.add(User(uid=uid, nickname=nick, username=nick.title(), blocked=blocked))
    db.add(Profile(uid=uid, hide_friends=hide_friends))
    await db.flush()
    public = await add_public(db, nick, f"{BASE_URL}/profile/{nick}")
    own = Contact(
        uid=uid, is_self=True, nick=nick, name=nick.title(), url=public.url,
        nurl=public.nurl, addr=public.addr, network="dfrn",
    )
    db.add(own)
    await db.flush()
    return SimpleNamespace(uid=uid, public=public, own=own)
