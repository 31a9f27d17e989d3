"""User Views — resolves contacts and posts into legacy user/status objects.

Invariants:
    - A user object's id is ALWAYS the public (global) contact id
    - Relationship fields (following, blocking, cid) come from the viewer's own
      contact with the same nurl, when one exists
    - Counts are only computed for the viewer's own account (self user)

Design Decisions:
    - Thin async layer over core/entity_shapes.py: IO here, shaping there
    - The remote screen-name lookup is awaited here and handed to the pure
      matcher as a precomputed answer
"""

import logging

from gateway.core.domain_types import (
    FOLLOWER_RELATIONS, FRIEND_RELATIONS, Viewer,
)
from gateway.core.entity_shapes import UserCounts, status_object, user_object
from gateway.core.errors import InternalServerError
from gateway.core.network_matcher import ScreenNameLookup, lookup_target
from gateway.core.repository_protocols import ContactFilter, ContactLike, ItemLike
from gateway.services.gateway_services import GatewayServices

logger = logging.getLogger(__name__)


async def prefetch_lookup(
    svc: GatewayServices, contact: ContactLike,
) -> ScreenNameLookup | None:
    """Answer the matcher's "/user/" question ahead of the synchronous classify()."""
    if svc.lookup is None or contact.network:
        return None
    target = lookup_target(contact.url)
    if target is None:
        return None
    screen_name = await svc.lookup(*target)
    return lambda host, user: screen_name


async def _own_counts(svc: GatewayServices, uid: int, public_id: int) -> UserCounts:
    return UserCounts(
        followers=await svc.contacts.count(ContactFilter(uid, FOLLOWER_RELATIONS)),
        friends=await svc.contacts.count(ContactFilter(uid, FRIEND_RELATIONS)),
        statuses=await svc.statuses.count_by_author(uid, public_id),
        favourites=await svc.statuses.count_starred(uid),
    )


async def user_view(
    svc: GatewayServices, public: ContactLike, viewer_uid: int,
) -> dict:
    """User object for a public contact as seen by `viewer_uid`."""
    local = await svc.contacts.owned_by_nurl(viewer_uid, public.nurl)
    source = local or public
    is_self = bool(local is not None and local.is_self)
    counts = await _own_counts(svc, viewer_uid, public.id) if is_self else None
    return user_object(
        source,
        public.id,
        owner_uid=source.uid,
        local_id=local.id if local is not None else 0,
        is_self=is_self,
        following=bool(local is not None and local.rel in FRIEND_RELATIONS),
        blocking=bool(local is not None and local.blocked),
        counts=counts,
        lookup=await prefetch_lookup(svc, source),
    )


async def user_view_by_public_id(
    svc: GatewayServices, public_id: int, viewer_uid: int,
) -> dict | None:
    public = await svc.contacts.get_public(public_id)
    if public is None:
        return None
    return await user_view(svc, public, viewer_uid)


async def own_public_contact(svc: GatewayServices, viewer: Viewer) -> ContactLike:
    """The viewer's public identity; its self contact when none was published."""
    own = await svc.contacts.self_contact(viewer.uid)
    if own is None:
        logger.error(
            "Account has no self contact", extra={"viewer_id": viewer.uid},
        )
        raise InternalServerError()
    return await svc.contacts.public_for_nurl(own.nurl) or own


async def self_view(svc: GatewayServices, viewer: Viewer) -> dict:
    return await user_view(svc, await own_public_contact(svc, viewer), viewer.uid)


async def contact_view(
    svc: GatewayServices, contact: ContactLike, viewer_uid: int,
) -> dict:
    """User object for a contact from the viewer's own contact space."""
    public = await svc.contacts.public_for_nurl(contact.nurl) or contact
    return await user_view(svc, public, viewer_uid)


async def status_view(
    svc: GatewayServices, item: ItemLike, viewer_uid: int,
) -> dict | None:
    """Status object with its author; None when the author is unknown."""
    author = await user_view_by_public_id(svc, item.author_id, viewer_uid)
    if author is None:
        logger.warning(
            f"Item {item.id} has no public author contact",
            extra={"viewer_id": viewer_uid},
        )
        return None

    reply_screen_name = None
    if item.parent_id and item.parent_id != item.id:
        parent = await svc.statuses.get_owned(viewer_uid, item.parent_id)
        if parent is not None:
            parent_author = await svc.contacts.get_public(parent.author_id)
            if parent_author is not None:
                reply_screen_name = parent_author.nick or parent_author.name
    return status_object(item, author, svc.markup, reply_screen_name)
