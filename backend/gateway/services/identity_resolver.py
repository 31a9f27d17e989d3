"""Identity Resolver — maps (contact id, screen name) request parameters to accounts.

Invariants:
    - No identifier -> the caller's own uid, without any lookup
    - Screen name beats contact id; a contact id must point at a contact whose
      URL lives on this instance, otherwise NotFound("Contact not found")
    - Unknown screen name -> NotFound("User not found")

Design Decisions:
    - Lookup decision in core/identity_rules.py; this module only performs IO
"""

import logging

from gateway.core.domain_types import Viewer
from gateway.core.errors import NotFoundError
from gateway.core.identity_rules import (
    LookupKind, best_by_network, choose_lookup, is_local_url,
)
from gateway.core.repository_protocols import ContactLike
from gateway.services.gateway_services import GatewayServices
from gateway.services.user_views import own_public_contact

logger = logging.getLogger(__name__)


async def resolve_viewer(
    svc: GatewayServices,
    viewer: Viewer,
    contact_id: int | None = None,
    screen_name: str | None = None,
) -> int:
    """uid of the account whose relationships are requested."""
    lookup = choose_lookup(contact_id, screen_name)
    if lookup.kind is LookupKind.SELF:
        return viewer.uid

    nickname = lookup.screen_name
    if lookup.kind is LookupKind.CONTACT_ID:
        contact = await svc.contacts.get(lookup.contact_id)
        # relationship data only exists for accounts hosted here
        if contact is None or not is_local_url(contact.url, svc.settings.base_url):
            raise NotFoundError("Contact not found")
        nickname = contact.nick

    user = await svc.users.get_by_nickname(nickname)
    if user is None:
        raise NotFoundError("User not found")
    return user.uid


async def resolve_contact(
    svc: GatewayServices,
    viewer: Viewer,
    user_id: int | None = None,
    screen_name: str | None = None,
) -> ContactLike:
    """Public contact addressed by user_id (global id) or screen_name; the caller by default."""
    if user_id:
        public = await svc.contacts.get_public(user_id)
        if public is None:
            raise NotFoundError("User not found")
        return public

    if not screen_name:
        return await own_public_contact(svc, viewer)

    contact = best_by_network(
        await svc.contacts.owned_by_nick(viewer.uid, screen_name),
    )
    if contact is None:
        user = await svc.users.get_by_nickname(screen_name)
        if user is not None:
            contact = await svc.contacts.self_contact(user.uid)
    if contact is None:
        raise NotFoundError("User not found")
    return await svc.contacts.public_for_nurl(contact.nurl) or contact
