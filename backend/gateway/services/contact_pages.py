"""Contact Pages — cursor-paginated relationship lists over the ContactStore.

Invariants:
    - A page holds at most `count` global ids, distinct, in ascending local-id order
    - Another account's lists are empty (total_count 0, cursors 0) when its
      profile hides friends; a missing profile is NotFound("Profile not found")
    - Local contacts without a public counterpart are skipped (and logged),
      never rendered with a local id

Design Decisions:
    - Impureim sandwich: count/select IO here, cursor rules in
      core/cursor_pagination.py (plan_selection -> IO -> compute_boundaries)
"""

import logging

from gateway.core.cursor_pagination import (
    Cursor, PageResult, clamp_count, compute_boundaries, parse_cursor,
    plan_selection, restore_display_order,
)
from gateway.core.domain_types import Viewer
from gateway.core.errors import BadRequestError, NotFoundError
from gateway.core.repository_protocols import ContactFilter
from gateway.core.request_context import RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.user_views import user_view_by_public_id

logger = logging.getLogger(__name__)


def paging_params(svc: GatewayServices, ctx: RequestContext) -> tuple[Cursor, int]:
    """Cursor and page size from the request; BadRequest when not integers."""
    try:
        cursor = parse_cursor(ctx.param("cursor"))
        count = clamp_count(
            ctx.param("count"),
            svc.settings.default_page_count,
            svc.settings.max_page_count,
        )
    except ValueError:
        raise BadRequestError("Invalid cursor or count")
    return cursor, count


async def page(
    svc: GatewayServices,
    condition: ContactFilter,
    viewer: Viewer,
    cursor: Cursor,
    count: int,
    stringify_ids: bool = False,
) -> PageResult:
    """One page of global ids for the relationship `condition`."""
    if condition.owner_uid != viewer.uid:
        profile = await svc.users.get_profile(condition.owner_uid)
        if profile is None:
            raise NotFoundError("Profile not found")
        if profile.hide_friends:
            return PageResult.empty()

    total_count = await svc.contacts.count(condition)
    plan = plan_selection(cursor, count)
    local_ids = restore_display_order(
        plan, await svc.contacts.select_ids(condition, plan),
    )
    boundaries = compute_boundaries(cursor, local_ids, total_count, count)

    public_ids = await svc.contacts.public_ids_for(local_ids)
    ids: list[int | str] = []
    for local_id in local_ids:
        public_id = public_ids.get(local_id)
        if public_id is None:
            logger.warning(
                f"Contact {local_id} has no public counterpart",
                extra={"viewer_id": viewer.uid},
            )
            continue
        ids.append(str(public_id) if stringify_ids else public_id)

    return PageResult(
        ids=ids,
        next_cursor=boundaries.next_cursor,
        previous_cursor=boundaries.previous_cursor,
        total_count=total_count,
    )


async def list_users(
    svc: GatewayServices,
    condition: ContactFilter,
    viewer: Viewer,
    cursor: Cursor,
    count: int,
) -> dict:
    """page() expanded into user objects: users first, then the cursors."""
    result = await page(svc, condition, viewer, cursor, count)
    users = []
    for public_id in result.ids:
        user = await user_view_by_public_id(svc, int(public_id), viewer.uid)
        if user is not None:
            users.append(user)

    wire = result.to_wire()
    del wire["ids"]
    return {"users": users, **wire}
