"""Notification Handlers — list notifications and mark one seen.

Invariants:
    - Neither endpoint accepts extra path segments (BadRequest otherwise)
    - At most NOTIFICATION_LIMIT notes, unseen first, newest first
    - An empty list answers {"note": false}; XML carries every field as an
      attribute of <note> under <notes>
"""

import logging

from gateway.core.domain_types import Scope
from gateway.core.entity_shapes import notes_payload, notification_object
from gateway.core.errors import BadRequestError
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.user_views import status_view

logger = logging.getLogger(__name__)

NOTIFICATION_LIMIT = 50
ITEM_OBJECT_TYPE = "item"


def _no_path_args(ctx: RequestContext) -> None:
    if ctx.path_args:
        raise BadRequestError("Invalid argument count")


async def notification(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    _no_path_args(ctx)

    notes = await svc.notifications.list_for(viewer.uid, NOTIFICATION_LIMIT)
    shaped = [notification_object(n, svc.markup, ctx.now) for n in notes]
    return ApiResponse("notes", notes_payload(shaped, as_attributes=ctx.fmt.is_xml))


async def notification_seen(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.WRITE)
    _no_path_args(ctx)

    note_id = ctx.int_param("id", 0)
    note = await svc.notifications.get_owned(viewer.uid, note_id) if note_id else None
    if note is None:
        raise BadRequestError("Invalid argument")

    await svc.notifications.mark_seen(note)
    logger.info(
        f"Notification {note.id} marked seen", extra={"viewer_id": viewer.uid},
    )

    if note.otype == ITEM_OBJECT_TYPE:
        item = await svc.statuses.get_owned(viewer.uid, note.iid)
        if item is not None:
            status = await status_view(svc, item, viewer.uid)
            if status is not None:
                return ApiResponse("status", {"status": status})
    return ApiResponse("result", {"result": "success"})
