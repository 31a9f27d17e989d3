"""Favorite Handlers — starred-post timeline and star/unstar.

Invariants:
    - favorites lists only the viewer's own starred posts, newest first;
      asking for another account's favorites yields an empty list
    - create/destroy take the post id from the path (favorites/create/12)
      or the `id` parameter; an unknown post is BadRequest("Invalid item.")
"""

from gateway.core.domain_types import Scope
from gateway.core.errors import BadRequestError
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.identity_resolver import resolve_viewer
from gateway.services.user_views import status_view


async def favorites(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    uid = await resolve_viewer(
        svc, viewer,
        contact_id=ctx.int_param("user_id"),
        screen_name=ctx.param("screen_name"),
    )

    statuses = []
    if uid == viewer.uid:
        count = ctx.int_param("count", svc.settings.default_page_count)
        page = ctx.int_param("page", 1)
        items = await svc.statuses.list_starred(
            viewer.uid,
            since_id=ctx.int_param("since_id", 0),
            max_id=ctx.int_param("max_id", 0),
            offset=max(0, (page - 1) * count),
            limit=max(0, count),
        )
        for item in items:
            status = await status_view(svc, item, viewer.uid)
            if status is not None:
                statuses.append(status)
    return ApiResponse("statuses", {"status": statuses})


async def _set_starred(
    svc: GatewayServices, ctx: RequestContext, starred: bool,
) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.WRITE)
    item_id = ctx.path_id() or ctx.int_param("id", 0)
    item = await svc.statuses.get_owned(viewer.uid, item_id) if item_id else None
    if item is None:
        raise BadRequestError("Invalid item.")

    item = await svc.statuses.set_starred(item, starred)
    status = await status_view(svc, item, viewer.uid)
    if status is None:
        raise BadRequestError("Invalid item.")
    return ApiResponse("status", {"status": status})


async def favorites_create(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _set_starred(svc, ctx, starred=True)


async def favorites_destroy(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _set_starred(svc, ctx, starred=False)
