"""User Handlers — users/show, users/lookup, users/search."""

from gateway.core.domain_types import Scope
from gateway.core.entity_shapes import public_user
from gateway.core.errors import BadRequestError, NotFoundError
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.identity_resolver import resolve_contact
from gateway.services.user_views import user_view, user_view_by_public_id


def _id_list(raw: str | None) -> list[int]:
    ids = []
    for part in (raw or "").split(","):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return ids


async def users_show(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    user_id = ctx.path_id() or ctx.int_param("user_id")
    public = await resolve_contact(
        svc, viewer, user_id=user_id, screen_name=ctx.param("screen_name"),
    )
    user = public_user(await user_view(svc, public, viewer.uid))
    return ApiResponse("user", {"user": user})


async def users_lookup(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    users = []
    for public_id in _id_list(ctx.param("user_id")):
        user = await user_view_by_public_id(svc, public_id, viewer.uid)
        if user is not None:
            users.append(public_user(user))
    if not users:
        raise NotFoundError()
    return ApiResponse("users", {"users": users})


async def users_search(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    term = ctx.param("q")
    if not term:
        raise BadRequestError("No user found.")

    users = []
    for public in await svc.contacts.search_public(term.strip()):
        users.append(public_user(await user_view(svc, public, viewer.uid)))
    return ApiResponse("users", {"users": users})
