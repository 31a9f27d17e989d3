"""Relationship Handlers — follower/friend ids and lists, incoming requests, blocks.

Invariants:
    - The listed account comes from resolve_viewer(user_id, screen_name)
    - followers = rel in (FOLLOWER, FRIEND); friends = rel in (SHARING, FRIEND)
    - incoming = pending followers; blocks = blocked contacts of any relation
    - statuses/* and blocks/incoming keep their legacy bare-list payloads
      ({"user": [...]}, {"id": [...]})
"""

from gateway.core.domain_types import (
    FOLLOWER_RELATIONS, FRIEND_RELATIONS, Relation, Scope,
)
from gateway.core.repository_protocols import ContactFilter
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.contact_pages import list_users, page, paging_params
from gateway.services.gateway_services import GatewayServices
from gateway.services.identity_resolver import resolve_viewer


async def _listed_uid(svc: GatewayServices, ctx: RequestContext) -> int:
    viewer = ctx.require_viewer(Scope.READ)
    return await resolve_viewer(
        svc, viewer,
        contact_id=ctx.int_param("user_id"),
        screen_name=ctx.param("screen_name"),
    )


async def _ids(
    svc: GatewayServices, ctx: RequestContext, relations: tuple[Relation, ...],
) -> ApiResponse:
    uid = await _listed_uid(svc, ctx)
    cursor, count = paging_params(svc, ctx)
    result = await page(
        svc, ContactFilter(uid, relations), ctx.viewer, cursor, count,
        stringify_ids=ctx.bool_param("stringify_ids"),
    )
    return ApiResponse("ids", {"ids": result.to_wire()})


async def _users(
    svc: GatewayServices, ctx: RequestContext, condition_for,
) -> dict:
    uid = await _listed_uid(svc, ctx)
    cursor, count = paging_params(svc, ctx)
    return await list_users(svc, condition_for(uid), ctx.viewer, cursor, count)


async def followers_ids(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _ids(svc, ctx, FOLLOWER_RELATIONS)


async def friends_ids(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _ids(svc, ctx, FRIEND_RELATIONS)


async def followers_list(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    result = await _users(svc, ctx, lambda uid: ContactFilter(uid, FOLLOWER_RELATIONS))
    return ApiResponse("users", {"users": result})


async def friends_list(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    result = await _users(svc, ctx, lambda uid: ContactFilter(uid, FRIEND_RELATIONS))
    return ApiResponse("users", {"users": result})


async def statuses_followers(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    result = await _users(svc, ctx, lambda uid: ContactFilter(uid, FOLLOWER_RELATIONS))
    return ApiResponse("users", {"user": result["users"]})


async def statuses_friends(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    result = await _users(svc, ctx, lambda uid: ContactFilter(uid, FRIEND_RELATIONS))
    return ApiResponse("users", {"user": result["users"]})


async def friendships_incoming(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    uid = await _listed_uid(svc, ctx)
    cursor, count = paging_params(svc, ctx)
    result = await page(
        svc, ContactFilter(uid, (Relation.FOLLOWER,), pending=True),
        ctx.viewer, cursor, count,
    )
    return ApiResponse("ids", {"id": result.ids})


async def blocks_list(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    result = await _users(
        svc, ctx, lambda uid: ContactFilter(uid, tuple(Relation), blocked=True),
    )
    return ApiResponse("users", {"user": result["users"]})
