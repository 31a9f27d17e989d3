"""Account Handlers — help/test, rate limit, credentials, site config, searches, lists.

Invariants:
    - help/test and the statusnet/gnusocial config+version endpoints need no viewer
    - verify_credentials never exposes uid/self/verified
    - rate_limit_status reads the quota without consuming it (the dispatcher
      records the hit after the handler returns)
"""

from gateway.core.domain_types import Scope
from gateway.core.entity_shapes import public_user, saved_search_object
from gateway.core.rate_quota import status_payload
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.user_views import own_public_contact, self_view, status_view


def _flag(value: bool) -> str:
    return "true" if value else "false"


async def help_test(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return ApiResponse("ok", {"ok": "ok"})


async def rate_limit_status(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    used = svc.rate_limiter.used(viewer.uid, ctx.now)
    payload = status_payload(
        ctx.now, svc.rate_limiter.hourly_limit, used, xml=ctx.fmt.is_xml,
    )
    return ApiResponse("hash", {"hash": payload})


async def verify_credentials(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    user = public_user(await self_view(svc, viewer))
    user.pop("verified", None)

    if not ctx.bool_param("skip_status"):
        own = await own_public_contact(svc, viewer)
        latest = await svc.statuses.latest_by_author(viewer.uid, own.id)
        if latest is not None:
            status = await status_view(svc, latest, viewer.uid)
            if status is not None:
                status.pop("user", None)
                user["status"] = status
    return ApiResponse("user", {"user": user})


async def statusnet_config(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    settings = svc.settings
    site = {
        "name": settings.site_name,
        "server": settings.site_hostname,
        "theme": "default",
        "path": "",
        "logo": settings.base_url + settings.logo_path,
        "fancy": True,
        "language": "en",
        "email": settings.admin_email,
        "broughtby": "",
        "broughtbyurl": "",
        "timezone": "UTC",
        "closed": _flag(settings.register_closed),
        "inviteonly": False,
        "private": _flag(settings.block_public),
        "textlimit": str(settings.text_limit),
        "sslserver": settings.site_hostname if settings.have_ssl else None,
        "ssl": _flag(settings.have_ssl),
        "shorturllength": "30",
        "friendica": {
            "FRIENDICA_PLATFORM": settings.platform_name,
            "FRIENDICA_VERSION": settings.platform_version,
            "DFRN_PROTOCOL_VERSION": "2.23",
        },
    }
    return ApiResponse("config", {"config": {"site": site}})


async def statusnet_version(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return ApiResponse("version", {"version": svc.settings.api_version})


async def saved_searches_list(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    searches = await svc.users.saved_searches(viewer.uid)
    return ApiResponse("terms", {"terms": [saved_search_object(s) for s in searches]})


async def lists_list(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    # list membership is not exposed through this surface
    ctx.require_viewer(Scope.READ)
    return ApiResponse("lists", {"lists_list": []})
