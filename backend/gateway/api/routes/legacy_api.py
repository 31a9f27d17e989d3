"""Legacy API Route — single catch-all entry for every /api/<command> path.

Invariants:
    - The route never decides anything: it collects method, path, params and
      viewer, then hands them to the ApiDispatcher built at startup
    - params = query string merged with the form body; body wins on conflicts
    - The response body and content type come verbatim from the dispatcher

Design Decisions:
    - One catch-all over one FastAPI route per endpoint: the legacy surface is
      path-suffix formatted (users/show.xml) and prefix-matched
      (favorites/create/12), which FastAPI path params cannot express
    - Registered AFTER every other /api router (see main.py)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.config import get_settings
from gateway.core.domain_types import Viewer
from gateway.infrastructure.database import get_db
from gateway.infrastructure.session_auth import get_viewer
from gateway.services.gateway_services import build_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["legacy-api"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _collect_params(request: Request) -> dict[str, str]:
    params = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        params.update(
            (key, value) for key, value in form.items() if isinstance(value, str)
        )
    return params


@router.api_route("/{command:path}", methods=["GET", "POST", "PUT", "DELETE"])
async def legacy_api(
    command: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    viewer: Viewer | None = Depends(get_viewer),
):
    """Dispatch a legacy command and return its rendered body."""
    state = request.app.state
    svc = build_services(
        db, get_settings(), state.rate_limiter, state.network_lookup,
    )
    result = await state.dispatcher.dispatch(
        svc,
        request.method,
        request.url.path.lstrip("/"),
        await _collect_params(request),
        viewer,
    )
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.content_type,
    )
