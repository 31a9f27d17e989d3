"""API Dispatcher — resolves a legacy command path and runs its handler.

Invariants:
    - Checks run in a fixed order: route -> method -> auth -> quota -> handler
    - Unknown path -> 404 envelope with an empty `request`
    - A handler returning a falsy result -> 500 "Internal Server Error"
    - Every GatewayError becomes the legacy envelope with its status line;
      any other exception is logged and answered with a bare 500 envelope
    - The quota hit is recorded after the handler ran, so a fresh viewer's
      rate_limit_status still reports the full quota

Design Decisions:
    - Routing table injected (built once at startup): the dispatcher holds no
      global registry and tests hand it a two-entry table
    - Longest registered prefix on a segment boundary wins; the leftover
      segments become RequestContext.path_args (favorites/create/12)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable

from gateway.core.domain_types import ResponseFormat, Viewer
from gateway.core.errors import (
    GatewayError, InternalServerError, MethodNotAllowedError, NotFoundError,
    TooManyRequestsError, UnauthorizedError,
)
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.core.response_formatter import parse_format, render, render_error
from gateway.services.gateway_services import GatewayServices

logger = logging.getLogger(__name__)

ANY_METHOD = "*"

Handler = Callable[[GatewayServices, RequestContext], Awaitable["ApiResponse | None"]]

_VERSION_SEGMENTS = ("1.1", "1")


@dataclass(frozen=True)
class Endpoint:
    method: str
    requires_auth: bool
    handler: Handler


@dataclass(frozen=True)
class DispatchResult:
    status_code: int
    body: str
    content_type: str


def split_command(command: str) -> tuple[str, ResponseFormat]:
    """'api/1.1/users/show.xml' -> ('users/show', XML)."""
    segments = [s for s in command.strip().strip("/").split("/") if s]
    if segments and segments[0] == "api":
        segments = segments[1:]
    if segments and segments[0] in _VERSION_SEGMENTS:
        segments = segments[1:]

    fmt = ResponseFormat.JSON
    if segments:
        stem, dot, suffix = segments[-1].rpartition(".")
        if dot and suffix.lower() in {f.value for f in ResponseFormat}:
            fmt = parse_format(suffix)
            segments[-1] = stem
    return "/".join(s for s in segments if s), fmt


class ApiDispatcher:
    """Routes command path -> Endpoint. Explicit table, no auto-discovery."""

    def __init__(self, routes: dict[str, Endpoint]):
        self._routes = routes

    def resolve(self, path: str) -> tuple[Endpoint, tuple[str, ...]] | None:
        """Exact match first, then the longest registered segment prefix."""
        endpoint = self._routes.get(path)
        if endpoint is not None:
            return endpoint, ()
        parts = path.split("/")
        for cut in range(len(parts) - 1, 0, -1):
            endpoint = self._routes.get("/".join(parts[:cut]))
            if endpoint is not None:
                return endpoint, tuple(parts[cut:])
        return None

    async def dispatch(
        self,
        svc: GatewayServices,
        method: str,
        command: str,
        params: dict[str, str],
        viewer: Viewer | None,
        now: datetime | None = None,
    ) -> DispatchResult:
        now = now or datetime.now(timezone.utc)
        path, fmt = split_command(command)
        request = command.strip("/")
        callback = params.get("callback") or None

        resolved = self.resolve(path)
        if resolved is None:
            logger.info(
                f"Unknown API path: {path}",
                extra={"api_path": path, "status_code": 404},
            )
            return self._error(NotFoundError(), fmt, "", callback)
        endpoint, path_args = resolved

        try:
            if endpoint.method != ANY_METHOD and method.upper() != endpoint.method:
                raise MethodNotAllowedError()
            if endpoint.requires_auth and viewer is None:
                raise UnauthorizedError("This API requires login")
            if viewer is not None and svc.rate_limiter.is_exhausted(viewer.uid, now):
                raise TooManyRequestsError()

            ctx = RequestContext(
                method=method.upper(),
                command=path,
                fmt=fmt,
                params=params,
                path_args=path_args,
                viewer=viewer,
                now=now,
            )
            try:
                result = await endpoint.handler(svc, ctx)
            finally:
                if viewer is not None:
                    svc.rate_limiter.record(viewer.uid, now)

            if not result:
                raise InternalServerError()
            rendered = render(fmt, result.root_element, result.data, callback)
        except GatewayError as e:
            logger.log(
                logging.ERROR if e.http_status >= 500 else logging.INFO,
                f"API error on {path}: {e.message}",
                extra={
                    "api_path": path, "error_code": e.code,
                    "status_code": e.http_status,
                    "viewer_id": viewer.uid if viewer else None,
                },
            )
            return self._error(e, fmt, request, callback)
        except Exception as e:
            logger.error(
                f"Unhandled exception on {path}: {e}",
                exc_info=True,
                extra={"api_path": path, "viewer_id": viewer.uid if viewer else None},
            )
            return self._error(InternalServerError(), fmt, request, callback)

        logger.info(
            f"API {ctx.method} {path}",
            extra={
                "api_path": path, "status_code": 200,
                "viewer_id": viewer.uid if viewer else None,
            },
        )
        return DispatchResult(200, rendered.body, rendered.content_type)

    def _error(
        self, error: GatewayError, fmt: ResponseFormat, request: str,
        callback: str | None,
    ) -> DispatchResult:
        rendered = render_error(fmt, error.to_envelope(request), callback)
        return DispatchResult(error.http_status, rendered.body, rendered.content_type)
