"""Viewer Provider — turns upstream auth headers into an explicit Viewer.

Invariants:
    - No header, malformed header or unknown uid -> None (anonymous request)
    - A blocked account yields a Viewer with allow_api=False (handlers answer
      403, the dispatcher still knows who called)
    - Credentials are never verified here; the upstream auth layer owns that

Design Decisions:
    - FastAPI dependency (get_viewer): the legacy route receives the caller
      already resolved and never reads auth headers itself
"""

import logging
from typing import Mapping

from fastapi import Depends, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.core.domain_types import Viewer, ViewerId
from gateway.infrastructure.database import get_db
from gateway.models.user import User
from gateway.schemas.viewer import ViewerHeaders

logger = logging.getLogger(__name__)

VIEWER_HEADER = "X-Gateway-Viewer"
SCOPES_HEADER = "X-Gateway-Scopes"


class ViewerProvider:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def from_headers(self, headers: Mapping[str, str]) -> Viewer | None:
        raw_uid = headers.get(VIEWER_HEADER)
        if not raw_uid:
            return None
        try:
            parsed = ViewerHeaders(uid=raw_uid, scopes=headers.get(SCOPES_HEADER))
        except ValidationError as e:
            logger.warning(f"Rejected viewer headers: {e.error_count()} error(s)")
            return None

        user = await self._db.get(User, parsed.uid)
        if user is None:
            logger.warning(
                "Viewer header names an unknown account",
                extra={"viewer_id": parsed.uid},
            )
            return None
        return Viewer(
            uid=ViewerId(user.uid),
            scopes=parsed.scopes,
            allow_api=not user.blocked,
        )


async def get_viewer(
    request: Request, db: AsyncSession = Depends(get_db),
) -> Viewer | None:
    """FastAPI dependency for the authenticated caller."""
    return await ViewerProvider(db).from_headers(request.headers)
