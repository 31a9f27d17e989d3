"""Gateway Services — the explicit collaborator bundle every handler receives.

Invariants:
    - Built once per request around that request's AsyncSession
    - Handlers reach storage, settings, quota and markup ONLY through this bundle

Design Decisions:
    - Dataclass bundle over a DI container: every dependency visible in one place
      (ADR: ExMA no convention-over-config); tests build it with fakes directly
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from gateway.config import Settings
from gateway.core.markup import BBCodeRenderer
from gateway.core.repository_protocols import (
    ContactStore, MailStore, MarkupRenderer, NotificationStore,
    ScreenNameFetcher, StatusStore, UserStore,
)
from gateway.infrastructure.contact_store import SqlContactStore
from gateway.infrastructure.content_stores import (
    SqlMailStore, SqlNotificationStore, SqlStatusStore, SqlUserStore,
)
from gateway.infrastructure.rate_limit import RateLimiter


@dataclass
class GatewayServices:
    contacts: ContactStore
    users: UserStore
    statuses: StatusStore
    mails: MailStore
    notifications: NotificationStore
    settings: Settings
    rate_limiter: RateLimiter
    markup: MarkupRenderer = field(default_factory=BBCodeRenderer)
    lookup: ScreenNameFetcher | None = None


def build_services(
    db: AsyncSession,
    settings: Settings,
    rate_limiter: RateLimiter,
    lookup: ScreenNameFetcher | None = None,
) -> GatewayServices:
    """Wire the SQLAlchemy stores for one request."""
    return GatewayServices(
        contacts=SqlContactStore(db),
        users=SqlUserStore(db),
        statuses=SqlStatusStore(db),
        mails=SqlMailStore(db),
        notifications=SqlNotificationStore(db),
        settings=settings,
        rate_limiter=rate_limiter,
        lookup=lookup,
    )
