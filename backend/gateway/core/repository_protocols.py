"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Relationship queries ALWAYS exclude self, deleted, hidden and archived rows

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - *Like record protocols: handlers and shapers read ORM rows without
      importing the ORM (same trick as a structural SessionLike)
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from gateway.core.cursor_pagination import SelectionPlan
from gateway.core.domain_types import MailBox, Relation


# ─── Record contracts ────────────────────────────────────────────

class ContactLike(Protocol):
    """Relationship record (uid > 0) or public contact (uid == 0)."""
    id: int
    uid: int
    is_self: bool
    nick: str
    name: str
    url: str
    nurl: str
    addr: str
    network: str
    location: str
    about: str
    avatar: str
    rel: int
    blocked: bool
    pending: bool
    created_at: datetime


class UserLike(Protocol):
    uid: int
    nickname: str
    username: str
    created_at: datetime


class ProfileLike(Protocol):
    uid: int
    hide_friends: bool
    about: str
    locality: str


class ItemLike(Protocol):
    id: int
    uid: int
    contact_id: int
    author_id: int
    parent_id: int | None
    title: str
    body: str
    source: str
    plink: str
    starred: bool
    private: bool
    created_at: datetime


class MailLike(Protocol):
    id: int
    uid: int
    contact_id: int
    from_url: str
    from_name: str
    title: str
    body: str
    seen: bool
    uri: str
    parent_uri: str
    created_at: datetime


class NotificationLike(Protocol):
    id: int
    uid: int
    type: int
    name: str
    url: str
    photo: str
    msg: str
    link: str
    iid: int
    parent: int
    otype: str
    verb: str
    seen: bool
    created_at: datetime


class SavedSearchLike(Protocol):
    id: int
    uid: int
    term: str
    created_at: datetime


class MarkupRenderer(Protocol):
    """Markup-to-HTML/plain conversion used for post and message bodies."""
    def to_html(self, body: str) -> str: ...
    def to_plain(self, body: str) -> str: ...


# ─── Query values ────────────────────────────────────────────────

@dataclass(frozen=True)
class ContactFilter:
    """Relationship condition. self/deleted/hidden/archive are always excluded."""
    owner_uid: int
    relations: tuple[Relation, ...]
    pending: bool = False
    blocked: bool | None = None


@dataclass(frozen=True)
class MailQuery:
    """Direct-message box selection, newest first."""
    own_url: str
    box: MailBox
    since_id: int = 0
    max_id: int = 0
    contact_id: int | None = None
    screen_name: str | None = None
    parent_uri: str | None = None
    offset: int = 0
    limit: int = 20


@dataclass(frozen=True)
class NewMail:
    """Outgoing direct message as stored in the sender's mailbox."""
    uid: int
    contact_id: int
    from_url: str
    from_name: str
    from_photo: str
    title: str
    body: str
    uri: str
    reply_to: str = ""


# ─── Store contracts ─────────────────────────────────────────────

class ContactStore(Protocol):
    """Contract for contact reads — implemented by shell."""
    async def count(self, condition: ContactFilter) -> int: ...
    async def select_ids(
        self, condition: ContactFilter, plan: SelectionPlan,
    ) -> list[int]: ...
    async def get(self, contact_id: int) -> ContactLike | None: ...
    async def get_public(self, public_id: int) -> ContactLike | None: ...
    async def public_ids_for(self, local_ids: list[int]) -> dict[int, int]: ...
    async def public_for_nurl(self, nurl: str) -> ContactLike | None: ...
    async def owned_by_nurl(self, owner_uid: int, nurl: str) -> ContactLike | None: ...
    async def owned_by_nick(self, owner_uid: int, nick: str) -> list[ContactLike]: ...
    async def self_contact(self, uid: int) -> ContactLike | None: ...
    async def search_public(self, term: str) -> list[ContactLike]: ...


class UserStore(Protocol):
    """Contract for local accounts and their profiles — implemented by shell."""
    async def get(self, uid: int) -> UserLike | None: ...
    async def get_by_nickname(self, nickname: str) -> UserLike | None: ...
    async def get_profile(self, uid: int) -> ProfileLike | None: ...
    async def saved_searches(self, uid: int) -> list[SavedSearchLike]: ...


class StatusStore(Protocol):
    """Contract for posts — implemented by shell."""
    async def get_owned(self, uid: int, item_id: int) -> ItemLike | None: ...
    async def set_starred(self, item: ItemLike, starred: bool) -> ItemLike: ...
    async def list_starred(
        self, uid: int, since_id: int, max_id: int, offset: int, limit: int,
    ) -> list[ItemLike]: ...
    async def latest_by_author(self, uid: int, author_id: int) -> ItemLike | None: ...
    async def count_by_author(self, uid: int, author_id: int) -> int: ...
    async def count_starred(self, uid: int) -> int: ...


class MailStore(Protocol):
    """Contract for direct messages — implemented by shell."""
    async def select_box(self, uid: int, query: MailQuery) -> list[MailLike]: ...
    async def get_owned(
        self, uid: int, mail_id: int, parent_uri: str = "",
    ) -> MailLike | None: ...
    async def delete(self, mail: MailLike) -> bool: ...
    async def create(self, mail: NewMail) -> MailLike | None: ...


class NotificationStore(Protocol):
    """Contract for notifications — implemented by shell."""
    async def list_for(self, uid: int, limit: int) -> list[NotificationLike]: ...
    async def get_owned(self, uid: int, note_id: int) -> NotificationLike | None: ...
    async def mark_seen(self, note: NotificationLike) -> None: ...


class ScreenNameFetcher(Protocol):
    """Remote screen-name lookup for the matcher's "/user/" rule — implemented by shell."""
    async def __call__(self, host: str, user: str) -> str | None: ...
