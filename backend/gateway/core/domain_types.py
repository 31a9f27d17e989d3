"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ViewerId is a local account uid; LocalContactId is scoped to one owner;
      PublicContactId is the federation-wide identity (owner uid 0)
    - Relation values match the storage `rel` column (0-3)
    - ResponseFormat values are the legacy path suffixes

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ViewerId = NewType("ViewerId", int)
LocalContactId = NewType("LocalContactId", int)
PublicContactId = NewType("PublicContactId", int)

PUBLIC_OWNER: int = 0   # uid of public (global identity) contacts


# ─── Enums ───────────────────────────────────────────────────────

class Relation(IntEnum):
    """Relationship kind from the owner's point of view."""
    NOTHING = 0
    FOLLOWER = 1    # they follow the owner
    SHARING = 2     # the owner follows them
    FRIEND = 3      # mutual


FOLLOWER_RELATIONS: tuple[Relation, ...] = (Relation.FOLLOWER, Relation.FRIEND)
FRIEND_RELATIONS: tuple[Relation, ...] = (Relation.SHARING, Relation.FRIEND)


class ResponseFormat(str, Enum):
    """Output formats, selected by path suffix."""
    JSON = "json"
    XML = "xml"
    RSS = "rss"
    ATOM = "atom"

    @property
    def is_xml(self) -> bool:
        return self is not ResponseFormat.JSON


class Scope(str, Enum):
    """API scopes granted to a session."""
    READ = "read"
    WRITE = "write"


class MailBox(str, Enum):
    """Direct message box selectors."""
    INBOX = "inbox"
    SENTBOX = "sentbox"
    ALL = "all"
    CONVERSATION = "conversation"


# ─── Viewer ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Viewer:
    """The authenticated caller, threaded explicitly through every call."""
    uid: ViewerId
    scopes: frozenset[Scope] = frozenset({Scope.READ, Scope.WRITE})
    is_local: bool = True
    allow_api: bool = True

    def has_scope(self, scope: Scope) -> bool:
        return scope in self.scopes
