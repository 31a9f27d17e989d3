"""Identity Rules — pure decisions behind viewer resolution.

Invariants:
    - Screen name ALWAYS wins over contact id when both are supplied
    - Neither supplied -> the caller's own uid
    - A contact can only stand for a local user when its URL lives under this
      instance's base URL (no relationship data exists for foreign viewers)

Design Decisions:
    - Lookup order as data (IdentityLookup) so the async shell performs IO and
      this module stays testable without a database
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from gateway.core.network_matcher import DFRN, DIASPORA, OSTATUS
from gateway.core.repository_protocols import ContactLike


class LookupKind(str, Enum):
    SELF = "self"
    SCREEN_NAME = "screen_name"
    CONTACT_ID = "contact_id"


@dataclass(frozen=True)
class IdentityLookup:
    kind: LookupKind
    screen_name: str | None = None
    contact_id: int | None = None


def choose_lookup(
    contact_id: int | None = None, screen_name: str | None = None,
) -> IdentityLookup:
    """Decide which identifier resolves the viewer."""
    if screen_name:
        return IdentityLookup(LookupKind.SCREEN_NAME, screen_name=screen_name)
    if contact_id:
        return IdentityLookup(LookupKind.CONTACT_ID, contact_id=contact_id)
    return IdentityLookup(LookupKind.SELF)


def normalise_link(url: str) -> str:
    """Scheme-insensitive, trailing-slash-insensitive form used for matching."""
    url = url.strip().rstrip("/")
    if url.startswith("https://"):
        return "http://" + url[len("https://"):]
    return url


def is_local_url(url: str | None, base_url: str) -> bool:
    """True when `url` lives under this instance's base URL."""
    if not url or not base_url:
        return False
    return normalise_link(url).startswith(normalise_link(base_url))


# Direct-message recipients: native protocols first
_NETWORK_PRIORITY: dict[str, int] = {DFRN: 0, DIASPORA: 1, OSTATUS: 2}


def best_by_network(contacts: Sequence[ContactLike]) -> ContactLike | None:
    """Pick the contact reachable over the best protocol (dfrn > dspr > stat > rest)."""
    if not contacts:
        return None
    return min(
        enumerate(contacts),
        key=lambda pair: (_NETWORK_PRIORITY.get(pair[1].network, 3), pair[0]),
    )[1]
