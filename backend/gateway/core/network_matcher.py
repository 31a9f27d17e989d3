"""Network Matcher — classifies a foreign profile URL into a federation protocol.

Invariants:
    - Rules are tried in a fixed priority order; plain "host/handle" is the
      catch-all LAST rule (reordering misclassifies ambiguous URL shapes)
    - The "/user/" rule is the only one that needs a live lookup; a failed or
      missing lookup falls through to the next rule, never raises
    - classify() never raises; get_addr_from_profile_url()/format_mention()
      raise ClassificationError for the placeholder tag

Design Decisions:
    - Lookup injected as a plain callable: the matcher stays pure and
      synchronous. The shell awaits the network fetch
      (infrastructure/network_lookup.py) for lookup_target() first and passes
      the answer in
    - "/channel/" (Hubzilla) maps to Diaspora: the gateway cannot speak to it directly
"""

import re
from dataclasses import dataclass
from typing import Callable

from gateway.core.errors import ClassificationError


# ─── Protocol tags ───────────────────────────────────────────────

DFRN = "dfrn"        # Friendica and other DFRN implementations
DIASPORA = "dspr"
DIASPORA2 = "dspc"   # Diaspora connector
STATUSNET = "stac"   # Statusnet connector
OSTATUS = "stat"     # GNU social, Pleroma, Mastodon
FEED = "feed"        # RSS/Atom feeds with no known post/notify protocol
MAIL = "mail"
XMPP = "xmpp"
FACEBOOK = "face"
LINKEDIN = "lnkd"
MYSPACE = "mysp"
GPLUS = "goog"
PUMPIO = "pump"
TWITTER = "twit"
APPNET = "apdn"
NEWS = "nntp"
ICALENDAR = "ical"
PNUT = "pnut"
ZOT = "zot!"
PHANTOM = "unkn"     # placeholder

NETWORK_NAMES: dict[str, str] = {
    DFRN: "DFRN",
    DIASPORA: "Diaspora",
    DIASPORA2: "Diaspora Connector",
    STATUSNET: "GNU Social Connector",
    OSTATUS: "OStatus",
    FEED: "RSS/Atom",
    MAIL: "Email",
    XMPP: "XMPP/IM",
    FACEBOOK: "Facebook",
    LINKEDIN: "LinkedIn",
    MYSPACE: "MySpace",
    GPLUS: "Google+",
    PUMPIO: "pump.io",
    TWITTER: "Twitter",
    APPNET: "App.net",
    NEWS: "NNTP",
    ICALENDAR: "iCalendar",
    PNUT: "pnut",
    ZOT: "Zot!",
    PHANTOM: "Unknown",
}

# (host, user) -> screen name, or None when the remote has no such user
ScreenNameLookup = Callable[[str, str], "str | None"]


@dataclass(frozen=True)
class Classification:
    tag: str
    host: str = ""
    handle: str = ""

    @property
    def is_known(self) -> bool:
        return self.tag != PHANTOM


_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

# Order is significant
_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"https?://(twitter\.com)/(.*)", _FLAGS), TWITTER),
    (re.compile(r"https?://(alpha\.app\.net)/(.*)", _FLAGS), APPNET),
    (re.compile(r"https?://(plus\.google\.com)/(.*)", _FLAGS), GPLUS),
    (re.compile(r"https?://(.*)/profile/(.*)", _FLAGS), DFRN),
    (re.compile(r"https?://(.*)/u/(.*)", _FLAGS), DIASPORA),
    (re.compile(r"https?://(.*)/channel/(.*)", _FLAGS), DIASPORA),
)
_STATUSNET_RULE = re.compile(r"https?://(.*)/user/(.*)", _FLAGS)
_PUMPIO_RULE = re.compile(r"https?://([.\w]+)/([.\w]+)$", _FLAGS)


def lookup_target(profile_url: str) -> tuple[str, str] | None:
    """(host, user) the "/user/" rule would ask about, None when no lookup is needed."""
    if any(pattern.search(profile_url) for pattern, _ in _RULES):
        return None
    match = _STATUSNET_RULE.search(profile_url)
    return (match.group(1), match.group(2)) if match else None


def classify(
    profile_url: str, lookup: ScreenNameLookup | None = None,
) -> Classification:
    """Guess the network of a profile URL. Pure except for the optional lookup."""
    for pattern, tag in _RULES:
        match = pattern.search(profile_url)
        if match:
            return Classification(tag, match.group(1), match.group(2))

    match = _STATUSNET_RULE.search(profile_url)
    if match and lookup is not None:
        screen_name = lookup(match.group(1), match.group(2))
        if screen_name:
            return Classification(STATUSNET, match.group(1), screen_name)

    match = _PUMPIO_RULE.search(profile_url)
    if match:
        return Classification(PUMPIO, match.group(1), match.group(2))

    return Classification(PHANTOM)


def get_addr_from_profile_url(
    profile_url: str, lookup: ScreenNameLookup | None = None,
) -> str:
    """handle@host for a profile URL. Raises ClassificationError when unknown."""
    result = classify(profile_url, lookup)
    if not result.is_known:
        raise ClassificationError(profile_url)
    return f"{result.handle}@{result.host}"


def format_mention(
    profile_url: str, display_name: str,
    lookup: ScreenNameLookup | None = None,
) -> str:
    """display_name(handle@host). Raises ClassificationError when unknown."""
    return f"{display_name}({get_addr_from_profile_url(profile_url, lookup)})"


def network_name(tag: str) -> str:
    """Human-readable label for a protocol tag."""
    return NETWORK_NAMES.get(tag, NETWORK_NAMES[PHANTOM])


def network_of(
    network: str | None, profile_url: str,
    lookup: ScreenNameLookup | None = None,
) -> str:
    """Stored network tag, or the classified one when storage has none."""
    if network:
        return network
    return classify(profile_url, lookup).tag
