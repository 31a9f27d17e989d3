"""Response Formatter — serializes handler results into JSON, XML, RSS or Atom.

Invariants:
    - JSON emits the LAST value of the top-level mapping ({"ok": "ok"} -> "ok")
    - XML/RSS/Atom share the same document; RSS and Atom success bodies get the
      encoding preamble line in front of the bare declaration
    - Error envelopes keep the {"status": ...} wrapper in JSON and are never
      prefixed with the RSS/Atom preamble
    - Same logical data in every format; only structure/naming differs

Design Decisions:
    - Compact JSON separators: legacy clients compare bodies byte-for-byte
    - Rendered carries body + content type so the HTTP layer never guesses
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from gateway.core.domain_types import ResponseFormat
from gateway.core.xml_document import create_xml


CONTENT_TYPES: dict[ResponseFormat, str] = {
    ResponseFormat.JSON: "application/json",
    ResponseFormat.XML: "text/xml",
    ResponseFormat.RSS: "application/rss+xml",
    ResponseFormat.ATOM: "application/atom+xml",
}

FEED_PREAMBLE = '<?xml version="1.0" encoding="UTF-8"?>\n'

LEGACY_DATE_FORMAT = "%a %b %d %H:%M:%S +0000 %Y"


@dataclass(frozen=True)
class Rendered:
    body: str
    content_type: str


def parse_format(suffix: str | None) -> ResponseFormat:
    """Format from a path suffix; unknown or missing suffix means JSON."""
    try:
        return ResponseFormat((suffix or "json").lower())
    except ValueError:
        return ResponseFormat.JSON


def encode_json(value: Any, callback: str | None = None) -> str:
    body = json.dumps(value, separators=(",", ":"))
    if callback:
        return f"{callback}({body})"
    return body


def render(
    fmt: ResponseFormat, root_element: str, payload: dict,
    callback: str | None = None,
) -> Rendered:
    """Render a successful handler result."""
    content_type = CONTENT_TYPES[fmt]
    if not fmt.is_xml:
        value = list(payload.values())[-1] if payload else payload
        return Rendered(encode_json(value, callback), content_type)

    body = create_xml(payload, root_element)
    if fmt in (ResponseFormat.RSS, ResponseFormat.ATOM):
        body = FEED_PREAMBLE + body
    return Rendered(body, content_type)


def render_error(
    fmt: ResponseFormat, envelope: dict, callback: str | None = None,
) -> Rendered:
    """Render an error envelope ({"status": {error, code, request}})."""
    content_type = CONTENT_TYPES[fmt]
    if fmt.is_xml:
        return Rendered(create_xml(envelope, "status"), content_type)
    return Rendered(encode_json(envelope, callback), content_type)


def api_date(value: datetime | str | None) -> str:
    """Legacy timestamp: 'Wed Oct 10 00:00:00 +0000 1990' (always UTC)."""
    if value is None:
        value = datetime.now(timezone.utc)
    elif isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(LEGACY_DATE_FORMAT)
