"""Entity Shapes — pure mapping from storage records to legacy API objects.

Invariants:
    - Every object carrying an id also carries its `*_str` twin
    - A user's `network` is the stored tag, or the classified tag for the
      profile URL when storage has none; `location` falls back to the
      network's display name
    - Message sender/recipient objects never expose `uid` or `self`
    - Notification XML puts every field on the <note> element as attributes

Design Decisions:
    - Plain dicts out: the response formatter serializes mappings, and the same
      mapping must render identically in JSON and XML
    - Counts passed in (UserCounts): shaping never performs IO
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from gateway.core.network_matcher import ScreenNameLookup, network_name, network_of
from gateway.core.repository_protocols import (
    ContactLike, ItemLike, MailLike, MarkupRenderer, NotificationLike,
    SavedSearchLike,
)
from gateway.core.response_formatter import api_date


NOTE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class UserCounts:
    followers: int = 0
    friends: int = 0
    statuses: int = 0
    favourites: int = 0


def user_object(
    contact: ContactLike,
    public_id: int,
    *,
    owner_uid: int = 0,
    local_id: int = 0,
    is_self: bool = False,
    following: bool = False,
    blocking: bool = False,
    counts: UserCounts | None = None,
    lookup: ScreenNameLookup | None = None,
) -> dict:
    """Legacy user object for a contact as seen by `owner_uid`."""
    counts = counts or UserCounts()
    network = network_of(contact.network, contact.url, lookup)
    return {
        "id": public_id,
        "id_str": str(public_id),
        "name": contact.name,
        "screen_name": contact.nick or contact.name,
        "location": contact.location or network_name(network),
        "description": contact.about,
        "profile_image_url": contact.avatar,
        "profile_image_url_https": contact.avatar,
        "url": contact.url,
        "protected": False,
        "followers_count": counts.followers,
        "friends_count": counts.friends,
        "created_at": api_date(contact.created_at),
        "favourites_count": counts.favourites,
        "utc_offset": "0",
        "time_zone": "UTC",
        "geo_enabled": False,
        "verified": is_self,
        "statuses_count": counts.statuses,
        "lang": "",
        "following": following,
        "follow_request_sent": False,
        "statusnet_blocking": blocking,
        "notifications": False,
        "statusnet_profile_url": contact.url,
        "uid": owner_uid,
        "cid": local_id,
        "pid": public_id,
        "self": 1 if is_self else 0,
        "network": network,
    }


def public_user(user: dict) -> dict:
    """User object without the internal uid/self fields."""
    return {k: v for k, v in user.items() if k not in ("uid", "self")}


def status_object(
    item: ItemLike,
    author: dict,
    markup: MarkupRenderer,
    reply_screen_name: str | None = None,
) -> dict:
    """Legacy status object for a post, with its author's user object."""
    reply_to = item.parent_id if item.parent_id and item.parent_id != item.id else None
    text = markup.to_plain(item.body)
    if item.title:
        text = f"{item.title}\n{text}"
    return {
        "text": text,
        "truncated": False,
        "created_at": api_date(item.created_at),
        "in_reply_to_status_id": reply_to,
        "in_reply_to_status_id_str": str(reply_to) if reply_to else None,
        "source": item.source or "api",
        "id": item.id,
        "id_str": str(item.id),
        "in_reply_to_user_id": None,
        "in_reply_to_user_id_str": None,
        "in_reply_to_screen_name": reply_screen_name,
        "geo": None,
        "favorited": bool(item.starred),
        "user": author,
        "friendica_private": bool(item.private),
        "statusnet_html": markup.to_html(item.body),
        "statusnet_conversation_id": item.parent_id or item.id,
        "external_url": item.plink,
    }


def message_object(
    mail: MailLike,
    recipient: dict,
    sender: dict,
    markup: MarkupRenderer,
    get_text: str | None = None,
    get_user_objects: bool = True,
) -> dict:
    """Legacy direct-message object.

    Without `get_text` the text is "title\\nplain body" and the title is empty;
    `get_text=html|plain` returns the title separately and the body alone.
    """
    message = {
        "id": mail.id,
        "sender_id": sender["id"],
        "text": "",
        "recipient_id": recipient["id"],
        "created_at": api_date(mail.created_at),
        "sender_screen_name": sender["screen_name"],
        "recipient_screen_name": recipient["screen_name"],
        "sender": public_user(sender),
        "recipient": public_user(recipient),
        "title": "",
        "friendica_seen": 1 if mail.seen else 0,
        "friendica_parent_uri": mail.parent_uri or "",
    }
    if get_text:
        message["title"] = mail.title
        if get_text == "html":
            message["text"] = markup.to_html(mail.body)
        elif get_text == "plain":
            message["text"] = markup.to_plain(mail.body)
    else:
        message["text"] = f"{mail.title}\n{markup.to_plain(mail.body)}"

    if not get_user_objects:
        del message["sender"]
        del message["recipient"]
    return message


def relative_date(then: datetime, now: datetime) -> str:
    """'3 hours ago' style age of a timestamp."""
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return "less than a minute ago"
    for unit, size in (
        ("year", 31_536_000), ("month", 2_592_000), ("week", 604_800),
        ("day", 86_400), ("hour", 3_600), ("minute", 60),
    ):
        if seconds >= size:
            amount = seconds // size
            return f"{amount} {unit}{'s' if amount != 1 else ''} ago"
    return "less than a minute ago"


def notification_object(
    note: NotificationLike, markup: MarkupRenderer, now: datetime,
) -> dict:
    created = note.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return {
        "id": note.id,
        "hash": "",
        "type": note.type,
        "name": note.name,
        "url": note.url,
        "photo": note.photo,
        "date": created.strftime(NOTE_DATE_FORMAT),
        "msg": note.msg,
        "uid": note.uid,
        "link": note.link,
        "iid": note.iid,
        "parent": note.parent,
        "seen": 1 if note.seen else 0,
        "verb": note.verb,
        "otype": note.otype,
        "name_cache": note.name,
        "msg_cache": note.msg,
        "timestamp": int(created.timestamp()),
        "date_rel": relative_date(created, now),
        "msg_html": markup.to_html(note.msg),
        "msg_plain": markup.to_plain(note.msg),
    }


def notes_payload(notes: list[dict], as_attributes: bool) -> dict:
    """{"note": [...]} ; `false` when empty, attribute-only elements for XML."""
    if not notes:
        return {"note": False}
    if as_attributes:
        return {"note": [{"@attributes": note} for note in notes]}
    return {"note": notes}


def saved_search_object(search: SavedSearchLike) -> dict:
    return {
        "created_at": api_date(search.created_at),
        "id": search.id,
        "id_str": str(search.id),
        "name": search.term,
        "position": None,
        "query": search.term,
    }


def verbose_answer(result: str, message: str) -> dict:
    """friendica_verbose answer body."""
    return {"result": {"result": result, "message": message}}
