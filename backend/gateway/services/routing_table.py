"""Routing Table — explicit mapping from legacy command path to Endpoint.

Invariants:
    - Every path -> handler mapping is visible here, no auto-discovery
    - Paths carry no "api/", version segment or format suffix
      (split_command strips those before lookup)
    - Only help/test and the statusnet/gnusocial config+version endpoints
      are reachable without a viewer

Design Decisions:
    - Explicit dict over decorators: adding an endpoint requires editing this
      table (ADR: ExMA no convention-over-config)
    - Write endpoints are POST-only; box readers accept any method like the
      clients that poll them
"""

from gateway.services import (
    handle_account as account,
    handle_direct_messages as dm,
    handle_favorites as fav,
    handle_notifications as notes,
    handle_relationships as rel,
    handle_users as users,
)
from gateway.services.dispatcher import ANY_METHOD, Endpoint

GET = "GET"
POST = "POST"


def build_routing_table() -> dict[str, Endpoint]:
    """All legacy endpoints. Built once at startup."""
    return {
        # Account and site
        "help/test": Endpoint(ANY_METHOD, False, account.help_test),
        "account/rate_limit_status": Endpoint(ANY_METHOD, True, account.rate_limit_status),
        "account/verify_credentials": Endpoint(GET, True, account.verify_credentials),
        "statusnet/config": Endpoint(ANY_METHOD, False, account.statusnet_config),
        "gnusocial/config": Endpoint(ANY_METHOD, False, account.statusnet_config),
        "statusnet/version": Endpoint(ANY_METHOD, False, account.statusnet_version),
        "gnusocial/version": Endpoint(ANY_METHOD, False, account.statusnet_version),
        "saved_searches/list": Endpoint(GET, True, account.saved_searches_list),
        "lists/list": Endpoint(GET, True, account.lists_list),

        # Relationships
        "followers/ids": Endpoint(GET, True, rel.followers_ids),
        "friends/ids": Endpoint(GET, True, rel.friends_ids),
        "followers/list": Endpoint(GET, True, rel.followers_list),
        "friends/list": Endpoint(GET, True, rel.friends_list),
        "statuses/followers": Endpoint(GET, True, rel.statuses_followers),
        "statuses/friends": Endpoint(GET, True, rel.statuses_friends),
        "friendships/incoming": Endpoint(GET, True, rel.friendships_incoming),
        "blocks/list": Endpoint(GET, True, rel.blocks_list),

        # Users
        "users/show": Endpoint(GET, True, users.users_show),
        "users/lookup": Endpoint(ANY_METHOD, True, users.users_lookup),
        "users/search": Endpoint(GET, True, users.users_search),

        # Favorites
        "favorites": Endpoint(GET, True, fav.favorites),
        "favorites/create": Endpoint(POST, True, fav.favorites_create),
        "favorites/destroy": Endpoint(POST, True, fav.favorites_destroy),

        # Direct messages
        "direct_messages": Endpoint(ANY_METHOD, True, dm.direct_messages_inbox),
        "direct_messages/sent": Endpoint(ANY_METHOD, True, dm.direct_messages_sentbox),
        "direct_messages/all": Endpoint(ANY_METHOD, True, dm.direct_messages_all),
        "direct_messages/conversation": Endpoint(
            ANY_METHOD, True, dm.direct_messages_conversation,
        ),
        "direct_messages/new": Endpoint(POST, True, dm.direct_messages_new),
        "direct_messages/destroy": Endpoint(ANY_METHOD, True, dm.direct_messages_destroy),

        # Notifications
        "friendica/notification": Endpoint(GET, True, notes.notification),
        "friendica/notification/seen": Endpoint(POST, True, notes.notification_seen),
    }
