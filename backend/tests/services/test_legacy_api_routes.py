"""Legacy API routes — end-to-end through FastAPI, the dispatcher and SQLite.

Tests:
    - help/test, statusnet config/version and the envelope for unknown paths
    - 401 / 403 / 405 / 429 as seen by an HTTP client
    - Follower/friend ids and lists, incoming requests and blocks
    - Form bodies merge with the query string
"""

import json
from datetime import datetime, timezone

import pytest

from tests.services.viewer_headers import as_viewer


# ─── Unauthenticated surface ─────────────────────────────────────

async def test_help_test_json(client):
    response = await client.get("/api/help/test.json")
    assert response.status_code == 200
    assert response.text == '"ok"'
    assert response.headers["content-type"].startswith("application/json")


async def test_help_test_xml(client):
    response = await client.get("/api/help/test.xml")
    assert response.status_code == 200
    assert response.text == '<?xml version="1.0"?>\n<ok>ok</ok>\n'
    assert response.headers["content-type"].startswith("text/xml")


async def test_help_test_accepts_post(client):
    response = await client.post("/api/help/test")
    assert response.status_code == 200


async def test_unknown_path_envelope(client):
    response = await client.get("/api/statuses/nowhere.json")
    assert response.status_code == 404
    assert response.json() == {
        "status": {"error": "Not Found", "code": "404 Not Found", "request": ""},
    }


async def test_version_prefix_is_ignored(client):
    response = await client.get("/api/1.1/help/test.json")
    assert response.text == '"ok"'


async def test_statusnet_version(client):
    for path in ("/api/statusnet/version.json", "/api/gnusocial/version.json"):
        response = await client.get(path)
        assert response.json() == "0.9.7"


async def test_statusnet_config(client):
    response = await client.get("/api/statusnet/config.json")
    site = response.json()["site"]
    assert site["server"] == "localhost"
    assert site["closed"] == "false"
    assert site["friendica"]["FRIENDICA_PLATFORM"] == "Friendica"


async def test_health(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


# ─── Access control ──────────────────────────────────────────────

async def test_login_required(client, graph):
    response = await client.get("/api/followers/ids.json")
    assert response.status_code == 401
    body = response.json()["status"]
    assert body["error"] == "This API requires login"
    assert body["request"] == "api/followers/ids.json"


async def test_unknown_viewer_is_anonymous(client, graph):
    response = await client.get("/api/followers/ids.json", headers=as_viewer(77))
    assert response.status_code == 401


async def test_wrong_method(client, graph):
    response = await client.get("/api/favorites/create.json", headers=as_viewer(1))
    assert response.status_code == 405
    assert response.json()["status"]["code"] == "405 Method Not Allowed"


async def test_blocked_account_is_forbidden(client, graph):
    response = await client.get("/api/followers/ids.json", headers=as_viewer(4))
    assert response.status_code == 403


async def test_read_only_session_cannot_write(client, content):
    response = await client.post(
        "/api/favorites/create.json",
        data={"id": str(content.plain.id)},
        headers=as_viewer(1, scopes="read"),
    )
    assert response.status_code == 403
    assert response.json()["status"]["error"] == "Missing write scope"


async def test_rate_limit_status_and_exhaustion(client, graph, rate_limiter):
    headers = as_viewer(1)
    first = await client.get("/api/account/rate_limit_status.json", headers=headers)
    assert first.json()["remaining_hits"] == 150
    assert first.json()["hourly_limit"] == 150

    second = await client.get("/api/account/rate_limit_status.json", headers=headers)
    assert second.json()["remaining_hits"] == 149

    for _ in range(148):
        rate_limiter.record(1, datetime.now(timezone.utc))
    response = await client.get("/api/help/test.json", headers=headers)
    assert response.status_code == 429


async def test_rate_limit_status_xml_key(client, graph):
    response = await client.get("/api/account/rate_limit_status.xml", headers=as_viewer(1))
    assert "<resettime_in_seconds>" in response.text


# ─── Relationships ───────────────────────────────────────────────

async def test_followers_ids(client, graph):
    response = await client.get("/api/followers/ids.json", headers=as_viewer(1))
    assert response.status_code == 200
    assert response.json() == {
        "ids": [graph.bob.public.id, graph.dave.id, graph.carol.public.id],
        "next_cursor": 0,
        "next_cursor_str": "0",
        "previous_cursor": 0,
        "previous_cursor_str": "0",
        "total_count": 3,
    }


async def test_friends_ids_stringified(client, graph):
    response = await client.get(
        "/api/friends/ids.json?stringify_ids=true", headers=as_viewer(1),
    )
    assert response.json()["ids"] == [
        str(graph.bob.public.id), str(graph.erin.id), str(graph.carol.public.id),
    ]


async def test_ids_paginate_with_count(client, graph):
    headers = as_viewer(1)
    first = (await client.get("/api/followers/ids.json?count=2", headers=headers)).json()
    assert first["ids"] == [graph.bob.public.id, graph.dave.id]
    assert first["next_cursor"] == graph.local.dave.id

    second = (await client.get(
        f"/api/followers/ids.json?count=2&cursor={first['next_cursor']}", headers=headers,
    )).json()
    assert second["ids"] == [graph.carol.public.id]
    assert second["next_cursor"] == 0
    assert second["previous_cursor"] == -graph.local.carol.id


async def test_ids_for_other_account_by_screen_name(client, graph):
    response = await client.get(
        "/api/followers/ids.json?screen_name=bob", headers=as_viewer(1),
    )
    assert response.json()["ids"] == [graph.alice.public.id]


async def test_hidden_friends_are_empty(client, graph):
    response = await client.get(
        "/api/friends/ids.json?screen_name=carol", headers=as_viewer(1),
    )
    assert response.json()["ids"] == []
    assert response.json()["total_count"] == 0


async def test_foreign_user_id_is_not_found(client, graph):
    response = await client.get(
        f"/api/followers/ids.json?user_id={graph.local.dave.id}", headers=as_viewer(1),
    )
    assert response.status_code == 404
    assert response.json()["status"]["error"] == "Contact not found"


@pytest.mark.parametrize("raw", ["abc", "undefined"])
async def test_invalid_cursor(client, graph, raw):
    response = await client.get(
        f"/api/followers/ids.json?cursor={raw}", headers=as_viewer(1),
    )
    assert response.status_code == 400
    assert response.json()["status"]["error"] == "Invalid cursor or count"


async def test_followers_list(client, graph):
    response = await client.get("/api/followers/list.json", headers=as_viewer(1))
    body = response.json()
    assert [u["screen_name"] for u in body["users"]] == ["bob", "dave", "carol"]
    assert body["users"][0]["following"] is True
    assert body["total_count"] == 3


async def test_friends_list_xml(client, graph):
    response = await client.get("/api/friends/list.xml", headers=as_viewer(1))
    assert response.status_code == 200
    assert response.text.count("<screen_name>") == 3
    assert "<next_cursor>0</next_cursor>" in response.text


async def test_statuses_friends_bare_list(client, graph):
    response = await client.get("/api/statuses/friends.json", headers=as_viewer(1))
    assert [u["screen_name"] for u in response.json()] == ["bob", "erin", "carol"]


async def test_statuses_followers_bare_list(client, graph):
    response = await client.get("/api/statuses/followers.json", headers=as_viewer(2))
    assert [u["screen_name"] for u in response.json()] == ["alice"]


async def test_friendships_incoming(client, graph):
    response = await client.get("/api/friendships/incoming.json", headers=as_viewer(1))
    assert response.json() == [graph.frank.id]


async def test_blocks_list(client, graph):
    response = await client.get("/api/blocks/list.json", headers=as_viewer(1))
    users = response.json()
    assert [u["screen_name"] for u in users] == ["carol"]
    assert users[0]["statusnet_blocking"] is True


# ─── Account ─────────────────────────────────────────────────────

async def test_verify_credentials(client, content):
    response = await client.get(
        "/api/account/verify_credentials.json", headers=as_viewer(1),
    )
    user = response.json()
    assert user["screen_name"] == "alice"
    assert user["id"] == content.own_post.author_id
    assert "verified" not in user
    assert "self" not in user
    assert user["followers_count"] == 3
    assert user["friends_count"] == 3
    assert user["status"]["text"] == "Mine\nmy post"


async def test_verify_credentials_skip_status(client, graph):
    response = await client.get(
        "/api/account/verify_credentials.json?skip_status=true", headers=as_viewer(1),
    )
    assert "status" not in response.json()


async def test_saved_searches(client, content):
    response = await client.get("/api/saved_searches/list.json", headers=as_viewer(1))
    terms = response.json()
    assert [t["query"] for t in terms] == ["Saved search"]


async def test_lists_list_is_empty(client, graph):
    response = await client.get("/api/lists/list.json", headers=as_viewer(1))
    assert response.status_code == 200
    assert response.json() == []


async def test_form_body_wins_over_query(client, content):
    response = await client.post(
        "/api/favorites/create.json?id=99999",
        data={"id": str(content.plain.id)},
        headers=as_viewer(1),
    )
    assert response.status_code == 200
    assert json.loads(response.text)["id"] == content.plain.id
