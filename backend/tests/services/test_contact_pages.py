"""Contact Pages — verifies cursor pagination over stored relationships.

Invariants:
    - A forward walk from the start yields every follower exactly once
    - previous_cursor of a page reproduces the page before it
    - Another account's hidden lists are empty; a missing profile is NotFound
    - Local contacts without a public counterpart are skipped
"""

import pytest

from gateway.core.cursor_pagination import Cursor
from gateway.core.domain_types import FOLLOWER_RELATIONS, Relation, Viewer, ViewerId
from gateway.core.errors import NotFoundError
from gateway.core.repository_protocols import ContactFilter
from gateway.models.contact import Contact
from gateway.services.contact_pages import list_users, page

from tests.services.seed_graph import add_account, add_local, add_public


@pytest.fixture
async def crowd(test_db):
    """Account 10 ('zed') with seven followers on remote hosts."""
    zed = await add_account(test_db, 10, "zed")
    publics = []
    for n in range(7):
        public = await add_public(
            test_db, f"fan{n}", f"https://fans.example/profile/fan{n}",
        )
        await add_local(test_db, 10, public, Relation.FOLLOWER)
        publics.append(public)
    await test_db.commit()
    return zed, [p.id for p in publics]


ZED = Viewer(uid=ViewerId(10))
FOLLOWERS = ContactFilter(10, FOLLOWER_RELATIONS)


async def test_forward_walk_yields_every_follower_once(svc, crowd):
    _, expected = crowd
    seen = []
    cursor = Cursor.start()
    for _ in range(10):
        result = await page(svc, FOLLOWERS, ZED, cursor, 3)
        assert len(result.ids) <= 3
        assert result.total_count == 7
        seen.extend(result.ids)
        if result.next_cursor == 0:
            break
        cursor = Cursor.from_wire(result.next_cursor)
    assert seen == expected


async def test_previous_cursor_reproduces_prior_page(svc, crowd):
    first = await page(svc, FOLLOWERS, ZED, Cursor.start(), 3)
    assert first.previous_cursor == 0
    second = await page(svc, FOLLOWERS, ZED, Cursor.from_wire(first.next_cursor), 3)
    back = await page(svc, FOLLOWERS, ZED, Cursor.from_wire(second.previous_cursor), 3)
    assert back.ids == first.ids


async def test_walking_past_the_end_points_back(svc, crowd):
    first = await page(svc, FOLLOWERS, ZED, Cursor.start(), 7)
    assert first.next_cursor == 0
    beyond = await page(svc, FOLLOWERS, ZED, Cursor.forward(10_000), 3)
    assert beyond.ids == []
    assert beyond.previous_cursor == -10_000


async def test_empty_first_page_points_back_to_start(svc, test_db):
    await add_account(test_db, 11, "yan")
    await test_db.commit()
    yan = Viewer(uid=ViewerId(11))
    result = await page(svc, ContactFilter(11, FOLLOWER_RELATIONS), yan, Cursor.start(), 20)
    assert result.ids == []
    assert result.next_cursor == -1
    assert result.previous_cursor == 0


async def test_stringified_ids(svc, crowd):
    result = await page(svc, FOLLOWERS, ZED, Cursor.start(), 2, stringify_ids=True)
    assert all(isinstance(i, str) for i in result.ids)


async def test_hidden_lists_are_empty_for_others(svc, graph):
    viewer = Viewer(uid=ViewerId(1))
    result = await page(svc, ContactFilter(3, FOLLOWER_RELATIONS), viewer, Cursor.start(), 20)
    assert result.ids == []
    assert result.total_count == 0
    assert result.next_cursor == 0


async def test_hidden_lists_stay_visible_to_owner(svc, graph):
    carol = Viewer(uid=ViewerId(3))
    result = await page(svc, ContactFilter(3, FOLLOWER_RELATIONS), carol, Cursor.start(), 20)
    assert result.ids == [graph.alice.public.id]


async def test_missing_profile_is_not_found(svc, graph):
    viewer = Viewer(uid=ViewerId(1))
    with pytest.raises(NotFoundError) as exc:
        await page(svc, ContactFilter(99, FOLLOWER_RELATIONS), viewer, Cursor.start(), 20)
    assert exc.value.message == "Profile not found"


async def test_contacts_without_public_counterpart_are_skipped(svc, test_db, crowd):
    orphan = Contact(
        uid=10, nick="orphan", url="https://nowhere.example/profile/orphan",
        nurl="http://nowhere.example/profile/orphan", rel=int(Relation.FOLLOWER),
    )
    test_db.add(orphan)
    await test_db.commit()

    _, expected = crowd
    result = await page(svc, FOLLOWERS, ZED, Cursor.start(), 20)
    assert result.ids == expected
    assert result.total_count == 8


async def test_list_users_expands_ids(svc, graph):
    alice = Viewer(uid=ViewerId(1))
    result = await list_users(
        svc, ContactFilter(1, FOLLOWER_RELATIONS), alice, Cursor.start(), 20,
    )
    assert [u["screen_name"] for u in result["users"]] == ["bob", "dave", "carol"]
    assert result["next_cursor"] == 0
    assert result["total_count"] == 3
    assert "ids" not in result
