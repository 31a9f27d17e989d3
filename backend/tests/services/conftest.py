"""Service test fixtures — async DB, a seeded social graph and the FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe that bypasses get_db
    - app.state carries the dispatcher, a fresh rate limiter and no network
      lookup (ASGITransport does not run the lifespan)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Viewer chosen per request through the X-Gateway-Viewer header, so the
      real get_viewer dependency is exercised
    - Seed graph returned as a SimpleNamespace of rows: tests address contacts
      by name, never by hard-coded ids
"""

from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from gateway.config import get_settings
from gateway.core.domain_types import Relation
from gateway.db.base import Base
from gateway.infrastructure.database import get_db, DatabaseSessionManager
from gateway.infrastructure.rate_limit import RateLimiter
from gateway.models.item import Item
from gateway.models.mail import Mail
from gateway.models.notification import Notification
from gateway.models.saved_search import SavedSearch
from gateway.services.dispatcher import ApiDispatcher
from gateway.services.gateway_services import GatewayServices, build_services
from gateway.services.routing_table import build_routing_table
import gateway.infrastructure.database as db_module
from gateway.main import app

from tests.services.seed_graph import add_account, add_local, add_public


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def rate_limiter():
    return RateLimiter(get_settings().rate_limit_hourly)


@pytest.fixture
def svc(test_db, rate_limiter) -> GatewayServices:
    """Services bundle over the test session, for handler-level tests."""
    return build_services(test_db, get_settings(), rate_limiter)


@pytest.fixture
async def client(test_engine, test_session_factory, rate_limiter):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    app.state.dispatcher = ApiDispatcher(build_routing_table())
    app.state.rate_limiter = rate_limiter
    app.state.network_lookup = None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed graph ──────────────────────────────────────────────────

@pytest.fixture
async def graph(test_db):
    """alice (1) follows/is followed by a small mixed-network graph.

    alice's contacts:
        bob   FRIEND            (local account)
        dave  FOLLOWER          (remote dfrn)
        erin  SHARING           (remote diaspora)
        frank FOLLOWER pending  (remote ostatus)
        carol FRIEND blocked    (local account, hides friends)
    grace is a known public contact alice has no relationship with.
    """
    db = test_db
    alice = await add_account(db, 1, "alice")
    bob = await add_account(db, 2, "bob")
    carol = await add_account(db, 3, "carol", hide_friends=True)
    mallory = await add_account(db, 4, "mallory", blocked=True)

    dave = await add_public(db, "dave", "https://remote.example/profile/dave")
    erin = await add_public(db, "erin", "https://pod.example/u/erin", network="dspr")
    frank = await add_public(db, "frank", "https://gs.example/frank", network="stat")
    grace = await add_public(db, "grace", "https://remote.example/profile/grace")

    local = SimpleNamespace(
        bob=await add_local(db, 1, bob.public, Relation.FRIEND),
        dave=await add_local(db, 1, dave, Relation.FOLLOWER),
        erin=await add_local(db, 1, erin, Relation.SHARING),
        frank=await add_local(db, 1, frank, Relation.FOLLOWER, pending=True),
        carol=await add_local(db, 1, carol.public, Relation.FRIEND, blocked=True),
    )
    # bob's side of the graph
    bob_alice = await add_local(db, 2, alice.public, Relation.FRIEND)
    await add_local(db, 2, dave, Relation.SHARING)
    # carol's side (hidden from others)
    await add_local(db, 3, alice.public, Relation.FRIEND)

    await db.commit()
    return SimpleNamespace(
        alice=alice, bob=bob, carol=carol, mallory=mallory,
        dave=dave, erin=erin, frank=frank, grace=grace,
        local=local, bob_alice=bob_alice,
    )


@pytest.fixture
async def content(test_db, graph):
    """Posts, mails, notifications and a saved search for alice."""
    db = test_db
    alice_url = graph.alice.own.url

    starred = Item(
        uid=1, contact_id=graph.local.bob.id, author_id=graph.bob.public.id,
        body="[b]starred[/b] post", starred=True,
    )
    own_post = Item(
        uid=1, contact_id=graph.alice.own.id, author_id=graph.alice.public.id,
        title="Mine", body="my post",
    )
    plain = Item(
        uid=1, contact_id=graph.local.dave.id, author_id=graph.dave.id,
        body="from dave",
    )
    db.add_all([starred, own_post, plain])
    await db.flush()

    first = Mail(
        uid=1, contact_id=graph.local.bob.id, from_url=graph.bob.public.url,
        from_name="Bob", title="Hi", body="[b]hello[/b]", uri="urn:m1",
        parent_uri="urn:m1",
    )
    db.add(first)
    await db.flush()
    reply = Mail(
        uid=1, contact_id=graph.local.bob.id, from_url=alice_url,
        from_name="Alice", title="Re: Hi", body="back", seen=True, reply=True,
        uri="urn:m2", parent_uri="urn:m1",
    )
    db.add(reply)
    await db.flush()
    other = Mail(
        uid=1, contact_id=graph.local.dave.id, from_url=graph.dave.url,
        from_name="Dave", title="Yo", body="ping", uri="urn:m3",
        parent_uri="urn:m3",
    )
    db.add(other)
    await db.flush()

    unseen = Notification(
        uid=1, type=8, name="Reply to", url="http://localhost/display/1",
        msg="A test reply", link="http://localhost/notification/1",
        iid=starred.id, otype="item",
    )
    seen = Notification(
        uid=1, type=1, name="Intro", msg="[b]New[/b] intro", otype="person",
        seen=True,
    )
    db.add_all([unseen, seen])
    db.add(SavedSearch(uid=1, term="Saved search"))
    await db.commit()

    return SimpleNamespace(
        starred=starred, own_post=own_post, plain=plain,
        first=first, reply=reply, other=other,
        unseen=unseen, seen=seen,
    )
