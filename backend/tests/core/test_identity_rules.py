"""Identity Rules — verifies lookup precedence, locality and recipient choice."""

from types import SimpleNamespace

from gateway.core.identity_rules import (
    LookupKind, best_by_network, choose_lookup, is_local_url, normalise_link,
)
from gateway.core.network_matcher import DFRN, DIASPORA, MAIL, OSTATUS


def test_screen_name_wins_over_contact_id():
    lookup = choose_lookup(contact_id=5, screen_name="bob")
    assert lookup.kind is LookupKind.SCREEN_NAME
    assert lookup.screen_name == "bob"


def test_contact_id_alone():
    lookup = choose_lookup(contact_id=5)
    assert lookup.kind is LookupKind.CONTACT_ID
    assert lookup.contact_id == 5


def test_no_identifier_means_self():
    assert choose_lookup().kind is LookupKind.SELF
    assert choose_lookup(contact_id=0, screen_name="").kind is LookupKind.SELF


def test_normalise_link():
    assert normalise_link("https://Example.org/profile/a/") == "http://Example.org/profile/a"
    assert normalise_link(" http://example.org ") == "http://example.org"


def test_is_local_url():
    assert is_local_url("http://localhost/profile/alice", "http://localhost")
    assert is_local_url("https://localhost/profile/alice", "http://localhost/")
    assert not is_local_url("https://remote.example/profile/dave", "http://localhost")
    assert not is_local_url(None, "http://localhost")
    assert not is_local_url("http://localhost/profile/alice", "")


def _contact(name, network):
    return SimpleNamespace(name=name, network=network)


def test_best_by_network_priority():
    contacts = [
        _contact("mail", MAIL),
        _contact("ostatus", OSTATUS),
        _contact("diaspora", DIASPORA),
        _contact("dfrn", DFRN),
    ]
    assert best_by_network(contacts).name == "dfrn"
    assert best_by_network(contacts[:3]).name == "diaspora"
    assert best_by_network(contacts[:2]).name == "ostatus"


def test_best_by_network_is_stable_for_ties():
    contacts = [_contact("first", MAIL), _contact("second", MAIL)]
    assert best_by_network(contacts).name == "first"


def test_best_by_network_empty():
    assert best_by_network([]) is None
