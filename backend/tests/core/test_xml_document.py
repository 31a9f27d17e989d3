"""XML Document — verifies the byte-exact legacy XML shape.

Tests:
    - Declaration, indentation, self-closing empty elements, trailing newline
    - Namespace declarations on every root except "ok"
    - statusnet_/friendica_ keys become prefixed names; undeclared prefixes drop
    - Lists repeat their element; @attributes attach to the emitted element
"""

from gateway.core.xml_document import (
    create_xml, reformat_key, reformat_tree, reformat_value,
)

ROOT_NS = (
    ' xmlns="http://api.twitter.com"'
    ' xmlns:statusnet="http://status.net/schema/api/1/"'
    ' xmlns:friendica="http://friendi.ca/schema/api/1/"'
    ' xmlns:georss="http://www.georss.org/georss"'
)


def test_ok_document_is_namespaceless():
    assert create_xml({"ok": "ok"}, "ok") == '<?xml version="1.0"?>\n<ok>ok</ok>\n'


def test_error_envelope_document():
    envelope = {"status": {"error": "Not Found", "code": "404 Not Found", "request": ""}}
    assert create_xml(envelope, "status") == (
        '<?xml version="1.0"?>\n'
        f"<status{ROOT_NS}>\n"
        "  <error>Not Found</error>\n"
        "  <code>404 Not Found</code>\n"
        "  <request/>\n"
        "</status>\n"
    )


def test_vendor_prefixes_and_value_rewrites():
    data = {"user": {"id": 1, "statusnet_blocking": False, "friendica_x": None}}
    assert create_xml(data, "user") == (
        '<?xml version="1.0"?>\n'
        f"<user{ROOT_NS}>\n"
        "  <id>1</id>\n"
        "  <statusnet:blocking>false</statusnet:blocking>\n"
        "  <friendica:x/>\n"
        "</user>\n"
    )


def test_undeclared_prefix_is_dropped():
    assert create_xml({"ok": {"friendica_x": "1"}}, "ok") == (
        '<?xml version="1.0"?>\n<ok>\n  <x>1</x>\n</ok>\n'
    )


def test_list_becomes_repeated_elements():
    data = {"user": [{"id": 1}, {"id": 2}]}
    assert create_xml(data, "users") == (
        '<?xml version="1.0"?>\n'
        f"<users{ROOT_NS}>\n"
        "  <user>\n"
        "    <id>1</id>\n"
        "  </user>\n"
        "  <user>\n"
        "    <id>2</id>\n"
        "  </user>\n"
        "</users>\n"
    )


def test_nested_list_repeats_under_parent():
    data = {"ids": {"ids": [3, 4], "next_cursor": 0}}
    assert create_xml(data, "ids") == (
        '<?xml version="1.0"?>\n'
        f"<ids{ROOT_NS}>\n"
        "  <ids>3</ids>\n"
        "  <ids>4</ids>\n"
        "  <next_cursor>0</next_cursor>\n"
        "</ids>\n"
    )


def test_attributes_attach_to_element():
    data = {"note": [{"@attributes": {"id": 1, "seen": False, "msg": 'a "b"'}}]}
    assert create_xml(data, "notes") == (
        '<?xml version="1.0"?>\n'
        f"<notes{ROOT_NS}>\n"
        '  <note id="1" seen="false" msg="a &quot;b&quot;"/>\n'
        "</notes>\n"
    )


def test_text_is_escaped():
    assert create_xml({"ok": "a<b&c"}, "ok") == (
        '<?xml version="1.0"?>\n<ok>a&lt;b&amp;c</ok>\n'
    )


def test_empty_data_gives_empty_root():
    assert create_xml({}, "ok") == '<?xml version="1.0"?>\n<ok/>\n'


def test_reformat_helpers():
    assert reformat_key("statusnet_api") == "statusnet:api"
    assert reformat_key("friendica_seen") == "friendica:seen"
    assert reformat_key("screen_name") == "screen_name"
    assert reformat_value(True) == "true"
    assert reformat_value(None) == ""
    assert reformat_value(0) == 0
    assert reformat_tree({"a": [{"statusnet_b": False}]}) == {
        "a": [{"statusnet:b": "false"}],
    }
