"""XML Document — renders nested mappings into the legacy pretty-printed XML.

Invariants:
    - Output starts with the bare declaration `<?xml version="1.0"?>` and ends
      with a newline after the root close tag
    - Two-space indentation; text-only elements stay on one line; elements with
      neither text nor children self-close (`<request/>`)
    - Keys prefixed `statusnet_`/`friendica_` become `statusnet:`/`friendica:`
    - A prefix not declared on the root is dropped (`friendica:x` -> `x`)
    - `@attributes*` keys attach attributes to the previously emitted sibling,
      or to the parent element when nothing was emitted yet

Design Decisions:
    - Hand-written serializer over ElementTree.tostring: the legacy byte shape
      (`<x/>` without a space, declaration without encoding) must be exact
    - Lists become repeated sibling elements named after their key, at any depth
"""

from dataclasses import dataclass, field
from typing import Any
from xml.sax.saxutils import escape


XML_DECLARATION = '<?xml version="1.0"?>'

# Declaration order on the root element is part of the wire format
NAMESPACES: dict[str, str] = {
    "": "http://api.twitter.com",
    "statusnet": "http://status.net/schema/api/1/",
    "friendica": "http://friendi.ca/schema/api/1/",
    "georss": "http://www.georss.org/georss",
}

# Roots that carry no namespace declarations
NAMESPACELESS_ROOTS: frozenset[str] = frozenset({"ok"})

VENDOR_PREFIXES: tuple[str, ...] = ("statusnet", "friendica")

_ATTRIBUTES_KEY = "@attributes"
_INDENT = "  "


def reformat_key(key: str) -> str:
    """statusnet_api -> statusnet:api, friendica_api -> friendica:api."""
    for prefix in VENDOR_PREFIXES:
        if key.startswith(prefix + "_"):
            return f"{prefix}:{key[len(prefix) + 1:]}"
    return key


def reformat_value(value: Any) -> Any:
    """Booleans become literal 'true'/'false'; None becomes empty text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return value


def reformat_tree(data: Any) -> Any:
    """Apply key and value reformatting recursively."""
    if isinstance(data, dict):
        return {
            reformat_key(str(k)): reformat_tree(v) for k, v in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [reformat_tree(v) for v in data]
    return reformat_value(data)


@dataclass
class _Element:
    name: str
    text: str = ""
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list["_Element"] = field(default_factory=list)


def _element_name(key: str, namespaces: dict[str, str]) -> str:
    prefix, sep, local = key.partition(":")
    if sep and prefix not in namespaces:
        return local
    return key


def _fill(parent: _Element, data: Any, namespaces: dict[str, str]) -> None:
    """Populate `parent` from a mapping, list or scalar."""
    if isinstance(data, dict):
        last = parent
        for key, value in data.items():
            key = str(key)
            if key.startswith(_ATTRIBUTES_KEY):
                if isinstance(value, dict):
                    for attr, attr_value in value.items():
                        last.attributes.append(
                            (str(attr), str(reformat_value(attr_value))),
                        )
                continue
            name = _element_name(key, namespaces)
            if isinstance(value, (list, tuple)):
                for item in value:
                    last = _append(parent, name, item, namespaces)
            else:
                last = _append(parent, name, value, namespaces)
        return
    if isinstance(data, (list, tuple)):
        # bare list inside an element: scalars become its text
        for item in data:
            if not isinstance(item, (dict, list, tuple)):
                parent.text = str(reformat_value(item))
        return
    parent.text = str(reformat_value(data))


def _append(parent: _Element, name: str, value: Any, namespaces: dict[str, str]) -> _Element:
    child = _Element(name)
    parent.children.append(child)
    _fill(child, value, namespaces)
    return child


def _quote_attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _open_tag(element: _Element, extra: str = "") -> str:
    attrs = "".join(
        f' {name}="{_quote_attr(value)}"'
        for name, value in element.attributes
    )
    return f"<{element.name}{extra}{attrs}"


def _serialize(element: _Element, depth: int, lines: list[str], extra: str = "") -> None:
    pad = _INDENT * depth
    head = _open_tag(element, extra)
    if element.children:
        lines.append(f"{pad}{head}>")
        for child in element.children:
            _serialize(child, depth + 1, lines)
        lines.append(f"{pad}</{element.name}>")
    elif element.text != "":
        lines.append(f"{pad}{head}>{escape(element.text)}</{element.name}>")
    else:
        lines.append(f"{pad}{head}/>")


def _namespace_declarations(namespaces: dict[str, str]) -> str:
    return "".join(
        f' xmlns{":" + prefix if prefix else ""}="{uri}"'
        for prefix, uri in namespaces.items()
    )


def create_xml(data: dict, root_element: str) -> str:
    """Render `{child: value}` under `root_element`.

    The last key of `data` names the children: a list value becomes repeated
    `<child>` siblings, a mapping becomes the root's content, a scalar becomes
    the root's text.
    """
    namespaces = {} if root_element in NAMESPACELESS_ROOTS else dict(NAMESPACES)
    root = _Element(root_element)

    if data:
        child_name = list(data.keys())[-1]
        content = reformat_tree(data[child_name])
        if isinstance(content, list):
            name = _element_name(reformat_key(str(child_name)), namespaces)
            for item in content:
                _append(root, name, item, namespaces)
        else:
            _fill(root, content, namespaces)

    lines: list[str] = [XML_DECLARATION]
    _serialize(root, 0, lines, _namespace_declarations(namespaces))
    return "\n".join(lines) + "\n"
