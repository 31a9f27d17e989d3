"""Markup — minimal BBCode renderer for post and message bodies.

Invariants:
    - to_html() escapes raw text before tags are translated (no HTML injection)
    - to_plain() drops every tag and keeps the enclosed text
    - Unknown tags pass through to_html() untouched

Design Decisions:
    - Regex table over a parser: bodies are short and tags never need balancing
      beyond what the regex pairs (ADR: default implementation, replaceable via
      the MarkupRenderer protocol)
"""

import html
import re


_FLAGS = re.IGNORECASE | re.DOTALL

_HTML_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"\[b\](.*?)\[/b\]", _FLAGS), r"<strong>\1</strong>"),
    (re.compile(r"\[i\](.*?)\[/i\]", _FLAGS), r"<em>\1</em>"),
    (re.compile(r"\[u\](.*?)\[/u\]", _FLAGS), r"<u>\1</u>"),
    (re.compile(r"\[s\](.*?)\[/s\]", _FLAGS), r"<s>\1</s>"),
    (re.compile(r"\[quote\](.*?)\[/quote\]", _FLAGS), r"<blockquote>\1</blockquote>"),
    (re.compile(r"\[code\](.*?)\[/code\]", _FLAGS), r"<code>\1</code>"),
    (re.compile(r"\[url=([^\]]+)\](.*?)\[/url\]", _FLAGS), r'<a href="\1">\2</a>'),
    (re.compile(r"\[url\](.*?)\[/url\]", _FLAGS), r'<a href="\1">\1</a>'),
    (re.compile(r"\[img\](.*?)\[/img\]", _FLAGS), r'<img src="\1" alt="">'),
)

_URL_WITH_LABEL = re.compile(r"\[url=[^\]]+\](.*?)\[/url\]", _FLAGS)
_ANY_TAG = re.compile(r"\[/?[a-z*]+(?:=[^\]]*)?\]", re.IGNORECASE)


class BBCodeRenderer:
    """Default MarkupRenderer."""

    def to_html(self, body: str) -> str:
        text = html.escape(body or "", quote=False)
        for pattern, replacement in _HTML_RULES:
            text = pattern.sub(replacement, text)
        return text.replace("\r\n", "\n").replace("\n", "<br>")

    def to_plain(self, body: str) -> str:
        text = _URL_WITH_LABEL.sub(r"\1", body or "")
        text = _ANY_TAG.sub("", text)
        return text.strip()
