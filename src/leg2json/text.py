"""Text normalization for register markup fragments."""

from __future__ import annotations

import re

_tag = re.compile(r"<[^>]+>")
_entity = re.compile(r"&(#[xX]\w+|#\d+|[A-Za-z]+);")
_ws = re.compile(r"\s+")

# Numeric references are looked up lower-cased, named ones as written.
ENTITIES = {
    "#xa0": " ",
    "#160": " ",
    "nbsp": " ",
    "#x2011": "-",
    "#x2013": "–",
    "ndash": "–",
    "#x2014": "—",
    "mdash": "—",
    "#x2018": "‘",
    "lsquo": "‘",
    "#x2019": "’",
    "rsquo": "’",
    "#x201c": '"',
    "#x201d": '"',
    "ldquo": "“",
    "rdquo": "”",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "#39": "'",
}


def _decode_entity(match: re.Match) -> str:
    name = match.group(1)
    if name.startswith("#"):
        return ENTITIES.get(name.lower(), " ")
    if name.lower() == "nbsp":
        return " "
    return ENTITIES.get(name, match.group(0))


def decode_entities(text: str) -> str:
    """Decode the fixed entity table in one pass.

    Unknown numeric references become a space; unknown named references are
    left untouched.
    """
    return _entity.sub(_decode_entity, text)


def strip_html(html: str) -> str:
    """Strip tags, decode entities and collapse whitespace.

    >>> strip_html("<b>personal&#xa0;information</b>  means")
    'personal information means'
    """
    if not html:
        return ""
    text = _tag.sub(" ", html)
    text = decode_entities(text)
    return _ws.sub(" ", text).strip()
