"""Section body and definition extraction."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from leg2json.constants import (
    MAX_CONTENT_CHARS,
    MAX_DEFINITION_CHARS,
    MIN_FALLBACK_CHARS,
    MIN_FRAGMENT_CHARS,
)
from leg2json.models import Definition
from leg2json.registry import CONTENT_RE, DEFINITION_RE
from leg2json.text import strip_html

EMPHASIS_TAGS = {"b", "i", "em", "strong"}
DEFINITION_TITLE_WORDS = ("interpretation", "definition")

_italic_style = re.compile(r"font-style:\s*italic", re.I)

logger = logging.getLogger(__name__)


def extract_section_content(body_html: str) -> str:
    """Join the text of all content-class paragraphs in a section body.

    Bodies with no recognised paragraphs fall back to the whole body's text
    when it is long enough to be more than noise.
    """
    parts: List[str] = []
    for m in CONTENT_RE.finditer(body_html):
        text = strip_html(m.group(2))
        if len(text) > MIN_FRAGMENT_CHARS:
            parts.append(text)

    if not parts:
        fallback = strip_html(body_html)
        if len(fallback) > MIN_FALLBACK_CHARS:
            parts.append(fallback)

    return " ".join(parts)[:MAX_CONTENT_CHARS]


def is_definitions_title(title: str) -> bool:
    lower = title.lower()
    return any(word in lower for word in DEFINITION_TITLE_WORDS)


def _is_emphasis(el: Tag) -> bool:
    if el.name in EMPHASIS_TAGS:
        return True
    if el.name == "span":
        return bool(_italic_style.search(el.get("style") or ""))
    return False


def find_defined_term(fragment_html: str) -> Optional[str]:
    """Text of the first bold/italic element in a definition paragraph.

    Character references are left for ``strip_html`` to decode, so terms use
    the same entity table as definition text.
    """
    # Escaped ampersands keep references as literal text through the parse
    soup = BeautifulSoup(fragment_html.replace("&", "&amp;"), "lxml")
    for el in soup.find_all(True):
        if _is_emphasis(el):
            return strip_html(el.decode_contents(formatter=None))
    return None


def extract_definitions(body_html: str, provision_ref: str) -> List[Definition]:
    """Extract defined terms from the Definition paragraphs of a section.

    The term is the first emphasised run of the paragraph; paragraphs without
    one contribute nothing.
    """
    definitions: List[Definition] = []
    for m in DEFINITION_RE.finditer(body_html):
        raw = m.group(2)
        term = find_defined_term(raw)
        if not term or not (1 < len(term) < 100):
            logger.debug(f"No defined term in {provision_ref} paragraph at {m.start()}")
            continue
        definitions.append(
            Definition(
                term=term,
                definition=strip_html(raw)[:MAX_DEFINITION_CHARS],
                source_provision=provision_ref,
            )
        )
    return definitions
