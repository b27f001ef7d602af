"""Heading detection and structural context tracking."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Optional

from leg2json.models import Heading
from leg2json.registry import HEADING_RE, LEGACY_SECTION_LEVEL, SECTION_LEVEL
from leg2json.text import strip_html

_level_digit = re.compile(r"([1-9])$")

PART_LEVELS = {1, 2}
DIVISION_LEVELS = {3, 4}
CONTEXT_SEPARATOR = " > "


def normalize_level(css_class: str) -> Optional[int]:
    """Map a heading class to its structural level.

    ``ActHead5``, ``New5`` and ``Heading5`` are all level 5. The legacy
    ``Heading9`` marks sections in deeply nested acts and folds into 5.
    """
    m = _level_digit.search(css_class)
    if not m:
        return None
    level = int(m.group(1))
    return SECTION_LEVEL if level == LEGACY_SECTION_LEVEL else level


def scan_headings(html: str) -> List[Heading]:
    """Find every heading marker in document order."""
    headings: List[Heading] = []
    for m in HEADING_RE.finditer(html or ""):
        level = normalize_level(m.group(1))
        if level is None:
            continue
        headings.append(
            Heading(
                css_class=m.group(1),
                level=level,
                text=strip_html(m.group(2)),
                start=m.start(),
                end=m.end(),
            )
        )
    return headings


@dataclass(frozen=True)
class StructuralContext:
    """Part and division labels in force at a point in the document."""

    part: Optional[str] = None
    division: Optional[str] = None

    def advance(self, heading: Heading) -> "StructuralContext":
        """Return the context after ``heading``. Section headings leave it unchanged."""
        if heading.level in PART_LEVELS:
            return StructuralContext(part=heading.text, division=None)
        if heading.level in DIVISION_LEVELS:
            return replace(self, division=heading.text)
        return self

    @property
    def label(self) -> Optional[str]:
        return CONTEXT_SEPARATOR.join(x for x in (self.part, self.division) if x) or None
