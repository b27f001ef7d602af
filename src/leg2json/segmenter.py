"""Segmentation of register XHTML into numbered sections."""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from leg2json.headings import StructuralContext, scan_headings
from leg2json.models import Heading, SectionUnit
from leg2json.registry import SECTION_LEVEL

# "6  Interpretation", "2A  Objects", "476.2  Meaning of...", "3LA  Person with..."
SECTION_HEADING_RE = re.compile(r"^(\d+(?:\.\d+)*[A-Za-z]*)\s+(.*)")

logger = logging.getLogger(__name__)


def parse_section_heading(text: str) -> Optional[Tuple[str, str]]:
    """Split section heading text into (number, title), or None if it has no number."""
    m = SECTION_HEADING_RE.match(text)
    if not m:
        return None
    return m.group(1), m.group(2).strip()


def iter_sections(html: str, headings: Sequence[Heading]) -> Iterator[SectionUnit]:
    """Fold over the headings, yielding a SectionUnit per numbered section heading.

    A section's body runs from the end of its heading to the start of the next
    heading of any level.
    """
    context = StructuralContext()
    for i, heading in enumerate(headings):
        if heading.level == SECTION_LEVEL:
            parsed = parse_section_heading(heading.text)
            if parsed is None:
                logger.debug(f"Skipping unnumbered section heading {heading.text!r} at {heading.start}")
                continue
            number, title = parsed
            body_end = headings[i + 1].start if i + 1 < len(headings) else len(html)
            yield SectionUnit(
                number=number,
                title=title,
                body_html=html[heading.end:body_end],
                body_start=heading.end,
                body_end=body_end,
                chapter=context.label,
                position=heading.start,
            )
        context = context.advance(heading)


def split_into_sections(html: str) -> List[SectionUnit]:
    """Split register XHTML into numbered sections in document order."""
    html = html or ""
    return list(iter_sections(html, scan_headings(html)))
