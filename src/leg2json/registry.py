"""Style-class registries for register XHTML.

The register's EPUB XHTML carries its structure in ``class`` attributes on
``<p>`` elements. Class names changed between document eras, so every class
the parser recognises is listed here, keyed by era. Patterns are compiled from
these tables only.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Tuple

# Heading class families. A family prefix is followed by a single digit 1-9
# giving the nominal level (ActHead5, New5, Heading9, ...).
HEADING_FAMILIES: Dict[str, Tuple[str, ...]] = {
    "modern": ("ActHead",),
    # Older compilations and amending acts
    "legacy": ("New", "Heading"),
}

CONTENT_CLASSES: Dict[str, FrozenSet[str]] = {
    "modern": frozenset({
        "subsection",
        "subsection2",
        "paragraph",
        "paragraphsub",
        "paragraphsub-sub",
        "Definition",
        "Penalty",
        "notetext",
        "notepara",
        "SubsectionHead",
        "Tabletext",
        "Tablea",
        "TableHeading",
        "SOText",
        "SOPara",
        "SOBullet",
    }),
    "legacy": frozenset({
        "indenta",
        "indentii",
        "Item",
        "NewItem",
        "Emphasis",
    }),
}

DEFINITION_CLASS = "Definition"

# Legacy deep-nesting marker that stands in for a section heading
LEGACY_SECTION_LEVEL = 9
SECTION_LEVEL = 5


def heading_prefixes() -> Tuple[str, ...]:
    """All heading family prefixes across eras, longest first."""
    prefixes = {p for family in HEADING_FAMILIES.values() for p in family}
    return tuple(sorted(prefixes, key=lambda p: (-len(p), p)))


def content_classes() -> FrozenSet[str]:
    """Union of content classes across eras."""
    return frozenset().union(*CONTENT_CLASSES.values())


def _alternation(names) -> str:
    return "|".join(re.escape(n) for n in sorted(names, key=lambda n: (-len(n), n)))


def _class_paragraph_pattern(class_group: str) -> re.Pattern:
    # Closing tags are not reliable across eras; the lazy body stops at the
    # first </p> whatever opened it.
    return re.compile(
        rf'<p[^>]*class="({class_group})"[^>]*>([\s\S]*?)</p>',
        re.IGNORECASE,
    )


HEADING_RE = _class_paragraph_pattern(rf"(?:{_alternation(heading_prefixes())})[1-9]")
CONTENT_RE = _class_paragraph_pattern(_alternation(content_classes()))
DEFINITION_RE = _class_paragraph_pattern(re.escape(DEFINITION_CLASS))
