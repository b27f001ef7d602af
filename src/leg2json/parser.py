"""Assembly of parsed sections into a normalized act record."""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from leg2json.constants import MIN_PROVISION_CHARS
from leg2json.content import extract_definitions, extract_section_content, is_definitions_title
from leg2json.models import (
    STATUS_MAP,
    ActIndexEntry,
    ActStatus,
    Definition,
    ParsedAct,
    Provision,
    SectionUnit,
    VersionInfo,
)
from leg2json.segmenter import split_into_sections

logger = logging.getLogger(__name__)


def _date_part(iso: Optional[str], year: int) -> str:
    """'2025-06-10T00:00:00' -> '2025-06-10'; missing values fall back to 1 January."""
    if iso:
        return iso.split("T")[0]
    return f"{year}-01-01"


def map_status(version_info: Optional[VersionInfo], default: ActStatus) -> ActStatus:
    """Map the register's status onto ActStatus. Unknown values count as in force."""
    if version_info is None or not version_info.status:
        return default
    return STATUS_MAP.get(version_info.status, "in_force")


def build_description(act: ActIndexEntry, version_info: Optional[VersionInfo]) -> str:
    register_id = version_info.register_id if version_info else None
    compilation = version_info.compilation_number if version_info else None
    # Only missing values are replaced; an empty string is kept as reported
    if register_id is None:
        register_id = "unknown"
    if compilation is None:
        compilation = "unknown"
    return (
        f"{act.title} - Australian federal legislation. "
        f"Register ID: {register_id}. "
        f"Compilation number: {compilation}. "
        f"Source: Federal Register of Legislation (legislation.gov.au)."
    )


class ActParser:
    """Parser for register EPUB XHTML.

    Headings carry the structure (``ActHead1``-``ActHead5`` in modern
    compilations, ``New``/``Heading`` classes in older ones). Each section
    starts at a level-5 heading and runs to the next heading of any level.
    """

    def __init__(self, html: str, act: ActIndexEntry, version_info: Optional[VersionInfo] = None):
        self.html = html or ""
        self.act = act
        self.version_info = version_info
        self.provisions: List[Provision] = []
        self.definitions: List[Definition] = []
        self._seen_refs: Set[str] = set()

    def _add_section(self, section: SectionUnit) -> None:
        ref = section.provision_ref

        # Schedules repeat section numbering; first occurrence wins
        if ref in self._seen_refs:
            logger.debug(f"Skipping duplicate {ref} at {section.position}")
            return
        self._seen_refs.add(ref)

        content = extract_section_content(section.body_html)
        if len(content) < MIN_PROVISION_CHARS:
            logger.debug(f"Skipping {ref}: no content")
            return

        self.provisions.append(
            Provision(
                provision_ref=ref,
                chapter=section.chapter,
                section=section.number,
                title=section.title,
                content=content,
            )
        )

        if is_definitions_title(section.title):
            self.definitions.extend(extract_definitions(section.body_html, ref))

    def parse(self) -> ParsedAct:
        """Assemble the normalized record. Never raises for malformed markup."""
        self.provisions = []
        self.definitions = []
        self._seen_refs = set()

        for section in split_into_sections(self.html):
            self._add_section(section)

        act, info = self.act, self.version_info
        logger.debug(
            f"{act.id}: {len(self.provisions)} provisions, {len(self.definitions)} definitions"
        )
        return ParsedAct(
            id=act.id,
            title=act.title,
            title_in_source_language=act.title,  # the register publishes in English
            short_name=act.title,
            status=map_status(info, act.status),
            issued_date=_date_part(info.making_date if info else None, act.year),
            in_force_date=_date_part(info.start if info else None, act.year),
            source_url=act.url,
            description=build_description(act, info),
            provisions=self.provisions,
            definitions=self.definitions,
        )


def parse_australian_html(
    html: str, act: ActIndexEntry, version_info: Optional[VersionInfo] = None
) -> ParsedAct:
    """Parse register XHTML into a ParsedAct."""
    return ActParser(html, act, version_info).parse()
