"""leg2json: Convert Australian federal legislation XHTML to structured JSON."""

from leg2json.core import parse_act_html, convert_to_json
from leg2json.parser import ActParser, parse_australian_html
from leg2json.segmenter import split_into_sections
from leg2json.headings import scan_headings, StructuralContext
from leg2json.content import extract_section_content, extract_definitions
from leg2json.text import strip_html
from leg2json.acts import KEY_AUSTRALIAN_ACTS, get_act
from leg2json.models import (
    ActIndexEntry,
    VersionInfo,
    Heading,
    SectionUnit,
    Provision,
    Definition,
    ParsedAct,
)
from leg2json.fetcher import RegisterClient, FetchResult
from leg2json.store import LegislationStore
from leg2json.exceptions import Leg2JsonError, FetchError

__version__ = "0.1.0"
__all__ = [
    "parse_act_html",
    "convert_to_json",
    "ActParser",
    "parse_australian_html",
    "split_into_sections",
    "scan_headings",
    "StructuralContext",
    "extract_section_content",
    "extract_definitions",
    "strip_html",
    "KEY_AUSTRALIAN_ACTS",
    "get_act",
    "ActIndexEntry",
    "VersionInfo",
    "Heading",
    "SectionUnit",
    "Provision",
    "Definition",
    "ParsedAct",
    "RegisterClient",
    "FetchResult",
    "LegislationStore",
    "Leg2JsonError",
    "FetchError",
]
