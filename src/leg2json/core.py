"""Core conversion functionality."""

from typing import Optional
from leg2json.parser import ActParser
from leg2json.models import ActIndexEntry, ParsedAct, VersionInfo


def _decode_source(source: str | bytes) -> str:
    # Handle bytes input
    if isinstance(source, bytes):
        if source.startswith(b"%PDF"):
            raise ValueError(
                "PDF content detected. This library only supports register XHTML input. "
                "Fetch the EPUB XHTML rendition of the act instead."
            )
        source = source.decode("utf-8", errors="ignore")

    if source.strip().startswith("%PDF"):
        raise ValueError(
            "PDF content detected. This library only supports register XHTML input. "
            "Fetch the EPUB XHTML rendition of the act instead."
        )
    return source


def parse_act_html(
    source: str | bytes,
    act: ActIndexEntry,
    *,
    version_info: Optional[VersionInfo] = None,
) -> ParsedAct:
    """
    Parse register XHTML into a normalized ParsedAct.

    Args:
        source: XHTML string/bytes from the register's EPUB endpoint
        act: Descriptor of the act being parsed
        version_info: Optional version metadata from the register API

    Returns:
        ParsedAct with provisions in document order and extracted definitions

    Raises:
        ValueError: If source appears to be PDF content

    Examples:
        >>> from leg2json.acts import get_act
        >>> act = get_act("privacy-act-1988")
        >>> parsed = parse_act_html(html, act)
        >>> parsed.get_provision("6").title
        'Interpretation'
    """
    html = _decode_source(source)
    return ActParser(html, act, version_info).parse()


def convert_to_json(
    source: str | bytes,
    act: ActIndexEntry,
    *,
    version_info: Optional[VersionInfo] = None,
    indent: int = 2,
) -> str:
    """Parse register XHTML and return the seed-file JSON."""
    return parse_act_html(source, act, version_info=version_info).to_json(indent=indent)
