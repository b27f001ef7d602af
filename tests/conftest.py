from pathlib import Path

import pytest

from leg2json.models import ActIndexEntry

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def privacy_html():
    """Excerpt of the Privacy Act 1988 EPUB XHTML with modern and legacy classes."""
    with open(FIXTURES / "privacy_act_excerpt.html", "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def privacy_act():
    return ActIndexEntry(
        id="privacy-act-1988",
        title="Privacy Act 1988",
        year=1988,
        title_id="C2004A03712",
        url="https://www.legislation.gov.au/C2004A03712/latest/text",
        status="in_force",
    )
