"""Catalogue of key federal acts for ingestion.

``title_id`` is the register identifier used by the OData API; ``url`` is the
human-readable register page.
"""

from typing import List, Optional

from leg2json.models import ActIndexEntry


def _act(id: str, title: str, year: int, title_id: str) -> ActIndexEntry:
    return ActIndexEntry(
        id=id,
        title=title,
        year=year,
        title_id=title_id,
        url=f"https://www.legislation.gov.au/{title_id}/latest/text",
        status="in_force",
    )


KEY_AUSTRALIAN_ACTS: List[ActIndexEntry] = [
    _act("privacy-act-1988", "Privacy Act 1988", 1988, "C2004A03712"),
    _act("soci-act-2018", "Security of Critical Infrastructure Act 2018", 2018, "C2018A00029"),
    _act("cybercrime-act-2001", "Cybercrime Act 2001", 2001, "C2004A00937"),
    _act("electronic-transactions-act-1999", "Electronic Transactions Act 1999", 1999, "C2004A00553"),
    _act("telecommunications-act-1997", "Telecommunications Act 1997", 1997, "C2004A05145"),
    _act("criminal-code-act-1995", "Criminal Code Act 1995", 1995, "C2004A04868"),
    _act("spam-act-2003", "Spam Act 2003", 2003, "C2004A01214"),
    _act("surveillance-devices-act-2004", "Surveillance Devices Act 2004", 2004, "C2004A01387"),
    _act("corporations-act-2001", "Corporations Act 2001", 2001, "C2004A00818"),
    _act("cca-2010", "Competition and Consumer Act 2010", 2010, "C2004A00109"),
]


def get_act(act_id: str) -> Optional[ActIndexEntry]:
    """Find a catalogue entry by document id or register title id."""
    for act in KEY_AUSTRALIAN_ACTS:
        if act_id in (act.id, act.title_id):
            return act
    return None
