"""Test provision and definition extraction on a compilation excerpt."""

import pytest

from leg2json.core import parse_act_html


@pytest.fixture
def parsed(privacy_html, privacy_act):
    return parse_act_html(privacy_html, privacy_act)


class TestProvisionExtraction:
    """Modern ActHead compilation with a legacy Heading9 tail."""

    def test_provision_refs_in_document_order(self, parsed):
        assert [p.provision_ref for p in parsed.provisions] == ["s1", "s6", "s6A", "s20A", "s3LA", "s476.2"]
        assert parsed.provision_count == 6

    def test_chapters(self, parsed):
        chapters = {p.provision_ref: p.chapter for p in parsed.provisions}
        assert chapters == {
            "s1": "Part I — Preliminary",
            "s6": "Part I — Preliminary",
            "s6A": "Part I — Preliminary > Division 1 — Application",
            "s20A": "Part IIIA — Credit reporting",
            "s3LA": "Schedule 1 — Australian Privacy Principles",
            "s476.2": "Schedule 1 — Australian Privacy Principles",
        }

    def test_titles(self, parsed):
        assert parsed.get_provision("1").title == "Short title"
        assert parsed.get_provision("s6").title == "Interpretation"
        assert parsed.get_provision("3LA").title == "Person with knowledge of a computer"
        assert parsed.get_provision("476.2").title == "Meaning of unauthorised access"

    def test_content(self, parsed):
        assert parsed.get_provision("1").content == "This Act may be cited as the Privacy Act 1988 ."
        assert parsed.get_provision("6A").content == (
            "(1) An act or practice breaches an Australian Privacy Principle if it contravenes that principle."
        )
        assert parsed.get_provision("20A").content == (
            "(1) This Division applies to credit reporting bodies. Penalty: 500 penalty units."
        )
        assert parsed.get_provision("3LA").content == (
            "(a) a person who has relevant knowledge of the computer system; "
            "Item text here for the legacy format."
        )

    def test_interpretation_content(self, parsed):
        content = parsed.get_provision("6").content
        assert content.startswith("(1) In this Act, unless the contrary intention appears: agency has")
        assert content.endswith("Note: The definition is broad & technology-neutral.")
        assert "\xa0" not in content

    def test_unclassed_body_uses_whole_text(self, parsed):
        assert parsed.get_provision("476.2").content == (
            "Access to data held in a computer is unauthorised if the person is not entitled to cause it."
        )

    def test_skipped_sections(self, parsed):
        # 20B has no real content; the schedule's section 1 repeats s1
        assert parsed.get_provision("20B") is None
        assert "Open and transparent" not in parsed.to_json()
        assert "unnumbered heading" not in parsed.to_json()


class TestDefinitionExtraction:
    def test_terms(self, parsed):
        assert [d.term for d in parsed.definitions] == [
            "agency",
            "APP entity",
            "Commissioner",
            "personal information",
        ]
        assert {d.source_provision for d in parsed.definitions} == {"s6"}

    def test_definition_text(self, parsed):
        by_term = {d.term: d.definition for d in parsed.definitions}
        assert by_term["agency"] == "agency has the meaning given by section 6(1A)."
        assert by_term["Commissioner"] == (
            "Commissioner means the Information Commissioner within the meaning of the "
            "Australian Information Commissioner Act 2010 ."
        )
