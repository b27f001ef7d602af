"""Test assembly of the normalized act record."""

import pytest

from leg2json.core import convert_to_json, parse_act_html
from leg2json.models import VersionInfo
from leg2json.parser import ActParser, build_description, map_status, parse_australian_html


class TestScenarios:
    def test_interpretation_section_with_definition(self, privacy_act):
        html = (
            '<p class="ActHead2">Part I—Preliminary</p>'
            '<p class="ActHead5">6  Interpretation</p>'
            '<p class="Definition"><b>personal information</b> means information about an identified individual.</p>'
        )
        parsed = parse_australian_html(html, privacy_act)

        assert [p.model_dump() for p in parsed.provisions] == [
            {
                "provision_ref": "s6",
                "chapter": "Part I—Preliminary",
                "section": "6",
                "title": "Interpretation",
                "content": "personal information means information about an identified individual.",
            }
        ]
        assert [d.model_dump() for d in parsed.definitions] == [
            {
                "term": "personal information",
                "definition": "personal information means information about an identified individual.",
                "source_provision": "s6",
            }
        ]

    def test_duplicate_section_keeps_first(self, privacy_act):
        html = (
            '<p class="ActHead5">10  Duplicate</p><p class="subsection">First body text.</p>'
            '<p class="ActHead5">10  Duplicate</p><p class="subsection">Second body text.</p>'
        )
        parsed = parse_australian_html(html, privacy_act)
        assert len(parsed.provisions) == 1
        assert parsed.provisions[0].content == "First body text."
        assert "Second" not in parsed.to_json()

    def test_duplicate_definitions_section_is_not_rescanned(self, privacy_act):
        html = (
            '<p class="ActHead5">2  Definitions</p><p class="Definition"><b>alpha</b> means A.</p>'
            '<p class="ActHead5">2  Definitions</p><p class="Definition"><b>beta</b> means B.</p>'
        )
        parsed = parse_australian_html(html, privacy_act)
        assert [d.term for d in parsed.definitions] == ["alpha"]

    def test_malformed_heading_contributes_nothing(self, privacy_act):
        html = (
            '<p class="ActHead5">—Schedule—</p>'
            '<p class="Definition"><b>term</b> means something substantial.</p>'
        )
        parsed = parse_australian_html(html, privacy_act)
        assert parsed.provisions == []
        assert parsed.definitions == []

    def test_fallback_content(self, privacy_act):
        text = "This section applies to every State and Territory."
        assert len(text) == 50
        parsed = parse_australian_html(f'<p class="ActHead5">3  Application</p><p>{text}</p>', privacy_act)
        assert len(parsed.provisions) == 1
        assert parsed.provisions[0].content == text

    def test_short_fallback_is_dropped(self, privacy_act):
        parsed = parse_australian_html('<p class="ActHead5">3  Application</p><p>Repealed</p>', privacy_act)
        assert parsed.provisions == []

    def test_short_content_is_dropped(self, privacy_act):
        html = '<p class="ActHead5">4  Gone</p><p class="subsection">(1)</p>'
        assert parse_australian_html(html, privacy_act).provisions == []

    def test_duplicate_of_dropped_section_is_also_skipped(self, privacy_act):
        html = (
            '<p class="ActHead5">4  Repealed</p><p>—</p>'
            '<p class="ActHead5">4  Reused number</p><p class="subsection">Later text for four.</p>'
        )
        assert parse_australian_html(html, privacy_act).provisions == []


class TestRecordShape:
    def test_empty_markup_gives_valid_empty_record(self, privacy_act):
        parsed = parse_australian_html("", privacy_act)
        assert parsed.provisions == []
        assert parsed.definitions == []
        assert parsed.to_dict()["type"] == "statute"

    def test_garbage_markup_does_not_raise(self, privacy_act):
        html = '<p class="ActHead5"><<<>>> 6  <p class="Definition"><b></p></b>&#xzz;&'
        parsed = parse_australian_html(html, privacy_act)
        assert isinstance(parsed.provisions, list)

    def test_to_dict_keys(self, privacy_act):
        html = '<p class="ActHead5">1  Short title</p><p class="subsection">This Act may be cited as the Privacy Act.</p>'
        data = parse_australian_html(html, privacy_act).to_dict()
        assert list(data) == [
            "id",
            "type",
            "title",
            "title_in_source_language",
            "short_name",
            "status",
            "issued_date",
            "in_force_date",
            "source_url",
            "description",
            "provisions",
            "definitions",
        ]
        # No part heading, so no chapter key
        assert data["provisions"][0] == {
            "provision_ref": "s1",
            "section": "1",
            "title": "Short title",
            "content": "This Act may be cited as the Privacy Act.",
        }

    def test_deterministic(self, privacy_html, privacy_act):
        first = parse_australian_html(privacy_html, privacy_act).to_json()
        second = parse_australian_html(privacy_html, privacy_act).to_json()
        assert first == second

    def test_parser_instance_can_parse_twice(self, privacy_html, privacy_act):
        parser = ActParser(privacy_html, privacy_act)
        assert parser.parse() == parser.parse()


class TestDatesAndStatus:
    def test_without_version_info(self, privacy_act):
        parsed = parse_australian_html("", privacy_act)
        assert parsed.status == "in_force"
        assert parsed.issued_date == "1988-01-01"
        assert parsed.in_force_date == "1988-01-01"
        assert "Register ID: unknown" in parsed.description
        assert "Compilation number: unknown" in parsed.description

    def test_with_version_info(self, privacy_act):
        info = VersionInfo(
            titleId="C2004A03712",
            status="InForce",
            registerId="C2025C00300",
            start="2025-06-10T00:00:00",
            retrospectiveStart="2025-06-10T00:00:00",
            compilationNumber=101,
            makingDate="1988-12-14T00:00:00",
        )
        parsed = parse_australian_html("", privacy_act, info)
        assert parsed.issued_date == "1988-12-14"
        assert parsed.in_force_date == "2025-06-10"
        assert parsed.description == (
            "Privacy Act 1988 - Australian federal legislation. "
            "Register ID: C2025C00300. Compilation number: 101. "
            "Source: Federal Register of Legislation (legislation.gov.au)."
        )

    def test_partial_version_info_falls_back_per_date(self, privacy_act):
        info = VersionInfo(titleId="C2004A03712", start="2020-03-01T00:00:00")
        parsed = parse_australian_html("", privacy_act, info)
        assert parsed.issued_date == "1988-01-01"
        assert parsed.in_force_date == "2020-03-01"

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("InForce", "in_force"),
            ("Ceased", "repealed"),
            ("Repealed", "repealed"),
            ("NeverEffective", "repealed"),
            ("SomethingNew", "in_force"),
        ],
    )
    def test_status_map(self, status, expected):
        assert map_status(VersionInfo(titleId="C1", status=status), "amended") == expected

    def test_status_defaults_to_descriptor(self, privacy_act):
        assert map_status(None, "not_yet_in_force") == "not_yet_in_force"
        assert map_status(VersionInfo(titleId="C1"), "amended") == "amended"
        repealed = privacy_act.model_copy(update={"status": "repealed"})
        assert parse_australian_html("", repealed).status == "repealed"

    def test_description_keeps_empty_values(self, privacy_act):
        info = VersionInfo(titleId="C2004A03712", registerId="", compilationNumber="")
        description = build_description(privacy_act, info)
        assert "Register ID: . " in description
        assert "Compilation number: . " in description

    def test_description_without_version(self, privacy_act):
        assert build_description(privacy_act, None).startswith("Privacy Act 1988 - Australian federal legislation.")


class TestCore:
    def test_bytes_input(self, privacy_html, privacy_act):
        from_bytes = parse_act_html(privacy_html.encode("utf-8"), privacy_act)
        from_str = parse_act_html(privacy_html, privacy_act)
        assert from_bytes == from_str

    def test_pdf_rejected(self, privacy_act):
        with pytest.raises(ValueError, match="PDF"):
            parse_act_html(b"%PDF-1.7 ...", privacy_act)
        with pytest.raises(ValueError, match="PDF"):
            parse_act_html("  %PDF-1.4", privacy_act)

    def test_convert_to_json(self, privacy_html, privacy_act):
        text = convert_to_json(privacy_html, privacy_act)
        assert text.startswith("{\n  \"id\": \"privacy-act-1988\"")
        assert "Part I — Preliminary" in text
