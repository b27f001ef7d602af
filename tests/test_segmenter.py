"""Test splitting of register XHTML into numbered sections."""

import pytest

from leg2json.segmenter import parse_section_heading, split_into_sections


class TestParseSectionHeading:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("6 Interpretation", ("6", "Interpretation")),
            ("2A Objects of this Act", ("2A", "Objects of this Act")),
            ("476.2 Meaning of unauthorised access", ("476.2", "Meaning of unauthorised access")),
            ("3LA Person with knowledge of a computer", ("3LA", "Person with knowledge of a computer")),
            ("100.1.2 Nested numbering", ("100.1.2", "Nested numbering")),
        ],
    )
    def test_number_forms(self, text, expected):
        assert parse_section_heading(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["—Schedule—", "Notes to the Privacy Act 1988", "6", "", "A1 Lettered first"],
    )
    def test_unnumbered_headings(self, text):
        assert parse_section_heading(text) is None


class TestSplitIntoSections:
    def test_body_runs_to_next_heading_of_any_level(self):
        html = (
            '<p class="ActHead5">1  First</p><p class="subsection">one</p>'
            '<p class="ActHead7">Sub-heading</p><p class="subsection">after</p>'
            '<p class="ActHead5">2  Second</p><p class="subsection">two</p>'
        )
        first, second = split_into_sections(html)
        assert first.body_html == '<p class="subsection">one</p>'
        assert html[first.body_start:first.body_end] == first.body_html
        assert second.body_html == '<p class="subsection">two</p>'
        assert second.body_end == len(html)

    def test_context_snapshot(self):
        html = (
            '<p class="ActHead5">1  Before any part</p>'
            '<p class="ActHead2">Part 1—Preliminary</p>'
            '<p class="ActHead5">2  In part</p>'
            '<p class="ActHead3">Division 1—General</p>'
            '<p class="ActHead5">3  In division</p>'
            '<p class="ActHead2">Part 2—Offences</p>'
            '<p class="ActHead5">4  Division reset</p>'
        )
        chapters = [s.chapter for s in split_into_sections(html)]
        assert chapters == [
            None,
            "Part 1—Preliminary",
            "Part 1—Preliminary > Division 1—General",
            "Part 2—Offences",
        ]

    def test_malformed_heading_is_skipped_silently(self):
        html = (
            '<p class="ActHead5">1  First</p><p class="subsection">one</p>'
            '<p class="ActHead5">—Schedule—</p><p class="subsection">orphan text</p>'
        )
        sections = split_into_sections(html)
        assert [s.number for s in sections] == ["1"]
        # The malformed heading still ends the previous body
        assert "orphan" not in sections[0].body_html

    def test_legacy_nine_is_a_section(self):
        html = '<p class="Heading2">Part 1</p><p class="Heading9">3LA  Person</p><p class="indenta">text</p>'
        (section,) = split_into_sections(html)
        assert section.number == "3LA"
        assert section.title == "Person"
        assert section.chapter == "Part 1"

    def test_positions_follow_document_order(self, privacy_html):
        sections = split_into_sections(privacy_html)
        assert [s.number for s in sections] == ["1", "6", "6A", "20A", "20B", "1", "3LA", "476.2"]
        positions = [s.position for s in sections]
        assert positions == sorted(positions)

    def test_no_headings(self):
        assert split_into_sections("<p class='subsection'>text</p>") == []
        assert split_into_sections("") == []
