"""Tests for schedule extraction."""

from pipeline.justice.documents import MAX_CONTENT_LENGTH
from pipeline.justice.schedules import (
    extract_schedules,
    find_schedule_blocks,
    heading_ref,
)


def _schedule(label: str, body: str, title: str | None = None) -> str:
    title_html = f'<span class="scheduleTitleText">{title}</span>' if title else ""
    return (
        '<div class="Schedule" id="sched">\n'
        f'<header><h2 class="scheduleLabel" id="h-1">{label}</h2>{title_html}</header>\n'
        f"{body}\n</div>\n"
    )


PRINCIPLES = _schedule(
    "SCHEDULE 1",
    '<p class="SchedHeadL1">1 Principle one — Accountability</p>\n'
    "<p>An organization is responsible for personal information under its control.</p>\n"
    '<p class="SchedHeadL1">2 Principle two — Consent</p>\n'
    "<p>The knowledge and consent of the individual are required.</p>",
    title="Principles Set Out in the National Standard",
)

TRANSITIONAL = _schedule(
    "SCHEDULE",
    "<p>Applications pending on the coming into force are continued.</p>\n"
    '<div class="HistoricalNote">2015, c. 32, s. 4</div>',
    title="Transitional Provisions",
)


class TestScheduleBlocks:
    """Tests for schedule block boundaries."""

    def test_block_ends_at_next_schedule(self) -> None:
        """Each block stops where the next schedule starts."""
        blocks = find_schedule_blocks(PRINCIPLES + TRANSITIONAL)

        assert [b.label for b in blocks] == ["SCHEDULE 1", "SCHEDULE"]
        assert "Applications pending" not in blocks[0].html

    def test_block_ends_at_footer_or_section(self) -> None:
        """Footer and section containers also end a schedule."""
        html = PRINCIPLES + "<footer><p>Date modified: 2024-05-01</p></footer>"
        assert "Date modified" not in find_schedule_blocks(html)[0].html

        html = TRANSITIONAL + "<section><p>Related provisions text</p></section>"
        assert "Related provisions" not in find_schedule_blocks(html)[0].html

    def test_block_runs_to_document_end(self) -> None:
        """Without a terminator the last block runs to the end of the page."""
        html = '<div class="Schedule"><h2 class="scheduleLabel">SCHEDULE 2</h2><p>Tail text'
        blocks = find_schedule_blocks(html)

        assert blocks[0].html.endswith("Tail text")

    def test_unlabelled_schedule_skipped(self) -> None:
        """A block without a scheduleLabel yields nothing."""
        html = '<div class="Schedule"><p>Some content without a label at all.</p></div>'
        assert find_schedule_blocks(html) == []
        assert extract_schedules(html) == []

    def test_label_and_title(self) -> None:
        block = find_schedule_blocks(PRINCIPLES)[0]

        assert block.label == "SCHEDULE 1"
        assert block.title == "Principles Set Out in the National Standard"
        assert block.ref_base == "sched-schedule1"
        assert block.chapter == "SCHEDULE 1 - Principles Set Out in the National Standard"


class TestHeadingRef:
    """Tests for schedule heading reference suffixes."""

    def test_leading_number(self) -> None:
        assert heading_ref("4.1 Principle 1 — Accountability") == "4.1"
        assert heading_ref("2 Principle two — Consent") == "2"

    def test_slug_fallback(self) -> None:
        """Headings without a number use their first 20 characters."""
        assert heading_ref("Amendments to Other Acts") == "Amendments to Other "


class TestExtractSchedules:
    """Tests for extract_schedules."""

    def test_sub_headings_scenario(self) -> None:
        """Two sub-headings yield two provisions, each with only its own content."""
        provisions = extract_schedules(PRINCIPLES)

        assert [p.provision_ref for p in provisions] == ["sched-schedule1-1", "sched-schedule1-2"]
        first, second = provisions
        assert first.section == "1"
        assert first.title == "1 Principle one — Accountability"
        assert "responsible for personal information" in first.content
        assert "Consent" not in first.content
        assert "knowledge and consent" in second.content
        assert "Accountability" not in second.content
        assert first.chapter == "SCHEDULE 1 - Principles Set Out in the National Standard"

    def test_whole_schedule_scenario(self) -> None:
        """A schedule without sub-headings is one provision keyed by its label."""
        provisions = extract_schedules(TRANSITIONAL)

        assert len(provisions) == 1
        provision = provisions[0]
        assert provision.provision_ref == "sched-schedule"
        assert provision.section == "SCHEDULE"
        assert provision.title == "Transitional Provisions"
        assert provision.chapter == "SCHEDULE - Transitional Provisions"
        assert "Applications pending" in provision.content
        assert "2015, c. 32" not in provision.content

    def test_untitled_schedule_uses_label_as_title(self) -> None:
        provisions = extract_schedules(_schedule("SCHEDULE II", "<p>Designated institutions list.</p>"))

        assert provisions[0].title == "SCHEDULE II"
        assert provisions[0].chapter == "SCHEDULE II"
        assert provisions[0].provision_ref == "sched-scheduleii"

    def test_headings_without_numbers_use_slug(self) -> None:
        html = _schedule(
            "SCHEDULE 3",
            '<p class="SchedHeadL1">Amendments to Other Acts</p><p>Text of the amendments.</p>',
        )
        provisions = extract_schedules(html)

        assert provisions[0].provision_ref == "sched-schedule3-Amendments to Other "

    def test_short_schedule_content_dropped(self) -> None:
        """Content must exceed ten characters."""
        html = '<div class="Schedule"><span class="scheduleLabel">S</span>1234567</div>'
        assert extract_schedules(html) == []

    def test_content_capped(self) -> None:
        provisions = extract_schedules(_schedule("SCHEDULE 4", "<p>" + "item " * 3000 + "</p>"))

        assert len(provisions[0].content) == MAX_CONTENT_LENGTH

    def test_duplicate_labels_do_not_collide(self) -> None:
        """Two schedules with the same label still produce unique keys."""
        html = _schedule("SCHEDULE", "<p>First schedule body text.</p>") + _schedule(
            "SCHEDULE", "<p>Second schedule body text.</p>"
        )
        provisions = extract_schedules(html)
        refs = [p.provision_ref for p in provisions]

        assert refs == ["sched-schedule"]
        assert "Second schedule" in provisions[0].content

    def test_document_order(self) -> None:
        provisions = extract_schedules(PRINCIPLES + TRANSITIONAL)

        assert [p.provision_ref for p in provisions] == [
            "sched-schedule1-1",
            "sched-schedule1-2",
            "sched-schedule",
        ]
