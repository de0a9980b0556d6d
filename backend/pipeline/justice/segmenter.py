"""Split a FullText.html page into per-section provisions.

Each section's raw region runs from its anchor to the next anchor (or the
end of the page). Subsections, paragraphs and provision lists between two
anchors all belong to the first one.
"""

import logging
import re

from pipeline.justice.documents import (
    MAX_CONTENT_LENGTH,
    MIN_SECTION_LENGTH,
    ParsedProvision,
)
from pipeline.justice.locator import StructureMarkers
from pipeline.justice.text import strip_html

logger = logging.getLogger(__name__)

# Amendment history, not operative text
HISTORICAL_NOTE_RES = (
    re.compile(r'<div class="HistoricalNote">.*?</div>', re.DOTALL),
    re.compile(r'<ul class="HistoricalNote">.*?</ul>', re.DOTALL),
)
# Already captured as the section title
MARGINAL_NOTE_BLOCK_RE = re.compile(r'<p class="MarginalNote"[^>]*>.*?</p>', re.DOTALL)

# Structural units that leak into a region through loose nesting
LEAKED_HEADING_RE = re.compile(r'<h[23][^>]*class="(?:Part|Subheading)"[^>]*>', re.IGNORECASE)
LEAKED_SCHEDULE_RE = re.compile(r'<div class="Schedule"', re.IGNORECASE)

ANCHOR_RESIDUE_RE = re.compile(r'^\s*id="s-[\d.]+"\s*>\s*')
LEADING_NUMBER_RE = re.compile(r"^\s*\d+(?:\.\d+)?\s+")
TRAILING_TAG_RE = re.compile(r"<[^>]*$")


def _truncate_at(html: str, pattern: re.Pattern[str]) -> str:
    match = pattern.search(html)
    return html[: match.start()] if match else html


def clean_section_html(section_html: str) -> str:
    """Remove notes and cut the region at leaked headings or schedules."""
    for pattern in HISTORICAL_NOTE_RES:
        section_html = pattern.sub("", section_html)
    section_html = MARGINAL_NOTE_BLOCK_RE.sub("", section_html)
    section_html = _truncate_at(section_html, LEAKED_HEADING_RE)
    return _truncate_at(section_html, LEAKED_SCHEDULE_RE)


def section_text(section_html: str, number: str) -> str:
    """Convert a raw section region to its display text.

    The visible number at the start of the text is replaced with the
    anchor's number, which is authoritative when the two drift apart.
    """
    # Cut-off tag at the region end; must go before entities are decoded
    cleaned = TRAILING_TAG_RE.sub("", clean_section_html(section_html))
    text = ANCHOR_RESIDUE_RE.sub("", strip_html(cleaned))
    return LEADING_NUMBER_RE.sub(f"{number} ", text, count=1).strip()


def extract_sections(html: str, markers: StructureMarkers) -> list[ParsedProvision]:
    """Build one provision per section anchor.

    Sections with less than MIN_SECTION_LENGTH characters of text (reserved
    or repealed placeholders) are dropped. Content is capped at
    MAX_CONTENT_LENGTH characters.

    A section number declared twice keeps its first position and the body of
    the last declaration that survived cleanup.
    """
    sections: dict[str, ParsedProvision] = {}

    for i, anchor in enumerate(markers.anchors):
        end = markers.region_end(i, len(html))
        text = section_text(html[anchor.offset : end], anchor.label)

        if len(text) < MIN_SECTION_LENGTH:
            logger.debug(f"Dropping empty section {anchor.label}")
            continue

        sections[anchor.label] = ParsedProvision(
            provision_ref=f"s{anchor.label}",
            chapter=markers.chapter_for(anchor.offset) or None,
            section=anchor.label,
            title=markers.title_for(anchor.offset),
            content=text[:MAX_CONTENT_LENGTH],
        )

    return list(sections.values())
