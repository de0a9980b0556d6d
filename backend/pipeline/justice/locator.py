"""Locate structural markers in a Justice Laws FullText.html page.

Three independent forward scans over the raw markup collect ordered
(label, offset) markers:

- section anchors:  ``<a class="sectionLabel" id="s-{num}">``
- headings:         ``<h2 class="Part">`` / ``<h3 class="Subheading">``
- marginal notes:   ``<p class="MarginalNote">...title...</p>``

Offsets are character positions in the raw page. Sections are associated
with their chapter and title by nearest-preceding lookup over these lists.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import NamedTuple

from pipeline.justice.text import strip_html

SECTION_ANCHOR_RE = re.compile(r'id="s-(\d+(?:\.\d+)?)">')
HEADING_RE = re.compile(
    r'<h[23][^>]*class="(?:Part|Subheading)"[^>]*>(.*?)</h[23]>', re.IGNORECASE
)
MARGINAL_NOTE_RE = re.compile(
    r'class="MarginalNote"[^>]*>(?:<span[^>]*>Marginal note:</span>)?\s*(.*?)</p>',
    re.IGNORECASE,
)

MARGINAL_NOTE_PLACEHOLDER = "Marginal note:"

# A marginal note further than this many characters before a section anchor
# belongs to something else (or to nothing).
TITLE_PROXIMITY = 2000


class Marker(NamedTuple):
    """A labelled position in the raw page."""

    label: str
    offset: int


def find_section_anchors(html: str) -> list[Marker]:
    """Find section anchors; the label is the section number (e.g. "342.1")."""
    return [Marker(m.group(1), m.start()) for m in SECTION_ANCHOR_RE.finditer(html)]


def find_headings(html: str) -> list[Marker]:
    """Find Part and Division headings."""
    return [Marker(strip_html(m.group(1)), m.start()) for m in HEADING_RE.finditer(html)]


def find_marginal_notes(html: str) -> list[Marker]:
    """Find marginal notes, discarding empty and placeholder-only notes."""
    notes: list[Marker] = []
    for m in MARGINAL_NOTE_RE.finditer(html):
        title = strip_html(m.group(1))
        if title and title != MARGINAL_NOTE_PLACEHOLDER:
            notes.append(Marker(title, m.start()))
    return notes


def _nearest_before(markers: list[Marker], offsets: list[int], offset: int) -> Marker | None:
    """Return the last marker strictly before ``offset``."""
    idx = bisect_left(offsets, offset) - 1
    if idx < 0:
        return None
    return markers[idx]


@dataclass
class StructureMarkers:
    """Marker lists for one page plus nearest-preceding lookups."""

    anchors: list[Marker]
    headings: list[Marker]
    marginal_notes: list[Marker]
    _anchor_offsets: list[int] = field(init=False, repr=False)
    _heading_offsets: list[int] = field(init=False, repr=False)
    _note_offsets: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._anchor_offsets = [m.offset for m in self.anchors]
        self._heading_offsets = [m.offset for m in self.headings]
        self._note_offsets = [m.offset for m in self.marginal_notes]

    def chapter_for(self, offset: int) -> str:
        """Label of the last heading before ``offset``, or "" if none."""
        heading = _nearest_before(self.headings, self._heading_offsets, offset)
        return heading.label if heading else ""

    def title_for(self, offset: int) -> str:
        """Nearest preceding marginal note within TITLE_PROXIMITY, or ""."""
        note = _nearest_before(self.marginal_notes, self._note_offsets, offset)
        if note is None or offset - note.offset >= TITLE_PROXIMITY:
            return ""
        return note.label

    def section_for(self, offset: int) -> str | None:
        """Number of the last section anchor before ``offset``, if any."""
        anchor = _nearest_before(self.anchors, self._anchor_offsets, offset)
        return anchor.label if anchor else None

    def region_end(self, index: int, document_length: int) -> int:
        """End offset (exclusive) of the region opened by anchor ``index``."""
        if index + 1 < len(self.anchors):
            return self.anchors[index + 1].offset
        return document_length


def locate_markers(html: str) -> StructureMarkers:
    """Run the three marker scans over a full page."""
    return StructureMarkers(
        anchors=find_section_anchors(html),
        headings=find_headings(html),
        marginal_notes=find_marginal_notes(html),
    )
