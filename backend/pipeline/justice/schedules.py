"""Extract schedule content as provisions.

Schedules live in ``<div class="Schedule">`` blocks at the end of an Act.
Their closing tags are unreliable, so a schedule's extent is bounded by the
earliest of: the next schedule, a following ``<section``, a following
``<footer``, or the end of the page.

A schedule subdivided by ``<p class="SchedHeadL1">`` headings (e.g. the
PIPEDA Schedule 1 principles) yields one provision per heading; otherwise
the whole schedule becomes a single provision.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pipeline.justice.documents import MAX_CONTENT_LENGTH, MIN_SECTION_LENGTH, ParsedProvision
from pipeline.justice.text import strip_html

logger = logging.getLogger(__name__)

SCHEDULE_START_RE = re.compile(r'<div class="Schedule"[^>]*>', re.IGNORECASE)
SCHEDULE_TERMINATOR_RE = re.compile(r'<div class="Schedule"|<section|<footer', re.IGNORECASE)
SCHEDULE_LABEL_RE = re.compile(r'class="scheduleLabel"[^>]*>([^<]+)<')
SCHEDULE_TITLE_RE = re.compile(r'class="scheduleTitleText"[^>]*>([^<]+)')
SCHEDULE_HEADING_RE = re.compile(r'<p class="SchedHeadL1"[^>]*>(.*?)</p>', re.IGNORECASE)
HISTORICAL_NOTE_RE = re.compile(r'<div class="HistoricalNote">.*?</div>', re.DOTALL)
HEADING_NUMBER_RE = re.compile(r"^(\d+(?:\.\d+)?)\s")

SCHEDULE_REF_PREFIX = "sched-"

# Fallback reference suffix length for headings without a leading number
HEADING_SLUG_LENGTH = 20


@dataclass
class ScheduleBlock:
    """Raw markup of one schedule with its label and optional title."""

    label: str
    title: str
    html: str

    @property
    def ref_base(self) -> str:
        """Reference key for the schedule, e.g. "sched-schedule1"."""
        return SCHEDULE_REF_PREFIX + re.sub(r"\s+", "", self.label.lower())

    @property
    def chapter(self) -> str:
        return f"{self.label} - {self.title}" if self.title else self.label


def find_schedule_blocks(html: str) -> list[ScheduleBlock]:
    """Slice the page into labelled schedule blocks.

    Blocks without a ``scheduleLabel`` are skipped.
    """
    blocks: list[ScheduleBlock] = []

    for m in SCHEDULE_START_RE.finditer(html):
        terminator = SCHEDULE_TERMINATOR_RE.search(html, m.end())
        end = terminator.start() if terminator else len(html)
        block_html = html[m.end() : end]

        label_match = SCHEDULE_LABEL_RE.search(block_html)
        if not label_match:
            logger.debug(f"Skipping unlabelled schedule at offset {m.start()}")
            continue

        title_match = SCHEDULE_TITLE_RE.search(block_html)
        blocks.append(
            ScheduleBlock(
                label=strip_html(label_match.group(1)),
                title=strip_html(title_match.group(1)) if title_match else "",
                html=block_html,
            )
        )

    return blocks


def heading_ref(heading: str) -> str:
    """Reference suffix for a schedule heading.

    "4.1 Principle 1 — Accountability" -> "4.1"; headings without a leading
    number fall back to their first HEADING_SLUG_LENGTH characters.
    """
    match = HEADING_NUMBER_RE.match(heading)
    return match.group(1) if match else heading[:HEADING_SLUG_LENGTH]


def _split_by_headings(block: ScheduleBlock) -> list[ParsedProvision]:
    headings = [(strip_html(m.group(1)), m.start()) for m in SCHEDULE_HEADING_RE.finditer(block.html)]
    provisions: list[ParsedProvision] = []

    for i, (heading, pos) in enumerate(headings):
        next_pos = headings[i + 1][1] if i + 1 < len(headings) else len(block.html)
        content = strip_html(block.html[pos:next_pos])
        if len(content) <= MIN_SECTION_LENGTH:
            continue

        ref = heading_ref(heading)
        provisions.append(
            ParsedProvision(
                provision_ref=f"{block.ref_base}-{ref}",
                chapter=block.chapter,
                section=ref,
                title=heading,
                content=content[:MAX_CONTENT_LENGTH],
            )
        )

    return provisions


def schedule_provisions(block: ScheduleBlock) -> list[ParsedProvision]:
    """Turn one schedule block into provisions."""
    if SCHEDULE_HEADING_RE.search(block.html):
        return _split_by_headings(block)

    content = strip_html(HISTORICAL_NOTE_RE.sub("", block.html))
    if len(content) <= MIN_SECTION_LENGTH:
        return []

    return [
        ParsedProvision(
            provision_ref=block.ref_base,
            chapter=block.chapter,
            section=block.label,
            title=block.title or block.label,
            content=content[:MAX_CONTENT_LENGTH],
        )
    ]


def extract_schedules(html: str) -> list[ParsedProvision]:
    """Extract all schedule provisions in document order.

    A reference key produced twice (e.g. two schedules with the same label)
    keeps its first position and the later body.
    """
    provisions: dict[str, ParsedProvision] = {}
    for block in find_schedule_blocks(html):
        for provision in schedule_provisions(block):
            if provision.provision_ref in provisions:
                logger.warning(f"Duplicate schedule reference {provision.provision_ref}")
            provisions[provision.provision_ref] = provision
    return list(provisions.values())
