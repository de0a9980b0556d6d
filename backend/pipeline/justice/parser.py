"""Parse Justice Laws Website FullText.html pages into structured Act data.

The site serves consolidated federal Acts with a consistent set of CSS
classes:

- Sections:       ``<p class="Section">`` / ``<p class="Section ProvisionList">``
- Section IDs:    ``<a class="sectionLabel" id="s-{num}">``
- Marginal notes: ``<p class="MarginalNote">...title...</p>``
- Definitions:    ``<p class="Definition"><span class="DefinedTerm"><dfn>term</dfn>...``
- Parts:          ``<h2 class="Part">``
- Divisions:      ``<h3 class="Subheading">``
- Schedules:      ``<div class="Schedule">``

There is no schema behind this markup, so structure is recovered from
positions in the raw page rather than from a document tree.
"""

from __future__ import annotations

import logging
import re

from pipeline.justice.catalog import CatalogEntry
from pipeline.justice.definitions import DEFAULT_SOURCE_PROVISION, extract_definitions
from pipeline.justice.documents import ParsedAct
from pipeline.justice.locator import locate_markers
from pipeline.justice.schedules import extract_schedules
from pipeline.justice.segmenter import extract_sections
from pipeline.justice.text import strip_html

logger = logging.getLogger(__name__)

# The site answers 200 for missing Acts; the body is the only reliable signal.
SOFT_404_MARKERS = ("Page not Found", "Error 404")

PAGE_TITLE_RE = re.compile(r"<title>([^<]+)</title>")
CURRENT_TO_RE = re.compile(r"Act current to\s*(\d{4}-\d{2}-\d{2})")


def is_soft_404(html: str) -> bool:
    """Return True if the page body is the site's not-found page."""
    return any(marker in html for marker in SOFT_404_MARKERS)


def extract_description(html: str, act: CatalogEntry) -> str:
    """Describe the Act from the page <title>, or fall back to the catalog title."""
    match = PAGE_TITLE_RE.search(html)
    if match:
        return f"{strip_html(match.group(1))} ({act.short_name})"
    return act.title


def extract_current_to_date(html: str) -> str | None:
    """Return the "Act current to" consolidation date, if the page states one."""
    match = CURRENT_TO_RE.search(html)
    return match.group(1) if match else None


def _empty_act(act: CatalogEntry) -> ParsedAct:
    return ParsedAct(
        id=act.id,
        title=act.title,
        title_en=act.title,
        title_fr=act.title_fr,
        short_name=act.short_name,
        status=act.status,
        issued_date=act.issued_date,
        in_force_date=act.in_force_date,
        url=act.url,
        description=act.title,
    )


def parse_full_text_html(
    html: str,
    act: CatalogEntry,
    *,
    resolve_definition_sources: bool = False,
) -> ParsedAct:
    """Parse a FullText.html page into structured Act data.

    Extracts numbered sections with their Part/Division and marginal-note
    titles, defined terms, and schedule content. A not-found page yields the
    catalog metadata with no provisions or definitions.

    Args:
        html: Raw page text.
        act: Catalog entry the page was fetched for.
        resolve_definition_sources: Attribute each definition to the section
            that contains it instead of the interpretation section (s. 2).

    Returns:
        The parsed Act. Provisions are sections in document order followed
        by schedule provisions.
    """
    if is_soft_404(html):
        logger.warning(f"{act.short_name} returned a 404 page")
        return _empty_act(act)

    description = extract_description(html, act)
    current_to = extract_current_to_date(html)
    if current_to:
        description = f"{description}. Current to {current_to}."

    markers = locate_markers(html)
    sections = extract_sections(html, markers)
    schedules = extract_schedules(html)
    definitions = extract_definitions(
        html,
        DEFAULT_SOURCE_PROVISION,
        markers=markers if resolve_definition_sources else None,
    )

    logger.debug(
        f"Parsed {act.short_name}: {len(markers.anchors)} anchors, "
        f"{len(sections)} sections, {len(schedules)} schedule provisions, "
        f"{len(definitions)} definitions"
    )

    return ParsedAct(
        id=act.id,
        title=act.title,
        title_en=act.title,
        title_fr=act.title_fr,
        short_name=act.short_name,
        status=act.status,
        issued_date=act.issued_date,
        in_force_date=act.in_force_date,
        url=act.url,
        description=description,
        provisions=tuple(sections + schedules),
        definitions=tuple(definitions),
        anchor_count=len(markers.anchors),
    )
