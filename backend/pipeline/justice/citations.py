"""Format Canadian statute citations.

Canadian style cites "Section N" in full text and "s. N" in short form.
Only formatting from already-structured parts happens here; free-text
citations are not parsed.
"""

from __future__ import annotations

import re

from pipeline.justice.documents import ParsedProvision
from pipeline.justice.schedules import SCHEDULE_REF_PREFIX

CITATION_STYLES: tuple[str, ...] = ("full", "short", "pinpoint")

SCHEDULE_WORD_RE = re.compile(r"^SCHEDULE\b", re.IGNORECASE)


def format_citation(section: str | None, law: str, style: str = "full") -> str:
    """Format a section citation.

    Examples:
        >>> format_citation("5", "PIPEDA")
        'Section 5 PIPEDA'
        >>> format_citation("342.1", "Criminal Code (R.S.C., 1985, c. C-46)", "short")
        's. 342.1 Criminal Code'
        >>> format_citation("5", "PIPEDA", "pinpoint")
        's. 5'

    Raises:
        ValueError: If ``style`` is not one of CITATION_STYLES.
    """
    if style not in CITATION_STYLES:
        raise ValueError(f"Unknown citation style: {style}")

    law = law.strip()
    if not section:
        return law

    if style == "short":
        return f"s. {section} {law.split('(')[0].strip()}"
    if style == "pinpoint":
        return f"s. {section}"
    return f"Section {section} {law}"


def _schedule_abbreviation(label: str) -> str:
    """Abbreviate a schedule label, e.g. SCHEDULE 1 -> Sch. 1."""
    return SCHEDULE_WORD_RE.sub("Sch.", label, count=1)


def cite_provision(provision: ParsedProvision, law: str, style: str = "full") -> str:
    """Cite a parsed provision; schedule provisions cite their schedule label.

    Examples:
        full:     "SCHEDULE 1, item 4.1, PIPEDA"
        short:    "Sch. 1, item 4.1 PIPEDA"
        pinpoint: "Sch. 1, item 4.1"
    """
    if style not in CITATION_STYLES:
        raise ValueError(f"Unknown citation style: {style}")
    if not provision.provision_ref.startswith(SCHEDULE_REF_PREFIX):
        return format_citation(provision.section, law, style)

    label = provision.chapter.split(" - ")[0] if provision.chapter else provision.section
    item = "" if label == provision.section else f", item {provision.section}"
    law = law.strip()

    if style == "short":
        return f"{_schedule_abbreviation(label)}{item} {law.split('(')[0].strip()}"
    if style == "pinpoint":
        return f"{_schedule_abbreviation(label)}{item}"
    return f"{label}{item}, {law}"
