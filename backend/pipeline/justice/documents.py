"""Parsed statute structures produced by the Justice Laws HTML parser."""

from __future__ import annotations

from dataclasses import dataclass

from pipeline.justice.catalog import LegalStatus

# Content cap per provision, keeps seed rows within storage limits.
MAX_CONTENT_LENGTH = 8000

# Sections whose cleaned text is shorter than this are structurally empty.
MIN_SECTION_LENGTH = 10


@dataclass(frozen=True)
class ParsedProvision:
    """One legally addressable unit of a statute (a section or schedule item).

    Section provisions are keyed ``s{num}`` (e.g. ``s5``, ``s342.1``);
    schedule provisions are keyed ``sched-{label}[-{suffix}]``, so the two
    namespaces never overlap.
    """

    provision_ref: str
    section: str
    title: str
    content: str
    chapter: str | None = None


@dataclass(frozen=True)
class ParsedDefinition:
    """A defined term and its full definition text."""

    term: str
    definition: str
    source_provision: str | None = None


@dataclass(frozen=True)
class ParsedAct:
    """Structured result of parsing one FullText.html page.

    ``provisions`` holds sections in document order followed by schedule
    provisions. ``anchor_count`` is the number of section anchors the page
    declared; zero means the page layout was not recognized.
    """

    id: str
    title: str
    title_en: str
    title_fr: str
    short_name: str
    status: LegalStatus
    issued_date: str
    in_force_date: str
    url: str
    description: str
    provisions: tuple[ParsedProvision, ...] = ()
    definitions: tuple[ParsedDefinition, ...] = ()
    type: str = "statute"
    anchor_count: int = 0

    @property
    def section_count(self) -> int:
        """Number of ordinary (non-schedule) section provisions."""
        return sum(1 for p in self.provisions if not p.provision_ref.startswith("sched-"))

    def get_provision(self, provision_ref: str) -> ParsedProvision | None:
        """Return the provision with the given reference key, if any."""
        for provision in self.provisions:
            if provision.provision_ref == provision_ref:
                return provision
        return None
