"""Hand-curated catalog of federal Acts to ingest from the Justice Laws Website."""

import enum
import re
from dataclasses import dataclass

ACT_CHAPTER_RE = re.compile(r"^[A-Z]-[\d.]+$", re.IGNORECASE)


class LegalStatus(str, enum.Enum):
    """Legal status of a statute."""

    IN_FORCE = "in_force"
    AMENDED = "amended"
    REPEALED = "repealed"
    NOT_YET_IN_FORCE = "not_yet_in_force"


@dataclass(frozen=True)
class CatalogEntry:
    """A statute to ingest, independent of any parsed content.

    Attributes:
        id: Internal document ID (e.g., "pipeda").
        act_path: Consolidated Act chapter used in URLs (e.g., "P-8.6").
        title: Official English title.
        title_fr: Official French title.
        short_name: Abbreviation or short title (e.g., "PIPEDA").
        status: Legal status of the Act.
        issued_date: Assent date (ISO 8601).
        in_force_date: Coming-into-force date (ISO 8601).
        url: Canonical English landing page.
    """

    id: str
    act_path: str
    title: str
    title_fr: str
    short_name: str
    status: LegalStatus
    issued_date: str
    in_force_date: str
    url: str


# =============================================================================
# HARDCODED ASSUMPTION: Key federal Acts for privacy, data protection,
# cybersecurity and compliance work.
# Source: https://laws-lois.justice.gc.ca/eng/acts/
#
# The Uniform Electronic Commerce Act (U-0.8) is deliberately absent: it is a
# model act, not a federal statute, and the Justice Laws Website serves a
# 404 page for it.
# =============================================================================
KEY_CANADIAN_ACTS: list[CatalogEntry] = [
    CatalogEntry(
        id="pipeda",
        act_path="P-8.6",
        title="Personal Information Protection and Electronic Documents Act",
        title_fr=(
            "Loi sur la protection des renseignements personnels et les "
            "documents électroniques"
        ),
        short_name="PIPEDA",
        status=LegalStatus.IN_FORCE,
        issued_date="2000-04-13",
        in_force_date="2001-01-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/P-8.6/",
    ),
    CatalogEntry(
        id="privacy-act",
        act_path="P-21",
        title="Privacy Act",
        title_fr="Loi sur la protection des renseignements personnels",
        short_name="Privacy Act",
        status=LegalStatus.IN_FORCE,
        issued_date="1982-07-07",
        in_force_date="1983-07-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/P-21/",
    ),
    CatalogEntry(
        id="casl",
        act_path="E-1.6",
        title=(
            "An Act to promote the efficiency and adaptability of the Canadian "
            "economy by regulating certain activities that discourage reliance "
            "on electronic means of carrying out commercial activities, and to "
            "amend the Canadian Radio-television and Telecommunications "
            "Commission Act, the Competition Act, the Personal Information "
            "Protection and Electronic Documents Act and the Telecommunications "
            "Act"
        ),
        title_fr=(
            "Loi visant à promouvoir l'efficacité et la capacité d'adaptation "
            "de l'économie canadienne"
        ),
        short_name="CASL",
        status=LegalStatus.IN_FORCE,
        issued_date="2010-12-15",
        in_force_date="2014-07-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/E-1.6/",
    ),
    CatalogEntry(
        id="criminal-code",
        act_path="C-46",
        title="Criminal Code",
        title_fr="Code criminel",
        short_name="Criminal Code",
        status=LegalStatus.IN_FORCE,
        issued_date="1985-01-01",
        in_force_date="1985-01-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/C-46/",
    ),
    CatalogEntry(
        id="cbca",
        act_path="C-44",
        title="Canada Business Corporations Act",
        title_fr="Loi canadienne sur les sociétés par actions",
        short_name="CBCA",
        status=LegalStatus.IN_FORCE,
        issued_date="1985-01-01",
        in_force_date="1985-01-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/C-44/",
    ),
    CatalogEntry(
        id="competition-act",
        act_path="C-34",
        title="Competition Act",
        title_fr="Loi sur la concurrence",
        short_name="Competition Act",
        status=LegalStatus.IN_FORCE,
        issued_date="1985-01-01",
        in_force_date="1986-06-19",
        url="https://laws-lois.justice.gc.ca/eng/acts/C-34/",
    ),
    CatalogEntry(
        id="telecommunications-act",
        act_path="T-3.4",
        title="Telecommunications Act",
        title_fr="Loi sur les télécommunications",
        short_name="Telecommunications Act",
        status=LegalStatus.IN_FORCE,
        issued_date="1993-06-23",
        in_force_date="1993-10-25",
        url="https://laws-lois.justice.gc.ca/eng/acts/T-3.4/",
    ),
    CatalogEntry(
        id="bank-act",
        act_path="B-1.01",
        title="Bank Act",
        title_fr="Loi sur les banques",
        short_name="Bank Act",
        status=LegalStatus.IN_FORCE,
        issued_date="1991-12-13",
        in_force_date="1992-06-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/B-1.01/",
    ),
    CatalogEntry(
        id="copyright-act",
        act_path="C-42",
        title="Copyright Act",
        title_fr="Loi sur le droit d'auteur",
        short_name="Copyright Act",
        status=LegalStatus.IN_FORCE,
        issued_date="1985-01-01",
        in_force_date="1985-01-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/C-42/",
    ),
]


def get_catalog_entry(act_id: str) -> CatalogEntry:
    """Look up a catalog entry by its internal ID.

    Raises:
        KeyError: If no entry has that ID.
    """
    for entry in KEY_CANADIAN_ACTS:
        if entry.id == act_id:
            return entry
    raise KeyError(f"Unknown act: {act_id}")


def resolve_act_id(query: str) -> str | None:
    """Resolve a loose Act reference to a catalog ID.

    Tried in order: exact ID ("pipeda"), Act chapter ("P-8.6", "c-46"),
    substring of the title or short name ("PIPEDA", "Privacy Act"), then the
    same substring match ignoring case ("competition").

    Returns:
        The catalog ID, or None if nothing matches.
    """
    query = query.strip()
    if not query:
        return None

    for entry in KEY_CANADIAN_ACTS:
        if entry.id == query:
            return entry.id

    if ACT_CHAPTER_RE.match(query):
        chapter = query.upper()
        for entry in KEY_CANADIAN_ACTS:
            if entry.act_path == chapter:
                return entry.id

    for entry in KEY_CANADIAN_ACTS:
        if query in entry.title or query in entry.short_name:
            return entry.id

    lowered = query.lower()
    for entry in KEY_CANADIAN_ACTS:
        if lowered in entry.title.lower() or lowered in entry.short_name.lower():
            return entry.id

    return None


# Attribution shown alongside any provision text served from the seeds
DATA_SOURCE = "Justice Laws Website (laws-lois.justice.gc.ca) - Department of Justice Canada"
JURISDICTION = "CA"
DISCLAIMER = (
    "This data is sourced from the Justice Laws Website under the Open Government "
    "Licence - Canada. Both English and French texts are official. Always verify "
    "with the official Justice Laws Website portal."
)


@dataclass(frozen=True)
class Provenance:
    """Source attribution for provision text."""

    data_source: str = DATA_SOURCE
    jurisdiction: str = JURISDICTION
    disclaimer: str = DISCLAIMER
    freshness: str | None = None

    def format_block(self) -> str:
        lines = [f"Source: {self.data_source}", f"Jurisdiction: {self.jurisdiction}"]
        if self.freshness:
            lines.append(f"Current to: {self.freshness}")
        lines.append(self.disclaimer)
        return "\n".join(lines)
