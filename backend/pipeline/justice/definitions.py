"""Extract defined terms from ``<p class="Definition">`` elements.

Markup::

    <p class="Definition"><span class="DefinedTerm"><dfn>term</dfn></span> means ...</p>
"""

from __future__ import annotations

import re

from pipeline.justice.documents import ParsedDefinition
from pipeline.justice.locator import StructureMarkers
from pipeline.justice.text import strip_html

DEFINITION_RE = re.compile(r'<p class="Definition"[^>]*>(.*?)</p>', re.IGNORECASE)
DEFINED_TERM_RE = re.compile(r"<dfn>([^<]+)</dfn>")

# Interpretation sections are usually s. 2; every definition is attributed
# there unless the caller asks for per-block resolution.
DEFAULT_SOURCE_PROVISION = "s2"


def extract_definitions(
    html: str,
    source_provision: str = DEFAULT_SOURCE_PROVISION,
    markers: StructureMarkers | None = None,
) -> list[ParsedDefinition]:
    """Extract every definition block on the page, in document order.

    Blocks without a ``<dfn>`` term are skipped. Repeated terms are kept:
    an Act can define the same term in several sections.

    Args:
        html: Full page markup.
        source_provision: Back-reference attached to every definition.
        markers: When given, each definition is attributed to the nearest
            preceding section anchor instead, falling back to
            ``source_provision`` before the first anchor.
    """
    definitions: list[ParsedDefinition] = []

    for m in DEFINITION_RE.finditer(html):
        block = m.group(1)
        term_match = DEFINED_TERM_RE.search(block)
        if not term_match:
            continue

        term = strip_html(term_match.group(1))
        definition = strip_html(block)
        if not term or not definition:
            continue

        source = source_provision
        if markers is not None:
            section = markers.section_for(m.start())
            if section is not None:
                source = f"s{section}"

        definitions.append(
            ParsedDefinition(term=term, definition=definition, source_provision=source)
        )

    return definitions
