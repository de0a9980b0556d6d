"""Plain-text normalization for Justice Laws HTML fragments."""

import re

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

# Bounded entity table: the punctuation and accented Latin letters that show
# up in bilingual federal statutes. Anything else is left verbatim.
ENTITIES: dict[str, str] = {
    "&nbsp;": " ",
    "&#x00A0;": " ",
    "&#160;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&lsquo;": "‘",
    "&rsquo;": "’",
    "&ldquo;": "“",
    "&rdquo;": "”",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "…",
    "&sect;": "§",
    "&eacute;": "é",
    "&Eacute;": "É",
    "&egrave;": "è",
    "&Egrave;": "È",
    "&ecirc;": "ê",
    "&euml;": "ë",
    "&agrave;": "à",
    "&Agrave;": "À",
    "&acirc;": "â",
    "&ccedil;": "ç",
    "&Ccedil;": "Ç",
    "&icirc;": "î",
    "&iuml;": "ï",
    "&ocirc;": "ô",
    "&ucirc;": "û",
    "&ugrave;": "ù",
}

_ENTITY_RE = re.compile("|".join(re.escape(name) for name in ENTITIES))


def decode_entities(text: str) -> str:
    """Decode the fixed entity set in a single pass (no double decoding)."""
    return _ENTITY_RE.sub(lambda m: ENTITIES[m.group(0)], text)


def strip_html(html: str) -> str:
    """Strip tags and decode common entities to plain text.

    Each tag is replaced by a space so adjacent inline elements do not run
    together; whitespace runs are then collapsed and the result trimmed.

    Args:
        html: Any markup fragment.

    Returns:
        Single-line plain text.
    """
    text = _TAG_RE.sub(" ", html)
    text = decode_entities(text)
    return _WHITESPACE_RE.sub(" ", text).strip()
