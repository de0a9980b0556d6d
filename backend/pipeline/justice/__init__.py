"""Justice Laws Website (laws-lois.justice.gc.ca) statute ingestion."""

from pipeline.justice.catalog import KEY_CANADIAN_ACTS, CatalogEntry, LegalStatus
from pipeline.justice.fetcher import JusticeLawsClient, RequestScheduler
from pipeline.justice.parser import parse_full_text_html

__all__ = [
    "KEY_CANADIAN_ACTS",
    "CatalogEntry",
    "JusticeLawsClient",
    "LegalStatus",
    "RequestScheduler",
    "parse_full_text_html",
]
