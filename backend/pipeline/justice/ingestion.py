"""Ingestion driver: fetch FullText.html pages and write provision seed files.

For each catalog entry the driver fetches (or reuses) the source page,
parses it, and writes ``{seed_dir}/{act.id}.json``. Failures are recorded
per Act and never abort the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from app.schemas.statute import ParsedActSchema
from pipeline.justice.catalog import CatalogEntry
from pipeline.justice.documents import ParsedAct
from pipeline.justice.fetcher import JusticeLawsClient
from pipeline.justice.parser import is_soft_404, parse_full_text_html

logger = logging.getLogger(__name__)


def write_seed(path: Path, act: ParsedAct) -> None:
    """Write a parsed Act as a seed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(ParsedActSchema.from_parsed(act).to_seed_json(), encoding="utf-8")


def read_seed(path: Path) -> ParsedActSchema:
    """Load a seed JSON file."""
    return ParsedActSchema.model_validate_json(path.read_text(encoding="utf-8"))


@dataclass
class IngestionRecord:
    """Outcome for one Act."""

    act: str
    status: str
    provisions: int = 0
    definitions: int = 0
    warning: str | None = None

    @property
    def failed(self) -> bool:
        return self.status not in ("OK", "cached")


@dataclass
class IngestionReport:
    """Per-Act outcomes for one ingestion run."""

    records: list[IngestionRecord] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.records)

    @property
    def cached(self) -> int:
        return sum(1 for r in self.records if r.status == "cached")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.records if r.failed)

    @property
    def warnings(self) -> list[IngestionRecord]:
        return [r for r in self.records if r.warning]

    @property
    def total_provisions(self) -> int:
        return sum(r.provisions for r in self.records)

    @property
    def total_definitions(self) -> int:
        return sum(r.definitions for r in self.records)

    def format_table(self) -> str:
        """Render the report as a fixed-width table."""
        rule = "-" * 70
        lines = [
            "=" * 70,
            "INGESTION REPORT",
            "=" * 70,
            f"{'Act':<25} {'Provisions':<12} {'Definitions':<12} Status",
            rule,
        ]
        for r in self.records:
            status = f"{r.status} ({r.warning})" if r.warning else r.status
            lines.append(f"{r.act:<25} {r.provisions:<12} {r.definitions:<12} {status}")
        lines += [
            rule,
            f"{'TOTAL':<25} {self.total_provisions:<12} {self.total_definitions:<12}",
            "",
            f"  Acts processed: {self.processed}",
            f"  Acts cached:    {self.cached}",
            f"  Acts failed:    {self.failed}",
            f"  Total provisions:  {self.total_provisions}",
            f"  Total definitions: {self.total_definitions}",
        ]
        return "\n".join(lines)


class IngestionService:
    """Fetch, parse and seed a list of catalog entries, one request at a time."""

    def __init__(
        self,
        client: JusticeLawsClient,
        source_dir: Path | str = "data/source",
        seed_dir: Path | str = "data/seed",
        language: str = "eng",
        resolve_definition_sources: bool = False,
    ):
        self.client = client
        self.source_dir = Path(source_dir)
        self.seed_dir = Path(seed_dir)
        self.language = language
        self.resolve_definition_sources = resolve_definition_sources

    def source_path(self, act: CatalogEntry) -> Path:
        return self.source_dir / f"{act.id}.html"

    def seed_path(self, act: CatalogEntry) -> Path:
        return self.seed_dir / f"{act.id}.json"

    async def ingest(
        self, acts: Sequence[CatalogEntry], skip_fetch: bool = False
    ) -> IngestionReport:
        """Ingest each Act in order.

        Args:
            acts: Catalog entries to process.
            skip_fetch: Reuse existing seed files and cached source pages
                instead of hitting the network.

        Returns:
            Report with one record per Act.
        """
        logger.info(f"Processing {len(acts)} federal Acts")
        self.source_dir.mkdir(parents=True, exist_ok=True)
        self.seed_dir.mkdir(parents=True, exist_ok=True)

        report = IngestionReport()
        for act in acts:
            try:
                record = await self.ingest_act(act, skip_fetch=skip_fetch)
            except Exception as e:
                logger.exception(f"Error ingesting {act.short_name}: {e}")
                record = IngestionRecord(act=act.short_name, status=f"ERROR: {e}")
            report.records.append(record)
        return report

    async def ingest_act(self, act: CatalogEntry, skip_fetch: bool = False) -> IngestionRecord:
        """Ingest a single Act and return its report record."""
        seed_file = self.seed_path(act)
        source_file = self.source_path(act)

        if skip_fetch and seed_file.exists():
            existing = read_seed(seed_file)
            logger.info(f"Using cached seed for {act.short_name}")
            return IngestionRecord(
                act=act.short_name,
                status="cached",
                provisions=len(existing.provisions),
                definitions=len(existing.definitions),
            )

        if skip_fetch and source_file.exists():
            logger.info(f"Using cached {act.short_name} ({act.act_path})")
            html = source_file.read_text(encoding="utf-8")
        else:
            logger.info(f"Fetching {act.short_name} ({act.act_path})")
            result = await self.client.fetch_act_full_text(act.act_path, self.language)
            if not result.ok:
                logger.warning(f"HTTP {result.status} for {act.short_name}, skipped")
                return IngestionRecord(act=act.short_name, status=f"HTTP {result.status}")
            if is_soft_404(result.body):
                logger.warning(f"Soft 404 for {act.short_name}, skipped")
                return IngestionRecord(act=act.short_name, status="soft 404")

            html = result.body
            source_file.write_text(html, encoding="utf-8")
            logger.info(f"  {act.short_name}: {len(html) / 1024:.0f} KB")

        parsed = parse_full_text_html(
            html, act, resolve_definition_sources=self.resolve_definition_sources
        )
        write_seed(seed_file, parsed)

        warning = None
        if parsed.anchor_count == 0:
            warning = "no section anchors found"
            logger.warning(f"{act.short_name}: {warning}; page layout not recognized")

        logger.info(
            f"  -> {len(parsed.provisions)} provisions, "
            f"{len(parsed.definitions)} definitions"
        )
        return IngestionRecord(
            act=act.short_name,
            status="OK",
            provisions=len(parsed.provisions),
            definitions=len(parsed.definitions),
            warning=warning,
        )
