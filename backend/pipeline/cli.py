"""CLI for running the Canadian federal statute ingestion pipeline."""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path

from pipeline.justice.catalog import (
    KEY_CANADIAN_ACTS,
    Provenance,
    get_catalog_entry,
    resolve_act_id,
)
from pipeline.justice.citations import CITATION_STYLES, cite_provision
from pipeline.justice.fetcher import JusticeLawsClient
from pipeline.justice.ingestion import IngestionService, read_seed
from pipeline.justice.parser import parse_full_text_html

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)-5.5s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

CURRENT_TO_RE = re.compile(r"Current to (\d{4}-\d{2}-\d{2})")


def _resolve_or_log(query: str) -> str | None:
    act_id = resolve_act_id(query)
    if act_id is None:
        logger.error(f"Unknown act: {query}")
    return act_id


async def ingest_command(
    limit: int | None,
    skip_fetch: bool,
    source_dir: Path,
    seed_dir: Path,
    resolve_definitions: bool = False,
) -> int:
    """Fetch and parse catalog Acts into seed files, then print the report.

    Returns:
        0 if every Act succeeded (or was cached), 1 otherwise.
    """
    from app.config import settings

    acts = KEY_CANADIAN_ACTS[:limit] if limit else KEY_CANADIAN_ACTS
    logger.info("Source:  Justice Laws Website (laws-lois.justice.gc.ca)")
    logger.info("Method:  FullText.html (structured HTML)")
    logger.info("License: Open Government Licence - Canada")

    service = IngestionService(
        JusticeLawsClient.from_settings(),
        source_dir=source_dir,
        seed_dir=seed_dir,
        language=settings.default_language,
        resolve_definition_sources=resolve_definitions,
    )
    report = await service.ingest(acts, skip_fetch=skip_fetch)

    print()
    print(report.format_table())
    return 1 if report.failed else 0


def parse_command(act_ref: str, html_path: Path, resolve_definitions: bool = False) -> int:
    """Parse a saved FullText.html page and print a summary."""
    act_id = _resolve_or_log(act_ref)
    if act_id is None:
        return 1
    act = get_catalog_entry(act_id)

    if not html_path.exists():
        logger.error(f"File not found: {html_path}")
        return 1

    parsed = parse_full_text_html(
        html_path.read_text(encoding="utf-8"),
        act,
        resolve_definition_sources=resolve_definitions,
    )

    print(f"\n{parsed.short_name}: {parsed.title}")
    print(f"  {parsed.title_fr}")
    print(f"  Description: {parsed.description}")
    print(f"  Section anchors: {parsed.anchor_count}")
    print(f"  Sections: {parsed.section_count}")
    print(f"  Provisions: {len(parsed.provisions)}")
    print(f"  Definitions: {len(parsed.definitions)}")

    if parsed.provisions:
        print("\n  First 5 provisions:")
        for provision in parsed.provisions[:5]:
            print(f"    {provision.provision_ref}: {provision.title or '(untitled)'}")

    if parsed.anchor_count == 0:
        logger.warning("No section anchors found; page layout not recognized")
    return 0


def show_command(act_ref: str, provision_ref: str, seed_dir: Path, style: str) -> int:
    """Print one provision from a seed file with its citation."""
    act_id = _resolve_or_log(act_ref)
    if act_id is None:
        return 1

    seed_file = seed_dir / f"{act_id}.json"
    if not seed_file.exists():
        logger.error(f"No seed for {act_id}. Run ingest first.")
        return 1

    seed = read_seed(seed_file)
    provision = seed.get_provision(provision_ref)
    if provision is None:
        logger.error(f"{provision_ref} not found in {act_id}")
        return 1

    print(cite_provision(provision.to_parsed(), seed.short_name, style))
    if provision.chapter:
        print(f"  {provision.chapter}")
    if provision.title:
        print(f"  {provision.title}")
    print()
    print(provision.content)

    current_to = CURRENT_TO_RE.search(seed.description or "")
    print()
    print(Provenance(freshness=current_to.group(1) if current_to else None).format_block())
    return 0


def catalog_command() -> int:
    """List the catalog of Acts."""
    for act in KEY_CANADIAN_ACTS:
        print(f"{act.id:<25} {act.act_path:<8} {act.status.value:<10} {act.short_name}")
    return 0


def main() -> int:
    """Main entry point for CLI."""
    from app.config import settings

    parser = argparse.ArgumentParser(description="Canadian federal statute ingestion CLI")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Ingest command
    ingest_parser = subparsers.add_parser("ingest", help="Fetch and parse catalog Acts")
    ingest_parser.add_argument(
        "--limit",
        type=int,
        help="Only process the first N Acts",
    )
    ingest_parser.add_argument(
        "--skip-fetch",
        action="store_true",
        help="Reuse cached seeds and source pages",
    )
    ingest_parser.add_argument(
        "--source-dir",
        type=Path,
        default=settings.source_dir,
        help=f"Source page directory (default: {settings.source_dir})",
    )
    ingest_parser.add_argument(
        "--seed-dir",
        type=Path,
        default=settings.seed_dir,
        help=f"Seed output directory (default: {settings.seed_dir})",
    )
    ingest_parser.add_argument(
        "--resolve-definitions",
        action="store_true",
        help="Attribute definitions to their containing section instead of s. 2",
    )

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse a saved FullText.html page")
    parse_parser.add_argument("act_id", help="Catalog ID, chapter or title (e.g., pipeda, P-8.6, PIPEDA)")
    parse_parser.add_argument("html_file", type=Path, help="Path to the HTML page")
    parse_parser.add_argument(
        "--resolve-definitions",
        action="store_true",
        help="Attribute definitions to their containing section instead of s. 2",
    )

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a provision from a seed file")
    show_parser.add_argument("act_id", help="Catalog ID, chapter or title (e.g., pipeda, P-8.6, PIPEDA)")
    show_parser.add_argument("provision_ref", help="Provision reference (e.g., s5)")
    show_parser.add_argument(
        "--seed-dir",
        type=Path,
        default=settings.seed_dir,
        help=f"Seed directory (default: {settings.seed_dir})",
    )
    show_parser.add_argument(
        "--style",
        choices=CITATION_STYLES,
        default="full",
        help="Citation style (default: full)",
    )

    # Catalog command
    subparsers.add_parser("catalog", help="List catalog Acts")

    args = parser.parse_args()

    if args.command == "ingest":
        return asyncio.run(
            ingest_command(
                limit=args.limit,
                skip_fetch=args.skip_fetch,
                source_dir=args.source_dir,
                seed_dir=args.seed_dir,
                resolve_definitions=args.resolve_definitions,
            )
        )

    elif args.command == "parse":
        return parse_command(args.act_id, args.html_file, args.resolve_definitions)

    elif args.command == "show":
        return show_command(args.act_id, args.provision_ref, args.seed_dir, args.style)

    elif args.command == "catalog":
        return catalog_command()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
