"""Tests for the Justice Laws ingestion driver."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from pipeline.justice.catalog import CatalogEntry, LegalStatus
from pipeline.justice.fetcher import FetchResult
from pipeline.justice.ingestion import (
    IngestionRecord,
    IngestionReport,
    IngestionService,
    read_seed,
)

PAGE = """<html><head><title>Test Act</title></head><body>
<p class="MarginalNote">Short title</p>
<p class="Section"><a class="sectionLabel" id="s-1">1</a> This Act may be cited as the Test Act.</p>
<p class="Section"><a class="sectionLabel" id="s-2">2</a> In this Act,</p>
<p class="Definition"><span class="DefinedTerm"><dfn>Minister</dfn></span> means the Minister of Industry.</p>
</body></html>
"""

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _entry(act_id: str = "test-act", short_name: str = "TA") -> CatalogEntry:
    return CatalogEntry(
        id=act_id,
        act_path="T-0.1",
        title="Test Act",
        title_fr="Loi d'essai",
        short_name=short_name,
        status=LegalStatus.IN_FORCE,
        issued_date="2000-01-01",
        in_force_date="2000-06-01",
        url="https://laws-lois.justice.gc.ca/eng/acts/T-0.1/",
    )


def _result(status: int = 200, body: str = PAGE) -> FetchResult:
    return FetchResult(
        status=status,
        body=body,
        content_type="text/html; charset=utf-8",
        url="https://laws-lois.justice.gc.ca/eng/acts/T-0.1/FullText.html",
    )


def _make_mock_client(*results: FetchResult) -> MagicMock:
    """Create a mock JusticeLawsClient returning the given results in order."""
    client = MagicMock()
    client.fetch_act_full_text = AsyncMock(side_effect=list(results))
    return client


@pytest.fixture
def service_factory(tmp_path):
    def factory(client: MagicMock) -> IngestionService:
        return IngestionService(
            client, source_dir=tmp_path / "source", seed_dir=tmp_path / "seed"
        )

    return factory


# ---------------------------------------------------------------------------
# Tests: IngestionService
# ---------------------------------------------------------------------------


class TestIngestionService:
    """Tests for IngestionService.ingest."""

    @pytest.mark.asyncio
    async def test_fetch_parse_and_seed(self, service_factory) -> None:
        """A fetched page is cached, parsed, and written as a seed file."""
        client = _make_mock_client(_result())
        service = service_factory(client)
        act = _entry()

        report = await service.ingest([act])

        record = report.records[0]
        assert record.status == "OK"
        assert record.provisions == 2
        assert record.definitions == 1
        assert record.warning is None
        client.fetch_act_full_text.assert_awaited_once_with("T-0.1", "eng")

        assert service.source_path(act).read_text(encoding="utf-8") == PAGE
        seed = read_seed(service.seed_path(act))
        assert seed.id == "test-act"
        assert [p.provision_ref for p in seed.provisions] == ["s1", "s2"]
        assert seed.definitions[0].source_provision == "s2"

    @pytest.mark.asyncio
    async def test_seed_json_is_utf8_and_indented(self, service_factory) -> None:
        page = PAGE.replace("Minister of Industry", "ministre de l&rsquo;Industrie")
        service = service_factory(_make_mock_client(_result(body=page)))
        act = _entry()

        await service.ingest([act])

        raw = service.seed_path(act).read_text(encoding="utf-8")
        assert raw.startswith('{\n  "id": "test-act"')
        assert "ministre de l’Industrie" in raw
        assert json.loads(raw)["type"] == "statute"

    @pytest.mark.asyncio
    async def test_http_error_recorded(self, service_factory) -> None:
        service = service_factory(_make_mock_client(_result(status=404, body="")))
        act = _entry()

        report = await service.ingest([act])

        assert report.records[0].status == "HTTP 404"
        assert report.failed == 1
        assert not service.seed_path(act).exists()

    @pytest.mark.asyncio
    async def test_soft_404_skipped(self, service_factory) -> None:
        """A 200 response carrying the not-found page is not seeded."""
        body = "<html><h1>Page not Found</h1></html>"
        service = service_factory(_make_mock_client(_result(body=body)))
        act = _entry()

        report = await service.ingest([act])

        assert report.records[0].status == "soft 404"
        assert not service.source_path(act).exists()
        assert not service.seed_path(act).exists()

    @pytest.mark.asyncio
    async def test_zero_anchor_page_warns(self, service_factory) -> None:
        """An unrecognized layout is seeded with a warning, not a failure."""
        body = "<html><title>Test Act</title><p>Redesigned page</p></html>"
        service = service_factory(_make_mock_client(_result(body=body)))

        report = await service.ingest([_entry()])

        record = report.records[0]
        assert record.status == "OK"
        assert record.provisions == 0
        assert record.warning == "no section anchors found"
        assert report.warnings == [record]
        assert report.failed == 0

    @pytest.mark.asyncio
    async def test_error_does_not_abort_batch(self, service_factory) -> None:
        """One failing Act is recorded and the next Act still runs."""
        client = MagicMock()
        client.fetch_act_full_text = AsyncMock(
            side_effect=[RuntimeError("connection reset"), _result()]
        )
        service = service_factory(client)

        report = await service.ingest([_entry("first", "A1"), _entry("second", "A2")])

        assert [r.status for r in report.records] == ["ERROR: connection reset", "OK"]
        assert report.failed == 1

    @pytest.mark.asyncio
    async def test_skip_fetch_uses_existing_seed(self, service_factory) -> None:
        client = _make_mock_client(_result())
        service = service_factory(client)
        act = _entry()
        await service.ingest([act])

        report = await service.ingest([act], skip_fetch=True)

        record = report.records[0]
        assert record.status == "cached"
        assert record.provisions == 2
        assert record.definitions == 1
        assert report.cached == 1
        assert client.fetch_act_full_text.await_count == 1

    @pytest.mark.asyncio
    async def test_skip_fetch_reparses_cached_source(self, service_factory) -> None:
        """With only the source page cached, it is re-parsed without fetching."""
        client = _make_mock_client()
        service = service_factory(client)
        act = _entry()
        service.source_dir.mkdir(parents=True)
        service.source_path(act).write_text(PAGE, encoding="utf-8")

        report = await service.ingest([act], skip_fetch=True)

        assert report.records[0].status == "OK"
        assert service.seed_path(act).exists()
        client.fetch_act_full_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolve_definition_sources(self, tmp_path) -> None:
        page = PAGE.replace(
            "</body>",
            '<p class="Section"><a class="sectionLabel" id="s-7">7</a> For this section,</p>\n'
            '<p class="Definition"><span class="DefinedTerm"><dfn>record</dfn></span> '
            "includes any document.</p>\n</body>",
        )
        service = IngestionService(
            _make_mock_client(_result(body=page)),
            source_dir=tmp_path / "source",
            seed_dir=tmp_path / "seed",
            resolve_definition_sources=True,
        )
        act = _entry()

        await service.ingest([act])

        seed = read_seed(service.seed_path(act))
        assert [d.source_provision for d in seed.definitions] == ["s2", "s7"]


# ---------------------------------------------------------------------------
# Tests: IngestionReport
# ---------------------------------------------------------------------------


class TestIngestionReport:
    """Tests for report totals and rendering."""

    @pytest.fixture
    def report(self) -> IngestionReport:
        return IngestionReport(
            records=[
                IngestionRecord(act="PIPEDA", status="OK", provisions=80, definitions=12),
                IngestionRecord(act="Privacy Act", status="cached", provisions=100, definitions=20),
                IngestionRecord(act="CASL", status="HTTP 503"),
                IngestionRecord(
                    act="Bank Act", status="OK", warning="no section anchors found"
                ),
            ]
        )

    def test_totals(self, report: IngestionReport) -> None:
        assert report.processed == 4
        assert report.cached == 1
        assert report.failed == 1
        assert report.total_provisions == 180
        assert report.total_definitions == 32
        assert [r.act for r in report.warnings] == ["Bank Act"]

    def test_format_table(self, report: IngestionReport) -> None:
        table = report.format_table()
        lines = table.splitlines()

        assert lines[1] == "INGESTION REPORT"
        assert lines[0] == "=" * 70
        assert any(line.startswith("PIPEDA") and line.endswith("OK") for line in lines)
        assert "OK (no section anchors found)" in table
        assert "  Acts failed:    1" in lines
        assert "  Total provisions:  180" in lines
