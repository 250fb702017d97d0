from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_endpoint
from reachability_monitor.aggregator import summarize
from reachability_monitor.catalog import group_by_category, load_catalog
from reachability_monitor.config import ENDPOINTS
from reachability_monitor.handlers import ConsoleResultHandler
from reachability_monitor.models import CheckResult, ConnectivityStatus

_TS = datetime(2026, 2, 21, 12, 39, 8, tzinfo=timezone.utc)


def _result(endpoint_id: str, status: ConnectivityStatus, latency: int = 0) -> CheckResult:
    return CheckResult(endpoint_id, status, latency, _TS)


def test_bundled_catalog_loads_in_order_with_unique_ids() -> None:
    catalog = load_catalog(ENDPOINTS)

    assert [d.id for d in catalog] == [e["id"] for e in ENDPOINTS]
    assert len({d.id for d in catalog}) == len(catalog)
    assert catalog[1].description == "Google Advanced AI"
    assert catalog[0].icon_url is None


def test_load_catalog_rejects_duplicate_ids() -> None:
    entries = [
        {"id": "a", "name": "A", "url": "https://a.example.com", "category": "Dev"},
        {"id": "a", "name": "A again", "url": "https://a2.example.com", "category": "Dev"},
    ]
    with pytest.raises(ValueError, match="duplicate"):
        load_catalog(entries)


def test_load_catalog_rejects_missing_fields() -> None:
    with pytest.raises(ValueError, match="url"):
        load_catalog([{"id": "a", "name": "A", "category": "Dev"}])


def test_load_catalog_keeps_malformed_urls_for_the_prober_to_report() -> None:
    catalog = load_catalog([{"id": "a", "name": "A", "url": "nope", "category": "Dev", "icon_url": ""}])

    assert catalog[0].url == "nope"
    assert catalog[0].icon_url is None


def test_group_by_category_uses_display_order() -> None:
    catalog = [
        make_endpoint("gh", category="Dev"),
        make_endpoint("misc", category="Weather"),
        make_endpoint("claude", category="AI"),
        make_endpoint("google", category="Search"),
        make_endpoint("gitlab", category="Dev"),
    ]

    groups = group_by_category(catalog)

    assert list(groups) == ["AI", "Search", "Dev", "Weather"]
    assert [d.id for d in groups["Dev"]] == ["gh", "gitlab"]


def test_summarize_counts_and_averages_only_positive_latencies() -> None:
    snapshot = {
        "a": _result("a", ConnectivityStatus.SUCCESS, 100),
        "b": _result("b", ConnectivityStatus.SUCCESS, 201),
        "c": _result("c", ConnectivityStatus.ERROR),
        "d": _result("d", ConnectivityStatus.TIMEOUT),
        "e": _result("e", ConnectivityStatus.PENDING),
    }

    summary = summarize(snapshot, total=6)

    assert summary.online == 2
    assert summary.offline == 2
    assert summary.pending == 1
    assert summary.avg_latency_ms == 150
    assert summary.total == 6


def test_summarize_empty_store() -> None:
    summary = summarize({})

    assert (summary.total, summary.online, summary.offline, summary.avg_latency_ms) == (0, 0, 0, 0)


def test_pending_placeholder_factory() -> None:
    previous = _result("a", ConnectivityStatus.SUCCESS, 88)

    assert CheckResult.pending("a", previous).latency_ms == 88
    assert CheckResult.pending("a").latency_ms == 0
    assert CheckResult.pending("a").status is ConnectivityStatus.PENDING


@pytest.mark.asyncio
async def test_console_handler_prints_one_line_per_result(capsys) -> None:
    handler = ConsoleResultHandler()

    await handler.handle(make_endpoint("github"), _result("github", ConnectivityStatus.SUCCESS, 182))
    await handler.handle(make_endpoint("gone"), _result("gone", ConnectivityStatus.TIMEOUT))
    await handler.handle_summary(summarize({"github": _result("github", ConnectivityStatus.SUCCESS, 182)}))

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("[2026-02-21T12:39:08Z] Github | ")
    assert "SUCCESS" in lines[0] and "Latency=182ms" in lines[0] and "Category=Dev" in lines[0]
    assert "TIMEOUT" in lines[1] and "Latency=N/A" in lines[1]
    assert "Online=1/1" in lines[2] and "AvgLatency=182ms" in lines[2]
