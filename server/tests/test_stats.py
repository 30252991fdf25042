"""Tests for VisitorStats."""

from __future__ import annotations

from globe_server.core.stats import VisitorStats


def test_initial_stats():
    snap = VisitorStats().snapshot()
    assert snap["visits_recorded"] == 0
    assert snap["store_errors"] == 0
    assert snap["location_sources"] == {"headers": 0, "centroid": 0, "hash": 0}


def test_record_visits():
    stats = VisitorStats()
    stats.record_visit("headers", persisted=True)
    stats.record_visit("hash", persisted=False)
    stats.record_visit("hash", persisted=True)

    snap = stats.snapshot()
    assert snap["visits_recorded"] == 3
    assert snap["visits_persisted"] == 2
    assert snap["location_sources"] == {"headers": 1, "centroid": 0, "hash": 2}


def test_store_counters():
    stats = VisitorStats()
    stats.record_store_read()
    stats.record_store_error()
    stats.record_store_error()
    stats.record_malformed(3)
    stats.record_served(150)

    snap = stats.snapshot()
    assert snap["store_reads"] == 1
    assert snap["store_errors"] == 2
    assert snap["malformed_entries"] == 3
    assert snap["entries_served"] == 150
