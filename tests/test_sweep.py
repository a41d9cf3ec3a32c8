#!/usr/bin/env python3
"""Sweep tests - per-k diagnostics records."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcluster.clustering.interface import InvalidArgument
from kcluster.clustering.sweep import format_sweep, sweep_k
from kcluster.config import ClusterConfig


class TestSweep:
    """One diagnostic row per k."""
    
    def test_rows(self, two_blobs):
        rows = sweep_k(two_blobs, 5, config=ClusterConfig(attempts=5), rng=0)
        
        assert [row.k for row in rows] == [2, 3, 4, 5]
        assert rows[0].relative_improvement is None
        for prev, row in zip(rows, rows[1:]):
            assert row.relative_improvement == pytest.approx(
                1 - row.average_distance / prev.average_distance
            )
            assert row.cumulative_seconds >= prev.cumulative_seconds
        assert all(row.elapsed_seconds >= 0 for row in rows)
    
    def test_format(self, two_blobs):
        rows = sweep_k(two_blobs, 3, min_clusters=1, config=ClusterConfig(attempts=3), rng=0)
        table = format_sweep(rows).splitlines()
        
        assert len(table) == 1 + len(rows)
        assert "avg distance" in table[0]
        assert table[1].split("|")[2].strip() == "-"
    
    def test_invalid_range(self, two_blobs):
        with pytest.raises(InvalidArgument):
            sweep_k(two_blobs, 1, min_clusters=3)
