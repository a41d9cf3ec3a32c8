#!/usr/bin/env python3
"""Canonical relabeling tests - equal partitions must compare equal."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcluster.clustering.interface import InvalidArgument
from kcluster.clustering.relabel import assignment_distance, canonical_mapping, relabel


class TestRelabel:
    """Relabeling renumbers clusters by first appearance."""
    
    def test_first_appearance_order(self):
        labels, _ = relabel([2, 2, 0, 1, 0, 2])
        assert labels.tolist() == [0, 0, 1, 2, 1, 0]
    
    def test_first_point_is_cluster_zero(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            raw = rng.integers(0, 5, size=30)
            labels, _ = relabel(raw)
            assert labels[0] == 0
    
    def test_idempotent(self):
        rng = np.random.default_rng(4)
        for _ in range(20):
            once, _ = relabel(rng.integers(0, 6, size=25))
            twice, _ = relabel(once)
            assert np.array_equal(once, twice)
    
    def test_same_partition_different_numbering(self):
        a, _ = relabel([1, 1, 0, 0, 2])
        b, _ = relabel([0, 0, 2, 2, 1])
        assert assignment_distance(a, b) == 0
    
    def test_centroids_follow_labels(self):
        centroids = np.array([[0.0, 0.0], [10.0, 10.0], [20.0, 20.0]])
        raw = np.array([2, 0, 2, 1])
        labels, permuted = relabel(raw, centroids)
        
        # Each point keeps the same centroid after relabeling
        for old, new in zip(raw, labels):
            assert np.array_equal(centroids[old], permuted[new])
    
    def test_unused_clusters_take_remaining_labels(self):
        mapping = canonical_mapping([3, 3, 1], n_clusters=4)
        assert mapping.tolist() == [2, 1, 3, 0]


class TestAssignmentDistance:
    """Elementwise squared distance between assignments."""
    
    def test_zero_iff_identical(self):
        assert assignment_distance([0, 1, 2], [0, 1, 2]) == 0
        assert assignment_distance([0, 1, 2], [0, 1, 1]) == 1
        assert assignment_distance([0, 0, 0], [2, 0, 1]) == 5
    
    def test_symmetric(self):
        rng = np.random.default_rng(5)
        for _ in range(20):
            a = rng.integers(0, 4, size=15)
            b = rng.integers(0, 4, size=15)
            assert assignment_distance(a, b) == assignment_distance(b, a)
    
    def test_length_mismatch(self):
        with pytest.raises(InvalidArgument, match="differ in length"):
            assignment_distance([0, 1], [0, 1, 1])
