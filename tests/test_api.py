#!/usr/bin/env python3
"""Public function tests - fit, fit_unknown_k, nearest_centroid and distances."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcluster import (
    ClusterConfig,
    InvalidArgument,
    Metric,
    centroid_distance,
    fit,
    fit_unknown_k,
    nearest_centroid,
    point_distance,
)


class TestFit:
    """Fixed-k clustering through the functional API."""
    
    @pytest.mark.parametrize("strategy", ["min_distance", "max_count"])
    def test_strategies(self, two_blobs, strategy):
        result = fit(two_blobs, 2, strategy=strategy, rng=3)
        sizes = sorted(result.cluster_sizes().values())
        assert sizes == [30, 30]
    
    def test_strategy_overrides_config(self, two_blobs):
        config = ClusterConfig(strategy="max_count", attempts=5)
        a = fit(two_blobs, 3, strategy="min_distance", config=config, rng=1)
        b = fit(two_blobs, 3, config=config.model_copy(update={"strategy": "min_distance"}), rng=1)
        assert np.array_equal(a.assignment, b.assignment)
    
    def test_custom_functions(self):
        words = ["aaa", "aab", "zzz", "zzy", "aba"]
        result = fit(words, 2, to_value=ord, rng=0)
        assert result.assignment.tolist() == [0, 0, 1, 1, 0]
    
    def test_metric_and_functions_conflict(self, two_blobs):
        with pytest.raises(InvalidArgument, match="not both"):
            fit(two_blobs, 2, to_value=float, metric=Metric())
    
    def test_unknown_strategy(self, two_blobs):
        with pytest.raises(InvalidArgument, match="Unknown strategy"):
            fit(two_blobs, 2, strategy="median")
    
    def test_unknown_k(self, two_blobs_high_dim):
        result = fit_unknown_k(two_blobs_high_dim, 2, 6, rng=0)
        assert result.n_clusters == 2


class TestNearestCentroid:
    """Classifying new points against fitted centroids."""
    
    def test_basic(self):
        assert nearest_centroid([1, 1], [[0, 0], [10, 10]]) == 0
        assert nearest_centroid([9, 8], [[0, 0], [10, 10]]) == 1
    
    def test_tie_goes_to_first(self):
        assert nearest_centroid([5, 5], [[0, 0], [10, 10]]) == 0
    
    def test_custom_distance(self):
        # Only the first coordinate matters
        first_axis = lambda p, c: (p[0] - c[0]) ** 2
        assert nearest_centroid([9, 0], [[0, 0], [10, 100]], distance=first_axis) == 1
        assert nearest_centroid([9, 0], [[0, 0], [10, 100]]) == 0
    
    def test_no_centroids(self):
        with pytest.raises(InvalidArgument):
            nearest_centroid([1, 1], [])
    
    def test_dimension_mismatch(self):
        with pytest.raises(InvalidArgument, match="Dimension mismatch"):
            nearest_centroid([1, 1], [[0, 0, 0]])


class TestDistances:
    """Direct access to the distance metric."""
    
    def test_centroid_distance(self):
        assert centroid_distance([1, 2], [0.0, 0.0]) == 5.0
        assert centroid_distance("ab", [97.0, 97.0], to_value=ord) == 1.0
    
    def test_point_distance(self):
        assert point_distance([1, 2], [4, 6]) == 25.0
        assert point_distance("ab", "ba", to_value=ord) == 2.0
    
    def test_dimension_mismatch(self):
        with pytest.raises(InvalidArgument):
            centroid_distance([1, 2], [0.0])
