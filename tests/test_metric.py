#!/usr/bin/env python3
"""Metric tests - default squared Euclidean distance and custom conversions."""

import dataclasses
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcluster.clustering.metric import (
    DEFAULT_METRIC,
    Metric,
    squared_euclidean,
    to_raw_centroids,
)


class TestDefaultMetric:
    """Default metric casts components and sums squared differences."""
    
    def test_squared_euclidean(self):
        assert squared_euclidean([1, 2], [0.0, 0.0]) == 5.0
        assert squared_euclidean([3, 4, 5], [3.0, 4.0, 5.0]) == 0.0
    
    def test_non_negative_and_zero_only_on_identity(self):
        rng = np.random.default_rng(0)
        for _ in range(20):
            point = rng.integers(0, 255, size=4)
            centroid = rng.normal(size=4) * 100
            assert DEFAULT_METRIC.measure(point, centroid) > 0
            assert DEFAULT_METRIC.measure(point, point.astype(float)) == 0
    
    def test_default_metric_is_vectorized(self):
        assert DEFAULT_METRIC.vectorized
        assert not Metric(distance=lambda p, c: 0.0).vectorized
    
    def test_values_matrix(self):
        values = DEFAULT_METRIC.values([b"\x00\x10", b"\xff\x01"])
        assert values.dtype == np.float64
        assert values.tolist() == [[0.0, 16.0], [255.0, 1.0]]


class TestCustomMetric:
    """Custom conversions flow through the default distance."""
    
    def test_to_value_used_by_default_distance(self):
        metric = Metric(to_value=ord)
        assert metric.measure("ab", [97.0, 97.0]) == 1.0
        assert metric.vectorized
    
    def test_custom_distance(self):
        manhattan = Metric(distance=lambda p, c: float(sum(abs(a - b) for a, b in zip(p, c))))
        assert manhattan.measure([1, 2], [0.0, 0.0]) == 3.0
    
    def test_point_distance_converts_other_point(self):
        metric = Metric(to_value=ord)
        assert metric.point_distance("aa", "ac") == 4.0
    
    def test_replaced_conversion_reaches_default_distance(self):
        metric = dataclasses.replace(Metric(), to_value=ord)
        assert metric.vectorized
        assert metric.measure("ab", [97.0, 97.0]) == 1.0
    
    def test_custom_distance_disables_batching(self):
        metric = dataclasses.replace(DEFAULT_METRIC, distance=lambda p, c: 0.0)
        assert not metric.vectorized
        assert metric.measure([5, 5], [0.0, 0.0]) == 0.0
    
    def test_to_raw_centroids(self):
        centroids = np.array([[0.4, 1.6], [254.5, 97.2]])
        assert to_raw_centroids(centroids) == [[0, 2], [254, 97]]
        assert to_raw_centroids(centroids, lambda v: chr(int(round(v)))) == [
            [chr(0), chr(2)], [chr(254), "a"]
        ]
