"""K-means clustering with pluggable metrics and restart strategies.

Provides a single-run Lloyd iterator, canonical relabeling of cluster
indices and three ways of aggregating many randomized runs: lowest
distance, consensus and elbow-based selection of k.
"""

from __future__ import annotations

from kcluster.clustering.api import (
    centroid_distance,
    fit,
    fit_unknown_k,
    nearest_centroid,
    point_distance,
)
from kcluster.clustering.estimator import Clusterer, ElbowKMeansClusterer, KMeansClusterer
from kcluster.clustering.interface import (
    ClusteringResult,
    InvalidArgument,
    NotFittedError,
    RestartStrategy,
)
from kcluster.clustering.lloyd import cluster_once
from kcluster.clustering.metric import Metric, squared_euclidean, to_raw_centroids
from kcluster.clustering.relabel import assignment_distance, relabel
from kcluster.clustering.strategies import (
    ElbowSearch,
    MaxCountStrategy,
    MinDistanceStrategy,
    make_strategy,
)
from kcluster.clustering.sweep import KDiagnostic, sweep_k

__all__ = [
    "ClusteringResult",
    "InvalidArgument",
    "NotFittedError",
    "Metric",
    "squared_euclidean",
    "to_raw_centroids",
    "cluster_once",
    "relabel",
    "assignment_distance",
    "RestartStrategy",
    "MinDistanceStrategy",
    "MaxCountStrategy",
    "ElbowSearch",
    "make_strategy",
    "Clusterer",
    "KMeansClusterer",
    "ElbowKMeansClusterer",
    "KDiagnostic",
    "sweep_k",
    "fit",
    "fit_unknown_k",
    "nearest_centroid",
    "centroid_distance",
    "point_distance",
]
