"""kcluster: K-means clustering for arbitrary vector-like data.

A small clustering library built around:
- Lloyd's iteration with pluggable distance and value conversion
- Canonical relabeling so independent runs can be compared
- Min-distance, consensus and elbow restart strategies
"""

from __future__ import annotations

__version__ = "0.1.0"

# Public API exports
from kcluster.clustering import (
    ClusteringResult,
    ElbowKMeansClusterer,
    InvalidArgument,
    KMeansClusterer,
    Metric,
    NotFittedError,
    centroid_distance,
    cluster_once,
    fit,
    fit_unknown_k,
    nearest_centroid,
    point_distance,
    sweep_k,
)
from kcluster.config import ClusterConfig, StrategyType, load_config
from kcluster.utils import make_rng, setup_logger

__all__ = [
    # Version info
    "__version__",
    # Core
    "ClusteringResult",
    "Metric",
    "InvalidArgument",
    "NotFittedError",
    "cluster_once",
    "fit",
    "fit_unknown_k",
    "nearest_centroid",
    "centroid_distance",
    "point_distance",
    "sweep_k",
    # Estimators
    "KMeansClusterer",
    "ElbowKMeansClusterer",
    # Config
    "ClusterConfig",
    "StrategyType",
    "load_config",
    # Utils
    "make_rng",
    "setup_logger",
]
