"""Diagnostic sweep over candidate cluster counts.

Runs the configured restart strategy for every k in a range and
records how average distance and run time evolve, the raw material
for choosing k by eye.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from kcluster.clustering.interface import InvalidArgument, validate_dataset
from kcluster.clustering.metric import DEFAULT_METRIC, Metric
from kcluster.clustering.strategies import make_strategy
from kcluster.config.models import ClusterConfig
from kcluster.utils.seed import SeedLike, make_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KDiagnostic:
    """Outcome of clustering at one k.
    
    Attributes:
        k: Number of clusters
        average_distance: Average distance of the selected result
        relative_improvement: ``1 - d_k / d_{k-1}``; None for the first
            row or when the previous distance was zero
        elapsed_seconds: Wall time spent at this k
        cumulative_seconds: Wall time since the sweep started
    """
    k: int
    average_distance: float
    relative_improvement: Optional[float]
    elapsed_seconds: float
    cumulative_seconds: float
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sweep_k(
    dataset: Sequence[Sequence[Any]],
    max_clusters: int,
    min_clusters: int = 2,
    metric: Metric = DEFAULT_METRIC,
    config: Optional[ClusterConfig] = None,
    rng: SeedLike = None,
) -> List[KDiagnostic]:
    """Cluster at every k in ``[min_clusters, max_clusters]``.
    
    Args:
        dataset: Raw points, all of the same length
        max_clusters: Largest k
        min_clusters: Smallest k
        metric: Distance and conversion functions
        config: Clustering configuration (strategy, attempts...)
        rng: Seed or generator; defaults to ``config.seed``
        
    Returns:
        One diagnostic per k, in increasing k
    """
    validate_dataset(dataset)
    if not 1 <= min_clusters <= max_clusters <= len(dataset):
        raise InvalidArgument(
            f"Cluster range must satisfy 1 <= min <= max <= {len(dataset)}, "
            f"got [{min_clusters}, {max_clusters}]"
        )
    
    config = config if config is not None else ClusterConfig()
    rng = make_rng(config.seed if rng is None else rng)
    strategy = make_strategy(metric, config)
    
    rows: List[KDiagnostic] = []
    start = time.perf_counter()
    last_distance: Optional[float] = None
    
    for k in range(min_clusters, max_clusters + 1):
        k_start = time.perf_counter()
        result = strategy.fit(dataset, k, rng)
        now = time.perf_counter()
        
        distance = result.average_distance
        improvement = None
        if last_distance:
            improvement = 1.0 - distance / last_distance
        
        row = KDiagnostic(
            k=k,
            average_distance=distance,
            relative_improvement=improvement,
            elapsed_seconds=now - k_start,
            cumulative_seconds=now - start,
        )
        rows.append(row)
        
        logger.info(
            f"k={k:2d} | {distance:.4f} ({'-' if improvement is None else f'{improvement:.3f}'})"
            f" | {row.elapsed_seconds:.3f}s ({row.cumulative_seconds:.3f}s)"
        )
        last_distance = distance
    
    return rows


def format_sweep(rows: List[KDiagnostic]) -> str:
    """Render sweep diagnostics as a fixed-width table."""
    lines = [f"{'k':>3} | {'avg distance':>14} | {'improvement':>11} | {'seconds':>9}"]
    for row in rows:
        improvement = "-" if row.relative_improvement is None else f"{row.relative_improvement:.3f}"
        lines.append(
            f"{row.k:>3} | {row.average_distance:>14.4f} | {improvement:>11} | "
            f"{row.elapsed_seconds:>9.3f}"
        )
    return "\n".join(lines)
