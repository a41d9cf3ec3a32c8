"""Functional entry points to the clustering core."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from kcluster.clustering.interface import ClusteringResult, InvalidArgument
from kcluster.clustering.lloyd import closest
from kcluster.clustering.metric import Distance, Metric, ToValue, cast_value
from kcluster.clustering.strategies import ElbowSearch, make_strategy
from kcluster.config.models import ClusterConfig, StrategyType
from kcluster.utils.seed import SeedLike


def build_metric(
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    metric: Optional[Metric] = None,
) -> Metric:
    """Use ``metric`` if given, otherwise assemble one from the two functions."""
    if metric is not None:
        if distance is not None or to_value is not None:
            raise InvalidArgument("Pass either a metric or distance/to_value, not both")
        return metric
    return Metric(distance=distance, to_value=to_value or cast_value)


def fit(
    dataset: Sequence[Sequence[Any]],
    k: int,
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    *,
    strategy: Union[str, StrategyType, None] = None,
    metric: Optional[Metric] = None,
    config: Optional[ClusterConfig] = None,
    rng: SeedLike = None,
) -> ClusteringResult:
    """Cluster ``dataset`` into k clusters with restarts.

    Args:
        dataset: Raw points, all of the same length
        k: Number of clusters
        distance: Point-to-centroid distance (squared Euclidean by default)
        to_value: Raw component to float conversion (``float`` by default)
        strategy: ``"min_distance"`` or ``"max_count"``; overrides ``config``
        metric: Prebuilt metric, instead of ``distance``/``to_value``
        config: Clustering configuration
        rng: Seed or generator; defaults to ``config.seed``

    Returns:
        Selected clustering result
    """
    config = config if config is not None else ClusterConfig()
    if strategy is not None:
        try:
            strategy = StrategyType(strategy)
        except ValueError as e:
            raise InvalidArgument(
                f"Unknown strategy: {strategy!r}, expected one of "
                f"{[s.value for s in StrategyType]}"
            ) from e
        config = config.model_copy(update={"strategy": strategy})

    selector = make_strategy(build_metric(distance, to_value, metric), config)
    return selector.fit(dataset, k, rng)


def fit_unknown_k(
    dataset: Sequence[Sequence[Any]],
    min_clusters: int,
    max_clusters: int,
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    *,
    metric: Optional[Metric] = None,
    config: Optional[ClusterConfig] = None,
    rng: SeedLike = None,
) -> ClusteringResult:
    """Cluster ``dataset`` choosing k in ``[min_clusters, max_clusters]``."""
    search = ElbowSearch(build_metric(distance, to_value, metric), config)
    return search.fit(dataset, min_clusters, max_clusters, rng)


def nearest_centroid(
    point: Sequence[Any],
    centroids: Sequence[Sequence[float]],
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    *,
    metric: Optional[Metric] = None,
) -> int:
    """Index of the centroid closest to ``point``, lowest index on ties."""
    if len(centroids) == 0:
        raise InvalidArgument("At least one centroid is required")
    for centroid in centroids:
        _check_dimensions(point, centroid)

    return closest(point, centroids, build_metric(distance, to_value, metric).measure)[0]


def centroid_distance(
    point: Sequence[Any],
    centroid: Sequence[float],
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    *,
    metric: Optional[Metric] = None,
) -> float:
    """Distance between a raw point and a real-valued centroid."""
    _check_dimensions(point, centroid)
    return float(build_metric(distance, to_value, metric).measure(point, centroid))


def point_distance(
    point: Sequence[Any],
    other: Sequence[Any],
    distance: Optional[Distance] = None,
    to_value: Optional[ToValue] = None,
    *,
    metric: Optional[Metric] = None,
) -> float:
    """Distance between two raw points, ``other`` converted through ``to_value``."""
    _check_dimensions(point, other)
    return float(build_metric(distance, to_value, metric).point_distance(point, other))


def _check_dimensions(point: Sequence[Any], other: Sequence[Any]) -> None:
    if len(point) != len(other):
        raise InvalidArgument(
            f"Dimension mismatch: point has {len(point)} components, "
            f"centroid has {len(other)}"
        )
