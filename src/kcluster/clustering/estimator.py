"""Stateful K-means estimators.

Wrap the restart strategies in fit/predict objects that keep the
fitted centroids for classifying new points.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from kcluster.clustering.interface import ClusteringResult, NotFittedError
from kcluster.clustering.lloyd import closest
from kcluster.clustering.metric import DEFAULT_METRIC, Metric, to_raw_centroids
from kcluster.clustering.strategies import ElbowSearch, make_strategy
from kcluster.config.models import ClusterConfig
from kcluster.utils.seed import SeedLike, make_rng

logger = logging.getLogger(__name__)


class Clusterer(ABC):
    """Abstract base class for K-means estimators.

    The random source is created once from ``seed`` and shared by
    every ``fit`` call, so repeated fits on one estimator differ while
    two estimators built with the same seed agree.
    """

    def __init__(
        self,
        metric: Metric = DEFAULT_METRIC,
        config: Optional[ClusterConfig] = None,
        seed: SeedLike = None,
    ):
        """Initialize clusterer.

        Args:
            metric: Distance and conversion functions
            config: Clustering configuration
            seed: Random seed or generator (defaults to ``config.seed``)
        """
        self.metric = metric
        self.config = config if config is not None else ClusterConfig()
        self.rng = make_rng(self.config.seed if seed is None else seed)
        self.fitted_ = False
        self.result_: Optional[ClusteringResult] = None

    @abstractmethod
    def _fit(self, dataset: Sequence[Sequence[Any]]) -> ClusteringResult:
        pass

    def fit(self, dataset: Sequence[Sequence[Any]]) -> ClusteringResult:
        """Fit clustering model.

        Args:
            dataset: Raw points, all of the same length

        Returns:
            Selected clustering result
        """
        self.result_ = self._fit(dataset)
        self.fitted_ = True

        logger.info(
            f"{self.__class__.__name__}: {self.result_.n_clusters} clusters, "
            f"average_distance={self.result_.average_distance:.4f}"
        )
        return self.result_

    def predict(self, points: Sequence[Sequence[Any]]) -> NDArray[np.int64]:
        """Index of the nearest fitted centroid for each point."""
        result = self._require_fitted()
        return np.array(
            [closest(point, result.centroids, self.metric.measure)[0] for point in points],
            dtype=np.int64,
        )

    def fit_predict(self, dataset: Sequence[Sequence[Any]]) -> NDArray[np.int64]:
        """Fit the model and return the assignment of ``dataset``."""
        return self.fit(dataset).assignment

    def raw_centroids(self) -> List[List[Any]]:
        """Fitted centroids converted back to the raw component type."""
        return to_raw_centroids(self._require_fitted().centroids, self.metric.from_value)

    def get_cluster_info(self) -> Dict[str, Any]:
        """Get information about the clustering results."""
        result = self._require_fitted()
        sizes = np.array(list(result.cluster_sizes().values()))

        return {
            "n_clusters": result.n_clusters,
            "average_distance": result.average_distance,
            "n_iterations": result.n_iter,
            "converged": result.converged,
            "cluster_sizes": result.cluster_sizes(),
            "min_cluster_size": int(sizes.min()),
            "max_cluster_size": int(sizes.max()),
        }

    def _require_fitted(self) -> ClusteringResult:
        if not self.fitted_:
            raise NotFittedError("Clusterer must be fitted before use")
        return self.result_


class KMeansClusterer(Clusterer):
    """K-means with a fixed number of clusters."""

    def __init__(
        self,
        n_clusters: int,
        metric: Metric = DEFAULT_METRIC,
        config: Optional[ClusterConfig] = None,
        seed: SeedLike = None,
    ):
        super().__init__(metric, config, seed)
        self.n_clusters = n_clusters
        self.strategy = make_strategy(self.metric, self.config)

    def _fit(self, dataset: Sequence[Sequence[Any]]) -> ClusteringResult:
        return self.strategy.fit(dataset, self.n_clusters, self.rng)


class ElbowKMeansClusterer(Clusterer):
    """K-means choosing k by elbow search over a range."""

    def __init__(
        self,
        min_clusters: int = 2,
        max_clusters: int = 10,
        metric: Metric = DEFAULT_METRIC,
        config: Optional[ClusterConfig] = None,
        seed: SeedLike = None,
    ):
        super().__init__(metric, config, seed)
        self.min_clusters = min_clusters
        self.max_clusters = max_clusters
        self.search = ElbowSearch(self.metric, self.config)

    def _fit(self, dataset: Sequence[Sequence[Any]]) -> ClusteringResult:
        return self.search.fit(dataset, self.min_clusters, self.max_clusters, self.rng)
