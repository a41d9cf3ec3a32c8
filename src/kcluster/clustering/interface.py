"""Clustering result record and restart strategy interface.

This module provides the immutable result produced by every
clustering run and the abstract base that restart strategies
implement.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from kcluster.clustering.metric import DEFAULT_METRIC, Metric
from kcluster.config.models import ClusterConfig
from kcluster.utils.seed import SeedLike, make_rng

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """Raised before any iteration when clustering arguments are invalid."""


class NotFittedError(RuntimeError):
    """Raised when an estimator is used before ``fit``."""


def _frozen(array: NDArray) -> NDArray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class ClusteringResult:
    """Result of one clustering run.
    
    Attributes:
        assignment: Cluster index of each point (N,)
        centroids: Cluster centers (K x D); ``centroids[assignment[i]]``
            is the centroid of point i
        average_distance: Mean distance of each point to its centroid
        n_iter: Refinement iterations performed
        converged: Whether two successive assignments matched
        n_discarded: Degenerate candidates discarded during refinement
    """
    assignment: NDArray[np.int64]
    centroids: NDArray[np.float64]
    average_distance: float
    n_iter: int = 0
    converged: bool = False
    n_discarded: int = 0
    
    def __post_init__(self):
        object.__setattr__(
            self, "assignment", _frozen(np.array(self.assignment, dtype=np.int64))
        )
        object.__setattr__(
            self, "centroids", _frozen(np.array(self.centroids, dtype=np.float64, ndmin=2))
        )
        object.__setattr__(self, "average_distance", float(self.average_distance))
    
    @property
    def n_clusters(self) -> int:
        """Number of centroids (k)."""
        return len(self.centroids)
    
    def cluster_sizes(self) -> Dict[int, int]:
        """Number of points assigned to each cluster index."""
        counts = np.bincount(self.assignment, minlength=self.n_clusters)
        return {i: int(c) for i, c in enumerate(counts)}
    
    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view of the result for logging and JSON output."""
        return {
            "n_clusters": self.n_clusters,
            "assignment": self.assignment.tolist(),
            "centroids": self.centroids.tolist(),
            "average_distance": self.average_distance,
            "n_iter": int(self.n_iter),
            "converged": bool(self.converged),
            "n_discarded": int(self.n_discarded),
        }


def validate_dataset(dataset: Sequence[Sequence[Any]]) -> int:
    """Check the dataset is non-empty and rectangular.
    
    Returns:
        Dimensionality of the points
        
    Raises:
        InvalidArgument: If the dataset is empty or ragged
    """
    if dataset is None or len(dataset) == 0:
        raise InvalidArgument("Dataset must contain at least one point")
    
    n_features = len(dataset[0])
    for i, point in enumerate(dataset):
        if len(point) != n_features:
            raise InvalidArgument(
                f"Point {i} has {len(point)} components, expected {n_features}"
            )
    return n_features


def validate_k(n_samples: int, k: int) -> None:
    """Require ``1 <= k <= n_samples``."""
    if not 1 <= k <= n_samples:
        raise InvalidArgument(
            f"Number of clusters must be in [1, {n_samples}], got {k}"
        )


class RestartStrategy(ABC):
    """Abstract base class for restart selection strategies.
    
    A strategy runs the Lloyd iterator ``config.attempts`` times over
    the same dataset and k and reduces the attempts to one result.
    Each attempt draws from its own child generator, so the outcome
    only depends on the seed, never on how attempts are dispatched.
    """
    
    def __init__(
        self,
        metric: Metric = DEFAULT_METRIC,
        config: Optional[ClusterConfig] = None,
    ):
        """Initialize strategy.
        
        Args:
            metric: Distance and conversion functions
            config: Attempt budget, iteration budget and dispatch settings
        """
        self.metric = metric
        self.config = config if config is not None else ClusterConfig()
        self.name = self.__class__.__name__
    
    def fit(
        self,
        dataset: Sequence[Sequence[Any]],
        k: int,
        rng: SeedLike = None,
    ) -> ClusteringResult:
        """Run all attempts and return the selected result.
        
        Args:
            dataset: Raw points, all of the same length
            k: Number of clusters
            rng: Random source; defaults to ``config.seed``
            
        Returns:
            Selected clustering result
        """
        validate_dataset(dataset)
        validate_k(len(dataset), k)
        
        if rng is None:
            rng = self.config.seed
        
        logger.info(
            f"{self.name}: k={k}, n={len(dataset)}, attempts={self.config.attempts}"
        )
        result = self._select(dataset, k, make_rng(rng))
        logger.info(
            f"{self.name}: selected k={k} result, "
            f"average_distance={result.average_distance:.4f}"
        )
        return result
    
    @abstractmethod
    def _select(
        self,
        dataset: Sequence[Sequence[Any]],
        k: int,
        rng: np.random.Generator,
    ) -> ClusteringResult:
        """Run attempts and reduce them to a single result."""
        pass
    
    @abstractmethod
    def reduce(self, results: List[ClusteringResult]) -> ClusteringResult:
        """Select a result from a complete list of attempts."""
        pass
