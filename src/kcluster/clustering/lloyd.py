"""Single randomized K-means run (Lloyd's iteration).

Implements one clustering attempt:
- k distinct seed points drawn by reservoir sampling
- nearest-centroid assignment, ties to the lowest index
- centroid recomputation that keeps the previous centroid of an
  empty cluster
- a degeneracy guard that discards candidates using fewer than k
  cluster indices
- convergence once two successive canonical assignments are equal
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from kcluster.clustering.interface import ClusteringResult, validate_dataset, validate_k
from kcluster.clustering.metric import DEFAULT_METRIC, Distance, Metric
from kcluster.clustering.relabel import assignment_distance, relabel
from kcluster.utils.seed import SeedLike, make_rng

logger = logging.getLogger(__name__)

ITERATIONS = 30


def sample_indices(n: int, k: int, rng: np.random.Generator) -> NDArray[np.int64]:
    """Draw k distinct indices from ``range(n)`` uniformly (Algorithm R).

    Returns:
        Selected indices in ascending (dataset) order
    """
    reservoir = list(range(k))
    for i in range(k, n):
        j = int(rng.integers(0, i + 1))
        if j < k:
            reservoir[j] = i
    return np.sort(np.array(reservoir, dtype=np.int64))


def closest(
    point: Sequence[Any],
    centroids: Sequence[Sequence[float]],
    distance: Distance,
) -> Tuple[int, float]:
    """Index of and distance to the nearest centroid.

    Linear scan; the first centroid at the minimum distance wins.
    """
    best_index = 0
    best_distance = distance(point, centroids[0])

    for i in range(1, len(centroids)):
        d = distance(point, centroids[i])
        if d < best_distance:
            best_index = i
            best_distance = d

    return best_index, best_distance


def assign_clusters(
    dataset: Sequence[Sequence[Any]],
    values: NDArray[np.float64],
    centroids: NDArray[np.float64],
    metric: Metric,
) -> Tuple[NDArray[np.int64], NDArray[np.float64]]:
    """Assign each point to its nearest centroid.

    Args:
        dataset: Raw points
        values: ``to_value``-converted points (N x D)
        centroids: Centroid matrix (K x D)
        metric: Distance and conversion functions

    Returns:
        Tuple of (assignment, distance of each point to its centroid)
    """
    if metric.vectorized:
        # (N, 1, D) - (1, K, D) -> (N, K)
        diff = values[:, np.newaxis, :] - centroids[np.newaxis, :, :]
        distances = np.einsum("nkd,nkd->nk", diff, diff)
        assignment = np.argmin(distances, axis=1).astype(np.int64)
        return assignment, distances[np.arange(len(values)), assignment]

    assignment = np.empty(len(dataset), dtype=np.int64)
    point_distances = np.empty(len(dataset), dtype=np.float64)
    for i, point in enumerate(dataset):
        assignment[i], point_distances[i] = closest(point, centroids, metric.measure)

    return assignment, point_distances


def compute_centroids(
    values: NDArray[np.float64],
    assignment: NDArray[np.int64],
    previous: NDArray[np.float64],
) -> Tuple[NDArray[np.float64], NDArray[np.bool_]]:
    """Average the points of each cluster.

    A cluster without points keeps its previous centroid.

    Args:
        values: ``to_value``-converted points (N x D)
        assignment: Cluster index per point
        previous: Current centroids (K x D)

    Returns:
        Tuple of (new centroids, mask of empty clusters)
    """
    n_clusters = len(previous)

    sums = np.zeros_like(previous)
    np.add.at(sums, assignment, values)
    counts = np.bincount(assignment, minlength=n_clusters)

    empty = counts == 0
    centroids = previous.copy()
    centroids[~empty] = sums[~empty] / counts[~empty, np.newaxis]

    return centroids, empty


def cluster_once(
    dataset: Sequence[Sequence[Any]],
    k: int,
    metric: Metric = DEFAULT_METRIC,
    rng: SeedLike = None,
    iterations: int = ITERATIONS,
    values: Optional[NDArray[np.float64]] = None,
) -> ClusteringResult:
    """Run one randomized clustering attempt.

    Args:
        dataset: Raw points, all of the same length
        k: Number of clusters, ``1 <= k <= len(dataset)``
        metric: Distance and conversion functions
        rng: Random source used for seeding
        iterations: Refinement iteration budget
        values: Precomputed ``metric.values(dataset)``

    Returns:
        Canonically relabelled clustering result

    Raises:
        InvalidArgument: If the dataset is empty or ragged or k is out of range
    """
    validate_dataset(dataset)
    validate_k(len(dataset), k)
    rng = make_rng(rng)

    if values is None:
        values = metric.values(dataset)

    seeds = sample_indices(len(dataset), k, rng)
    centroids = values[seeds].copy()

    assignment, point_distances = assign_clusters(dataset, values, centroids, metric)
    assignment, centroids = relabel(assignment, centroids)
    result = ClusteringResult(assignment, centroids, point_distances.mean())

    n_discarded = 0
    for iteration in range(1, iterations + 1):
        centroids, empty = compute_centroids(values, result.assignment, result.centroids)
        if empty.any():
            logger.debug(
                f"Iteration {iteration}: clusters {np.flatnonzero(empty).tolist()} "
                f"empty, keeping previous centroids"
            )

        candidate, point_distances = assign_clusters(dataset, values, centroids, metric)

        # Collapsed into fewer than k clusters
        if candidate.max() < k - 1:
            n_discarded += 1
            logger.debug(f"Iteration {iteration}: discarded degenerate candidate")
            continue

        candidate, centroids = relabel(candidate, centroids)
        converged = assignment_distance(result.assignment, candidate) == 0
        result = ClusteringResult(
            candidate,
            centroids,
            point_distances.mean(),
            n_iter=iteration,
            converged=converged,
            n_discarded=n_discarded,
        )

        if converged:
            logger.debug(f"Converged after {iteration} iterations")
            return result

    return dataclasses.replace(result, n_iter=iterations, n_discarded=n_discarded)
