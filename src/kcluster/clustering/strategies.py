"""Restart selection strategies.

Lloyd's iteration only finds a local optimum that depends on the
random seeds, so every strategy runs it many times and aggregates:

- ``MinDistanceStrategy``: lowest average distance wins
- ``MaxCountStrategy``: the most frequent partition wins, returning
  early once one partition holds an absolute majority
- ``ElbowSearch``: grows k until an extra cluster stops paying off
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from kcluster.clustering.interface import (
    ClusteringResult,
    InvalidArgument,
    RestartStrategy,
    validate_dataset,
)
from kcluster.clustering.lloyd import cluster_once
from kcluster.clustering.metric import DEFAULT_METRIC, Metric
from kcluster.clustering.relabel import assignment_distance
from kcluster.config.models import ClusterConfig, StrategyType
from kcluster.utils.seed import SeedLike, make_rng, spawn_rngs

logger = logging.getLogger(__name__)


def iter_attempt_batches(
    dataset: Sequence[Sequence[Any]],
    k: int,
    rng: np.random.Generator,
    metric: Metric,
    config: ClusterConfig,
) -> Iterator[List[ClusteringResult]]:
    """Run ``config.attempts`` Lloyd attempts, yielding them batch by batch.

    Attempt i always uses the i-th child of ``rng`` and results come
    back in attempt order, whatever the worker count.
    """
    values = metric.values(dataset)
    rngs = spawn_rngs(rng, config.attempts)
    size = config.effective_batch_size
    run = partial(
        cluster_once, dataset, k, metric,
        iterations=config.iterations, values=values,
    )

    if config.n_workers == 1:
        for start in range(0, len(rngs), size):
            yield [run(rng=child) for child in rngs[start:start + size]]
        return

    with ThreadPoolExecutor(max_workers=config.n_workers) as executor:
        for start in range(0, len(rngs), size):
            batch = rngs[start:start + size]
            yield list(executor.map(lambda child: run(rng=child), batch))


class MinDistanceStrategy(RestartStrategy):
    """Keep the attempt with the lowest average distance."""

    def _select(
        self,
        dataset: Sequence[Sequence[Any]],
        k: int,
        rng: np.random.Generator,
    ) -> ClusteringResult:
        results = [
            result
            for batch in iter_attempt_batches(dataset, k, rng, self.metric, self.config)
            for result in batch
        ]
        return self.reduce(results)

    def reduce(self, results: List[ClusteringResult]) -> ClusteringResult:
        """First result with the strictly lowest average distance."""
        best = results[0]
        for attempt, result in enumerate(results):
            logger.debug(
                f"  attempt {attempt}: average_distance={result.average_distance:.4f}"
            )
            if result.average_distance < best.average_distance:
                best = result
        return best


@dataclass
class ClusterCount:
    """A distinct partition and how many attempts produced it."""
    result: ClusteringResult
    count: int = 1


class ConsensusTally:
    """Occurrence counts of distinct canonical assignments."""

    def __init__(self):
        self.entries: List[ClusterCount] = []

    def add(self, result: ClusteringResult) -> ClusterCount:
        """Count ``result`` against an equal partition or start a new entry."""
        for entry in self.entries:
            if assignment_distance(result.assignment, entry.result.assignment) == 0:
                entry.count += 1
                return entry

        entry = ClusterCount(result)
        self.entries.append(entry)
        return entry

    def best(self) -> ClusterCount:
        """Entry with the highest count, first seen on ties."""
        return max(self.entries, key=lambda entry: entry.count)


class MaxCountStrategy(RestartStrategy):
    """Keep the partition found most often (consensus clustering).

    Stops as soon as one partition was found by more than half of the
    attempts. The check runs after each batch, over the batch's
    results in attempt order.
    """

    @property
    def majority(self) -> int:
        """Count a partition must exceed to win outright."""
        return self.config.attempts // 2

    def _select(
        self,
        dataset: Sequence[Sequence[Any]],
        k: int,
        rng: np.random.Generator,
    ) -> ClusteringResult:
        tally = ConsensusTally()
        batches = iter_attempt_batches(dataset, k, rng, self.metric, self.config)
        try:
            for batch in batches:
                winner = self._count(tally, batch)
                if winner is not None:
                    return winner.result
        finally:
            batches.close()

        return self._finish(tally).result

    def reduce(self, results: List[ClusteringResult]) -> ClusteringResult:
        tally = ConsensusTally()
        winner = self._count(tally, results)
        if winner is not None:
            return winner.result
        return self._finish(tally).result

    def _count(
        self,
        tally: ConsensusTally,
        results: List[ClusteringResult],
    ) -> Optional[ClusterCount]:
        for result in results:
            entry = tally.add(result)
            if entry.count > self.majority:
                logger.info(
                    f"Consensus reached: {entry.count} matching attempts "
                    f"out of {self.config.attempts}"
                )
                return entry
        return None

    def _finish(self, tally: ConsensusTally) -> ClusterCount:
        best = tally.best()
        logger.info(
            f"No majority: best partition found {best.count} times "
            f"among {len(tally.entries)} distinct partitions"
        )
        return best


def make_strategy(
    metric: Metric = DEFAULT_METRIC,
    config: Optional[ClusterConfig] = None,
) -> RestartStrategy:
    """Build the restart strategy named by ``config.strategy``."""
    config = config if config is not None else ClusterConfig()

    if config.strategy == StrategyType.MIN_DISTANCE:
        return MinDistanceStrategy(metric, config)
    if config.strategy == StrategyType.MAX_COUNT:
        return MaxCountStrategy(metric, config)
    raise ValueError(f"Unknown strategy: {config.strategy}")


class ElbowSearch:
    """Select k by the elbow of average distance against k.

    Runs consensus clustering for increasing k and stops at the first
    k whose improvement over k - 1 is below ``improve_tolerance``
    times its own average distance, returning the k - 1 result.
    """

    def __init__(
        self,
        metric: Metric = DEFAULT_METRIC,
        config: Optional[ClusterConfig] = None,
    ):
        """Initialize elbow search.

        Args:
            metric: Distance and conversion functions
            config: Attempt budget, tolerance and dispatch settings
        """
        self.config = config if config is not None else ClusterConfig()
        self.strategy = MaxCountStrategy(metric, self.config)
        self.history_: List[Tuple[int, float]] = []

    def fit(
        self,
        dataset: Sequence[Sequence[Any]],
        min_clusters: int,
        max_clusters: int,
        rng: SeedLike = None,
    ) -> ClusteringResult:
        """Search k in ``[min_clusters, max_clusters]``.

        Args:
            dataset: Raw points, all of the same length
            min_clusters: Smallest k considered
            max_clusters: Largest k considered
            rng: Random source; defaults to ``config.seed``

        Returns:
            Result for the selected k

        Raises:
            InvalidArgument: If the range is empty or out of bounds
        """
        validate_dataset(dataset)
        if not 1 <= min_clusters <= max_clusters <= len(dataset):
            raise InvalidArgument(
                f"Cluster range must satisfy 1 <= min <= max <= {len(dataset)}, "
                f"got [{min_clusters}, {max_clusters}]"
            )

        rng = make_rng(self.config.seed if rng is None else rng)
        self.history_ = []

        # Too few candidates for a meaningful elbow
        if max_clusters <= 3:
            logger.info(f"max_clusters={max_clusters} <= 3, clustering at k={max_clusters}")
            return self._run(dataset, max_clusters, rng)

        tolerance = self.config.improve_tolerance
        last = self._run(dataset, min_clusters, rng)

        for k in range(min_clusters + 1, max_clusters + 1):
            current = self._run(dataset, k, rng)
            improvement = last.average_distance - current.average_distance

            if improvement < tolerance * current.average_distance:
                logger.info(
                    f"Elbow at k={k - 1}: improvement {improvement:.4f} < "
                    f"{tolerance:.0%} of {current.average_distance:.4f}"
                )
                return last

            last = current

        logger.info(f"No elbow in [{min_clusters}, {max_clusters}], using k={max_clusters}")
        return last

    def _run(
        self,
        dataset: Sequence[Sequence[Any]],
        k: int,
        rng: np.random.Generator,
    ) -> ClusteringResult:
        result = self.strategy.fit(dataset, k, rng)
        self.history_.append((k, result.average_distance))
        logger.info(f"  k={k:2d}: average_distance={result.average_distance:.4f}")
        return result
