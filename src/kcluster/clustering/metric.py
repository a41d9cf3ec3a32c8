"""Pluggable distance and value conversion.

A ``Metric`` bundles the two functions the clustering core needs:

- ``distance(point, centroid) -> float`` between a raw point and a
  real-valued centroid
- ``to_value(component) -> float`` converting one raw component into
  centroid space

Raw points can be any sequence (bytes, strings, tuples of ints...);
centroids are always float64 arrays. The two types only meet through
``to_value``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

Distance = Callable[[Sequence[Any], Sequence[float]], float]
ToValue = Callable[[Any], float]
FromValue = Callable[[float], Any]


def cast_value(component: Any) -> float:
    """Default raw-to-value conversion: a direct numeric cast."""
    return float(component)


def round_value(value: float) -> int:
    """Default value-to-raw conversion: round to nearest integer."""
    return int(round(value))


def as_values(point: Sequence[Any], to_value: ToValue = cast_value) -> NDArray[np.float64]:
    """Convert a raw point into a centroid-space vector."""
    return np.fromiter((to_value(c) for c in point), dtype=np.float64, count=len(point))


def squared_euclidean(
    point: Sequence[Any],
    centroid: Sequence[float],
    to_value: ToValue = cast_value,
) -> float:
    """Sum over dimensions of ``(to_value(point[d]) - centroid[d]) ** 2``."""
    diff = as_values(point, to_value) - np.asarray(centroid, dtype=np.float64)
    return float(np.sum(diff * diff))


@dataclass(frozen=True)
class Metric:
    """Distance and conversion functions for one clustering session.
    
    Attributes:
        distance: Point-to-centroid distance. When omitted, squared
            Euclidean distance over ``to_value``-converted components
        to_value: Raw component to float conversion
        from_value: Float back to raw component, used only to express
            centroids in the raw type
    """
    distance: Optional[Distance] = None
    to_value: ToValue = cast_value
    from_value: FromValue = round_value
    
    @property
    def vectorized(self) -> bool:
        """Whether the default distance is in use, so it can be batched."""
        return self.distance is None
    
    def measure(self, point: Sequence[Any], centroid: Sequence[float]) -> float:
        """Distance from a raw point to a centroid."""
        if self.distance is None:
            return squared_euclidean(point, centroid, self.to_value)
        return self.distance(point, centroid)
    
    def values(self, dataset: Sequence[Sequence[Any]]) -> NDArray[np.float64]:
        """Convert every point of ``dataset`` into an (N x D) float matrix."""
        return np.vstack([as_values(point, self.to_value) for point in dataset])
    
    def point_distance(self, point: Sequence[Any], other: Sequence[Any]) -> float:
        """Distance between two raw points, ``other`` acting as centroid."""
        return self.measure(point, as_values(other, self.to_value))


DEFAULT_METRIC = Metric()


def to_raw_centroids(
    centroids: NDArray[np.float64],
    from_value: FromValue = round_value,
) -> list:
    """Express centroids in the raw component type.
    
    Args:
        centroids: Centroid matrix (K x D)
        from_value: Float to raw component conversion
        
    Returns:
        List of K lists of raw components
    """
    return [[from_value(float(v)) for v in row] for row in centroids]
