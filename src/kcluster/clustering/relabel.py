"""Canonical relabeling of cluster assignments.

Two runs that find the same partition usually number the clusters
differently. Renumbering clusters in order of first appearance gives
a canonical form in which equal partitions have equal assignments,
as long as both runs cover the same points in the same order.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from kcluster.clustering.interface import InvalidArgument


def canonical_mapping(
    assignment: Sequence[int],
    n_clusters: Optional[int] = None,
) -> NDArray[np.int64]:
    """Map each raw cluster index to its canonical label.
    
    Indices are labelled 0, 1, ... in order of first appearance.
    Indices that never appear take the remaining labels in
    ascending order.
    
    Args:
        assignment: Raw cluster index per point
        n_clusters: Number of clusters (defaults to max index + 1)
        
    Returns:
        Array ``mapping`` with ``mapping[raw] == canonical``
    """
    assignment = np.asarray(assignment, dtype=np.int64)
    if n_clusters is None:
        n_clusters = int(assignment.max()) + 1 if assignment.size else 0
    
    mapping = np.full(n_clusters, -1, dtype=np.int64)
    label = 0
    for c in assignment:
        if mapping[c] < 0:
            mapping[c] = label
            label += 1
            if label == n_clusters:
                break
    
    for c in range(n_clusters):
        if mapping[c] < 0:
            mapping[c] = label
            label += 1
    
    return mapping


def relabel(
    assignment: Sequence[int],
    centroids: Optional[NDArray[np.float64]] = None,
) -> Tuple[NDArray[np.int64], Optional[NDArray[np.float64]]]:
    """Rewrite an assignment into canonical form.
    
    Args:
        assignment: Raw cluster index per point
        centroids: Optional centroid matrix (K x D), permuted so that
            row ``mapping[c]`` holds the old row ``c``
            
    Returns:
        Tuple of (canonical assignment, permuted centroids or None)
    """
    assignment = np.asarray(assignment, dtype=np.int64)
    n_clusters = len(centroids) if centroids is not None else None
    mapping = canonical_mapping(assignment, n_clusters)
    
    relabelled = mapping[assignment] if assignment.size else assignment.copy()
    
    if centroids is None:
        return relabelled, None
    
    permuted = np.empty_like(centroids)
    permuted[mapping] = centroids
    return relabelled, permuted


def assignment_distance(lhs: Sequence[int], rhs: Sequence[int]) -> float:
    """Sum of squared elementwise differences of two assignments.
    
    Zero exactly when both sequences are identical.
    
    Raises:
        InvalidArgument: If the sequences differ in length
    """
    lhs = np.asarray(lhs, dtype=np.float64)
    rhs = np.asarray(rhs, dtype=np.float64)
    if lhs.shape != rhs.shape:
        raise InvalidArgument(
            f"Assignments differ in length: {lhs.shape[0]} vs {rhs.shape[0]}"
        )
    diff = lhs - rhs
    return float(np.sum(diff * diff))
