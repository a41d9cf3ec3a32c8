"""Shared fixtures for kcluster tests."""

import numpy as np
import pytest
from sklearn.datasets import make_blobs


@pytest.fixture
def two_blobs():
    """Two tight 2D blobs around (0, 0) and (100, 100)."""
    X, _ = make_blobs(
        n_samples=60,
        centers=[[0.0, 0.0], [100.0, 100.0]],
        cluster_std=1.0,
        random_state=0,
    )
    return X


@pytest.fixture
def two_blobs_high_dim():
    """Two well separated blobs in 20 dimensions."""
    X, _ = make_blobs(
        n_samples=100,
        centers=[np.zeros(20), np.full(20, 100.0)],
        cluster_std=1.0,
        random_state=1,
    )
    return X
