"""Utility functions for kcluster."""

from __future__ import annotations

from kcluster.utils.logging import setup_logger
from kcluster.utils.seed import make_rng, spawn_rngs

__all__ = [
    "setup_logger",
    "make_rng",
    "spawn_rngs",
]
