"""Configuration management with Pydantic validation."""

from __future__ import annotations

from kcluster.config.loader import load_config, save_config
from kcluster.config.models import ClusterConfig, StrategyType
from kcluster.config.utils import compute_config_hash

__all__ = [
    "ClusterConfig",
    "StrategyType",
    "load_config",
    "save_config",
    "compute_config_hash",
]
