"""Command implementations for the kcluster CLI."""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import List

import numpy as np
from numpy.typing import NDArray

from kcluster.clustering import ElbowSearch, make_strategy, sweep_k
from kcluster.clustering.metric import DEFAULT_METRIC
from kcluster.clustering.sweep import format_sweep
from kcluster.config import ClusterConfig, load_config

logger = logging.getLogger(__name__)


def load_dataset(path: Path, delimiter: str = ",") -> NDArray[np.float64]:
    """Load one point per row from a delimited text file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    
    data = np.loadtxt(path, delimiter=delimiter, dtype=np.float64, ndmin=2)
    logger.info(f"Loaded {data.shape[0]} x {data.shape[1]} points from {path}")
    return data


def resolve_config(args: Namespace) -> ClusterConfig:
    """Merge the optional config file with command-line overrides."""
    overrides: List[str] = []
    for key, attr in (
        ("attempts", "attempts"),
        ("strategy", "strategy"),
        ("seed", "seed"),
        ("n_workers", "workers"),
    ):
        value = getattr(args, attr, None)
        if value is not None:
            overrides.append(f"{key}={value}")
    
    return load_config(args.config, overrides)


def fit_command(args: Namespace, config: ClusterConfig) -> int:
    """Cluster a data file with a fixed k and print the result as JSON."""
    data = load_dataset(args.data, args.delimiter)
    
    result = make_strategy(DEFAULT_METRIC, config).fit(data, args.k)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def auto_command(args: Namespace, config: ClusterConfig) -> int:
    """Cluster a data file choosing k by elbow search."""
    data = load_dataset(args.data, args.delimiter)
    
    result = ElbowSearch(DEFAULT_METRIC, config).fit(data, args.min_k, args.max_k)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def sweep_command(args: Namespace, config: ClusterConfig) -> int:
    """Print average distance and timing for every k in a range."""
    data = load_dataset(args.data, args.delimiter)
    
    rows = sweep_k(data, args.max_k, args.min_k, DEFAULT_METRIC, config)
    print(format_sweep(rows))
    return 0
