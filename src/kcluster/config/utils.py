"""Configuration utilities including hashing."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Set

# Keys that do not influence clustering output
VOLATILE_KEYS = {
    "n_workers",
    "batch_size",
    "log_level",
}


def compute_config_hash(
    config: Dict[str, Any],
    exclude_keys: Set[str] | None = None,
    hash_length: int = 8,
) -> str:
    """Compute deterministic hash of configuration.
    
    Worker count and batch size are excluded: attempts draw from
    per-attempt generators, so they never change the result.
    
    Args:
        config: Configuration dictionary
        exclude_keys: Additional keys to exclude from hash
        hash_length: Number of hash characters to return
        
    Returns:
        Truncated SHA256 hash of configuration
    """
    all_exclude = VOLATILE_KEYS.copy()
    if exclude_keys:
        all_exclude.update(exclude_keys)
    
    filtered_config = {
        k: v for k, v in config.items()
        if k not in all_exclude
    }
    
    config_str = json.dumps(filtered_config, sort_keys=True, default=str)
    digest = hashlib.sha256(config_str.encode()).hexdigest()
    
    return digest[:hash_length]
