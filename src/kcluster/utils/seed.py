"""Random source utilities for reproducibility.

Every call that samples takes an explicit ``numpy.random.Generator``;
nothing here touches global random state.
"""

from __future__ import annotations

from typing import List, Optional, Union

import numpy as np

SeedLike = Union[None, int, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return a Generator for ``seed``.
    
    Args:
        seed: Integer seed, an existing Generator (returned as is),
            or None for fresh OS entropy
            
    Returns:
        Random generator
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def spawn_rngs(rng: np.random.Generator, n: int) -> List[np.random.Generator]:
    """Spawn ``n`` independent child generators in a fixed order.
    
    Children are derived from the parent's seed sequence, so the
    i-th child is the same no matter which worker consumes it.
    """
    return list(rng.spawn(n))
