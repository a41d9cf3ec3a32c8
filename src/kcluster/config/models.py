"""Pydantic models for configuration validation."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StrategyType(str, Enum):
    """Restart selection strategies."""
    
    MIN_DISTANCE = "min_distance"
    MAX_COUNT = "max_count"


class ClusterConfig(BaseModel):
    """Clustering configuration shared by every call in a session."""
    
    model_config = ConfigDict(validate_assignment=True)
    
    # Restarts
    attempts: int = Field(30, ge=1)
    iterations: int = Field(30, ge=1)
    strategy: StrategyType = StrategyType.MAX_COUNT
    
    # Elbow search
    improve_tolerance: float = Field(0.1, gt=0, lt=1)
    
    # Randomness
    seed: Optional[int] = Field(None, ge=0)
    
    # Dispatch
    n_workers: int = Field(1, ge=1)
    batch_size: Optional[int] = Field(None, ge=1)
    
    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    
    @property
    def effective_batch_size(self) -> int:
        """Attempts dispatched between two aggregation checkpoints."""
        if self.batch_size is not None:
            return self.batch_size
        return self.n_workers
    
    @model_validator(mode='after')
    def validate_batch_size(self) -> 'ClusterConfig':
        """Batches larger than the attempt budget are pointless."""
        if self.batch_size is not None and self.batch_size > self.attempts:
            raise ValueError(
                f'batch_size ({self.batch_size}) must be <= attempts ({self.attempts})'
            )
        return self
