#!/usr/bin/env python3
"""Configuration tests - validation, YAML loading and hashing."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcluster.config import (
    ClusterConfig,
    StrategyType,
    compute_config_hash,
    load_config,
    save_config,
)


class TestClusterConfig:
    """Pydantic validation of clustering settings."""
    
    def test_defaults(self):
        config = ClusterConfig()
        assert config.attempts == 30
        assert config.iterations == 30
        assert config.strategy == StrategyType.MAX_COUNT
        assert config.improve_tolerance == 0.1
        assert config.effective_batch_size == 1
    
    def test_batch_size_defaults_to_workers(self):
        assert ClusterConfig(n_workers=4).effective_batch_size == 4
        assert ClusterConfig(n_workers=4, batch_size=2).effective_batch_size == 2
    
    @pytest.mark.parametrize("field, value", [
        ("attempts", 0),
        ("iterations", 0),
        ("improve_tolerance", 1.5),
        ("n_workers", 0),
        ("strategy", "random"),
        ("seed", -1),
    ])
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            ClusterConfig(**{field: value})
    
    def test_batch_larger_than_attempts(self):
        with pytest.raises(ValidationError, match="batch_size"):
            ClusterConfig(attempts=5, batch_size=10)
    
    def test_validates_assignment(self):
        config = ClusterConfig()
        with pytest.raises(ValidationError):
            config.attempts = -3


class TestLoadConfig:
    """YAML files and dotlist overrides."""
    
    def test_defaults_without_file(self):
        assert load_config() == ClusterConfig()
    
    def test_file_and_overrides(self, tmp_path):
        path = tmp_path / "cluster.yaml"
        path.write_text("attempts: 50\nstrategy: min_distance\nseed: 3\n")
        
        config = load_config(path, overrides=["seed=8"])
        assert config.attempts == 50
        assert config.strategy == StrategyType.MIN_DISTANCE
        assert config.seed == 8
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
    
    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("attempts: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)
    
    def test_save_then_load(self, tmp_path):
        config = ClusterConfig(attempts=12, strategy="min_distance", seed=4)
        path = save_config(config, tmp_path / "out" / "config.yaml")
        assert load_config(path) == config


class TestConfigHash:
    """Hash ignores settings that never change results."""
    
    def test_dispatch_settings_ignored(self):
        a = ClusterConfig(seed=1).model_dump(mode="json")
        b = ClusterConfig(seed=1, n_workers=8, log_level="DEBUG").model_dump(mode="json")
        assert compute_config_hash(a) == compute_config_hash(b)
    
    def test_seed_changes_hash(self):
        a = ClusterConfig(seed=1).model_dump(mode="json")
        b = ClusterConfig(seed=2).model_dump(mode="json")
        assert compute_config_hash(a) != compute_config_hash(b)
        assert len(compute_config_hash(a)) == 8
