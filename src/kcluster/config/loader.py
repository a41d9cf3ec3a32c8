"""Configuration loader with OmegaConf and Pydantic validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from omegaconf import OmegaConf
from pydantic import ValidationError

from kcluster.config.models import ClusterConfig
from kcluster.config.utils import compute_config_hash

logger = logging.getLogger(__name__)


def load_config(
    config_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> ClusterConfig:
    """Load configuration from a YAML file and dotlist overrides.
    
    Args:
        config_path: Path to a YAML config file (defaults only if None)
        overrides: List of ``key=value`` overrides
        
    Returns:
        Validated configuration
        
    Raises:
        FileNotFoundError: If ``config_path`` does not exist
        ValidationError: If config validation fails
    """
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw_config = OmegaConf.load(config_path)
    else:
        raw_config = OmegaConf.create({})
    
    if overrides:
        cli_config = OmegaConf.from_dotlist(overrides)
        raw_config = OmegaConf.merge(raw_config, cli_config)
    
    config_dict: Dict[str, Any] = OmegaConf.to_container(raw_config, resolve=True)
    
    try:
        config = ClusterConfig(**config_dict)
    except ValidationError as e:
        logger.error(f"Configuration validation failed:\n{e}")
        raise
    
    logger.debug(f"Config hash: {compute_config_hash(config.model_dump(mode='json'))}")
    return config


def save_config(config: ClusterConfig, path: str | Path) -> Path:
    """Write configuration to a YAML file.
    
    Args:
        config: Configuration to save
        path: Output file path
        
    Returns:
        Path to saved configuration file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(config.model_dump(mode='json')), path)
    logger.info(f"Configuration saved to: {path}")
    return path
