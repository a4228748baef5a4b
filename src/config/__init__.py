"""Configuration module: exports Settings and the YAML loader."""

from src.config.loader import load_config, quality_models
from src.config.settings import Settings

__all__ = ["Settings", "load_config", "quality_models"]
