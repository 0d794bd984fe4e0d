"""Configuration system."""

from nofomo_core.config.loader import load_config
from nofomo_core.config.schema import AppConfig, EngineConfig

__all__ = ["AppConfig", "EngineConfig", "load_config"]
