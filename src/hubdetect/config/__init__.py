"""Configuration package for hubdetect."""

from hubdetect.config.loader import ConfigError, load_config, parse_property_overrides
from hubdetect.config.models import HubDetectConfig

__all__ = [
    "ConfigError",
    "HubDetectConfig",
    "load_config",
    "parse_property_overrides",
]
