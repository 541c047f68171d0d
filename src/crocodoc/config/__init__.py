"""Configuration module for the Crocodoc client."""

from .schemas import CrocodocConfig
from .settings import Settings, find_config_path, load_settings, load_view_url

__all__ = ["CrocodocConfig", "Settings", "find_config_path", "load_settings", "load_view_url"]
