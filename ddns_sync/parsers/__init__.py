"""
Configuration parsers.
"""

from .config import ConfigParser, get_default_config, parse_config

__all__ = ["ConfigParser", "get_default_config", "parse_config"]
