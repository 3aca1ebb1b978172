"""
Utility functions and helpers.

This package contains utility functions for validation and the shared
HTTP client.
"""

from .validators import validate_base_url, validate_hostname, validate_record_name

__all__ = ["validate_base_url", "validate_hostname", "validate_record_name"]
