"""
Validators - Input validation for configured domains

This module provides validation functions for zone hostnames, record names
and endpoint URLs so configuration mistakes are caught before any network
activity.
"""

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

APEX_RECORD = "@"

_LABEL_RE = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$")


def validate_hostname(hostname: str) -> bool:
    """
    Validate the hostname of a managed zone.

    Args:
        hostname: The zone hostname, without a trailing dot

    Returns:
        True if valid, False otherwise
    """
    if not hostname or not isinstance(hostname, str):
        return False

    # The trailing dot is added when the name is resolved
    if hostname.endswith("."):
        logger.warning(f"Hostname ends with dot: {hostname}")
        return False

    if len(hostname) > 253:
        logger.warning(f"Hostname too long: {hostname}")
        return False

    labels = hostname.split(".")

    if len(labels) < 2:
        logger.warning(f"Hostname must have at least 2 labels: {hostname}")
        return False

    for label in labels:
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in hostname: {hostname}")
            return False

    return True


def validate_record_name(record: str) -> bool:
    """
    Validate a record name relative to its zone.

    Args:
        record: "@" for the zone apex, otherwise one or more labels

    Returns:
        True if valid, False otherwise
    """
    if not record or not isinstance(record, str):
        return False

    if record == APEX_RECORD:
        return True

    if record.startswith(".") or record.endswith("."):
        logger.warning(f"Record name must be relative to its zone: {record}")
        return False

    labels = record.split(".")
    if not all(label == "*" or _validate_label(label) for label in labels):
        logger.warning(f"Invalid record name: {record}")
        return False

    return True


def _validate_label(label: str) -> bool:
    """
    Validate a single domain label.

    Args:
        label: The label to validate

    Returns:
        True if valid, False otherwise
    """
    if len(label) == 0 or len(label) > 63:
        return False

    # Letters, digits, hyphens and underscores; no leading or trailing hyphen
    return bool(_LABEL_RE.match(label))


def validate_base_url(url: str) -> bool:
    """
    Validate a provider endpoint override.

    Args:
        url: Absolute http(s) URL

    Returns:
        True if valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        logger.warning(f"Invalid base url: {url}")
        return False

    return True
