"""
Config Parser - Load and validate the YAML configuration

Turns the raw YAML document into an immutable DnsConfig. Any problem is
reported as a ConfigurationError so the run can stop before touching the
network.
"""

import dataclasses
import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.errors import ConfigurationError
from ..core.models import DOMAIN_CONFIG_TYPES, DnsConfig, DomainConfig, IpFamily
from ..resolvers import WAN_RESOLVERS
from ..utils.validators import validate_base_url, validate_hostname, validate_record_name

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS = {
    "ip_resolver",
    "http_timeout_seconds",
    "dns_timeout_seconds",
    "logging",
    "dns_providers",
}
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
# Fields holding the zone hostname, depending on the vendor
HOSTNAME_FIELDS = ("hostname", "domain")


class ConfigParser:
    def __init__(self, config_path: str):
        self.config_path = config_path

    def parse(self) -> DnsConfig:
        """Parse the configuration file and validate it."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found: {self.config_path}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read config file: {self.config_path}") from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Config file is not valid UTF-8: {self.config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing config file: {self.config_path}") from e

        config = parse_config(raw)
        logger.info(
            f"Configuration loaded from {self.config_path}: {len(config.domains)} domain(s)"
        )
        return config


def get_default_config() -> DnsConfig:
    """Return default configuration: resolve the WAN address, manage no domains."""
    return DnsConfig()


def parse_config(raw: Optional[Dict[str, Any]]) -> DnsConfig:
    """Build a DnsConfig from a parsed YAML document."""
    if raw is None:
        return get_default_config()
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration must be a mapping")

    unknown = set(raw) - TOP_LEVEL_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(sorted(map(str, unknown)))}"
        )

    defaults = get_default_config()

    ip_resolver = str(raw.get("ip_resolver", defaults.ip_resolver)).strip().lower()
    if ip_resolver not in WAN_RESOLVERS:
        raise ConfigurationError(
            f"Unknown ip_resolver '{ip_resolver}', expected one of: {', '.join(WAN_RESOLVERS)}"
        )

    return DnsConfig(
        domains=tuple(_parse_providers(raw.get("dns_providers") or {})),
        ip_resolver=ip_resolver,
        log_level=_parse_log_level(raw.get("logging") or {}, defaults.log_level),
        http_timeout_seconds=_parse_timeout(
            raw, "http_timeout_seconds", defaults.http_timeout_seconds
        ),
        dns_timeout_seconds=_parse_timeout(
            raw, "dns_timeout_seconds", defaults.dns_timeout_seconds
        ),
    )


def _parse_log_level(logging_config: Any, default: str) -> str:
    if not isinstance(logging_config, dict):
        raise ConfigurationError("'logging' must be a mapping")
    level = str(logging_config.get("level", default)).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level '{level}'")
    return level


def _parse_timeout(raw: Dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a number of seconds")
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"'{key}' must be a number of seconds") from e
    if seconds <= 0:
        raise ConfigurationError(f"'{key}' must be positive, got {value}")
    return seconds


def _parse_providers(providers: Any) -> List[DomainConfig]:
    """Parse the vendor -> domain(s) mapping, keeping file order."""
    if not isinstance(providers, dict):
        raise ConfigurationError("'dns_providers' must map provider names to domains")

    domains = []
    for kind, entries in providers.items():
        kind = str(kind).strip().lower()
        if kind not in DOMAIN_CONFIG_TYPES:
            raise ConfigurationError(
                f"Unknown provider '{kind}', expected one of: {', '.join(DOMAIN_CONFIG_TYPES)}"
            )
        if isinstance(entries, dict):
            entries = [entries]
        if not isinstance(entries, list):
            raise ConfigurationError(f"Provider '{kind}' must list one or more domains")

        for index, entry in enumerate(entries):
            domains.append(parse_domain(kind, entry, index))

    return domains


def parse_domain(kind: str, entry: Any, index: int = 0) -> DomainConfig:
    """Build the vendor's DomainConfig from one configuration entry."""
    where = f"{kind}[{index}]"
    if not isinstance(entry, dict):
        raise ConfigurationError(f"{where}: domain configuration must be a mapping")

    config_cls = DOMAIN_CONFIG_TYPES[kind]
    fields = {f.name: f for f in dataclasses.fields(config_cls)}

    unknown = set(entry) - set(fields)
    if unknown:
        raise ConfigurationError(
            f"{where}: unknown keys: {', '.join(sorted(map(str, unknown)))}"
        )

    values: Dict[str, Any] = {}
    for name, field in fields.items():
        required = field.default is dataclasses.MISSING
        if name not in entry or entry[name] is None:
            if required:
                raise ConfigurationError(f"{where}: missing required key '{name}'")
            continue

        value = entry[name]
        if name == "records":
            values[name] = _parse_records(where, value)
        elif name == "ip_types":
            values[name] = _parse_ip_types(where, value)
        elif name == "base_url":
            if not validate_base_url(str(value)):
                raise ConfigurationError(f"{where}: invalid base_url '{value}'")
            values[name] = str(value)
        else:
            text = str(value).strip()
            if not text:
                raise ConfigurationError(f"{where}: '{name}' must not be empty")
            if name in HOSTNAME_FIELDS and not validate_hostname(text):
                raise ConfigurationError(f"{where}: invalid hostname '{text}'")
            values[name] = text

    return config_cls(**values)


def _parse_records(where: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise ConfigurationError(f"{where}: 'records' must be a non-empty list")

    records = []
    for record in value:
        record = str(record).strip()
        if not validate_record_name(record):
            raise ConfigurationError(f"{where}: invalid record name '{record}'")
        records.append(record)
    return tuple(records)


def _parse_ip_types(where: str, value: Any) -> Tuple[IpFamily, ...]:
    if not isinstance(value, list):
        value = [value]
    if not value:
        raise ConfigurationError(f"{where}: 'ip_types' must not be empty")

    families: List[IpFamily] = []
    for item in value:
        try:
            family = IpFamily.parse(item)
        except ValueError as e:
            raise ConfigurationError(f"{where}: {e}") from e
        if family not in families:
            families.append(family)
    return tuple(families)
