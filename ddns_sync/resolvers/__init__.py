"""
Address resolvers.

This package contains the DNS resolver used to verify published records and
the services used to discover the host's WAN address.
"""

import logging

import httpx

from ..core.errors import DnsLookupError, WanResolutionError
from ..core.models import DnsConfig, IpFamily, WanAddress
from .dns_resolver import DnsResolver
from .ipify import ipify_resolve_ip
from .opendns import wan_lookup_ip

logger = logging.getLogger(__name__)

WAN_RESOLVERS = ("opendns", "ipify")


async def resolve_wan_address(
    config: DnsConfig, client: httpx.AsyncClient, family: IpFamily
) -> WanAddress:
    """Resolve the WAN address for one family with the configured method."""
    logger.debug(f"resolving {family} WAN address via {config.ip_resolver}")
    if config.ip_resolver == "opendns":
        try:
            return await wan_lookup_ip(family, timeout_seconds=config.dns_timeout_seconds)
        except DnsLookupError as e:
            raise WanResolutionError(family, "opendns lookup failed") from e
    elif config.ip_resolver == "ipify":
        return await ipify_resolve_ip(client, family)
    else:
        raise WanResolutionError(family, f"unknown ip resolver '{config.ip_resolver}'")


__all__ = [
    "DnsResolver",
    "WAN_RESOLVERS",
    "resolve_wan_address",
    "ipify_resolve_ip",
    "wan_lookup_ip",
]
