"""
OpenDNS - WAN address discovery through OpenDNS's myip service

OpenDNS answers queries for myip.opendns.com with the address the query
arrived from, so the host's public address is one DNS query away.
"""

import logging

from ..core.models import IpFamily, WanAddress
from .dns_resolver import DnsResolver

logger = logging.getLogger(__name__)

MYIP_HOSTNAME = "myip.opendns.com."

OPENDNS_NAMESERVERS = {
    IpFamily.V4: ["208.67.222.222", "208.67.220.220"],
    IpFamily.V6: ["2620:119:35::35", "2620:119:53::53"],
}


async def wan_lookup_ip(family: IpFamily, timeout_seconds: float = 5.0) -> WanAddress:
    """Resolve the WAN address of the given family via OpenDNS."""
    resolver = DnsResolver(OPENDNS_NAMESERVERS[family], timeout_seconds=timeout_seconds)
    address = await resolver.ip_lookup(MYIP_HOSTNAME, family)
    return WanAddress(address)
