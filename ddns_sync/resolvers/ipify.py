"""
ipify - WAN address discovery through the ipify HTTP echo service
"""

import ipaddress
import logging

import httpx

from ..core.errors import WanResolutionError
from ..core.models import IpFamily, WanAddress

logger = logging.getLogger(__name__)

IPIFY_URLS = {
    IpFamily.V4: "https://api.ipify.org/",
    IpFamily.V6: "https://api6.ipify.org/",
}


async def ipify_resolve_ip(client: httpx.AsyncClient, family: IpFamily) -> WanAddress:
    """Resolve the WAN address of the given family via ipify."""
    url = IPIFY_URLS[family]
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise WanResolutionError(family, f"received bad http response from {url}") from e
    except httpx.HTTPError as e:
        raise WanResolutionError(family, f"unable to send http request to {url}") from e

    ip_text = response.text.strip()
    try:
        address = ipaddress.ip_address(ip_text)
    except ValueError as e:
        raise WanResolutionError(family, f"unable to parse {ip_text!r} as an ip") from e

    if IpFamily.of(address) is not family:
        raise WanResolutionError(family, f"ipify returned {address}, not an {family} address")

    return WanAddress(address)
