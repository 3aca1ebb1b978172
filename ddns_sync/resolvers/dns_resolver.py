"""
DNS Resolver - Address lookups against a fixed set of recursive resolvers

This module wraps dnspython's asyncio resolver. It is used both to verify the
currently published address of a record and to discover the WAN address.
"""

import ipaddress
import logging
from typing import List, Sequence

import dns.asyncresolver
import dns.exception

from ..core.errors import DnsResolveError, UnexpectedAnswerError
from ..core.models import IPAddress, IpFamily

logger = logging.getLogger(__name__)

CLOUDFLARE_NAMESERVERS = [
    "1.1.1.1",
    "1.0.0.1",
    "2606:4700:4700::1111",
    "2606:4700:4700::1001",
]


class DnsResolver:
    """Resolves A/AAAA records through an explicit nameserver list."""

    def __init__(
        self,
        nameservers: Sequence[str],
        timeout_seconds: float = 5.0,
        port: int = 53,
    ):
        """Initialize the resolver; the system resolv.conf is never read."""
        self.nameservers: List[str] = list(nameservers)
        self.port = port
        self.timeout_seconds = timeout_seconds
        self.resolver = self._initialize_dns_resolver()

    @classmethod
    def cloudflare(cls, timeout_seconds: float = 5.0) -> "DnsResolver":
        """The public recursive resolver used to verify published records."""
        return cls(CLOUDFLARE_NAMESERVERS, timeout_seconds=timeout_seconds)

    def _initialize_dns_resolver(self) -> dns.asyncresolver.Resolver:
        """Initialize and configure the DNS resolver with nameserver and timeout settings."""
        resolver = dns.asyncresolver.Resolver(configure=False)
        resolver.port = self.port
        resolver.nameservers = self.nameservers
        resolver.timeout = self.timeout_seconds
        resolver.lifetime = self.timeout_seconds
        return resolver

    async def ip_lookup(self, fqdn: str, family: IpFamily) -> IPAddress:
        """
        Look up the single address published for fqdn.

        Args:
            fqdn: Absolute name, with a trailing dot
            family: Restricts the query to A or AAAA records

        Returns:
            The one address in the answer

        Raises:
            DnsResolveError: the query failed (NXDOMAIN, no answer, timeout)
            UnexpectedAnswerError: the answer held zero or several addresses
        """
        try:
            answer = await self.resolver.resolve(
                fqdn,
                family.record_type,
                search=False,
                lifetime=self.timeout_seconds,
            )
        except (dns.exception.DNSException, OSError) as e:
            logger.debug(f"DNS query failed for {fqdn} ({family.record_type}): {e}")
            raise DnsResolveError(fqdn) from e

        addresses = [ipaddress.ip_address(rdata.address) for rdata in answer]
        if len(addresses) != 1:
            raise UnexpectedAnswerError(fqdn, len(addresses))
        return addresses[0]
