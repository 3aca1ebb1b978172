"""
Reconciler - Core logic for keeping records in sync with the WAN address

Every configured record is first checked through DNS; an update is sent only
when DNS shows exactly one address and it differs from the WAN address. A
lookup that fails or is ambiguous counts the record as missing instead of
triggering a write.
"""

import logging

import httpx

from ..providers.base_provider import DNSProvider
from ..providers.dns_client import create_provider
from ..utils.validators import APEX_RECORD
from .errors import DnsLookupError
from .models import DomainConfig, RecordOutcome, UpdateSummary, WanAddress

logger = logging.getLogger(__name__)


def record_fqdn(hostname: str, record: str) -> str:
    """Return the absolute name to verify for a record of the zone."""
    if record == APEX_RECORD:
        return f"{hostname}."
    return f"{record}.{hostname}."


class Reconciler:
    """Verifies records of a domain and updates the stale ones."""

    def __init__(self, http_client: httpx.AsyncClient, resolver):
        """
        Initialize the reconciler.

        Args:
            http_client: Shared transport handed to every provider
            resolver: Object with an async ``ip_lookup(fqdn, family)``, usually
                a DnsResolver pointed at a public recursive resolver
        """
        self.http_client = http_client
        self.resolver = resolver

    async def reconcile(self, domain: DomainConfig, wan: WanAddress) -> UpdateSummary:
        """
        Reconcile every record of a domain against the WAN address.

        Records are processed one at a time in configured order to avoid
        bursts against the resolver and the vendor.

        Args:
            domain: Configuration of the domain
            wan: Resolved WAN address; its family selects A or AAAA records

        Returns:
            Summary of the record outcomes

        Raises:
            ProviderError: the first failed update; remaining records are skipped
        """
        provider = create_provider(domain, self.http_client)
        summary = UpdateSummary()

        for record in provider.records():
            outcome = await self.reconcile_record(provider, record, wan)
            summary += UpdateSummary.from_outcome(outcome)

        return summary

    async def reconcile_record(
        self, provider: DNSProvider, record: str, wan: WanAddress
    ) -> RecordOutcome:
        """Verify one record and update it if DNS shows a different address."""
        hostname = provider.hostname()
        fqdn = record_fqdn(hostname, record)

        try:
            current = await self.resolver.ip_lookup(fqdn, wan.family)
        except DnsLookupError as e:
            # Could be a network issue or a record the vendor has not published yet
            logger.warning(f"resolving domain ({fqdn}) encountered an error: {e}")
            return RecordOutcome.MISSING

        if current == wan.address:
            logger.debug(f"{record} from domain {hostname} is current at {wan}")
            return RecordOutcome.CURRENT

        await provider.update_record(record, wan)
        logger.info(f"{record} from domain {hostname} updated from {current} to {wan}")
        return RecordOutcome.UPDATED
