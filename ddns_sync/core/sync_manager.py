#!/usr/bin/env python3
"""
Sync Manager - Orchestrates one synchronization run

Resolves the WAN address of every required family concurrently, then hands
each configured domain to the reconciler one after another. A failed domain
is logged and recorded; the remaining domains are still processed.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Tuple

import httpx
from rich.console import Console
from rich.table import Table

from ..resolvers import DnsResolver, resolve_wan_address
from ..utils.http_client import build_async_client
from .errors import DdnsSyncError, WanResolutionError, format_error_chain
from .models import (
    DnsConfig,
    DomainConfig,
    DomainResult,
    IpFamily,
    RunResult,
    UpdateSummary,
    WanAddress,
)
from .reconciler import Reconciler

# Initialize rich console and logger
console = Console()
logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class SyncManager:
    """Main synchronization class that orchestrates the entire run."""

    def __init__(
        self,
        config: DnsConfig,
        http_client: httpx.AsyncClient,
        verifier: Optional[DnsResolver] = None,
    ):
        """Initialize the manager with configuration and shared transports."""
        self.config = config
        self.http_client = http_client
        self.verifier = verifier or DnsResolver.cloudflare(config.dns_timeout_seconds)
        self.reconciler = Reconciler(http_client, self.verifier)

    async def resolve_wan_addresses(
        self,
    ) -> Tuple[Dict[IpFamily, WanAddress], List[WanResolutionError]]:
        """Resolve every required family concurrently."""
        families = self.config.ip_types()
        results = await asyncio.gather(
            *(self._resolve_family(family) for family in families),
            return_exceptions=True,
        )

        addresses: Dict[IpFamily, WanAddress] = {}
        errors: List[WanResolutionError] = []
        for family, result in zip(families, results):
            if isinstance(result, WanResolutionError):
                logger.error(format_error_chain("could not successfully resolve IP", result))
                errors.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                addresses[family] = result

        return addresses, errors

    async def _resolve_family(self, family: IpFamily) -> WanAddress:
        start = time.monotonic()
        wan = await resolve_wan_address(self.config, self.http_client, family)
        logger.info(f"resolved address to {wan} in {_elapsed_ms(start)}ms")
        return wan

    async def sync_domain(self, domain: DomainConfig, wan: WanAddress) -> DomainResult:
        """Reconcile one domain, capturing its write error instead of raising."""
        start = time.monotonic()
        try:
            summary = await self.reconciler.reconcile(domain, wan)
        except DdnsSyncError as e:
            logger.error(format_error_chain(f"could not update {domain}", e))
            return DomainResult(domain, wan.family, error=e, elapsed_ms=_elapsed_ms(start))

        elapsed = _elapsed_ms(start)
        logger.info(f"processed {domain}: ({summary}) in {elapsed}ms")
        return DomainResult(domain, wan.family, summary=summary, elapsed_ms=elapsed)

    async def run(self) -> RunResult:
        """Run one full pass and fold the per-domain results."""
        start = time.monotonic()
        addresses, wan_errors = await self.resolve_wan_addresses()

        errors: List[Exception] = list(wan_errors)
        domain_results: List[DomainResult] = []

        for domain in self.config.domains:
            for family in self.config.ip_types():
                if family not in domain.ip_types:
                    continue
                wan = addresses.get(family)
                if wan is None:
                    logger.warning(f"skipping {domain}: no {family} WAN address")
                    continue

                result = await self.sync_domain(domain, wan)
                domain_results.append(result)
                if result.error is not None:
                    errors.append(result.error)

        summary = sum(
            (result.summary for result in domain_results if result.summary is not None),
            UpdateSummary(),
        )
        logger.info(f"processed all: ({summary}) in {_elapsed_ms(start)}ms")

        if errors:
            logger.error("at least one update failed, so exiting with non-zero status code")

        return RunResult(
            summary=summary,
            errors=tuple(errors),
            domain_results=tuple(domain_results),
        )

    def display_summary(self, result: RunResult):
        """Display a summary of the run."""
        table = Table(title="DNS Sync Summary")
        table.add_column("Domain", style="cyan")
        table.add_column("Family", style="magenta")
        table.add_column("Current", justify="right")
        table.add_column("Updated", justify="right", style="green")
        table.add_column("Missing", justify="right", style="yellow")
        table.add_column("Time", justify="right")
        table.add_column("Status", style="white")

        for domain_result in result.domain_results:
            summary = domain_result.summary or UpdateSummary()
            status = "[green]ok[/green]" if domain_result.succeeded else "[red]failed[/red]"
            table.add_row(
                str(domain_result.domain),
                str(domain_result.family),
                str(summary.current),
                str(summary.updated),
                str(summary.missing),
                f"{domain_result.elapsed_ms}ms",
                status,
            )

        console.print(table)
        console.print(f"\n[bold]Total: {result.summary}[/bold]")
        if not result.succeeded:
            console.print(f"[red]{len(result.errors)} error(s) during sync[/red]")


async def run_sync(config: DnsConfig, verifier: Optional[DnsResolver] = None) -> RunResult:
    """Run one pass with a freshly built HTTP client."""
    async with build_async_client(config.http_timeout_seconds) as http_client:
        manager = SyncManager(config, http_client, verifier)
        result = await manager.run()
    manager.display_summary(result)
    return result
