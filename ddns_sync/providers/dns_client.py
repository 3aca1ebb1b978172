"""
DNS Client - Dispatch from domain configuration to provider

Maps each vendor's configuration type to the provider that speaks its
protocol. Providers are created per pass and bound to the shared HTTP client.
"""

import logging
from typing import Dict, Type

import httpx

from ..core.errors import ConfigurationError
from ..core.models import (
    DomainConfig,
    DynuConfig,
    GoDaddyConfig,
    HeConfig,
    NamecheapConfig,
    NoIpConfig,
    PorkbunConfig,
)
from .base_provider import DNSProvider
from .dynu import DynuProvider
from .godaddy import GoDaddyProvider
from .he import HeProvider
from .namecheap import NamecheapProvider
from .noip import NoIpProvider
from .porkbun import PorkbunProvider

logger = logging.getLogger(__name__)

PROVIDERS: Dict[Type[DomainConfig], Type[DNSProvider]] = {
    NamecheapConfig: NamecheapProvider,
    HeConfig: HeProvider,
    NoIpConfig: NoIpProvider,
    DynuConfig: DynuProvider,
    PorkbunConfig: PorkbunProvider,
    GoDaddyConfig: GoDaddyProvider,
}


def create_provider(domain: DomainConfig, client: httpx.AsyncClient) -> DNSProvider:
    """Get the DNS provider for a domain's configuration."""
    provider_cls = PROVIDERS.get(type(domain))
    if provider_cls is None:
        raise ConfigurationError(f"No provider registered for {type(domain).__name__}")
    return provider_cls(domain, client)
