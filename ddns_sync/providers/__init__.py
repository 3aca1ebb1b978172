"""
DNS provider implementations.

This package contains one provider per DNS hosting vendor, all implementing
the DNSProvider contract, and the dispatch from configuration to provider.
"""

from .base_provider import DNSProvider
from .dns_client import PROVIDERS, create_provider
from .dynu import DynuProvider
from .godaddy import GoDaddyProvider
from .he import HeProvider
from .namecheap import NamecheapProvider
from .noip import NoIpProvider
from .porkbun import PorkbunProvider

__all__ = [
    "DNSProvider",
    "PROVIDERS",
    "create_provider",
    "DynuProvider",
    "GoDaddyProvider",
    "HeProvider",
    "NamecheapProvider",
    "NoIpProvider",
    "PorkbunProvider",
]
