"""
DNS Records Sync - Keep provider DNS records pointed at the WAN address

A tool for updating DNS records hosted by third-party providers (Namecheap,
Hurricane Electric, No-IP, Dynu, Porkbun, GoDaddy) whenever the host's public
IP address changes.
"""

__version__ = "1.0.0"
__author__ = "DNS Records Sync Team"
__description__ = "Keep DNS records at third-party providers in sync with the WAN address"

from .core.reconciler import Reconciler
from .core.sync_manager import SyncManager
from .resolvers.dns_resolver import DnsResolver

__all__ = [
    "Reconciler",
    "SyncManager",
    "DnsResolver",
]
