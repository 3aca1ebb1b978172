"""
GoDaddy DNS provider implementation.

https://developer.godaddy.com/doc/endpoint/domains
"""

import httpx

from ..core.models import WanAddress
from .base_provider import DNSProvider


class GoDaddyProvider(DNSProvider):
    """GoDaddy domains API; replaces every record of one name and type."""

    path = "/v1/domains"

    @classmethod
    def identify(cls) -> str:
        return "godaddy"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        url = f"{self.endpoint()}/{self.config.domain}/records/{wan.family.record_type}/{record}"
        headers = {"Authorization": f"sso-key {self.config.key}:{self.config.secret}"}
        return self.client.build_request("PUT", url, json=[{"data": str(wan)}], headers=headers)

    def response_indicates_success(self, body: str) -> bool:
        # Failures are reported through the HTTP status alone
        return True
