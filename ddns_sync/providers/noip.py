"""
No-IP DNS provider implementation.

https://www.noip.com/integrate/request
"""

import httpx

from ..core.models import WanAddress
from .base_provider import DNSProvider, with_basic_auth


class NoIpProvider(DNSProvider):
    """No-IP manages a single host, so record is always the apex."""

    path = "/nic/update"

    @classmethod
    def identify(cls) -> str:
        return "noip"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        params = {"hostname": self.hostname(), "myip": str(wan)}
        request = self.client.build_request("GET", self.endpoint(), params=params)
        return with_basic_auth(request, self.config.username, self.config.password)

    def response_indicates_success(self, body: str) -> bool:
        return "good" in body or "nochg" in body
