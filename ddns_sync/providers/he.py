"""
Hurricane Electric DNS provider implementation.

https://dns.he.net/docs.html
"""

import httpx

from ..core.models import WanAddress
from .base_provider import DNSProvider


class HeProvider(DNSProvider):
    """he.net dynamic DNS, authenticated with a per-record key."""

    path = "/nic/update"

    @classmethod
    def identify(cls) -> str:
        return "he"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        data = {
            "hostname": self.host_record(record),
            "password": self.config.password,
            "myip": str(wan),
        }
        # he.net closes the connection without announcing it, so the
        # connection must not be returned to the pool for reuse.
        return self.client.build_request(
            "POST", self.endpoint(), data=data, headers={"Connection": "close"}
        )

    def response_indicates_success(self, body: str) -> bool:
        return "good" in body or "nochg" in body
