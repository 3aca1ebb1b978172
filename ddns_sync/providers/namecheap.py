"""
Namecheap DNS provider implementation.

https://www.namecheap.com/support/knowledgebase/article.aspx/29/11/how-do-i-use-a-browser-to-dynamically-update-the-hosts-ip
"""

import httpx

from ..core.models import IpFamily, WanAddress
from .base_provider import DNSProvider

SUCCESS_MARKER = "<ErrCount>0</ErrCount>"


class NamecheapProvider(DNSProvider):
    """Namecheap dynamic DNS; only A records can be updated."""

    path = "/update"
    supported_families = (IpFamily.V4,)

    @classmethod
    def identify(cls) -> str:
        return "namecheap"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        params = {
            "host": record,
            "domain": self.config.domain,
            "password": self.config.ddns_password,
            "ip": str(wan),
        }
        return self.client.build_request("GET", self.endpoint(), params=params)

    def response_indicates_success(self, body: str) -> bool:
        # The answer is an XML document whose ErrCount element counts failures
        return SUCCESS_MARKER in body
