"""
Dynu DNS provider implementation.

Dynu speaks the dyndns2 protocol; records other than the apex are sent as
aliases of the hostname.
"""

import httpx

from ..core.models import IpFamily, WanAddress
from ..utils.validators import APEX_RECORD
from .base_provider import DNSProvider, with_basic_auth


class DynuProvider(DNSProvider):
    path = "/nic/update"

    @classmethod
    def identify(cls) -> str:
        return "dynu"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        params = {"hostname": self.hostname()}
        # "no" leaves the other family's address untouched
        if wan.family is IpFamily.V4:
            params.update({"myip": str(wan), "myipv6": "no"})
        else:
            params.update({"myip": "no", "myipv6": str(wan)})
        if record != APEX_RECORD:
            params["alias"] = record
        request = self.client.build_request("GET", self.endpoint(), params=params)
        return with_basic_auth(request, self.config.username, self.config.password)

    def response_indicates_success(self, body: str) -> bool:
        return "good" in body or "nochg" in body
