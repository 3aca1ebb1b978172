"""
Porkbun DNS provider implementation.

https://porkbun.com/api/json/v3/documentation
"""

import json
import logging

import httpx

from ..core.models import WanAddress
from ..utils.validators import APEX_RECORD
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)


class PorkbunProvider(DNSProvider):
    """Porkbun JSON API; records are edited by name and type."""

    path = "/dns/editByNameType"

    @classmethod
    def identify(cls) -> str:
        return "porkbun"

    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        self.require_family(wan)
        url = f"{self.endpoint()}/{self.config.domain}/{wan.family.record_type}"
        # The apex is addressed by leaving the subdomain segment out
        if record != APEX_RECORD:
            url = f"{url}/{record}"
        payload = {
            "apikey": self.config.key,
            "secretapikey": self.config.secret,
            "content": str(wan),
        }
        return self.client.build_request("POST", url, json=payload)

    def response_indicates_success(self, body: str) -> bool:
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            logger.debug(f"Porkbun response is not JSON: {body!r}")
            return False
        return isinstance(data, dict) and data.get("status") == "SUCCESS"
