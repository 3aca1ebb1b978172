"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must
implement. A provider only translates one record update into the vendor's
HTTP protocol and interprets the answer; deciding whether an update is
needed is the reconciler's job.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

import httpx

from ..core.errors import (
    BadResponseError,
    ResponseDecodeError,
    SendRequestError,
    ProviderRejectedError,
    UnsupportedAddressFamilyError,
)
from ..core.models import DomainConfig, IpFamily, WanAddress
from ..utils.validators import APEX_RECORD

logger = logging.getLogger(__name__)


def with_basic_auth(request: httpx.Request, username: str, password: str) -> httpx.Request:
    """Apply HTTP basic auth to a built request."""
    return next(httpx.BasicAuth(username, password).sync_auth_flow(request))


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    # Path appended to the configured base URL
    path: str = ""
    supported_families: Tuple[IpFamily, ...] = (IpFamily.V4, IpFamily.V6)

    def __init__(self, config: DomainConfig, client: httpx.AsyncClient):
        """Bind the provider to one domain and the shared HTTP client."""
        self.config = config
        self.client = client

    @classmethod
    @abstractmethod
    def identify(cls) -> str:
        """Return the provider name for logging."""
        pass

    def endpoint(self) -> str:
        """Return the update URL derived from the configured base URL."""
        return f"{self.config.base_url.rstrip('/')}{self.path}"

    def hostname(self) -> str:
        return self.config.hostname

    def records(self) -> List[str]:
        return list(self.config.records)

    def host_record(self, record: str) -> str:
        """Return the record's name qualified with the zone, without a trailing dot."""
        if record == APEX_RECORD:
            return self.hostname()
        return f"{record}.{self.hostname()}"

    def require_family(self, wan: WanAddress) -> None:
        """Raise UnsupportedAddressFamilyError if the vendor cannot publish wan."""
        if wan.family not in self.supported_families:
            raise UnsupportedAddressFamilyError(self.identify(), wan.family)

    @abstractmethod
    def build_update_request(self, record: str, wan: WanAddress) -> httpx.Request:
        """Build the request that points record at wan, without sending it."""
        pass

    @abstractmethod
    def response_indicates_success(self, body: str) -> bool:
        """Return True if the response body reports a successful update."""
        pass

    async def update_record(self, record: str, wan: WanAddress) -> None:
        """
        Point one record at the WAN address.

        Raises:
            UnsupportedAddressFamilyError: before any request is sent
            SendRequestError: the request could not be sent or timed out
            BadResponseError: the vendor answered with an HTTP error status
            ResponseDecodeError: the response body could not be read
            ProviderRejectedError: the body did not report success
        """
        request = self.build_update_request(record, wan)
        context = f"{self.identify()} update"
        # The query string may carry credentials
        url = str(request.url.copy_with(query=None))

        try:
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise SendRequestError(url, context) from e

        try:
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise BadResponseError(url, context, f"status {response.status_code}") from e

            try:
                await response.aread()
            except httpx.HTTPError as e:
                raise ResponseDecodeError(url, context) from e
        finally:
            await response.aclose()

        body = response.text
        if not self.response_indicates_success(body):
            raise ProviderRejectedError(url, context, body)

        logger.debug(f"{self.identify()}: {self.host_record(record)} -> {wan} accepted")
