"""
Errors - Exception hierarchy for DNS record synchronization

Read-path failures (DnsLookupError) are absorbed by the reconciliation engine,
write-path failures (ProviderError) always propagate out of it.
"""

from typing import List, Optional

from .models import IpFamily


class DdnsSyncError(Exception):
    """Root exception for all ddns-sync errors."""


class ConfigurationError(DdnsSyncError):
    """Configuration could not be loaded or is invalid."""


class WanResolutionError(DdnsSyncError):
    """The public address for an IP family could not be resolved."""

    def __init__(self, family: IpFamily, message: str):
        super().__init__(f"could not resolve {family} WAN address: {message}")
        self.family = family


class DnsLookupError(DdnsSyncError):
    """Base exception for DNS lookups."""

    def __init__(self, fqdn: str, message: str):
        super().__init__(message)
        self.fqdn = fqdn


class DnsResolveError(DnsLookupError):
    """The resolver could not answer the query."""

    def __init__(self, fqdn: str):
        super().__init__(fqdn, f"could not resolve {fqdn} via dns")


class UnexpectedAnswerError(DnsLookupError):
    """The resolver returned zero or several addresses."""

    def __init__(self, fqdn: str, count: int):
        super().__init__(fqdn, f"unexpected number of results for {fqdn}: {count}")
        self.count = count


class ProviderError(DdnsSyncError):
    """Base exception for provider update (write) operations."""


class HttpProviderError(ProviderError):
    """A provider error tied to one HTTP exchange."""

    action = "send http request"

    def __init__(self, url: str, context: str, detail: Optional[str] = None):
        message = f"{self.describe()} for {context}: url attempted: {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.url = url
        self.context = context

    @classmethod
    def describe(cls) -> str:
        return f"unable to {cls.action}"


class SendRequestError(HttpProviderError):
    """The request could not be sent or timed out."""


class BadResponseError(HttpProviderError):
    """The provider answered with a non-success HTTP status."""

    @classmethod
    def describe(cls) -> str:
        return "received bad http response"


class ResponseDecodeError(HttpProviderError):
    """The response body could not be read."""

    action = "deserialize response"


class ProviderRejectedError(HttpProviderError):
    """The provider answered with a success status but reported a failure."""

    def __init__(self, url: str, context: str, body: str):
        super().__init__(url, context, f"expected success marker, but received: {body}")
        self.body = body

    @classmethod
    def describe(cls) -> str:
        return "provider rejected update"


class UnsupportedAddressFamilyError(ProviderError):
    """The provider cannot publish addresses of the given family."""

    def __init__(self, provider: str, family: IpFamily):
        super().__init__(f"{family} not supported for {provider}")
        self.provider = provider
        self.family = family


def error_chain(err: BaseException) -> List[BaseException]:
    """Return err followed by each exception it was raised from."""
    chain = [err]
    seen = {id(err)}
    cause = err.__cause__ or err.__context__
    while cause is not None and id(cause) not in seen:
        chain.append(cause)
        seen.add(id(cause))
        cause = cause.__cause__ or cause.__context__
    return chain


def format_error_chain(context: str, err: BaseException) -> str:
    """Render an error and its causes as a multi-line log message."""
    lines = [context]
    for cause in error_chain(err):
        lines.append(f"\tcaused by: {cause}")
    return "\n".join(lines)
