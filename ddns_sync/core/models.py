"""
Models - Data types shared by the reconciliation engine and the providers

Everything here is immutable: configuration is loaded once at startup and
WAN addresses are resolved once per run, then shared read-only.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class IpFamily(Enum):
    """Address family of a WAN address and of the records published for it."""

    V4 = 4
    V6 = 6

    def __str__(self) -> str:
        return f"IPv{self.value}"

    @property
    def record_type(self) -> str:
        return "A" if self is IpFamily.V4 else "AAAA"

    @classmethod
    def of(cls, address: IPAddress) -> "IpFamily":
        return cls(address.version)

    @classmethod
    def parse(cls, value) -> "IpFamily":
        """Parse a configured family such as 4, "6", "v4" or "ipv6"."""
        text = str(value).strip().lower()
        for prefix in ("ipv", "v"):
            if text.startswith(prefix):
                text = text[len(prefix):]
                break
        if text == "4":
            return cls.V4
        if text == "6":
            return cls.V6
        raise ValueError(f"invalid ip type '{value}', expected 4 or 6")


@dataclass(frozen=True)
class WanAddress:
    """The host's public address for one family."""

    address: IPAddress

    @property
    def family(self) -> IpFamily:
        return IpFamily.of(self.address)

    @classmethod
    def parse(cls, text: str) -> "WanAddress":
        return cls(ipaddress.ip_address(text.strip()))

    def __str__(self) -> str:
        return str(self.address)


class RecordOutcome(Enum):
    """Result of reconciling a single record."""

    CURRENT = "current"
    UPDATED = "updated"
    MISSING = "missing"


@dataclass(frozen=True)
class UpdateSummary:
    """Counts of record outcomes; adds component-wise with UpdateSummary() as identity."""

    current: int = 0
    updated: int = 0
    missing: int = 0

    def __post_init__(self):
        if min(self.current, self.updated, self.missing) < 0:
            raise ValueError(f"summary counters must be non-negative: {self}")

    @classmethod
    def from_outcome(cls, outcome: RecordOutcome) -> "UpdateSummary":
        return cls(**{outcome.value: 1})

    def __add__(self, other: "UpdateSummary") -> "UpdateSummary":
        if not isinstance(other, UpdateSummary):
            return NotImplemented
        return UpdateSummary(
            current=self.current + other.current,
            updated=self.updated + other.updated,
            missing=self.missing + other.missing,
        )

    @property
    def total(self) -> int:
        return self.current + self.updated + self.missing

    def __str__(self) -> str:
        return f"current: {self.current}, updated: {self.updated}, missing: {self.missing}"


# =============================================================================
# Domain configuration, one dataclass per vendor
# =============================================================================

V4_ONLY = (IpFamily.V4,)


class DomainConfig:
    """Base of the per-vendor domain configurations."""

    kind: ClassVar[str] = ""

    hostname: str
    records: Tuple[str, ...]
    ip_types: Tuple[IpFamily, ...]
    base_url: str

    def __str__(self) -> str:
        return f"{self.kind} ({self.hostname})"


@dataclass(frozen=True)
class NamecheapConfig(DomainConfig):
    kind: ClassVar[str] = "namecheap"

    domain: str
    ddns_password: str = field(repr=False)
    records: Tuple[str, ...] = ("@",)
    base_url: str = "https://dynamicdns.park-your-domain.com"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY

    @property
    def hostname(self) -> str:
        return self.domain


@dataclass(frozen=True)
class HeConfig(DomainConfig):
    kind: ClassVar[str] = "he"

    hostname: str
    password: str = field(repr=False)
    records: Tuple[str, ...] = ("@",)
    base_url: str = "https://dyn.dns.he.net"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY


@dataclass(frozen=True)
class NoIpConfig(DomainConfig):
    """No-IP manages exactly one host, so it exposes a single apex record."""

    kind: ClassVar[str] = "noip"

    hostname: str
    username: str
    password: str = field(repr=False)
    base_url: str = "https://dynupdate.no-ip.com"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY

    @property
    def records(self) -> Tuple[str, ...]:
        return ("@",)


@dataclass(frozen=True)
class DynuConfig(DomainConfig):
    kind: ClassVar[str] = "dynu"

    hostname: str
    username: str
    password: str = field(repr=False)
    records: Tuple[str, ...] = ("@",)
    base_url: str = "https://api.dynu.com"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY


@dataclass(frozen=True)
class PorkbunConfig(DomainConfig):
    kind: ClassVar[str] = "porkbun"

    domain: str
    key: str = field(repr=False)
    secret: str = field(repr=False)
    records: Tuple[str, ...] = ("@",)
    base_url: str = "https://api.porkbun.com/api/json/v3"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY

    @property
    def hostname(self) -> str:
        return self.domain


@dataclass(frozen=True)
class GoDaddyConfig(DomainConfig):
    kind: ClassVar[str] = "godaddy"

    domain: str
    key: str = field(repr=False)
    secret: str = field(repr=False)
    records: Tuple[str, ...] = ("@",)
    base_url: str = "https://api.godaddy.com"
    ip_types: Tuple[IpFamily, ...] = V4_ONLY

    @property
    def hostname(self) -> str:
        return self.domain


DOMAIN_CONFIG_TYPES = {
    cls.kind: cls
    for cls in (
        NamecheapConfig,
        HeConfig,
        NoIpConfig,
        DynuConfig,
        PorkbunConfig,
        GoDaddyConfig,
    )
}


@dataclass(frozen=True)
class DnsConfig:
    """Top-level configuration for one invocation."""

    domains: Tuple[DomainConfig, ...] = ()
    ip_resolver: str = "opendns"
    log_level: str = "INFO"
    http_timeout_seconds: float = 10.0
    dns_timeout_seconds: float = 5.0

    def ip_types(self) -> List[IpFamily]:
        """Families to resolve; IPv4 alone when no domains are configured."""
        if not self.domains:
            return [IpFamily.V4]
        families = {family for domain in self.domains for family in domain.ip_types}
        return sorted(families, key=lambda family: family.value)


# =============================================================================
# Run results
# =============================================================================


@dataclass(frozen=True)
class DomainResult:
    """Outcome of reconciling one domain against one WAN address."""

    domain: DomainConfig
    family: IpFamily
    summary: Optional[UpdateSummary] = None
    error: Optional[Exception] = None
    elapsed_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RunResult:
    """Folded result of a whole run: total summary plus every error raised."""

    summary: UpdateSummary = UpdateSummary()
    errors: Tuple[Exception, ...] = ()
    domain_results: Tuple[DomainResult, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1
