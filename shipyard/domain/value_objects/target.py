"""
Target Value Object

Architectural Intent:
- Immutable value object representing the host a container is deployed to
- An absent address, 127.0.0.1 or localhost denote this machine
- Validates hostname format (DNS, IPv4, IPv6) when an address is given
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

LOCAL_ADDRESSES = ("127.0.0.1", "localhost")

# RFC 1123 hostname: labels of alnum/hyphens, dot-separated
_HOSTNAME_RE = re.compile(
    r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*$"
)

_IPV4_RE = re.compile(
    r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$"
)

_IPV6_RE = re.compile(r"^[0-9a-fA-F:]+$")


def _is_valid_hostname(host: str) -> bool:
    """Validate hostname as DNS name, IPv4, or IPv6."""
    m = _IPV4_RE.match(host)
    if m:
        return all(0 <= int(g) <= 255 for g in m.groups())

    if _IPV6_RE.match(host) and ":" in host:
        return True

    return bool(_HOSTNAME_RE.match(host)) and len(host) <= 253


def is_local_address(address: Optional[str]) -> bool:
    return not address or address in LOCAL_ADDRESSES


@dataclass(frozen=True)
class Target:
    """
    Value Object representing a deployable host.
    """
    private_ip_address: Optional[str] = None
    platform: Optional[str] = None

    def __post_init__(self) -> None:
        if self.private_ip_address and not _is_valid_hostname(self.private_ip_address):
            raise ValueError(f"Invalid target address: {self.private_ip_address!r}")

    @property
    def is_local(self) -> bool:
        return is_local_address(self.private_ip_address)

    def __str__(self) -> str:
        return self.private_ip_address or "localhost"

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Target":
        """Builds a Target from the orchestration layer's persisted record."""
        return Target(
            private_ip_address=data.get("privateIpAddress") or None,
            platform=data.get("platform") or None,
        )
