"""Client address anonymization for like deduplication.

Addresses are coarsened before they are used as a liker identity:

- IPv4 keeps its first three octets: ``203.0.113.77`` → ``203.0.113.0``
- IPv6 keeps its first four groups: ``2001:db8:85a3:8d3:1319::7348`` →
  ``2001:db8:85a3:8d3::``
- IPv4-mapped IPv6 (``::ffff:203.0.113.77``) is treated as IPv4
- anything unparseable collapses into the shared ``0.0.0.0`` identity
"""

from __future__ import annotations

import ipaddress

UNKNOWN_ADDRESS = "0.0.0.0"

_IPV6_KEPT_GROUPS = 4


def _anonymize_ipv4(address: ipaddress.IPv4Address) -> str:
    octets = str(address).split(".")
    return ".".join(octets[:3] + ["0"])


def _anonymize_ipv6(address: ipaddress.IPv6Address) -> str:
    groups = [group.lstrip("0") or "0" for group in address.exploded.split(":")]
    return ":".join(groups[:_IPV6_KEPT_GROUPS]) + "::"


def anonymize(raw_address: str | None) -> str:
    """Derive the anonymized identity key for a raw client address.

    Never raises: empty, malformed or non-string input maps to
    ``UNKNOWN_ADDRESS``.
    """
    if not raw_address or not isinstance(raw_address, str):
        return UNKNOWN_ADDRESS

    try:
        address = ipaddress.ip_address(raw_address.strip())
    except ValueError:
        return UNKNOWN_ADDRESS

    if isinstance(address, ipaddress.IPv6Address):
        if address.ipv4_mapped is not None:
            return _anonymize_ipv4(address.ipv4_mapped)
        return _anonymize_ipv6(address)
    return _anonymize_ipv4(address)
