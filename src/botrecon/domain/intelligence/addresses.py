"""IPv4 address and CIDR parsing.

Parsing is total: malformed input yields ``None`` instead of raising, so a single
bad feed line never interrupts ingestion or classification.
"""

from __future__ import annotations

from ipaddress import AddressValueError, IPv4Address
from typing import Final

ADDRESS_SPACE: Final[int] = 1 << 32


def parse_ipv4(text: str | None) -> int | None:
    if not text:
        return None
    try:
        return int(IPv4Address(text.strip()))
    except AddressValueError:
        return None


def canonical_ipv4(text: str | None) -> str | None:
    value = parse_ipv4(text)
    return None if value is None else str(IPv4Address(value))


def parse_cidr(text: str) -> tuple[int, int] | None:
    """Return the inclusive ``(start, end)`` range of ``a.b.c.d/n``.

    The address is masked by the prefix, so host bits in the input are ignored.
    """

    address, sep, prefix_text = text.strip().partition("/")
    if not sep:
        return None
    base = parse_ipv4(address)
    if base is None:
        return None
    try:
        prefix = int(prefix_text)
    except ValueError:
        return None
    if not 0 <= prefix <= 32:
        return None

    size = 1 << (32 - prefix)
    start = base & ~(size - 1) & (ADDRESS_SPACE - 1)
    end = (start + size - 1) % ADDRESS_SPACE
    return start, end


def is_range_scope(scope: str) -> bool:
    return "/" in scope
