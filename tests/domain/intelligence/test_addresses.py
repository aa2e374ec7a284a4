from __future__ import annotations

import pytest

from botrecon.domain.intelligence import canonical_ipv4, parse_cidr, parse_ipv4

LAST_ADDRESS = (1 << 32) - 1


def test_parse_ipv4_returns_integer() -> None:
    assert parse_ipv4("1.2.3.4") == 0x01020304
    assert parse_ipv4(" 255.255.255.255 ") == LAST_ADDRESS


@pytest.mark.parametrize("text", [None, "", "abc", "256.1.1.1", "1.2.3", "1.2.3.4/24"])
def test_parse_ipv4_rejects_malformed(text: str | None) -> None:
    assert parse_ipv4(text) is None


def test_canonical_ipv4_strips_whitespace() -> None:
    assert canonical_ipv4(" 10.0.0.1\n") == "10.0.0.1"
    assert canonical_ipv4("nope") is None


def test_parse_cidr_masks_host_bits() -> None:
    start, end = parse_cidr("10.0.0.77/24") or (None, None)

    assert start == parse_ipv4("10.0.0.0")
    assert end == parse_ipv4("10.0.0.255")


def test_parse_cidr_full_and_single_address() -> None:
    assert parse_cidr("0.0.0.0/0") == (0, LAST_ADDRESS)
    assert parse_cidr("8.8.8.8/0") == (0, LAST_ADDRESS)

    single = parse_ipv4("192.0.2.1")
    assert parse_cidr("192.0.2.1/32") == (single, single)


@pytest.mark.parametrize(
    "text",
    ["1.2.3.4", "1.2.3.4/33", "1.2.3.4/-1", "1.2.3.4/ab", "300.1.1.1/8", "/8", ""],
)
def test_parse_cidr_rejects_malformed(text: str) -> None:
    assert parse_cidr(text) is None
