from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterator

from .errors import InvalidAddressFormat

MAX_ADDRESS = 0xFFFFFFFF


def parse_address(text: str) -> int:
    """
    Converts dotted-quad text to its 32-bit integer value.
    The first segment is the most significant byte: "10.0.0.1" -> 0x0A000001.
    Leading zeros are accepted ("010.0.0.1" == "10.0.0.1").
    """
    segments = text.strip().split(".")
    if len(segments) != 4:
        raise InvalidAddressFormat(text, f"expected 4 segments, got {len(segments)}")

    value = 0
    for seg in segments:
        # isdigit() rejects signs and inner whitespace that int() would accept
        if not seg.isascii() or not seg.isdigit():
            raise InvalidAddressFormat(text, f"segment '{seg}' is not a number")
        octet = int(seg)
        if octet > 255:
            raise InvalidAddressFormat(text, f"segment {octet} is out of range [0, 255]")
        value = (value << 8) | octet
    return value


def format_address(value: int) -> str:
    return str(ipaddress.IPv4Address(value & MAX_ADDRESS))


@dataclass(frozen=True)
class AddressRange:
    """
    Inclusive range of IPv4 addresses. Iterating yields dotted-quad text
    from low to high; each iteration starts over.
    """
    low: int
    high: int

    def __post_init__(self):
        if not (0 <= self.low <= self.high <= MAX_ADDRESS):
            raise ValueError(f"Invalid address range: {self.low}-{self.high}")

    def __len__(self) -> int:
        return self.high - self.low + 1

    def __iter__(self) -> Iterator[str]:
        for value in range(self.low, self.high + 1):
            yield format_address(value)

    def __str__(self) -> str:
        first, last = format_address(self.low), format_address(self.high)
        return first if self.low == self.high else f"{first} - {last}"


def build_range(start: str, end: str) -> AddressRange:
    """
    Parses both ends of an address range. Reversed input is swapped,
    so "10.0.0.5" .. "10.0.0.1" covers the same five addresses as the
    forward order.
    """
    low = parse_address(start)
    high = parse_address(end)
    if low > high:
        low, high = high, low
    return AddressRange(low, high)
