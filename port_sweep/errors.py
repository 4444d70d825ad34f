from __future__ import annotations

from typing import Optional


class ScanError(Exception):
    """Base class for errors that abort a sweep."""


class InvalidAddressFormat(ScanError, ValueError):
    def __init__(self, text: str, reason: str = "expected four dot-separated integers in [0, 255]"):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid IPv4 address '{text}': {reason}")


class InvalidPortRange(ScanError, ValueError):
    def __init__(self, low: int, high: int):
        self.low = low
        self.high = high
        super().__init__(
            f"Invalid port range {low}-{high}: end port must be greater than or equal to start port"
        )


class ScanInterrupted(ScanError):
    """
    Raised when the wait for an address's workers is interrupted.
    Results already reported stay reported.
    """

    def __init__(self, address: Optional[str] = None):
        self.address = address
        where = f" while scanning {address}" if address else ""
        super().__init__(f"Scan interrupted{where}")
