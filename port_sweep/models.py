from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .ports import PORTS_PER_WORKER, PortRange

CONNECT_TIMEOUT_S = 0.5


class PortState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ProbeResult:
    address: str
    port: int
    state: PortState
    elapsed_s: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.state is PortState.OPEN


@dataclass(frozen=True)
class ScanJob:
    """One worker's share of an address: every port in `ports`, in order."""
    address: str
    ports: PortRange


@dataclass(frozen=True)
class ScanConfig:
    only_show_open: bool = True
    timeout_s: float = CONNECT_TIMEOUT_S
    ports_per_worker: int = PORTS_PER_WORKER

    def __post_init__(self):
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0 (got {self.timeout_s})")
        if self.ports_per_worker < 1:
            raise ValueError(f"ports_per_worker must be >= 1 (got {self.ports_per_worker})")

    def should_report(self, result: ProbeResult) -> bool:
        return result.is_open or not self.only_show_open


@dataclass(frozen=True)
class ScanRequest:
    start_address: str
    end_address: str
    start_port: int
    end_port: int
