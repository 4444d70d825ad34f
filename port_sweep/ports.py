from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from .errors import InvalidPortRange

# Ports handed to one worker thread
PORTS_PER_WORKER = 100


@dataclass(frozen=True)
class PortRange:
    low: int
    high: int

    def __post_init__(self):
        if self.high < self.low:
            raise InvalidPortRange(self.low, self.high)

    def __len__(self) -> int:
        return self.high - self.low + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.low, self.high + 1))

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


def worker_count(ports: PortRange, ports_per_worker: int = PORTS_PER_WORKER) -> int:
    if ports_per_worker < 1:
        raise ValueError(f"ports_per_worker must be >= 1 (got {ports_per_worker})")
    return -(-len(ports) // ports_per_worker)


def partition_ports(ports: PortRange, ports_per_worker: int = PORTS_PER_WORKER) -> List[PortRange]:
    """
    Splits a port range into contiguous, non-overlapping chunks of at most
    `ports_per_worker` ports, in ascending order.

    Chunk i starts at ports.low + i * ports_per_worker; only the last chunk
    may be shorter. The same input always yields the same plan.
    """
    plan: List[PortRange] = []
    for i in range(worker_count(ports, ports_per_worker)):
        start = ports.low + i * ports_per_worker
        if start > ports.high:
            break
        end = min(start + ports_per_worker - 1, ports.high)
        plan.append(PortRange(start, end))
    return plan
