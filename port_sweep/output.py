from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, List, Optional, TextIO

if TYPE_CHECKING:
    from .models import ProbeResult
    from .ports import PortRange
    from .targets import AddressRange


def format_result(r: ProbeResult) -> str:
    return f"Host: {r.address} | Port {r.port}: {r.state.value} ({r.elapsed_s:.4f}s)"


class Reporter:
    """
    Receives scan events. report() is called from worker threads,
    everything else from the thread driving the scan.
    """

    def scan_started(self, addresses: AddressRange, ports: PortRange, workers: int) -> None:
        pass

    def address_started(self, address: str, plan: List[PortRange]) -> None:
        pass

    def report(self, result: ProbeResult) -> None:
        pass

    def address_completed(self, address: str) -> None:
        pass

    def scan_interrupted(self, address: Optional[str]) -> None:
        pass

    def scan_finished(self) -> None:
        pass


class ConsoleReporter(Reporter):
    """Prints one line per event; lines from concurrent workers never interleave."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.open_count = 0
        self.addresses_done = 0
        self._lock = threading.Lock()

    def _emit(self, line: str) -> None:
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()

    def scan_started(self, addresses: AddressRange, ports: PortRange, workers: int) -> None:
        self._emit(
            f"[*] Addresses: {len(addresses)} ({addresses}) | Ports: {ports} ({len(ports)}) "
            f"| Workers per address: {workers}"
        )

    def address_started(self, address: str, plan: List[PortRange]) -> None:
        self._emit(f"\n[*] Scanning {address} | ports {plan[0].low}-{plan[-1].high} | workers={len(plan)}")

    def report(self, result: ProbeResult) -> None:
        with self._lock:
            if result.is_open:
                self.open_count += 1
            self.stream.write(format_result(result) + "\n")
            self.stream.flush()

    def address_completed(self, address: str) -> None:
        self.addresses_done += 1
        self._emit(f"[+] Scan completed for {address}")

    def scan_interrupted(self, address: Optional[str]) -> None:
        where = f" while scanning {address}" if address else ""
        self._emit(f"[!] Scan interrupted{where}; remaining addresses skipped")

    def scan_finished(self) -> None:
        self._emit(f"\nFound {self.open_count} open ports on {self.addresses_done} address(es)")
