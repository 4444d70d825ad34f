import socket
import threading
from typing import List, Tuple

import pytest

from port_sweep.output import Reporter


class RecordingReporter(Reporter):
    """Keeps every event, in arrival order, for assertions."""

    def __init__(self):
        self.events: List[Tuple] = []
        self.results = []
        self.lock = threading.Lock()

    def record(self, *event):
        with self.lock:
            self.events.append(event)

    def scan_started(self, addresses, ports, workers):
        self.record("scan_started", len(addresses), str(ports), workers)

    def address_started(self, address, plan):
        self.record("address_started", address, [(p.low, p.high) for p in plan])

    def report(self, result):
        with self.lock:
            self.results.append(result)
            self.events.append(("result", result.address, result.port, result.state))

    def address_completed(self, address):
        self.record("address_completed", address)

    def scan_interrupted(self, address):
        self.record("scan_interrupted", address)

    def scan_finished(self):
        self.record("scan_finished")

    def names(self):
        return [e[0] for e in self.events]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def listener():
    """A loopback TCP listener; yields its port."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind(("127.0.0.1", 0))
    srv.listen(50)
    try:
        yield srv.getsockname()[1]
    finally:
        srv.close()


@pytest.fixture
def closed_port():
    """A loopback port that nothing is listening on."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
