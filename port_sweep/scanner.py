from __future__ import annotations

import logging
import socket
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional

from .errors import ScanInterrupted
from .models import PortState, ProbeResult, ScanConfig, ScanJob, ScanRequest
from .output import Reporter
from .ports import PortRange, partition_ports, worker_count
from .targets import build_range

logger = logging.getLogger(__name__)

Probe = Callable[[str, int, float], ProbeResult]


def probe_port(address: str, port: int, timeout_s: float) -> ProbeResult:
    """
    One TCP connect attempt, bounded by timeout_s. Nothing is sent; the
    socket is closed as soon as the handshake completes. Refused,
    unreachable and timed-out attempts are all reported as CLOSED.
    """
    start = time.perf_counter()
    sock: Optional[socket.socket] = None
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(timeout_s)
        sock.connect((address, port))
        state = PortState.OPEN
    except (OSError, OverflowError):
        # OverflowError: port outside 0-65535
        state = PortState.CLOSED
    finally:
        if sock is not None:
            sock.close()

    elapsed = time.perf_counter() - start
    return ProbeResult(address=address, port=port, state=state, elapsed_s=round(elapsed, 4))


def scan_job(
    job: ScanJob,
    config: ScanConfig,
    reporter: Reporter,
    abort: threading.Event,
    probe: Probe,
) -> None:
    """Worker body: probe each port of the job in ascending order."""
    logger.debug("worker %s ports %s started", job.address, job.ports)
    for port in job.ports:
        if abort.is_set():
            logger.debug("worker %s ports %s aborted before port %d", job.address, job.ports, port)
            return
        result = probe(job.address, port, config.timeout_s)
        if config.should_report(result):
            reporter.report(result)
    logger.debug("worker %s ports %s finished", job.address, job.ports)


def scan_address(
    address: str,
    ports: PortRange,
    config: ScanConfig,
    reporter: Reporter,
    probe: Optional[Probe] = None,
) -> None:
    """
    Scans every port of one address with one worker thread per partition
    chunk, and returns only after all of those workers have finished.

    A Ctrl-C anywhere in here tells running workers to stop, cancels
    queued ones and raises ScanInterrupted.
    """
    probe = probe or probe_port
    plan = partition_ports(ports, config.ports_per_worker)
    logger.debug("partition for %s: %s", address, ", ".join(str(p) for p in plan))

    abort = threading.Event()
    pool = ThreadPoolExecutor(max_workers=len(plan), thread_name_prefix=f"sweep-{address}")
    futures: List[Future] = []
    try:
        reporter.address_started(address, plan)
        logger.info("dispatching %d worker(s) for %s", len(plan), address)

        for chunk in plan:
            job = ScanJob(address=address, ports=chunk)
            futures.append(pool.submit(scan_job, job, config, reporter, abort, probe))
        # Barrier: nothing below runs until every worker is done
        wait(futures)
        pool.shutdown(wait=True)

        for fut, chunk in zip(futures, plan):
            exc = fut.exception()
            if exc is not None:
                logger.error("worker for %s ports %s failed: %r", address, chunk, exc)

        reporter.address_completed(address)
    except KeyboardInterrupt:
        abort.set()
        pool.shutdown(wait=False, cancel_futures=True)
        logger.warning("scan of %s interrupted; %d worker(s) told to stop", address, len(futures))
        reporter.scan_interrupted(address)
        raise ScanInterrupted(address) from None


def run_scan(
    request: ScanRequest,
    config: ScanConfig,
    reporter: Reporter,
    probe: Optional[Probe] = None,
) -> None:
    """
    Validates the request, then scans addresses one after another.
    Raises InvalidAddressFormat / InvalidPortRange before any probe runs,
    and ScanInterrupted if the run is interrupted.
    """
    addresses = build_range(request.start_address, request.end_address)
    ports = PortRange(request.start_port, request.end_port)

    current: Optional[str] = None
    try:
        reporter.scan_started(addresses, ports, worker_count(ports, config.ports_per_worker))
        for current in addresses:
            scan_address(current, ports, config, reporter, probe=probe)
        reporter.scan_finished()
    except KeyboardInterrupt:
        # Between addresses or in a reporter hook; scan_address handles its own
        logger.warning("scan interrupted after %s", current or "start")
        reporter.scan_interrupted(current)
        raise ScanInterrupted(current) from None
