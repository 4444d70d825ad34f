from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from .errors import InvalidAddressFormat, InvalidPortRange, ScanInterrupted
from .models import CONNECT_TIMEOUT_S, ScanConfig, ScanRequest
from .output import ConsoleReporter
from .scanner import run_scan

MAX_PORT = 65535


def port_number(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"port {port} is out of range [0, {MAX_PORT}]")
    return port


def positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if f <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return f


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="port-sweep",
        description="Multi-threaded TCP connect sweep over an IPv4 address range and a port range",
    )
    p.add_argument("--start-address", help="First IPv4 address (prompted for if omitted)")
    p.add_argument("--end-address", help="Last IPv4 address (default: same as start)")
    p.add_argument("--start-port", type=port_number, help="First port (prompted for if omitted)")
    p.add_argument("--end-port", type=port_number, help="Last port (default: same as start)")
    show = p.add_mutually_exclusive_group()
    show.add_argument(
        "--open-only", dest="open_only", action="store_const", const=True,
        help="Only display open ports (default; prompted for in interactive mode)",
    )
    show.add_argument(
        "--show-closed", dest="open_only", action="store_const", const=False,
        help="Also display closed ports",
    )
    p.add_argument(
        "--timeout",
        type=positive_float,
        default=CONNECT_TIMEOUT_S,
        help=f"Connect timeout seconds (default: {CONNECT_TIMEOUT_S})",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def prompt_missing(args: argparse.Namespace, ask: Callable[[str], str] = input) -> argparse.Namespace:
    """
    Asks on stdin for a start value the command line left out, and for
    its end value when that is missing too. A blank end answer means a
    single address / single port. The open-only filter is asked for last
    unless --open-only or --show-closed was given.
    """
    if args.start_address is None:
        args.start_address = ask("Enter start IP address: ").strip()
        if args.end_address is None:
            answer = ask("Enter end IP address (blank for a single address): ").strip()
            args.end_address = answer or args.start_address

    try:
        if args.start_port is None:
            args.start_port = port_number(ask("Enter start port: ").strip())
            if args.end_port is None:
                answer = ask("Enter end port (blank for a single port): ").strip()
                args.end_port = port_number(answer) if answer else args.start_port
    except argparse.ArgumentTypeError as e:
        raise SystemExit(f"Input format error: {e}")

    if args.open_only is None:
        answer = ask("Show only open ports (true/false, blank for true): ").strip()
        # Anything but "true" means false, blank keeps the default
        args.open_only = answer.lower() == "true" if answer else True
    return args


def main(argv=None, ask: Optional[Callable[[str], str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.start_address is None or args.start_port is None:
            args = prompt_missing(args, ask or input)
    except KeyboardInterrupt:
        return 130
    if args.open_only is None:
        args.open_only = True
    if args.end_address is None:
        args.end_address = args.start_address
    if args.end_port is None:
        args.end_port = args.start_port

    request = ScanRequest(
        start_address=args.start_address,
        end_address=args.end_address,
        start_port=args.start_port,
        end_port=args.end_port,
    )
    config = ScanConfig(only_show_open=args.open_only, timeout_s=args.timeout)

    try:
        run_scan(request, config, ConsoleReporter())
    except (InvalidAddressFormat, InvalidPortRange) as e:
        raise SystemExit(str(e))
    except (ScanInterrupted, KeyboardInterrupt):
        return 130

    return 0
