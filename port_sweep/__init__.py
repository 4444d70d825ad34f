"""Multi-threaded TCP connect sweep over IPv4 address and port ranges."""

__version__ = "0.1.0"
