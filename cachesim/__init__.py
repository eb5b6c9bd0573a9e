"""Trace-driven set-associative cache simulator with FIFO, LRU and random replacement."""

__version__ = "0.1.0"

__all__ = ["policies", "simulator", "cli"]