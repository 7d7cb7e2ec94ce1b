"""Concurrency and caching primitives shared by adapters and services."""

from mediahub.lib.fanout import FanOutResult, fan_out
from mediahub.lib.snapshot import Clock, TTLSnapshot

__all__ = [
    "Clock",
    "FanOutResult",
    "TTLSnapshot",
    "fan_out",
]
