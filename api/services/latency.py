"""Simulated network latency for the in-memory services.

Every service call awaits its latency strategy before touching a store, so
callers see the same scheduling behaviour they would get from a remote
backend. Tests inject ``NoLatency``.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass

from core.config import Settings


class Latency(ABC):
    """Delay applied before each service operation runs."""

    @abstractmethod
    async def wait(self) -> None:
        """Suspend the calling task for the simulated round trip."""


@dataclass
class FixedLatency(Latency):
    """Constant delay per operation."""
    delay_seconds: float = 0.5

    def __post_init__(self):
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    async def wait(self) -> None:
        await asyncio.sleep(self.delay_seconds)


class NoLatency(Latency):
    """Zero delay; still yields to the event loop once."""

    async def wait(self) -> None:
        await asyncio.sleep(0)


def latency_from_settings(settings: Settings) -> Latency:
    """Pick the latency strategy for the configured delay."""
    if settings.latency_ms == 0:
        return NoLatency()
    return FixedLatency(delay_seconds=settings.latency_seconds)
