"""Clock configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ObservabilityConfig:
    emit_events: bool = True


@dataclass
class ClockConfig:
    zone: str = "UTC"
    start: datetime | None = None  # naive: wall time in `zone`; None: real now
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)
