"""Timing windows, thresholds and sizes for sandbox surfaces and their hosts."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SandboxConfig:
    # Seconds.
    surface_resize_delay: float = 0.2
    scroll_settle_delay: float = 0.15
    host_apply_delay: float = 0.1
    # Height units.
    surface_report_threshold: int = 5
    host_noise_threshold: int = 2
    fallback_height: int = 600
    line_height: int = 20
    # Console columns for the terminal rendering context.
    width: int = 80

    @classmethod
    def from_dict(cls, data: dict) -> "SandboxConfig":
        """Build from a settings mapping. Unknown keys and wrong types are ignored."""
        if not isinstance(data, dict):
            return cls()
        kwargs = {}
        for f in dataclasses.fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            expected = float if f.type in (float, "float") else int
            # bool is an int subclass; never accept it as a number here.
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                logger.warning("ignoring sandbox setting %s=%r", f.name, value)
                continue
            kwargs[f.name] = expected(value)
        return cls(**kwargs)
