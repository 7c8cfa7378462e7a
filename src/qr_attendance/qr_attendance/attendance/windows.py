from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Optional

from ..core.constants import TIME_IN_END, TIME_IN_START, TIME_OUT_END, TIME_OUT_START


class ScanKind(str, Enum):
    TIME_IN = "time_in"
    TIME_OUT = "time_out"


@dataclass(frozen=True)
class ScanWindows:
    """Daily windows during which SBO officers may record a scan (inclusive bounds)."""

    time_in_start: time = TIME_IN_START
    time_in_end: time = TIME_IN_END
    time_out_start: time = TIME_OUT_START
    time_out_end: time = TIME_OUT_END

    def allows(self, kind: ScanKind, now: datetime) -> bool:
        t = now.time()
        if kind == ScanKind.TIME_IN:
            return self.time_in_start <= t <= self.time_in_end
        return self.time_out_start <= t <= self.time_out_end

    def current(self, now: datetime) -> Optional[ScanKind]:
        for kind in ScanKind:
            if self.allows(kind, now):
                return kind
        return None

    def describe(self, kind: ScanKind) -> str:
        if kind == ScanKind.TIME_IN:
            start, end = self.time_in_start, self.time_in_end
            label = "Time-in"
        else:
            start, end = self.time_out_start, self.time_out_end
            label = "Time-out"
        return f"{label} is only allowed between {_clock(start)} and {_clock(end)}"


def _clock(t: time) -> str:
    return t.strftime("%I:%M %p").lstrip("0")
