from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named daily work period.

    Times carry no date; end_time <= start_time means the shift crosses midnight.
    """

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time

    @property
    def is_overnight(self) -> bool:
        return self.end_time <= self.start_time
