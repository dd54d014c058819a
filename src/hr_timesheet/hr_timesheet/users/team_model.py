from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Team:
    """A group of employees sharing one office location."""

    team_id: int
    team_name: str
    description: Optional[str] = None
