from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .team_model import Team


class TeamRepository(Protocol):
    def list_all(self) -> Sequence[Team]:
        raise NotImplementedError

    def get_by_id(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def create(self, *, team_name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, team_id: int, team_name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, team_id: int) -> bool:
        """Members keep their account with no team; the office location goes with the team."""
        raise NotImplementedError
