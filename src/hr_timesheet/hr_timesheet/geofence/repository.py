from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeLocationSetting


class OfficeLocationRepository(Protocol):
    def get_for_team(self, team_id: int) -> Optional[OfficeLocationSetting]:
        raise NotImplementedError

    def upsert(self, setting: OfficeLocationSetting) -> None:
        raise NotImplementedError
