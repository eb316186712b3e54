from __future__ import annotations

from typing import Protocol

from ..core.enums import EducationLevel
from .model import RosterSnapshot


class RosterRepository(Protocol):
    def load(self, level: EducationLevel) -> RosterSnapshot:
        raise NotImplementedError
