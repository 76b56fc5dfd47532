from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from recepcao_core.core.domain.entities._base import EntityMixin
from recepcao_core.core.domain.entities.record_entity import RecordEntity


class SlotState(str, Enum):
    PAST = "past"
    FREE = "free"
    OCCUPIED = "occupied"


@dataclass(frozen=True, slots=True)
class TimeSlot(EntityMixin):
    day: date
    hour: int
    minute: int
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True, slots=True)
class SlotAssignment(EntityMixin):
    slot: TimeSlot
    state: SlotState
    record: RecordEntity | None = None


@dataclass(frozen=True, slots=True)
class SlotConflict(EntityMixin):
    """Dois registros disputando o mesmo horário; o primeiro fica no slot."""
    slot: TimeSlot
    kept: RecordEntity
    displaced: RecordEntity
