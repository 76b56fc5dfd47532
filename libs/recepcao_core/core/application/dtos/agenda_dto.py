from dataclasses import dataclass, field
from datetime import date

from recepcao_core.core.domain.entities.badge_entity import BadgeEntity, StatusInfo
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity
from recepcao_core.core.domain.entities.record_entity import ConsultationDetails, RecordEntity
from recepcao_core.core.domain.entities.slot_entity import SlotState, TimeSlot


@dataclass(frozen=True)
class AgendaSlotEntryDTO:
    slot: TimeSlot
    state: SlotState
    record: RecordEntity | None = None
    badges: tuple[BadgeEntity, ...] = ()
    financial_badges: tuple[BadgeEntity, ...] = ()
    clean_annotations: str = ""
    financial: FinancialEntity | None = None
    status_info: StatusInfo | None = None
    phone_display: str | None = None
    initials: str | None = None
    time_ago: str | None = None
    appointment_label: str | None = None
    consultation: ConsultationDetails | None = None
    quick_schedule_target: str | None = None

    @property
    def label(self) -> str:
        return self.slot.label

    @property
    def is_occupied(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class SlotConflictDTO:
    slot_label: str
    kept_record_id: int | str
    displaced_record_id: int | str


@dataclass(frozen=True)
class AgendaStatsDTO:
    total: int
    by_status: dict[str, int]
    total_slots: int
    occupied: int
    free: int
    past: int

    @property
    def available(self) -> int:
        return self.total_slots - self.occupied


@dataclass(frozen=True)
class AgendaViewDTO:
    day: date
    date_label: str
    entries: list[AgendaSlotEntryDTO]
    stats: AgendaStatsDTO
    conflicts: list[SlotConflictDTO] = field(default_factory=list)
    off_grid: list[RecordEntity] = field(default_factory=list)
