from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

# ╭──────────────────────────────────────────────╮
# │ 1. Registros (ciclo de vida)                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class RecordStatusChangedEvent(DomainEvent):
    record_id: int | str
    old_status: str | None
    new_status: str

@dataclass(frozen=True)
class RecordOutcomeRecordedEvent(DomainEvent):
    record_id: int | str
    outcome: str
    status: str

@dataclass(frozen=True)
class RecordRescheduledEvent(DomainEvent):
    record_id: int | str
    old_time: datetime | None
    new_time: datetime

@dataclass(frozen=True)
class FollowUpStartedEvent(DomainEvent):
    origin_record_id: int | str
    record_id: int | str

@dataclass(frozen=True)
class FinancialDataUpdatedEvent(DomainEvent):
    record_id: int | str
    has_financial: bool

# ╭──────────────────────────────────────────────╮
# │ 2. Agenda                                    │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class SlotConflictDetectedEvent(DomainEvent):
    day: date
    slot_label: str
    kept_record_id: int | str
    displaced_record_id: int | str
