from dataclasses import dataclass
from datetime import date, datetime

from recepcao_core.core.application.cqrs import QueryDTO
from recepcao_core.core.domain.entities.record_entity import RecordEntity


@dataclass(frozen=True, slots=True)
class BuildAgendaViewQuery(QueryDTO):
    day: date
    records: tuple[RecordEntity, ...]
    now: datetime | None = None
    selected_practitioner: str | None = None
    # None ⇒ janela configurada no container
    start_hour: int | None = None
    end_hour: int | None = None
    slot_minutes: int | None = None


@dataclass(frozen=True, slots=True)
class ComputeBadgesQuery(QueryDTO):
    status: str | None
    outcome: str | None
    category: str | None = None


@dataclass(frozen=True, slots=True)
class DecodeAnnotationsQuery(QueryDTO):
    annotations: str | None
