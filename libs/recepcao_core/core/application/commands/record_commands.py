from dataclasses import dataclass
from datetime import datetime

from recepcao_core.core.application.cqrs import CommandDTO
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity
from recepcao_core.core.domain.entities.record_entity import RecordEntity


@dataclass(frozen=True, slots=True)
class TransitionStatusCommand(CommandDTO):
    record: RecordEntity
    new_status: str


@dataclass(frozen=True, slots=True)
class RecordOutcomeCommand(CommandDTO):
    record: RecordEntity
    outcome: str


@dataclass(frozen=True, slots=True)
class RescheduleRecordCommand(CommandDTO):
    record: RecordEntity
    new_time: datetime


@dataclass(frozen=True, slots=True)
class StartFollowUpCommand(CommandDTO):
    record: RecordEntity
    new_id: int | str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class UpdateFinancialCommand(CommandDTO):
    record: RecordEntity
    financial: FinancialEntity | None
