from collections.abc import Iterable
from datetime import date, datetime

from recepcao_core.core.application.commands.record_commands import (
    RecordOutcomeCommand,
    RescheduleRecordCommand,
    StartFollowUpCommand,
    TransitionStatusCommand,
    UpdateFinancialCommand,
)
from recepcao_core.core.application.cqrs import CommandBus, QueryBus, RecordChangeResult
from recepcao_core.core.application.dtos.agenda_dto import AgendaViewDTO
from recepcao_core.core.application.queries.agenda_queries import (
    BuildAgendaViewQuery,
    ComputeBadgesQuery,
    DecodeAnnotationsQuery,
)
from recepcao_core.core.domain.entities.badge_entity import BadgeEntity
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity
from recepcao_core.core.domain.entities.record_entity import RecordEntity
from recepcao_core.core.domain.services.financial_codec import DecodedAnnotations


class RecepcaoFacadeService:
    """
    Fachada usada pela camada de apresentação.

    Cada operação vira um comando/query nos buses; quem chama recebe o
    registro alterado e é responsável por persisti-lo.
    """

    def __init__(self, command_bus: CommandBus, query_bus: QueryBus) -> None:
        self.commands = command_bus
        self.queries = query_bus

    # ------------------------------------------------ ciclo de vida
    def move_to(self, record: RecordEntity, new_status: str) -> RecordChangeResult:
        return self.commands.dispatch(TransitionStatusCommand(record=record, new_status=new_status))

    def mark_attendance(self, record: RecordEntity, outcome: str) -> RecordChangeResult:
        return self.commands.dispatch(RecordOutcomeCommand(record=record, outcome=outcome))

    def reschedule(self, record: RecordEntity, new_time: datetime) -> RecordChangeResult:
        return self.commands.dispatch(RescheduleRecordCommand(record=record, new_time=new_time))

    def start_follow_up(self, record: RecordEntity, new_id: int | str, created_at: datetime) -> RecordChangeResult:
        return self.commands.dispatch(StartFollowUpCommand(record=record, new_id=new_id, created_at=created_at))

    def update_financial(self, record: RecordEntity, financial: FinancialEntity | None) -> RecordChangeResult:
        return self.commands.dispatch(UpdateFinancialCommand(record=record, financial=financial))

    # ------------------------------------------------ leitura
    def agenda(
        self,
        day: date,
        records: Iterable[RecordEntity],
        now: datetime | None = None,
        selected_practitioner: str | None = None,
    ) -> AgendaViewDTO:
        return self.queries.dispatch(
            BuildAgendaViewQuery(
                day=day,
                records=tuple(records),
                now=now,
                selected_practitioner=selected_practitioner,
            )
        )

    def badges(self, status: str | None, outcome: str | None, category: str | None = None) -> tuple[BadgeEntity, ...]:
        return self.queries.dispatch(ComputeBadgesQuery(status=status, outcome=outcome, category=category))

    def annotations(self, text: str | None) -> DecodedAnnotations:
        return self.queries.dispatch(DecodeAnnotationsQuery(annotations=text))
