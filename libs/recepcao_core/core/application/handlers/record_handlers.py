from dataclasses import replace

import structlog

from recepcao_core.core.application.cqrs import CommandHandler, RecordChangeResult
from recepcao_core.core.domain.entities.record_entity import RecordStatus
from recepcao_core.core.domain.events.events import (
    FinancialDataUpdatedEvent,
    FollowUpStartedEvent,
    RecordOutcomeRecordedEvent,
    RecordRescheduledEvent,
    RecordStatusChangedEvent,
)
from recepcao_core.core.domain.services import financial_codec, status_rules

from ..commands.record_commands import (
    RecordOutcomeCommand,
    RescheduleRecordCommand,
    StartFollowUpCommand,
    TransitionStatusCommand,
    UpdateFinancialCommand,
)

logger = structlog.get_logger(__name__)


def _status_value(status) -> str | None:
    if status is None:
        return None
    return status.value if isinstance(status, RecordStatus) else str(status)


class TransitionStatusHandler(CommandHandler[TransitionStatusCommand]):
    def handle(self, cmd: TransitionStatusCommand) -> RecordChangeResult:
        old = cmd.record.status
        updated = status_rules.transition_status(cmd.record, cmd.new_status)
        if updated.status == old:
            return RecordChangeResult(record=updated)
        logger.info("record.status_changed", record_id=updated.id, old=_status_value(old), new=updated.status.value)
        return RecordChangeResult(
            record=updated,
            events=(
                RecordStatusChangedEvent(
                    record_id=updated.id,
                    old_status=_status_value(old),
                    new_status=updated.status.value,
                ),
            ),
        )


class RecordOutcomeHandler(CommandHandler[RecordOutcomeCommand]):
    def handle(self, cmd: RecordOutcomeCommand) -> RecordChangeResult:
        updated = status_rules.record_outcome(cmd.record, cmd.outcome)
        events = [
            RecordOutcomeRecordedEvent(
                record_id=updated.id,
                outcome=updated.outcome.value,
                status=_status_value(updated.status),
            )
        ]
        if updated.status != cmd.record.status:
            events.append(
                RecordStatusChangedEvent(
                    record_id=updated.id,
                    old_status=_status_value(cmd.record.status),
                    new_status=_status_value(updated.status),
                )
            )
        return RecordChangeResult(record=updated, events=tuple(events))


class RescheduleRecordHandler(CommandHandler[RescheduleRecordCommand]):
    def handle(self, cmd: RescheduleRecordCommand) -> RecordChangeResult:
        updated = status_rules.reschedule(cmd.record, cmd.new_time)
        logger.info(
            "record.rescheduled",
            record_id=updated.id,
            old_time=str(cmd.record.appointment_time),
            new_time=str(cmd.new_time),
        )
        return RecordChangeResult(
            record=updated,
            events=(
                RecordRescheduledEvent(
                    record_id=updated.id,
                    old_time=cmd.record.appointment_time,
                    new_time=cmd.new_time,
                ),
            ),
        )


class StartFollowUpHandler(CommandHandler[StartFollowUpCommand]):
    """Devolve o *novo* registro de retorno; o original não é alterado."""

    def handle(self, cmd: StartFollowUpCommand) -> RecordChangeResult:
        follow_up = status_rules.start_follow_up(cmd.record, cmd.new_id, cmd.created_at)
        return RecordChangeResult(
            record=follow_up,
            events=(FollowUpStartedEvent(origin_record_id=cmd.record.id, record_id=follow_up.id),),
        )


class UpdateFinancialHandler(CommandHandler[UpdateFinancialCommand]):
    def handle(self, cmd: UpdateFinancialCommand) -> RecordChangeResult:
        annotations = financial_codec.encode(cmd.record.annotations, cmd.financial)
        updated = replace(cmd.record, annotations=annotations)
        _, financial = financial_codec.decode(annotations)
        return RecordChangeResult(
            record=updated,
            events=(FinancialDataUpdatedEvent(record_id=updated.id, has_financial=financial is not None),),
        )
