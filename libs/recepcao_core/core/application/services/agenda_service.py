"""
Montagem da agenda diária.

Único ponto que recebe a coleção completa de registros: gera a grade,
aloca os registros e enriquece cada slot ocupado com badges, observações
limpas e dados financeiros. O resultado é dado puro, sem markup.
"""
from __future__ import annotations

import time
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime

import structlog

from recepcao_core.adapters.observability.metrics import (
    AGENDA_BUILD_COUNT,
    AGENDA_BUILD_DURATION,
    FINANCIAL_DECODE_COUNT,
    SLOT_CONFLICT_COUNT,
)
from recepcao_core.core.application.dtos.agenda_dto import (
    AgendaSlotEntryDTO,
    AgendaStatsDTO,
    AgendaViewDTO,
    SlotConflictDTO,
)
from recepcao_core.core.application.services.formatter_service import FormatterService
from recepcao_core.core.domain.entities.record_entity import RecordEntity, RecordStatus
from recepcao_core.core.domain.entities.slot_entity import SlotAssignment, SlotState
from recepcao_core.core.domain.events.events import SlotConflictDetectedEvent
from recepcao_core.core.domain.services import financial_codec, slot_scheduler, status_rules
from recepcao_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)


class AgendaService:
    def __init__(
        self,
        formatter: FormatterService,
        dispatcher: EventDispatcher | None = None,
        strict_conflicts: bool = False,
    ):
        self.formatter = formatter
        self.dispatcher = dispatcher
        self.strict_conflicts = strict_conflicts

    def build(  # noqa: PLR0913
        self,
        day: date,
        records: Iterable[RecordEntity],
        start_hour: int,
        end_hour: int,
        slot_minutes: int,
        now: datetime | None,
        selected_practitioner: str | None = None,
    ) -> AgendaViewDTO:
        start = time.perf_counter()
        records = list(records)
        try:
            slots = slot_scheduler.generate_slots(day, start_hour, end_hour, slot_minutes)
            assignments = slot_scheduler.assign_records(slots, records, day, selected_practitioner, now)
            conflicts = slot_scheduler.find_slot_conflicts(slots, records, day, selected_practitioner)
            off_grid = slot_scheduler.find_off_grid_records(slots, records, day, selected_practitioner)
            day_records = slot_scheduler.records_for_day(records, day, selected_practitioner)

            entries = [self._entry(a, day, now) for a in assignments]
            view = AgendaViewDTO(
                day=day,
                date_label=self.formatter.format_date_label(day),
                entries=entries,
                stats=self._stats(day_records, assignments),
                conflicts=[
                    SlotConflictDTO(
                        slot_label=c.slot.label,
                        kept_record_id=c.kept.id,
                        displaced_record_id=c.displaced.id,
                    )
                    for c in conflicts
                ],
                off_grid=off_grid,
            )
        finally:
            AGENDA_BUILD_DURATION.observe(time.perf_counter() - start)
        AGENDA_BUILD_COUNT.labels(str(self.strict_conflicts).lower()).inc()

        if conflicts:
            SLOT_CONFLICT_COUNT.inc(len(conflicts))
            self._report_conflicts(day, view.conflicts)
        if off_grid:
            logger.info("agenda.off_grid", day=str(day), records=[r.id for r in off_grid])

        logger.info(
            "agenda.built",
            day=str(day),
            slots=view.stats.total_slots,
            occupied=view.stats.occupied,
            records=view.stats.total,
            conflicts=len(view.conflicts),
            practitioner=selected_practitioner,
        )
        return view

    def status_counters(self, records: Iterable[RecordEntity]) -> dict[str, int]:
        """Contadores por coluna do kanban; status fora da enumeração contam à parte."""
        counts = {s.value: 0 for s in RecordStatus}
        for rec in records:
            key = rec.status.value if isinstance(rec.status, RecordStatus) else str(rec.status)
            counts[key] = counts.get(key, 0) + 1
        return counts

    # ───────────────────────── internos ──────────────────────────
    def _entry(self, assignment: SlotAssignment, day: date, now: datetime | None) -> AgendaSlotEntryDTO:
        slot = assignment.slot
        rec = assignment.record
        if rec is None:
            target = None
            if slot_scheduler.can_quick_schedule(assignment):
                target = f"{day.isoformat()}T{slot.label}"
            return AgendaSlotEntryDTO(slot=slot, state=assignment.state, quick_schedule_target=target)

        decoded = financial_codec.inspect_annotations(rec.annotations)
        FINANCIAL_DECODE_COUNT.labels(decoded.result).inc()
        if decoded.result == financial_codec.DECODE_MALFORMED:
            logger.warning("agenda.financial_malformed", record_id=rec.id)

        return AgendaSlotEntryDTO(
            slot=slot,
            state=assignment.state,
            record=rec,
            badges=status_rules.record_badges(rec),
            financial_badges=status_rules.financial_badges(decoded.financial, self.formatter.format_currency),
            clean_annotations=decoded.clean_text,
            financial=decoded.financial,
            status_info=status_rules.status_info(rec.status),
            phone_display=self.formatter.format_phone(rec.phone),
            initials=self.formatter.initials(rec.name),
            time_ago=self.formatter.format_time_ago(rec.created_at, now) if now else None,
            appointment_label=self.formatter.format_appointment_short(rec.appointment_time),
            consultation=rec.consultation,
        )

    def _stats(self, day_records: Sequence[RecordEntity], assignments: Sequence[SlotAssignment]) -> AgendaStatsDTO:
        states = Counter(a.state for a in assignments)
        return AgendaStatsDTO(
            total=len(day_records),
            by_status=self.status_counters(day_records),
            total_slots=len(assignments),
            occupied=states[SlotState.OCCUPIED],
            free=states[SlotState.FREE],
            past=states[SlotState.PAST],
        )

    def _report_conflicts(self, day: date, conflicts: Sequence[SlotConflictDTO]) -> None:
        if not self.strict_conflicts:
            logger.debug("agenda.conflicts", day=str(day), count=len(conflicts))
            return
        for c in conflicts:
            logger.warning(
                "agenda.slot_conflict",
                day=str(day),
                slot=c.slot_label,
                kept=c.kept_record_id,
                displaced=c.displaced_record_id,
            )
            if self.dispatcher is not None:
                self.dispatcher.dispatch(
                    SlotConflictDetectedEvent(
                        day=day,
                        slot_label=c.slot_label,
                        kept_record_id=c.kept_record_id,
                        displaced_record_id=c.displaced_record_id,
                    )
                )


def build_agenda_view(  # noqa: PLR0913
    day: date,
    records: Iterable[RecordEntity],
    start_hour: int,
    end_hour: int,
    slot_minutes: int,
    now: datetime | None,
    selected_practitioner: str | None = None,
) -> list[AgendaSlotEntryDTO]:
    """Sequência ordenada de slots renderizáveis para o dia."""
    service = AgendaService(FormatterService())
    view = service.build(day, records, start_hour, end_hour, slot_minutes, now, selected_practitioner)
    return view.entries
