"""
Grade diária de horários e alocação de registros nos slots.

A alocação é por casamento exato de HH:MM: um agendamento fora da grade
não é "puxado" para o slot mais próximo, ele aparece em
`find_off_grid_records` para que a anomalia fique visível.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

import structlog

from recepcao_core.core.domain.entities.record_entity import RecordEntity
from recepcao_core.core.domain.entities.slot_entity import SlotAssignment, SlotConflict, SlotState, TimeSlot
from recepcao_core.core.domain.events.exceptions import InvalidScheduleWindowError

logger = structlog.get_logger(__name__)


def generate_slots(day: date, start_hour: int, end_hour: int, slot_minutes: int) -> list[TimeSlot]:
    """
    Um slot a cada `slot_minutes`, de start_hour:00 até end_hour:00 (exclusivo).
    O último slot é cortado em end_hour:00 quando a duração não divide a janela.
    """
    if not (0 <= start_hour < end_hour <= 24):  # noqa: PLR2004
        raise InvalidScheduleWindowError(
            f"Janela inválida: {start_hour}h-{end_hour}h (esperado 0 <= início < fim <= 24)"
        )
    if slot_minutes <= 0:
        raise InvalidScheduleWindowError(f"Duração de slot inválida: {slot_minutes} min")

    base = datetime.combine(day, time.min)
    limit = end_hour * 60
    slots: list[TimeSlot] = []
    for offset in range(start_hour * 60, limit, slot_minutes):
        slots.append(
            TimeSlot(
                day=day,
                hour=offset // 60,
                minute=offset % 60,
                start=base + timedelta(minutes=offset),
                end=base + timedelta(minutes=min(offset + slot_minutes, limit)),
            )
        )
    return slots


def assign_records(
    slots: Sequence[TimeSlot],
    records: Iterable[RecordEntity],
    day: date,
    selected_practitioner: str | None = None,
    now: datetime | None = None,
) -> list[SlotAssignment]:
    """
    Anota cada slot com no máximo um registro.

    Colisões: vence o primeiro registro na ordem de entrada; os demais
    ficam fora do slot (ver `find_slot_conflicts`). `now=None` ⇒ nenhum
    slot é considerado passado.
    """
    by_label = _eligible_by_label(records, day, selected_practitioner)
    reference = _naive(now)

    assignments: list[SlotAssignment] = []
    for slot in slots:
        candidates = by_label.get(slot.label)
        if candidates:
            if len(candidates) > 1:
                logger.debug("slots.collision", day=str(day), slot=slot.label, records=len(candidates))
            assignments.append(SlotAssignment(slot=slot, state=SlotState.OCCUPIED, record=candidates[0]))
        elif reference is not None and slot.start < reference:
            assignments.append(SlotAssignment(slot=slot, state=SlotState.PAST))
        else:
            assignments.append(SlotAssignment(slot=slot, state=SlotState.FREE))
    return assignments


def find_slot_conflicts(
    slots: Sequence[TimeSlot],
    records: Iterable[RecordEntity],
    day: date,
    selected_practitioner: str | None = None,
) -> list[SlotConflict]:
    """Um item por registro deslocado, junto com o registro que ficou no slot."""
    by_label = _eligible_by_label(records, day, selected_practitioner)
    conflicts: list[SlotConflict] = []
    for slot in slots:
        kept, *displaced = by_label.get(slot.label) or [None]
        for other in displaced:
            conflicts.append(SlotConflict(slot=slot, kept=kept, displaced=other))
    return conflicts


def find_off_grid_records(
    slots: Sequence[TimeSlot],
    records: Iterable[RecordEntity],
    day: date,
    selected_practitioner: str | None = None,
) -> list[RecordEntity]:
    """Registros do dia cujo horário não bate com nenhum slot da grade."""
    labels = {slot.label for slot in slots}
    by_label = _eligible_by_label(records, day, selected_practitioner)
    return [rec for label, recs in by_label.items() if label not in labels for rec in recs]


def can_quick_schedule(assignment: SlotAssignment) -> bool:
    return assignment.state is SlotState.FREE


def records_for_day(
    records: Iterable[RecordEntity],
    day: date,
    selected_practitioner: str | None = None,
) -> list[RecordEntity]:
    """Registros com horário no dia (e do profissional, se filtrado), na ordem de entrada."""
    return [
        rec for rec in records
        if rec.is_schedulable
        and rec.appointment_time.date() == day
        and practitioner_matches(rec.practitioner, selected_practitioner)
    ]


def practitioner_matches(practitioner: str | None, selected: str | None) -> bool:
    if not selected or not selected.strip():
        return True
    return (practitioner or "").strip().casefold() == selected.strip().casefold()


# ───────────────────────── helpers ──────────────────────────
def _time_label(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def _eligible_by_label(
    records: Iterable[RecordEntity],
    day: date,
    selected_practitioner: str | None,
) -> dict[str, list[RecordEntity]]:
    by_label: dict[str, list[RecordEntity]] = {}
    for rec in records_for_day(records, day, selected_practitioner):
        by_label.setdefault(_time_label(rec.appointment_time), []).append(rec)
    return by_label


def _naive(moment: datetime | None) -> datetime | None:
    # a grade é montada em horário local sem tz; `now` deve vir no mesmo fuso
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.replace(tzinfo=None)
