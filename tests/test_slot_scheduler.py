"""
Grade de horários: cardinalidade, alocação por HH:MM exato, colisões,
registros fora da grade e classificação passado/livre/ocupado.
"""
from __future__ import annotations

from datetime import UTC, date, datetime
from unittest import TestCase

from recepcao_core.core.domain.entities.slot_entity import SlotState
from recepcao_core.core.domain.events.exceptions import InvalidScheduleWindowError
from recepcao_core.core.domain.services.slot_scheduler import (
    assign_records,
    can_quick_schedule,
    find_off_grid_records,
    find_slot_conflicts,
    generate_slots,
)
from tests.helpers.record_factory import make_record

DAY = date(2026, 10, 19)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


class GenerateSlotsTests(TestCase):
    def test_default_window_has_26_slots(self):
        slots = generate_slots(DAY, 7, 20, 30)
        self.assertEqual(len(slots), 26)
        self.assertEqual(slots[0].label, "07:00")
        self.assertEqual(slots[-1].label, "19:30")
        self.assertEqual(slots[-1].end, at(20))

    def test_uneven_duration_is_clipped(self):
        slots = generate_slots(DAY, 9, 10, 45)
        self.assertEqual([s.label for s in slots], ["09:00", "09:45"])
        self.assertEqual(slots[-1].end, at(10))

    def test_invalid_window(self):
        for args in ((10, 9, 30), (9, 9, 30), (-1, 9, 30), (7, 25, 30), (7, 20, 0), (7, 20, -15)):
            with self.assertRaises(InvalidScheduleWindowError, msg=str(args)):
                generate_slots(DAY, *args)


class AssignRecordsTests(TestCase):
    def test_scenario_second_slot_occupied(self):
        rec = make_record(appointment_time=at(9, 30), status="scheduled")
        slots = generate_slots(DAY, 9, 10, 30)
        assignments = assign_records(slots, [rec], DAY)
        self.assertEqual(len(assignments), 2)
        self.assertEqual(assignments[0].state, SlotState.FREE)
        self.assertIsNone(assignments[0].record)
        self.assertEqual(assignments[1].state, SlotState.OCCUPIED)
        self.assertIs(assignments[1].record, rec)

    def test_other_days_and_unscheduled_records_ignored(self):
        records = [
            make_record(appointment_time=at(9, 0, day=date(2026, 10, 20))),
            make_record(appointment_time=None),
        ]
        assignments = assign_records(generate_slots(DAY, 9, 10, 30), records, DAY)
        self.assertTrue(all(a.state is SlotState.FREE for a in assignments))

    def test_collision_first_wins(self):
        first = make_record(appointment_time=at(9, 0))
        second = make_record(appointment_time=at(9, 0))
        slots = generate_slots(DAY, 9, 10, 30)
        assignments = assign_records(slots, [first, second], DAY)
        self.assertIs(assignments[0].record, first)
        ids = [a.record.id for a in assignments if a.record is not None]
        self.assertEqual(len(ids), len(set(ids)))

        (conflict,) = find_slot_conflicts(slots, [first, second], DAY)
        self.assertEqual(conflict.slot.label, "09:00")
        self.assertIs(conflict.kept, first)
        self.assertIs(conflict.displaced, second)

    def test_practitioner_filter_is_case_and_space_insensitive(self):
        ana = make_record(appointment_time=at(9, 0), practitioner="Dra. Ana ")
        bia = make_record(appointment_time=at(9, 30), practitioner="Dra. Bia")
        slots = generate_slots(DAY, 9, 10, 30)
        assignments = assign_records(slots, [ana, bia], DAY, selected_practitioner="  dra. ana")
        self.assertIs(assignments[0].record, ana)
        self.assertEqual(assignments[1].state, SlotState.FREE)
        # filtro vazio ⇒ todos
        assignments = assign_records(slots, [ana, bia], DAY, selected_practitioner="")
        self.assertEqual([a.state for a in assignments], [SlotState.OCCUPIED, SlotState.OCCUPIED])

    def test_past_and_free(self):
        slots = generate_slots(DAY, 9, 11, 30)
        rec = make_record(appointment_time=at(9, 0))
        assignments = assign_records(slots, [rec], DAY, now=at(10, 0))
        self.assertEqual(
            [a.state for a in assignments],
            [SlotState.OCCUPIED, SlotState.PAST, SlotState.FREE, SlotState.FREE],
        )
        self.assertFalse(can_quick_schedule(assignments[0]))
        self.assertFalse(can_quick_schedule(assignments[1]))
        self.assertTrue(can_quick_schedule(assignments[2]))

    def test_without_now_nothing_is_past(self):
        assignments = assign_records(generate_slots(DAY, 9, 10, 30), [], DAY)
        self.assertTrue(all(a.state is SlotState.FREE for a in assignments))

    def test_aware_now_is_compared_as_local_time(self):
        now = datetime(2026, 10, 19, 9, 45, tzinfo=UTC)
        assignments = assign_records(generate_slots(DAY, 9, 10, 30), [], DAY, now=now)
        self.assertEqual([a.state for a in assignments], [SlotState.PAST, SlotState.PAST])


class OffGridTests(TestCase):
    def test_time_between_slots_is_reported(self):
        on_grid = make_record(appointment_time=at(9, 0))
        between = make_record(appointment_time=at(9, 15))
        slots = generate_slots(DAY, 9, 10, 30)
        assignments = assign_records(slots, [on_grid, between], DAY)
        self.assertNotIn(between, [a.record for a in assignments])
        self.assertEqual(find_off_grid_records(slots, [on_grid, between], DAY), [between])
        self.assertEqual(find_slot_conflicts(slots, [on_grid, between], DAY), [])
