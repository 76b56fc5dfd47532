"""
Container DI + buses: cada comando/query registrado chega ao handler certo
e os eventos devolvidos pelos comandos passam pelo dispatcher.
"""
from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace
from unittest import TestCase

from recepcao_core.adapters.config import composition_root
from recepcao_core.core.application.cqrs import CommandBus, CommandDTO, QueryBus, QueryDTO, RecordChangeResult
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity
from recepcao_core.core.domain.entities.record_entity import RecordOutcome, RecordStatus
from recepcao_core.core.domain.events.events import (
    FinancialDataUpdatedEvent,
    FollowUpStartedEvent,
    RecordOutcomeRecordedEvent,
    RecordRescheduledEvent,
    RecordStatusChangedEvent,
    SlotConflictDetectedEvent,
)
from recepcao_core.core.domain.events.exceptions import InvalidStatusError
from tests.helpers.record_factory import make_record

DAY = date(2026, 10, 19)


def _settings(**overrides) -> SimpleNamespace:
    data = {
        "AGENDA_START_HOUR": 8,
        "AGENDA_END_HOUR": 12,
        "AGENDA_SLOT_MINUTES": 60,
        "AGENDA_STRICT_CONFLICTS": False,
        "CURRENCY_SYMBOL": "R$",
        "LOG_LEVEL": "WARNING",
        "JSON_LOGS": False,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


class ContainerWiringTests(TestCase):
    def setUp(self):
        composition_root.reset_container()
        self.container = composition_root.setup_di_container_from_settings(_settings())
        self.facade = self.container.recepcao_facade()
        self.events: list = []
        dispatcher = self.container.event_dispatcher()
        for evt_type in (
            RecordStatusChangedEvent,
            RecordOutcomeRecordedEvent,
            RecordRescheduledEvent,
            FollowUpStartedEvent,
            FinancialDataUpdatedEvent,
            SlotConflictDetectedEvent,
        ):
            dispatcher.subscribe(evt_type, self.events.append)

    def tearDown(self):
        composition_root.reset_container()

    # ----------------------------------------------------------------─  container

    def test_container_is_built_once(self):
        again = composition_root.setup_di_container_from_settings(_settings(AGENDA_SLOT_MINUTES=15))
        self.assertIs(again, self.container)

    def test_singletons_shared(self):
        self.assertIs(self.container.command_bus().dispatcher, self.container.event_dispatcher())
        self.assertIs(self.facade.commands, self.container.command_bus())

    # ----------------------------------------------------------------─  comandos

    def test_move_to_publishes_status_change(self):
        result = self.facade.move_to(make_record(status="new"), "agendado")
        self.assertIsInstance(result, RecordChangeResult)
        self.assertIs(result.record.status, RecordStatus.SCHEDULED)
        (evt,) = self.events
        self.assertIsInstance(evt, RecordStatusChangedEvent)
        self.assertEqual((evt.old_status, evt.new_status), ("new", "scheduled"))

    def test_move_to_same_status_has_no_event(self):
        self.facade.move_to(make_record(status="scheduled"), "scheduled")
        self.assertEqual(self.events, [])

    def test_invalid_status_propagates(self):
        with self.assertRaises(InvalidStatusError):
            self.facade.move_to(make_record(), "arquivado")
        self.assertEqual(self.events, [])

    def test_mark_attendance(self):
        result = self.facade.mark_attendance(make_record(status="scheduled"), "compareceu")
        self.assertIs(result.record.outcome, RecordOutcome.ATTENDED)
        self.assertIs(result.record.status, RecordStatus.FINISHED)
        self.assertEqual(
            [type(e) for e in self.events],
            [RecordOutcomeRecordedEvent, RecordStatusChangedEvent],
        )

    def test_reschedule(self):
        when = datetime(2026, 10, 21, 10, 0)
        result = self.facade.reschedule(make_record(status="finished", outcome="no_show"), when)
        self.assertEqual(result.record.appointment_time, when)
        (evt,) = self.events
        self.assertEqual(evt.new_time, when)

    def test_start_follow_up(self):
        origin = make_record(id=1, status="finished", outcome="attended")
        result = self.facade.start_follow_up(origin, 2, datetime(2026, 10, 19, 15, 0))
        self.assertEqual(result.record.id, 2)
        self.assertEqual(result.record.category, "retorno")
        (evt,) = self.events
        self.assertEqual((evt.origin_record_id, evt.record_id), (1, 2))

    def test_update_financial(self):
        rec = make_record(annotations="Obs")
        result = self.facade.update_financial(rec, FinancialEntity(payment_type="private", amount="120"))
        self.assertEqual(result.record.annotations, 'Obs\n{"financial":{"payment_type":"private","amount":"120"}}')
        self.assertTrue(self.events[0].has_financial)

        cleared = self.facade.update_financial(result.record, None)
        self.assertEqual(cleared.record.annotations, "Obs")
        self.assertFalse(self.events[1].has_financial)

    # ----------------------------------------------------------------─  queries

    def test_agenda_uses_configured_window(self):
        view = self.facade.agenda(DAY, [make_record(appointment_time=datetime(2026, 10, 19, 9, 0))])
        self.assertEqual([e.label for e in view.entries], ["08:00", "09:00", "10:00", "11:00"])
        self.assertEqual(view.stats.occupied, 1)

    def test_badges_and_annotations_queries(self):
        badges = self.facade.badges("finished", "cancelled", category="exame")
        self.assertEqual([b.label for b in badges], ["Exame", "Cancelado"])
        decoded = self.facade.annotations('A\n{"financial":{"payment_type":"private"}}')
        self.assertEqual(decoded.clean_text, "A")
        self.assertEqual(decoded.financial.payment_type, "private")


class StrictContainerTests(TestCase):
    def setUp(self):
        composition_root.reset_container()
        self.container = composition_root.setup_di_container_from_settings(_settings(AGENDA_STRICT_CONFLICTS=True))

    def tearDown(self):
        composition_root.reset_container()

    def test_conflicts_published(self):
        received = []
        self.container.event_dispatcher().subscribe(SlotConflictDetectedEvent, received.append)
        nine = datetime(2026, 10, 19, 9, 0)
        records = [make_record(appointment_time=nine), make_record(appointment_time=nine)]
        self.container.recepcao_facade().agenda(DAY, records)
        self.assertEqual(len(received), 1)


class BusTests(TestCase):
    def test_unregistered_command_and_query(self):
        with self.assertRaises(ValueError):
            CommandBus().dispatch(CommandDTO())
        with self.assertRaises(ValueError):
            QueryBus().dispatch(QueryDTO())


class SettingsModuleTests(TestCase):
    def tearDown(self):
        composition_root.reset_container()

    def test_container_from_settings_module(self):
        from recepcao_core.adapters.config import settings

        composition_root.reset_container()
        container = composition_root.setup_di_container_from_settings(settings)
        view = container.recepcao_facade().agenda(DAY, [])
        window = (settings.AGENDA_END_HOUR - settings.AGENDA_START_HOUR) * 60
        expected = -(-window // settings.AGENDA_SLOT_MINUTES)
        self.assertEqual(len(view.entries), expected)
        self.assertIsInstance(settings.AGENDA_STRICT_CONFLICTS, bool)
