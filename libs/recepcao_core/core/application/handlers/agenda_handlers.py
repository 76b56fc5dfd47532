from recepcao_core.core.application.cqrs import QueryHandler
from recepcao_core.core.application.dtos.agenda_dto import AgendaViewDTO
from recepcao_core.core.application.services.agenda_service import AgendaService
from recepcao_core.core.domain.entities.badge_entity import BadgeEntity
from recepcao_core.core.domain.services import financial_codec, status_rules
from recepcao_core.core.domain.services.financial_codec import DecodedAnnotations

from ..queries.agenda_queries import BuildAgendaViewQuery, ComputeBadgesQuery, DecodeAnnotationsQuery


class BuildAgendaViewHandler(QueryHandler[BuildAgendaViewQuery, AgendaViewDTO]):
    def __init__(self, agenda_service: AgendaService, start_hour: int, end_hour: int, slot_minutes: int):
        self.agenda_service = agenda_service
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.slot_minutes = slot_minutes

    def handle(self, q: BuildAgendaViewQuery) -> AgendaViewDTO:
        return self.agenda_service.build(
            day=q.day,
            records=q.records,
            start_hour=self.start_hour if q.start_hour is None else q.start_hour,
            end_hour=self.end_hour if q.end_hour is None else q.end_hour,
            slot_minutes=self.slot_minutes if q.slot_minutes is None else q.slot_minutes,
            now=q.now,
            selected_practitioner=q.selected_practitioner,
        )


class ComputeBadgesHandler(QueryHandler[ComputeBadgesQuery, tuple[BadgeEntity, ...]]):
    def handle(self, q: ComputeBadgesQuery) -> tuple[BadgeEntity, ...]:
        badges = status_rules.compute_badges(q.status, q.outcome)
        if q.category is None:
            return badges
        return (status_rules.type_badge(q.category), *badges)


class DecodeAnnotationsHandler(QueryHandler[DecodeAnnotationsQuery, DecodedAnnotations]):
    def handle(self, q: DecodeAnnotationsQuery) -> DecodedAnnotations:
        return financial_codec.inspect_annotations(q.annotations)
