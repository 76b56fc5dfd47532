"""
Núcleo da recepção: ciclo de vida dos registros, badges, bloco financeiro
nas observações e agenda diária por slots.
"""
from recepcao_core.core.application.services.agenda_service import build_agenda_view
from recepcao_core.core.domain.services.financial_codec import decode, encode
from recepcao_core.core.domain.services.slot_scheduler import assign_records, generate_slots
from recepcao_core.core.domain.services.status_rules import (
    compute_badges,
    record_badges,
    record_outcome,
    reschedule,
    start_follow_up,
    transition_status,
)

__all__ = [
    "assign_records",
    "build_agenda_view",
    "compute_badges",
    "decode",
    "encode",
    "generate_slots",
    "record_badges",
    "record_outcome",
    "reschedule",
    "start_follow_up",
    "transition_status",
]
