"""
Motor de regras de status.

Decide quais badges podem aparecer para um par (status, resultado) e aplica
as transições pedidas pelo chamador. Tudo aqui é função pura: nada é
persistido, o chamador grava o registro devolvido.

Regras de exibição:
  • compareceu / não veio / cancelado  → só com status `finished`
  • remarcado                          → só com `scheduled` ou `in_progress`
  • resultado desconhecido             → badge genérico onde algum resultado
                                         poderia aparecer
O resultado suprimido continua gravado no registro; só não é exibido.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import assert_never

import structlog

from recepcao_core.core.domain.entities.badge_entity import BadgeEntity, BadgeKind, StatusInfo
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity, canonical_payment_type
from recepcao_core.core.domain.entities.record_entity import (
    CONSULTATION_PREFIX,
    OUTCOME_RESULTS,
    RecordEntity,
    RecordOutcome,
    RecordStatus,
)
from recepcao_core.core.domain.events.exceptions import InvalidStatusError

logger = structlog.get_logger(__name__)

FOLLOW_UP_CATEGORY = "retorno"

# ───────────────────────────────────────────────
# Tabelas de badges
# ───────────────────────────────────────────────
_OUTCOME_BADGES: dict[RecordOutcome, BadgeEntity] = {
    RecordOutcome.ATTENDED: BadgeEntity(BadgeKind.OUTCOME, "Compareceu", "fa-check", "green"),
    RecordOutcome.NO_SHOW: BadgeEntity(BadgeKind.OUTCOME, "Não veio", "fa-times", "red"),
    RecordOutcome.CANCELLED: BadgeEntity(BadgeKind.OUTCOME, "Cancelado", "fa-ban", "gray"),
    RecordOutcome.RESCHEDULED: BadgeEntity(BadgeKind.RESCHEDULE, "Remarcado", "fa-calendar-alt", "yellow"),
}

_RESCHEDULE_STATUSES = frozenset({RecordStatus.SCHEDULED, RecordStatus.IN_PROGRESS})

# status em que *algum* resultado pode ser exibido
_BADGE_STATUSES = _RESCHEDULE_STATUSES | {RecordStatus.FINISHED}

_TYPE_BADGES: dict[str, BadgeEntity] = {
    "primeira_consulta": BadgeEntity(BadgeKind.TYPE, "Primeira Consulta", "fa-star", "yellow"),
    "retorno": BadgeEntity(BadgeKind.TYPE, "Retorno", "fa-redo", "blue"),
    "recorrente": BadgeEntity(BadgeKind.TYPE, "Sessão/Recorrente", "fa-sync", "purple"),
    "exame": BadgeEntity(BadgeKind.TYPE, "Exame", "fa-microscope", "pink"),
    "Atendimento Humano": BadgeEntity(BadgeKind.TYPE, "Atendimento Humano", "fa-user", "green"),
}
_CONSULTATION_BADGE = BadgeEntity(BadgeKind.TYPE, "Consulta", "fa-clipboard-list", "cyan")
_GENERAL_BADGE = BadgeEntity(BadgeKind.TYPE, "Geral", "fa-file", "gray")

_STATUS_INFO: dict[RecordStatus, StatusInfo] = {
    RecordStatus.NEW: StatusInfo("Novo", "blue", "fa-plus"),
    RecordStatus.IN_PROGRESS: StatusInfo("Em Atendimento", "purple", "fa-stethoscope"),
    RecordStatus.SCHEDULED: StatusInfo("Agendado", "amber", "fa-clock"),
    RecordStatus.FINISHED: StatusInfo("Finalizado", "cyan", "fa-check-double"),
}


# ───────────────────────────────────────────────
# Badges
# ───────────────────────────────────────────────
def compute_badges(
    status: RecordStatus | str | None,
    outcome: RecordOutcome | str | None,
) -> tuple[BadgeEntity, ...]:
    """
    Badges de resultado legalmente exibíveis para (status, outcome).

    Função total: nunca levanta. Sem resultado ⇒ vazio; status desconhecido
    ⇒ vazio.
    """
    status = RecordStatus.coerce(status)
    outcome = RecordOutcome.coerce(outcome)
    if outcome is None or not isinstance(status, RecordStatus):
        return ()

    badge = _outcome_badge(status, outcome)
    if badge is None:
        logger.debug("badge.suppressed", status=status.value, outcome=str(getattr(outcome, "value", outcome)))
        return ()
    return (badge,)


def _outcome_badge(status: RecordStatus, outcome: RecordOutcome | str) -> BadgeEntity | None:
    if not isinstance(outcome, RecordOutcome):
        if status in _BADGE_STATUSES:
            return BadgeEntity(BadgeKind.UNKNOWN, outcome, "fa-question", "gray")
        return None

    match outcome:
        case RecordOutcome.ATTENDED | RecordOutcome.NO_SHOW | RecordOutcome.CANCELLED:
            return _OUTCOME_BADGES[outcome] if status is RecordStatus.FINISHED else None
        case RecordOutcome.RESCHEDULED:
            return _OUTCOME_BADGES[outcome] if status in _RESCHEDULE_STATUSES else None
        case _:
            assert_never(outcome)


def type_badge(category: str | None) -> BadgeEntity:
    if not category:
        return _GENERAL_BADGE
    if category.startswith(CONSULTATION_PREFIX):
        return _CONSULTATION_BADGE
    badge = _TYPE_BADGES.get(category)
    if badge:
        return badge
    return BadgeEntity(BadgeKind.TYPE, f"? {category}", "fa-question", "gray")


def record_badges(record: RecordEntity) -> tuple[BadgeEntity, ...]:
    """Tipo primeiro, resultado/remarcação depois."""
    return (type_badge(record.category), *compute_badges(record.status, record.outcome))


def financial_badges(
    financial: FinancialEntity | None,
    format_currency: Callable[[Decimal], str],
) -> tuple[BadgeEntity, ...]:
    if financial is None:
        return ()

    badges: list[BadgeEntity] = []
    if financial.payment_type:
        match canonical_payment_type(financial.payment_type):
            case "private":
                badges.append(BadgeEntity(BadgeKind.PAYMENT, "Particular", "fa-money-bill", "emerald"))
            case "insurance":
                badges.append(BadgeEntity(BadgeKind.PAYMENT, financial.insurance_name or "Plano", "fa-hospital", "blue"))
            case "follow_up":
                badges.append(BadgeEntity(BadgeKind.PAYMENT, "Retorno", "fa-redo", "purple"))
            case _:
                badges.append(BadgeEntity(BadgeKind.PAYMENT, financial.payment_type, "fa-credit-card", "gray"))

    amount = financial.amount_decimal
    if amount:
        try:
            label = format_currency(amount)
        except InvalidOperation:
            # fora da precisão do contexto decimal: tratado como valor ilegível
            logger.debug("badge.amount_unformattable", amount=financial.amount)
        else:
            badges.append(BadgeEntity(BadgeKind.AMOUNT, label, "fa-coins", "green"))
    return tuple(badges)


def status_info(status: RecordStatus | str | None) -> StatusInfo:
    coerced = RecordStatus.coerce(status)
    if isinstance(coerced, RecordStatus):
        return _STATUS_INFO[coerced]
    if not coerced:
        return StatusInfo("Desconhecido", "gray", "fa-question")
    label = coerced.replace("_", " ").replace("-", " ").strip().title()
    return StatusInfo(label, "gray", "fa-question")


# ───────────────────────────────────────────────
# Transições
# ───────────────────────────────────────────────
def transition_status(record: RecordEntity, new_status: RecordStatus | str) -> RecordEntity:
    """Troca o status; valida só a pertença à enumeração."""
    status = RecordStatus.coerce(new_status)
    if not isinstance(status, RecordStatus):
        raise InvalidStatusError(f"Status inválido: {new_status!r}")
    return replace(record, status=status)


def record_outcome(record: RecordEntity, outcome: RecordOutcome | str) -> RecordEntity:
    """
    Registra o resultado do atendimento.
    Resultados (compareceu, não veio, cancelado) finalizam o registro;
    remarcado apenas marca o resultado.
    """
    value = RecordOutcome.coerce(outcome)
    if not isinstance(value, RecordOutcome):
        raise InvalidStatusError(f"Resultado inválido: {outcome!r}")
    if value in OUTCOME_RESULTS:
        return replace(record, status=RecordStatus.FINISHED, outcome=value)
    return replace(record, outcome=value)


def reschedule(record: RecordEntity, new_time: datetime) -> RecordEntity:
    return replace(
        record,
        appointment_time=new_time,
        outcome=RecordOutcome.RESCHEDULED,
        status=RecordStatus.SCHEDULED,
    )


def start_follow_up(record: RecordEntity, new_id: int | str, created_at: datetime) -> RecordEntity:
    """
    Novo ciclo (retorno) a partir de um registro: sempre um registro novo,
    nunca uma transição para trás.
    """
    return RecordEntity(
        id=new_id,
        name=record.name,
        phone=record.phone,
        status=RecordStatus.IN_PROGRESS,
        created_at=created_at,
        practitioner=record.practitioner,
        category=FOLLOW_UP_CATEGORY,
        annotations=record.annotations,
    )
