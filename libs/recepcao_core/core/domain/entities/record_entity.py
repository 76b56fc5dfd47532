from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from recepcao_core.core.domain.entities._base import EntityMixin
from recepcao_core.core.domain.events.exceptions import InvalidRecordError

# ───────────────────────────────────────────────
# Enumerações de status / resultado
# ───────────────────────────────────────────────

class RecordStatus(str, Enum):
    """Etapa principal do ciclo de vida de um registro."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    SCHEDULED = "scheduled"
    FINISHED = "finished"

    @classmethod
    def coerce(cls, value: RecordStatus | str | None) -> RecordStatus | str | None:
        """
        Normaliza o valor recebido do chamador.
        Aceita os nomes antigos das colunas do kanban (novo, agendado, ...).
        Valores desconhecidos voltam como string crua.
        """
        return _coerce(cls, _STATUS_ALIASES, value)


class RecordOutcome(str, Enum):
    """Resultado/evento secundário de um atendimento."""

    ATTENDED = "attended"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"

    @classmethod
    def coerce(cls, value: RecordOutcome | str | None) -> RecordOutcome | str | None:
        return _coerce(cls, _OUTCOME_ALIASES, value)


# resultados que só fazem sentido com o registro finalizado
OUTCOME_RESULTS = frozenset({RecordOutcome.ATTENDED, RecordOutcome.NO_SHOW, RecordOutcome.CANCELLED})

_STATUS_ALIASES = {
    "novo": RecordStatus.NEW,
    "em_atendimento": RecordStatus.IN_PROGRESS,
    "em atendimento": RecordStatus.IN_PROGRESS,
    "agendado": RecordStatus.SCHEDULED,
    "finalizado": RecordStatus.FINISHED,
}

_OUTCOME_ALIASES = {
    "compareceu": RecordOutcome.ATTENDED,
    "nao_compareceu": RecordOutcome.NO_SHOW,
    "cancelado": RecordOutcome.CANCELLED,
    "remarcado": RecordOutcome.RESCHEDULED,
}


def _coerce(enum_cls, aliases, value):
    if value is None or isinstance(value, enum_cls):
        return value
    norm = str(value).strip().lower()
    if not norm:
        return None
    try:
        return enum_cls(norm)
    except ValueError:
        return aliases.get(norm, str(value))


# ───────────────────────────────────────────────
# Categoria estruturada ("Consulta - ...")
# ───────────────────────────────────────────────
CONSULTATION_PREFIX = "Consulta - "
CATEGORY_SEPARATOR = " - "


@dataclass(frozen=True, slots=True)
class ConsultationDetails:
    specialty: str | None
    payment: str | None
    period: str | None
    days: str | None

    @classmethod
    def parse(cls, category: str | None) -> ConsultationDetails | None:
        """
        "Consulta - Cardiologia - Plano - Manhã - Seg/Qua" ⇒ 4 partes.
        Qualquer outra coisa é rótulo opaco e devolve None.
        """
        if not category or not category.startswith(CONSULTATION_PREFIX):
            return None
        parts = category.split(CATEGORY_SEPARATOR)[1:]
        parts += [""] * (4 - len(parts))
        specialty, payment, period, days = (p.strip() or None for p in parts[:4])
        return cls(specialty=specialty, payment=payment, period=period, days=days)


# ───────────────────────────────────────────────
# Registro (agendamento / lead)
# ───────────────────────────────────────────────
@dataclass(slots=True)
class RecordEntity(EntityMixin):
    id: int | str
    name: str
    phone: str
    status: RecordStatus | str
    created_at: datetime
    outcome: RecordOutcome | str | None = None
    appointment_time: datetime | None = None
    practitioner: str | None = None
    category: str | None = None
    annotations: str = ""

    def __post_init__(self):
        if not (self.name or "").strip():
            raise InvalidRecordError(f"Registro {self.id}: nome obrigatório")
        if not (self.phone or "").strip():
            raise InvalidRecordError(f"Registro {self.id}: telefone obrigatório")
        self.status = RecordStatus.coerce(self.status)
        self.outcome = RecordOutcome.coerce(self.outcome)
        self.annotations = self.annotations or ""

    @property
    def consultation(self) -> ConsultationDetails | None:
        return ConsultationDetails.parse(self.category)

    @property
    def is_schedulable(self) -> bool:
        """Sem horário marcado o registro não ocupa slot."""
        return self.appointment_time is not None
