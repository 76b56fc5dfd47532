from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from recepcao_core.core.domain.entities._base import EntityMixin


class BadgeKind(str, Enum):
    TYPE = "type"
    OUTCOME = "outcome"
    RESCHEDULE = "reschedule"
    UNKNOWN = "unknown"
    PAYMENT = "payment"
    AMOUNT = "amount"


@dataclass(frozen=True, slots=True)
class BadgeEntity(EntityMixin):
    kind: BadgeKind
    label: str
    icon: str
    color: str


@dataclass(frozen=True, slots=True)
class StatusInfo(EntityMixin):
    label: str
    color: str
    icon: str
