from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from recepcao_core.core.domain.entities._base import EntityMixin

PAYMENT_PRIVATE = "private"
PAYMENT_INSURANCE = "insurance"
PAYMENT_FOLLOW_UP = "follow_up"

# grafias antigas gravadas pelo front antigo
_PAYMENT_ALIASES = {
    "particular": PAYMENT_PRIVATE,
    "plano": PAYMENT_INSURANCE,
    "convenio": PAYMENT_INSURANCE,
    "retorno": PAYMENT_FOLLOW_UP,
}


def canonical_payment_type(payment_type: str | None) -> str | None:
    if not payment_type:
        return None
    norm = payment_type.strip().lower()
    return _PAYMENT_ALIASES.get(norm, norm)


@dataclass(frozen=True, slots=True)
class FinancialEntity(EntityMixin):
    """Sub-registro financeiro embutido nas observações do registro."""
    payment_type: str | None = None
    insurance_name: str | None = None
    amount: str | None = None  # texto, evita ambiguidade de locale/arredondamento

    def __post_init__(self):
        # forma canônica: sem espaços nas pontas, branco vira None
        for name in ("payment_type", "insurance_name", "amount"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, value.strip() or None)

    @property
    def is_insurance(self) -> bool:
        return canonical_payment_type(self.payment_type) == PAYMENT_INSURANCE

    @property
    def is_empty(self) -> bool:
        return not (self.payment_type or self.insurance_name or self.amount)

    @property
    def amount_decimal(self) -> Decimal | None:
        if not self.amount:
            return None
        raw = self.amount
        # "1.234,56" (pt-BR) ⇒ "1234.56"
        if "," in raw:
            raw = raw.replace(".", "").replace(",", ".")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            return None
        return value if value.is_finite() else None
