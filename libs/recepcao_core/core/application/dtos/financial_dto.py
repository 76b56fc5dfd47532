from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# ───────────────────────────────────────────────
# Bloco financeiro embutido nas observações
# {"financial":{"payment_type":...,"insurance_name":...,"amount":...}}
# ───────────────────────────────────────────────

class FinancialBlockDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")

    # aceita também as chaves camelCase gravadas pelo front antigo
    payment_type: str | None = Field(None, validation_alias=AliasChoices("payment_type", "paymentType"))
    insurance_name: str | None = Field(None, validation_alias=AliasChoices("insurance_name", "insuranceName"))
    amount: str | None = Field(None, validation_alias=AliasChoices("amount", "value", "paymentValue"))

    @field_validator("payment_type", "insurance_name", "amount")
    @classmethod
    def _blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class FinancialEnvelopeDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    financial: FinancialBlockDTO
