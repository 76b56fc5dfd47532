"""
Codec do sub-registro financeiro embutido no campo de observações.

O bloco é uma linha JSON compacta anexada ao texto livre:

    Paciente ansioso
    {"financial":{"payment_type":"insurance","insurance_name":"Acme","amount":"250.00"}}

`decode` nunca levanta: bloco ausente ou malformado devolve o texto original.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from recepcao_core.core.application.dtos.financial_dto import FinancialBlockDTO, FinancialEnvelopeDTO
from recepcao_core.core.domain.entities.financial_entity import FinancialEntity

logger = structlog.get_logger(__name__)

_BLOCK_RX = re.compile(r'\{\s*"financial"\s*:\s*\{[^{}]*\}\s*\}')
# bloco com chaves extras no fim do texto (formato antigo)
_TRAILING_BLOCK_RX = re.compile(r'\{[^{}]*"financial"[^{}]*\{[^{}]*\}[^{}]*\}\s*$')

_PREFIX = '{"financial":{'
_SUFFIX = "}}"

DECODE_FOUND = "found"
DECODE_ABSENT = "absent"
DECODE_MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class DecodedAnnotations:
    clean_text: str
    financial: FinancialEntity | None
    result: str = DECODE_ABSENT


def inspect_annotations(text: str | None) -> DecodedAnnotations:
    """Como `decode`, mas informa também se havia bloco malformado."""
    if not text:
        return DecodedAnnotations("", None)

    candidates = list(_BLOCK_RX.finditer(text))
    trailing = _TRAILING_BLOCK_RX.search(text)
    if trailing and all(m.span() != trailing.span() for m in candidates):
        candidates.append(trailing)
    if not candidates:
        return DecodedAnnotations(text, None)

    for match in candidates:
        try:
            envelope = FinancialEnvelopeDTO.model_validate_json(match.group(0).strip())
        except ValidationError as e:
            logger.debug("financial.block_malformed", position=match.start(), errors=e.error_count())
            continue
        block = envelope.financial
        financial = FinancialEntity(
            payment_type=block.payment_type,
            insurance_name=block.insurance_name,
            amount=block.amount,
        )
        return DecodedAnnotations(_remove_span(text, *match.span()), financial, DECODE_FOUND)

    return DecodedAnnotations(text, None, DECODE_MALFORMED)


def decode(text: str | None) -> tuple[str, FinancialEntity | None]:
    decoded = inspect_annotations(text)
    return decoded.clean_text, decoded.financial


def encode(text: str | None, financial: FinancialEntity | None) -> str:
    """
    Anexa o bloco financeiro ao texto, substituindo um bloco anterior.
    Campos ausentes são omitidos; sub-registro vazio devolve só o texto.
    """
    clean, _ = decode(text)
    if financial is None:
        return clean
    # nome do convênio só acompanha pagamento por convênio
    if financial.insurance_name and not financial.is_insurance:
        financial = FinancialEntity(payment_type=financial.payment_type, amount=financial.amount)
    if financial.is_empty:
        return clean
    block = serialize_financial(financial)
    return f"{clean}\n{block}" if clean else block


def serialize_financial(financial: FinancialEntity) -> str:
    envelope = FinancialEnvelopeDTO(
        financial=FinancialBlockDTO(
            payment_type=financial.payment_type,
            insurance_name=financial.insurance_name,
            amount=financial.amount,
        )
    )
    raw = envelope.model_dump_json(exclude_none=True)
    # chaves dentro dos valores quebrariam o casamento estrutural do decode
    body = raw[len(_PREFIX):-len(_SUFFIX)]
    body = body.replace("{", "\\u007b").replace("}", "\\u007d")
    return f"{_PREFIX}{body}{_SUFFIX}"


def _remove_span(text: str, start: int, end: int) -> str:
    """Remove o bloco; se ele ocupava a linha inteira, remove a linha."""
    s, e = start, end
    while s > 0 and text[s - 1] in " \t":
        s -= 1
    while e < len(text) and text[e] in " \t\r":
        e += 1
    own_line = (s == 0 or text[s - 1] == "\n") and (e == len(text) or text[e] == "\n")
    if not own_line:
        return text[:start] + text[end:]

    before, after = text[:s], text[e:]
    # só o "\n" escrito pelo encode; um "\r" anterior pertence ao texto
    if before.endswith("\n"):
        before = before[:-1]
    elif after.startswith("\n"):
        after = after[1:]
    return before + after
