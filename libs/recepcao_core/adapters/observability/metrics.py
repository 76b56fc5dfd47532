from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

AGENDA_BUILD_COUNT = Counter(
    "recepcao_agenda_build_total",
    "Montagens da agenda diaria",
    ["strict"],
    registry=registry,
)

AGENDA_BUILD_DURATION = Histogram(
    "recepcao_agenda_build_duration_seconds",
    "Duracao da montagem da agenda",
    registry=registry,
)

SLOT_CONFLICT_COUNT = Counter(
    "recepcao_slot_conflicts_total",
    "Registros deslocados por colisao de horario",
    registry=registry,
)

FINANCIAL_DECODE_COUNT = Counter(
    "recepcao_financial_decode_total",
    "Leituras do bloco financeiro nas observacoes",
    ["result"],
    registry=registry,
)


def metrics_payload() -> tuple[bytes, str]:
    """Corpo + content-type para expor em /metrics pelo chamador."""
    return generate_latest(registry), CONTENT_TYPE_LATEST
