from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

from recepcao_core.core.domain.entities.record_entity import RecordEntity
from recepcao_core.core.domain.events.events import DomainEvent
from recepcao_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# CQRS Genérico com Log de Performance
# ───────────────────────────────────────────────

# Type variables
C = TypeVar('C')  # Command type
Q = TypeVar('Q')  # Query type
R = TypeVar('R')  # Query result type

# Logger
logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base para todos comandos de escrita (transições de registro)."""
    pass

@dataclass(frozen=True)
class QueryDTO:
    """Base para consultas de leitura."""
    pass

@dataclass(frozen=True)
class RecordChangeResult:
    """Registro alterado + eventos a publicar. Persistir é papel do chamador."""
    record: RecordEntity
    events: Sequence[DomainEvent] = field(default_factory=tuple)

# ───────────────────────────────────────────────
# Handlers Protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any:
        """Processa um comando e devolve o novo estado."""
        ...

class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: Q) -> R:
        """Processa uma consulta e retorna um resultado."""
        ...

# ───────────────────────────────────────────────
# Buses com Logging
# ───────────────────────────────────────────────
class CommandBus:
    """Dispatcher de comandos com medição de performance."""
    def __init__(self) -> None:
        self._handlers: dict[type, CommandHandler] = {}

    def register(self, command_type: type[C], handler: CommandHandler[C]) -> None:
        self._handlers[command_type] = handler
        logger.debug("CommandHandler registrado", command=command_type.__name__)

    def dispatch(self, command: C) -> Any:
        handler = self._handlers.get(type(command))
        if not handler:
            raise ValueError(f"Nenhum handler para comando: {type(command).__name__}")
        start = time.perf_counter()
        logger.info("Executando comando", command=type(command).__name__)
        result = handler.handle(command)
        elapsed = time.perf_counter() - start
        logger.info("Comando executado", command=type(command).__name__, duration=f"{elapsed:.3f}s")
        return result

class QueryBus:
    """Dispatcher de queries com medição de performance."""
    def __init__(self) -> None:
        self._handlers: dict[type, QueryHandler] = {}

    def register(self, query_type: type[QueryDTO], handler: QueryHandler[Any, Any]) -> None:
        self._handlers[query_type] = handler
        logger.debug("QueryHandler registrado", query=query_type.__name__)

    def dispatch(self, query: QueryDTO) -> Any:
        handler = self._handlers.get(type(query))
        if not handler:
            raise ValueError(f"Nenhum handler para query: {type(query).__name__}")
        start = time.perf_counter()
        logger.info("Executando query", query=type(query).__name__)
        result = handler.handle(query)
        elapsed = time.perf_counter() - start
        logger.info("Query executada", query=type(query).__name__, duration=f"{elapsed:.3f}s")
        return result

class CommandBusImpl(CommandBus):
    """CommandBus que publica no dispatcher os eventos devolvidos pelos handlers."""
    def __init__(self, dispatcher: EventDispatcher):
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)

        if isinstance(result, RecordChangeResult):
            for evt in result.events:
                self.dispatcher.dispatch(evt)
        elif isinstance(result, DomainEvent):
            self.dispatcher.dispatch(result)

        return result

class QueryBusImpl(QueryBus):
    """
    Implementação padrão de QueryBus (herda toda a lógica de QueryBus).
    """
    # não exige nada além do já definido em QueryBus
    pass
