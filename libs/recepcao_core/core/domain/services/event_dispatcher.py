from collections.abc import Callable

import structlog

from recepcao_core.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

EventListener = Callable[[DomainEvent], None]


class EventDispatcher:
    """
    Entrega eventos de domínio aos ouvintes inscritos.

    A inscrição vale para o tipo e seus subtipos: quem assina `DomainEvent`
    recebe tudo (útil para auditoria). A entrega segue do tipo mais
    específico para o mais genérico. Erro de um ouvinte é logado e não
    impede os demais nem volta para quem publicou.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[DomainEvent], list[EventListener]] = {}

    def subscribe(self, event_type: type[DomainEvent], listener: EventListener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)
        logger.debug("event.subscribed", event_type=event_type.__name__, listener=_name(listener))

    def listeners_for(self, event_type: type[DomainEvent]) -> list[EventListener]:
        return [
            listener
            for klass in event_type.__mro__
            if issubclass(klass, DomainEvent)
            for listener in self._listeners.get(klass, ())
        ]

    def dispatch(self, event: DomainEvent) -> int:
        """Publica o evento; devolve quantos ouvintes o processaram sem erro."""
        listeners = self.listeners_for(type(event))
        delivered = 0
        for listener in listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.error(
                    "event.listener_failed",
                    event_name=type(event).__name__,
                    event_id=str(event.event_id),
                    listener=_name(listener),
                    error=str(exc),
                    exc_info=True,
                )
            else:
                delivered += 1
        logger.info("event.dispatched", event_name=type(event).__name__, listeners=len(listeners), delivered=delivered)
        return delivered


def _name(listener: EventListener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)
