from dependency_injector import containers, providers

container = None


def setup_di_container_from_settings(settings):
    """
    Inicializa o DI container uma única vez e registra os handlers nos buses.
    `settings` é qualquer objeto com os atributos de
    `recepcao_core.adapters.config.settings` (o próprio módulo, em produção).
    """
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    from recepcao_core.adapters.config.structlog_config import configure_logging

    # Commands / Queries
    from recepcao_core.core.application.commands.record_commands import (
        RecordOutcomeCommand,
        RescheduleRecordCommand,
        StartFollowUpCommand,
        TransitionStatusCommand,
        UpdateFinancialCommand,
    )

    # CQRS buses
    from recepcao_core.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # Handlers
    from recepcao_core.core.application.handlers.agenda_handlers import (
        BuildAgendaViewHandler,
        ComputeBadgesHandler,
        DecodeAnnotationsHandler,
    )
    from recepcao_core.core.application.handlers.record_handlers import (
        RecordOutcomeHandler,
        RescheduleRecordHandler,
        StartFollowUpHandler,
        TransitionStatusHandler,
        UpdateFinancialHandler,
    )
    from recepcao_core.core.application.queries.agenda_queries import (
        BuildAgendaViewQuery,
        ComputeBadgesQuery,
        DecodeAnnotationsQuery,
    )

    # Serviços
    from recepcao_core.core.application.services.agenda_service import AgendaService
    from recepcao_core.core.application.services.formatter_service import FormatterService
    from recepcao_core.core.application.services.recepcao_facade import RecepcaoFacadeService
    from recepcao_core.core.domain.services.event_dispatcher import EventDispatcher

    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        event_dispatcher = providers.Singleton(EventDispatcher)

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # Serviços de negócio
        formatter_service = providers.Singleton(FormatterService, currency_symbol=config.currency_symbol)
        agenda_service    = providers.Singleton(
            AgendaService,
            formatter=formatter_service,
            dispatcher=event_dispatcher,
            strict_conflicts=config.agenda.strict_conflicts,
        )

        # Handlers (comandos)
        transition_status_handler = providers.Factory(TransitionStatusHandler)
        record_outcome_handler    = providers.Factory(RecordOutcomeHandler)
        reschedule_record_handler = providers.Factory(RescheduleRecordHandler)
        start_follow_up_handler   = providers.Factory(StartFollowUpHandler)
        update_financial_handler  = providers.Factory(UpdateFinancialHandler)

        # Handlers (queries)
        build_agenda_view_handler = providers.Factory(
            BuildAgendaViewHandler,
            agenda_service=agenda_service,
            start_hour=config.agenda.start_hour,
            end_hour=config.agenda.end_hour,
            slot_minutes=config.agenda.slot_minutes,
        )
        compute_badges_handler     = providers.Factory(ComputeBadgesHandler)
        decode_annotations_handler = providers.Factory(DecodeAnnotationsHandler)

        recepcao_facade = providers.Singleton(
            RecepcaoFacadeService,
            command_bus=command_bus,
            query_bus=query_bus,
        )

        def init(self):
            # Bus de comandos
            cmd_bus = self.command_bus()
            cmd_bus.register(TransitionStatusCommand, self.transition_status_handler())
            cmd_bus.register(RecordOutcomeCommand, self.record_outcome_handler())
            cmd_bus.register(RescheduleRecordCommand, self.reschedule_record_handler())
            cmd_bus.register(StartFollowUpCommand, self.start_follow_up_handler())
            cmd_bus.register(UpdateFinancialCommand, self.update_financial_handler())

            # Bus de queries
            qry_bus = self.query_bus()
            qry_bus.register(BuildAgendaViewQuery, self.build_agenda_view_handler())
            qry_bus.register(ComputeBadgesQuery, self.compute_badges_handler())
            qry_bus.register(DecodeAnnotationsQuery, self.decode_annotations_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.currency_symbol.from_value(settings.CURRENCY_SYMBOL)
    container.config.agenda.start_hour.from_value(settings.AGENDA_START_HOUR)
    container.config.agenda.end_hour.from_value(settings.AGENDA_END_HOUR)
    container.config.agenda.slot_minutes.from_value(settings.AGENDA_SLOT_MINUTES)
    container.config.agenda.strict_conflicts.from_value(settings.AGENDA_STRICT_CONFLICTS)
    Container.init(container)
    return container


def reset_container() -> None:
    """Descarta o container global (usado pelos testes)."""
    global container  # noqa: PLW0603
    container = None
