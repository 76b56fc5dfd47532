import logging
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

LOGGER_NAME = "recepcao_core"
_HANDLER_NAME = "recepcao_core.stdout"


def configure_logging(level: str = "INFO", json_logs: bool = False) -> logging.Logger:
    """
    Liga os loggers do pacote (`recepcao_core.*`) ao stdout via structlog.

    Só o logger `recepcao_core` recebe handler; o root logger da aplicação
    que nos importa fica intocado. Chamar de novo troca o handler anterior.
    JSON em produção, console colorido em dev.
    """
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True)
    numeric_level = logging.getLevelName(level.upper())

    structlog.configure(
        processors=[
            *pre_chain,
            CallsiteParameterAdder(
                parameters=[CallsiteParameter.MODULE, CallsiteParameter.FUNC_NAME, CallsiteParameter.LINENO]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )

    pkg_logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in pkg_logger.handlers if h.get_name() == _HANDLER_NAME]:
        pkg_logger.removeHandler(old)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(numeric_level)
    # já renderizado aqui; não duplica nos handlers do root
    pkg_logger.propagate = False
    return pkg_logger
