class RecepcaoError(Exception):
    """Classe base para todas as exceções do núcleo da recepção."""
    pass

class InvalidRecordError(RecepcaoError, ValueError):
    """
    Registro construído sem os campos obrigatórios.
    Exemplos:
    - nome vazio ou só com espaços;
    - telefone vazio.
    """
    pass

class InvalidStatusError(RecepcaoError, ValueError):
    """
    Valor de status/resultado fora das enumerações conhecidas.
    Levantado apenas nas transições pedidas pelo chamador; o motor de
    badges nunca levanta, apenas degrada.
    """
    pass

class InvalidScheduleWindowError(RecepcaoError, ValueError):
    """
    Parâmetros de grade inválidos.
    Exemplos:
    - start_hour >= end_hour, ou fora de 0..24;
    - slot_minutes <= 0.
    """
    pass
