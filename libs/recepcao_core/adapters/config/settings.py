from decouple import config

# ───────────────────────────────────────────────
# Agenda
# ───────────────────────────────────────────────
AGENDA_START_HOUR       = config('AGENDA_START_HOUR', default=7, cast=int)
AGENDA_END_HOUR         = config('AGENDA_END_HOUR', default=20, cast=int)
AGENDA_SLOT_MINUTES     = config('AGENDA_SLOT_MINUTES', default=30, cast=int)
# publica SlotConflictDetectedEvent para cada registro deslocado
AGENDA_STRICT_CONFLICTS = config('AGENDA_STRICT_CONFLICTS', default=False, cast=bool)

# ───────────────────────────────────────────────
# Formatação
# ───────────────────────────────────────────────
CURRENCY_SYMBOL = config('CURRENCY_SYMBOL', default='R$')

# ───────────────────────────────────────────────
# Logging
# ───────────────────────────────────────────────
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
JSON_LOGS = config('JSON_LOGS', default=False, cast=bool)
