from datetime import datetime
from itertools import count

from recepcao_core.core.domain.entities.record_entity import RecordEntity

_ids = count(1)


def make_record(**overrides) -> RecordEntity:
    """RecordEntity válido com valores padrão; `overrides` substitui campos."""
    data = {
        "id": next(_ids),
        "name": "Maria Souza",
        "phone": "11987654321",
        "status": "new",
        "created_at": datetime(2026, 10, 19, 8, 0),
    }
    data.update(overrides)
    return RecordEntity(**data)
