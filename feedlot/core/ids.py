import itertools
import uuid
from collections import defaultdict
from typing import Dict, Iterator, Protocol


class IdGenerator(Protocol):
    def new_id(self, kind: str) -> str:
        ...


class UuidIdGenerator:
    """Ids opacos con uuid4, el generador por defecto."""

    def new_id(self, kind: str) -> str:
        return str(uuid.uuid4())


class SequenceIdGenerator:
    """
    Ids legibles tipo ``pen-001`` / ``SALE-002``, un contador por tipo.

    Los contadores viven en memoria: solo sirve para un store aislado
    (tests, datos de ejemplo), donde nadie más genera ids.
    """

    PREFIXES = {
        "pen": "pen",
        "feeding_record": "FEED",
        "death_loss": "DL",
        "treatment": "TRT",
        "partial_sale": "PSALE",
        "cattle_sale": "SALE",
        "nutritionist": "NUT",
        "operation": "OP",
        "plan": "PLAN",
        "schedule": "SCH",
        "schedule_change": "CHANGE",
    }

    def __init__(self, start: int = 1) -> None:
        self._counters: Dict[str, Iterator[int]] = defaultdict(
            lambda: itertools.count(start)
        )

    def new_id(self, kind: str) -> str:
        prefix = self.PREFIXES.get(kind, kind.upper())
        return f"{prefix}-{next(self._counters[kind]):03d}"


default_id_generator: IdGenerator = UuidIdGenerator()
