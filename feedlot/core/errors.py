"""
Errores tipados del ledger.

Los servicios lanzan estas excepciones; los routers las traducen a
HTTPException (ver feedlot.api.deps).
"""


class LedgerError(Exception):
    """Base de todos los errores del ledger."""

    def __init__(self, message: str, **context) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class ValidationError(LedgerError):
    """Entrada mal formada o que viola una restricción (p.ej. cabezas > capacidad)."""


class NotFoundError(LedgerError):
    """Entidad inexistente o de otro operador (no revelamos que exista)."""


class ScheduleNotFound(NotFoundError):
    """El par (corral, horario) no existe en el catálogo de planes."""


class InvariantViolation(LedgerError):
    """La operación rompería un invariante (p.ej. número de cabezas negativo)."""
