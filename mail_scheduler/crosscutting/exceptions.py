# mail_scheduler/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del núcleo de agendamiento
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SchedulerError + subclases

Responsabilidades:
  - Estandarizar los resultados de error por request (ninguno es fatal).
  - Generar error_id para rastreo.

Taxonomía:
  - ValidationError        input mal formado (nunca se reintenta)
  - AuthorizationError     rol/ownership insuficiente (nunca se reintenta)
  - InvalidTransitionError precondición de estado violada (incluye carreras)
  - PersistenceError       store/auditoría no disponible o timeout
  - NotFoundError          registro inexistente
  - AuthenticationError    el servicio de auth rechazó credenciales

Colaboradores:
  - application/usecases (levantan)
  - infrastructure/repositories (envuelven errores de psycopg)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para reportar errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class SchedulerError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      SchedulerError

    Responsabilidades:
      - Base para errores del sistema
      - Proveer error_code + error_id + message
    ----------------------------------------------------------------------------
    """

    error_code: str = "SCHEDULER_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class ValidationError(SchedulerError):
    """Input inválido (destinatarios, direcciones, fecha, puerto...)."""

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None, **kwargs):
        self.field = field
        super().__init__(message, **kwargs)


class AuthorizationError(SchedulerError):
    """El actor no tiene rol u ownership para la operación."""

    error_code: str = "FORBIDDEN"


class InvalidTransitionError(SchedulerError):
    """
    Transición de estado no permitida.

    Incluye el caso de carrera perdida: otro escritor cambió el estado
    entre la lectura y el write condicional.
    """

    error_code: str = "INVALID_TRANSITION"

    def __init__(
        self,
        message: str,
        *,
        current_status: str | None = None,
        target_status: str | None = None,
        **kwargs,
    ):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(message, **kwargs)


class PersistenceError(SchedulerError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "PERSISTENCE_ERROR"


class NotFoundError(SchedulerError):
    """Registro inexistente."""

    error_code: str = "NOT_FOUND"


class AuthenticationError(SchedulerError):
    """Credenciales rechazadas o respuesta inválida del servicio de auth."""

    error_code: str = "AUTHENTICATION_ERROR"
