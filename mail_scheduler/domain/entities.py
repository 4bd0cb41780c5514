"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (ScheduledEmail, DeliveryConfiguration)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (due-ness, countdown) sobre las entidades.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.lifecycle: decide transiciones válidas entre EmailStatus.
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/HTTP/SMTP.
    - Las transiciones NO se hacen mutando la entidad: las aplica el
      repositorio con un write condicional (ver domain.lifecycle).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# ScheduledEmail
# ---------------------------------------------------------------------------


class EmailStatus(str, Enum):
    """Estado del ciclo de vida de un email agendado."""

    SCHEDULED = "Scheduled"
    SENT = "Sent"
    FAILED = "Failed"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not EmailStatus.SCHEDULED


OVERDUE_LABEL = "Vencido"


@dataclass
class ScheduledEmail:
    """
    Email agendado para envío futuro.

    Invariantes (garantizadas por repositorios + lifecycle):
      - owner_id no cambia tras la creación.
      - sent_at solo existe en SENT / FAILED.
      - error_message solo existe en FAILED.
    """

    id: UUID
    owner_id: UUID
    sender: str
    recipients: List[str]
    subject: str
    body: str
    scheduled_at: datetime
    cc: List[str] = field(default_factory=list)
    status: EmailStatus = EmailStatus.SCHEDULED
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def is_due(self, now: datetime | None = None) -> bool:
        """True si está agendado y su horario ya pasó."""
        now = now or _utcnow()
        return self.status == EmailStatus.SCHEDULED and self.scheduled_at <= now

    def time_until_send(self, now: datetime | None = None) -> timedelta:
        """Tiempo restante hasta scheduled_at (negativo si está vencido)."""
        return self.scheduled_at - (now or _utcnow())

    def countdown_label(self, now: datetime | None = None) -> str:
        """
        Etiqueta corta para la vista de pendientes.

        Formato: "2d 3h 15m", "3h 15m", "15m" o "Vencido".
        """
        remaining = self.time_until_send(now)
        if remaining <= timedelta(0):
            return OVERDUE_LABEL

        total_minutes = int(remaining.total_seconds() // 60)
        days, rest = divmod(total_minutes, 24 * 60)
        hours, minutes = divmod(rest, 60)

        if days > 0:
            return f"{days}d {hours}h {minutes}m"
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"


# ---------------------------------------------------------------------------
# DeliveryConfiguration
# ---------------------------------------------------------------------------

DEFAULT_CONFIGURATION_ID = "default"
DEFAULT_SMTP_PORT = 587


@dataclass(frozen=True)
class DeliveryConfiguration:
    """
    Configuración SMTP saliente (singleton, id="default").

    La consume el dispatcher externo. Los writes son reemplazos completos.
    """

    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_credential: str = field(repr=False)
    use_tls: bool = True
    id: str = DEFAULT_CONFIGURATION_ID

    @classmethod
    def defaults(cls) -> "DeliveryConfiguration":
        """Valores iniciales del formulario de configuración."""
        return cls(
            smtp_host="",
            smtp_port=DEFAULT_SMTP_PORT,
            smtp_user="",
            smtp_credential="",
            use_tls=True,
        )
