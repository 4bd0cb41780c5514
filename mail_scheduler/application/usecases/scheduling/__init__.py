"""
===============================================================================
SCHEDULING USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso del ciclo de vida de ScheduledEmail
      (create / cancel / mark sent / mark failed) y sus lecturas.
    - Definir __all__ como contrato de API pública del paquete.
===============================================================================
"""

from __future__ import annotations

from .cancel_scheduled_email import CancelScheduledEmailUseCase
from .create_scheduled_email import (
    CreateScheduledEmailInput,
    CreateScheduledEmailUseCase,
)
from .list_emails import (
    EmailHistoryQuery,
    GetScheduledEmailUseCase,
    ListDueEmailsUseCase,
    ListEmailHistoryUseCase,
    ListPendingEmailsUseCase,
)
from .record_delivery import MarkEmailFailedUseCase, MarkEmailSentUseCase

__all__ = [
    "CancelScheduledEmailUseCase",
    "CreateScheduledEmailInput",
    "CreateScheduledEmailUseCase",
    "EmailHistoryQuery",
    "GetScheduledEmailUseCase",
    "ListDueEmailsUseCase",
    "ListEmailHistoryUseCase",
    "ListPendingEmailsUseCase",
    "MarkEmailFailedUseCase",
    "MarkEmailSentUseCase",
]
