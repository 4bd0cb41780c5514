"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── scheduling/     # ScheduledEmail lifecycle (create, cancel, dispatcher marks, reads)
├── audit/          # Audit log read side (admin)
├── configuration/  # SMTP delivery configuration + connection probe (admin)
└── accounts/       # Register / sign in via the hosted auth service

Usage
-----
    from mail_scheduler.application.usecases.scheduling import CreateScheduledEmailUseCase

Or use the barrel exports from this module:

    from mail_scheduler.application.usecases import CreateScheduledEmailUseCase
"""

# Accounts
from .accounts import (
    RegisterAccountInput,
    RegisterAccountUseCase,
    Session,
    SignInUseCase,
)

# Audit
from .audit import AuditLogQuery, ListAuditRecordsUseCase

# Configuration
from .configuration import (
    GetDeliveryConfigurationUseCase,
    ProbeDeliveryConfigurationUseCase,
    UpdateDeliveryConfigurationUseCase,
)

# Scheduling
from .scheduling import (
    CancelScheduledEmailUseCase,
    CreateScheduledEmailInput,
    CreateScheduledEmailUseCase,
    EmailHistoryQuery,
    GetScheduledEmailUseCase,
    ListDueEmailsUseCase,
    ListEmailHistoryUseCase,
    ListPendingEmailsUseCase,
    MarkEmailFailedUseCase,
    MarkEmailSentUseCase,
)

__all__ = [
    # Accounts
    "RegisterAccountInput",
    "RegisterAccountUseCase",
    "Session",
    "SignInUseCase",
    # Audit
    "AuditLogQuery",
    "ListAuditRecordsUseCase",
    # Configuration
    "GetDeliveryConfigurationUseCase",
    "ProbeDeliveryConfigurationUseCase",
    "UpdateDeliveryConfigurationUseCase",
    # Scheduling
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
