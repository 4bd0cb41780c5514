"""
CRC — domain/services.py

Name
- Domain Service Interfaces (Protocols) for external collaborators

Responsibilities
- Define the contract with the hosted auth service (sign in / sign up).
- Define the contract of the side-effect-free SMTP connection probe.

Collaborators
- infrastructure.services.supabase_auth.SupabaseAuthClient
- infrastructure.services.smtp_probe.SmtpConnectionProbe
- application/usecases/accounts, application/usecases/configuration

Constraints
- No HTTP/SMTP imports here.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from .entities import DeliveryConfiguration


@dataclass(frozen=True)
class AuthIdentity:
    """Identidad creada por el servicio de auth."""

    user_id: UUID
    email: str


@dataclass(frozen=True)
class AuthSession:
    """Sesión emitida por el servicio de auth."""

    user_id: UUID
    email: str
    access_token: str = ""
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class ProbeResult:
    """Resultado del probe SMTP (no se persiste)."""

    success: bool
    message: str


class AuthService(Protocol):
    """
    R: Hosted auth service.

    Both operations raise AuthenticationError when credentials are rejected.
    """

    def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        ...


class SmtpProbe(Protocol):
    """
    R: Connection test against an SMTP endpoint.

    Must not send mail nor mutate any stored state.
    """

    def probe(self, configuration: DeliveryConfiguration) -> ProbeResult:
        ...
