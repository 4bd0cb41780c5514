"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (perfil de aplicación)

Responsabilidades:
    - Definir el enum de roles (perfil) de usuario.
    - Definir el dataclass User (perfil guardado en la tabla users).
    - Mantener el contrato de datos de identidad centralizado y estable.

Colaboradores:
    - domain.access_policy: resuelve rol -> capacidades.
    - infrastructure/repositories/*/user.py: mapea filas -> User.
    - application/usecases/accounts: crea perfiles y sesiones.

Notas:
    - Los valores del enum son las etiquetas persistidas ("Usuário Padrão",
      "Administrador"), idénticas a las que guarda el backend externo.
    - El rol es inmutable en este subsistema.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Perfiles soportados."""

    STANDARD = "Usuário Padrão"
    ADMIN = "Administrador"


@dataclass(frozen=True, slots=True)
class User:
    """Perfil de usuario de la aplicación."""

    id: UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime | None = None
