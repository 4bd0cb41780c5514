"""
===============================================================================
TARJETA CRC — mail_scheduler/context.py (Contexto por request / job)
===============================================================================

Responsabilidades:
  - Mantener contexto “request-scoped” usando ContextVars (async-safe).
  - Permitir correlación de logs sin pasar parámetros por todo el stack.

Colaboradores:
  - crosscutting.logger: enriquece logs leyendo get_context_dict().
  - La capa que invoca los use cases (UI / dispatcher) setea el contexto.

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Este paquete no llama set_request_context: los use cases no conocen
    el request. Quien los invoca (UI, dispatcher, script) es responsable
    de setear el contexto al inicio y llamar clear_context() al final;
    sin eso los logs salen sin request_id / actor_id / origin.
  - Es contexto de LOGS: la autorización NUNCA se lee de aquí; el Actor se
    pasa explícito a cada use case.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

# Identificador de request o ciclo del dispatcher.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Usuario que origina la operación (solo para correlación).
actor_id_var: ContextVar[str] = ContextVar("actor_id", default="")

# Origen lógico: "ui", "dispatcher", "script"...
origin_var: ContextVar[str] = ContextVar("origin", default="")

_CTX_REQUEST_ID: Final[str] = "request_id"
_CTX_ACTOR_ID: Final[str] = "actor_id"
_CTX_ORIGIN: Final[str] = "origin"


def set_request_context(
    *, request_id: str = "", actor_id: str = "", origin: str = ""
) -> None:
    """
    Setea el contexto mínimo del request.

    Regla:
      - Strings vacíos significan “no disponible”.
    """
    request_id_var.set(request_id or "")
    actor_id_var.set(actor_id or "")
    origin_var.set(origin or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := request_id_var.get():
        ctx[_CTX_REQUEST_ID] = val
    if val := actor_id_var.get():
        ctx[_CTX_ACTOR_ID] = val
    if val := origin_var.get():
        ctx[_CTX_ORIGIN] = val

    return ctx


def clear_context() -> None:
    """Limpia el contexto al final del request/job."""
    request_id_var.set("")
    actor_id_var.set("")
    origin_var.set("")
