"""
===============================================================================
TARJETA CRC — domain/value_objects.py
===============================================================================

Módulo:
    Direcciones de email (parseo + validación sintáctica)

Responsabilidades:
    - Parsear listas de direcciones escritas como texto libre
      ("a@x.com, b@y.com; c@z.com").
    - Validar sintaxis de cada dirección (EmailStr de pydantic, sin DNS).
    - Preservar el orden y el texto original (solo strip).

Colaboradores:
    - pydantic.EmailStr / email-validator
    - crosscutting.exceptions.ValidationError
    - application/usecases/scheduling/create_scheduled_email.py
    - application/usecases/accounts/register_account.py
===============================================================================
"""

from __future__ import annotations

import re
from typing import Iterable, List

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..crosscutting.exceptions import ValidationError

# Separadores aceptados en el campo "Para" / "CC".
_ADDRESS_SEPARATORS = re.compile(r"[,;]")

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def split_addresses(raw: str | Iterable[str] | None) -> List[str]:
    """
    Normaliza una lista de direcciones.

    Acepta:
      - None -> []
      - "a@x.com; b@y.com" -> ["a@x.com", "b@y.com"]
      - ["a@x.com", " b@y.com "] -> ["a@x.com", "b@y.com"]

    Descarta entradas vacías. No valida sintaxis.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        candidates = _ADDRESS_SEPARATORS.split(raw)
    else:
        candidates = []
        for item in raw:
            candidates.extend(_ADDRESS_SEPARATORS.split(str(item)))

    return [c.strip() for c in candidates if c and c.strip()]


def is_valid_address(address: str) -> bool:
    """True si la dirección es sintácticamente válida."""
    try:
        _EMAIL_ADAPTER.validate_python(address)
    except PydanticValidationError:
        return False
    return True


def validate_address(address: str, *, field: str) -> str:
    """Valida una dirección y devuelve su forma sin espacios."""
    cleaned = (address or "").strip()
    if not cleaned or not is_valid_address(cleaned):
        raise ValidationError(f"Invalid email address: {cleaned!r}", field=field)
    return cleaned


def validate_address_list(
    raw: str | Iterable[str] | None,
    *,
    field: str,
    required: bool,
) -> List[str]:
    """
    Parsea y valida una lista de direcciones.

    Reglas:
      - required=True y lista vacía -> ValidationError
      - cualquier dirección inválida -> ValidationError (se reporta la primera)
    """
    addresses = split_addresses(raw)
    if required and not addresses:
        raise ValidationError("At least one recipient is required.", field=field)

    return [validate_address(address, field=field) for address in addresses]
