"""Identidad: perfiles de usuario y roles."""

from .users import User, UserRole

__all__ = ["User", "UserRole"]
