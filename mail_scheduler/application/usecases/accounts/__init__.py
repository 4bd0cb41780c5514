"""Account use cases (register / sign in) over the hosted auth service."""

from .register_account import RegisterAccountInput, RegisterAccountUseCase
from .sign_in import Session, SignInUseCase

__all__ = [
    "RegisterAccountInput",
    "RegisterAccountUseCase",
    "Session",
    "SignInUseCase",
]
