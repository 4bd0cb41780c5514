"""Delivery configuration use cases (admin)."""

from .manage_configuration import (
    GetDeliveryConfigurationUseCase,
    ProbeDeliveryConfigurationUseCase,
    UpdateDeliveryConfigurationUseCase,
    validate_configuration,
)

__all__ = [
    "GetDeliveryConfigurationUseCase",
    "ProbeDeliveryConfigurationUseCase",
    "UpdateDeliveryConfigurationUseCase",
    "validate_configuration",
]
