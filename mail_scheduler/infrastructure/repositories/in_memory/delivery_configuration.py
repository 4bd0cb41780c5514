"""In-memory singleton store for DeliveryConfiguration (tests / local dev)."""

from __future__ import annotations

from threading import Lock
from typing import Optional

from ....domain.entities import DeliveryConfiguration


class InMemoryDeliveryConfigurationRepository:
    def __init__(self, initial: DeliveryConfiguration | None = None) -> None:
        self._lock = Lock()
        self._configuration = initial

    def get_configuration(self) -> Optional[DeliveryConfiguration]:
        with self._lock:
            return self._configuration

    def save_configuration(
        self, configuration: DeliveryConfiguration
    ) -> DeliveryConfiguration:
        # Entidad frozen: guardar la referencia no expone estado mutable.
        with self._lock:
            self._configuration = configuration
        return configuration
