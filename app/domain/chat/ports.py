"""
Port interfaces (ABCs) for the chat bounded context.

Ports define the contracts that the domain requires from the outside world.
Persistence adapters implement these interfaces and exchange entities with
the store through ``to_primitives`` / ``from_primitives``.
The domain layer never depends on concrete implementations.

Adapters must serialize writes per aggregate (row lock or optimistic
version check): two concurrent ``save`` calls for the same daily query
counter must not both succeed from the same starting value.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from app.domain.chat.entities import (
    ConsumoProducto,
    ControlConsultaDiaria,
    ConversacionChat,
    MensajeChat,
    RecomendacionNutricional,
)


class ConsumoProductoRepository(ABC):
    """Port for persisting product consumption logs."""

    @abstractmethod
    def save(self, consumo: ConsumoProducto) -> None:
        """Insert or update a consumption log."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, consumo_id: str) -> Optional[ConsumoProducto]:
        """Return a consumption log by id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_by_cliente(
        self,
        cliente_id: str,
        desde: Optional[datetime] = None,
        hasta: Optional[datetime] = None,
    ) -> list[ConsumoProducto]:
        """Return a client's consumption logs.

        Args:
            cliente_id: Client whose logs are requested.
            desde: Optional lower bound on fecha_consumo (inclusive).
            hasta: Optional upper bound on fecha_consumo (inclusive).

        Returns:
            List of ConsumoProducto ordered by fecha_consumo descending.
        """
        raise NotImplementedError


class ControlConsultaDiariaRepository(ABC):
    """Port for the per-day query counters.

    At most one counter exists per (cliente_id, fecha).
    """

    @abstractmethod
    def get_by_cliente_y_fecha(
        self, cliente_id: str, fecha: date
    ) -> Optional[ControlConsultaDiaria]:
        """Return the client's counter for the day, or None if none exists yet."""
        raise NotImplementedError

    @abstractmethod
    def save(self, control: ControlConsultaDiaria) -> None:
        """Insert or update a counter."""
        raise NotImplementedError


class ConversacionChatRepository(ABC):
    """Port for persisting chat conversations."""

    @abstractmethod
    def get_by_id(self, conversacion_id: str) -> Optional[ConversacionChat]:
        raise NotImplementedError

    @abstractmethod
    def list_by_cliente(
        self, cliente_id: str, solo_activas: bool = False
    ) -> list[ConversacionChat]:
        """Return a client's conversations, most recently updated first."""
        raise NotImplementedError

    @abstractmethod
    def save(self, conversacion: ConversacionChat) -> None:
        raise NotImplementedError


class MensajeChatRepository(ABC):
    """Port for persisting chat messages."""

    @abstractmethod
    def list_by_conversacion(
        self, conversacion_id: str, limit: Optional[int] = None
    ) -> list[MensajeChat]:
        """Return a conversation's messages ordered by timestamp ascending."""
        raise NotImplementedError

    @abstractmethod
    def save(self, mensaje: MensajeChat) -> None:
        raise NotImplementedError


class RecomendacionNutricionalRepository(ABC):
    """Port for persisting product recommendations."""

    @abstractmethod
    def get_by_id(self, recomendacion_id: str) -> Optional[RecomendacionNutricional]:
        raise NotImplementedError

    @abstractmethod
    def list_by_mensaje(self, mensaje_id: str) -> list[RecomendacionNutricional]:
        raise NotImplementedError

    @abstractmethod
    def list_pendientes_by_cliente(
        self, cliente_id: str
    ) -> list[RecomendacionNutricional]:
        """Return the client's recommendations still awaiting an answer."""
        raise NotImplementedError

    @abstractmethod
    def save(self, recomendacion: RecomendacionNutricional) -> None:
        raise NotImplementedError
