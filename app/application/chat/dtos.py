"""
Data Transfer Objects for the chat application layer.

DTOs carry data between callers and the application layer.
They are plain dataclasses with no behavior. Enum-valued fields travel
as their string tags.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional


@dataclass(frozen=True)
class RegistrarConsultaCommand:
    """Input DTO for counting one chat query against the daily quota.

    Attributes:
        cliente_id: Client making the query.
        fecha: Day to count against. Defaults to today (UTC).
    """

    cliente_id: str
    fecha: Optional[date] = None


@dataclass(frozen=True)
class ConsultaResult:
    """Output DTO with the state of the daily quota after a query.

    Attributes:
        cliente_id: Client the quota belongs to.
        fecha: Day the quota refers to.
        consultas_realizadas: Queries counted so far, this one included.
        limite_consultas: Queries allowed that day.
        consultas_restantes: Queries still available.
    """

    cliente_id: str
    fecha: date
    consultas_realizadas: int
    limite_consultas: int
    consultas_restantes: int


@dataclass(frozen=True)
class IniciarConversacionCommand:
    """Input DTO for starting a conversation."""

    cliente_id: str
    plan_id: Optional[str] = None
    objetivo: Optional[str] = None
    contexto: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class FinalizarConversacionCommand:
    """Input DTO for closing a conversation.

    Attributes:
        conversacion_id: Conversation to close.
        abandonada: Close as ABANDONADA instead of COMPLETADA.
        fecha: End time for a completed conversation. Defaults to now.
    """

    conversacion_id: str
    abandonada: bool = False
    fecha: Optional[datetime] = None


@dataclass(frozen=True)
class ConversacionResult:
    """Output DTO for a conversation."""

    id: str
    cliente_id: str
    estado: str
    fecha_inicio: datetime
    fecha_fin: Optional[datetime]


@dataclass(frozen=True)
class RegistrarMensajeCommand:
    """Input DTO for appending a message to a conversation.

    Attributes:
        conversacion_id: Target conversation.
        rol: "usuario" or "asistente".
        contenido: Message text.
        tipo: TEXTO, RECOMENDACION or PLAN.
        metadatos: Optional free-form metadata.
    """

    conversacion_id: str
    rol: str
    contenido: str
    tipo: str = "TEXTO"
    metadatos: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class MensajeResult:
    """Output DTO for a stored message."""

    id: str
    conversacion_id: str
    rol: str
    tipo: str
    timestamp: datetime


@dataclass(frozen=True)
class RegistrarConsumoCommand:
    """Input DTO for logging a product consumption."""

    cliente_id: str
    producto_id: str
    fecha_consumo: datetime
    cantidad: float
    plan_id: Optional[str] = None
    tamano: Optional[str] = None
    momento_consumo: Optional[str] = None
    notas: Optional[str] = None
    recomendacion_id: Optional[str] = None


@dataclass(frozen=True)
class ConsumoResult:
    """Output DTO for a stored consumption log."""

    id: str
    cliente_id: str
    producto_id: str
    fecha_consumo: datetime
    fue_recomendado: bool


@dataclass(frozen=True)
class ResponderRecomendacionCommand:
    """Input DTO for the client's answer to a recommendation.

    Attributes:
        recomendacion_id: Recommendation being answered.
        accion: "aceptar", "rechazar" or "modificar".
        nuevo_timing: Replacement timing, required when accion is "modificar".
    """

    recomendacion_id: str
    accion: str
    nuevo_timing: Optional[str] = None


@dataclass(frozen=True)
class RecomendacionResult:
    """Output DTO for an answered recommendation."""

    id: str
    respuesta_usuario: str
    timing_modificado: Optional[str]
    fecha_respuesta: Optional[datetime]
