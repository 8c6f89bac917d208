"""
Primitive records for the chat bounded context.

A primitive record is the plain, storage-shaped form of an entity: exactly
the persisted field set, with dates as ``datetime``/``date`` values and enum
fields holding the enum members (or their equal string tags). Persistence
adapters read and write these dicts; entities wrap them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Optional, TypedDict

if TYPE_CHECKING:
    from app.domain.chat.entities import (
        EstadoConversacion,
        MomentoDelDia,
        Prioridad,
        RespuestaUsuario,
        RolMensaje,
        TipoMensaje,
    )


class PrimitiveConsumoProducto(TypedDict):
    id: str
    cliente_id: str
    producto_id: str
    plan_id: Optional[str]
    fecha_consumo: datetime
    cantidad: float
    tamano: Optional[str]
    momento_consumo: Optional[MomentoDelDia]
    notas: Optional[str]
    recomendacion_id: Optional[str]
    fue_recomendado: bool
    fecha_creacion: datetime


class PrimitiveControlConsultaDiaria(TypedDict):
    id: str
    cliente_id: str
    fecha: date
    consultas_realizadas: int
    limite_consultas: int
    fecha_creacion: datetime
    fecha_actualizacion: datetime


class PrimitiveConversacionChat(TypedDict):
    id: str
    cliente_id: str
    plan_id: Optional[str]
    objetivo: Optional[str]
    contexto: Optional[dict[str, Any]]
    estado: EstadoConversacion
    fecha_inicio: datetime
    fecha_fin: Optional[datetime]
    fecha_creacion: datetime
    fecha_actualizacion: datetime


class PrimitiveMensajeChat(TypedDict):
    id: str
    conversacion_id: str
    rol: RolMensaje
    contenido: str
    metadatos: Optional[dict[str, Any]]
    tipo: TipoMensaje
    timestamp: datetime


class PrimitiveRecomendacionNutricional(TypedDict):
    id: str
    mensaje_id: str
    producto_id: str
    tamano_id: Optional[str]
    titulo_recomendacion: Optional[str]
    icono_producto: Optional[str]
    timing_recomendado: str
    horario_especifico: Optional[datetime]
    timing_adicional: Optional[str]
    prioridad: Prioridad
    razonamiento: str
    dosis: Optional[str]
    frecuencia: Optional[str]
    respuesta_usuario: RespuestaUsuario
    timing_modificado: Optional[str]
    fecha_creacion: datetime
    fecha_respuesta: Optional[datetime]
