"""
Domain entities for the chat bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.

Every entity is a frozen dataclass built through two factories:
``create`` assigns a fresh id, timestamps and defaulted status fields;
``from_primitives`` wraps an already persisted record without recomputing
anything. Mutation methods never touch the receiver, they return a new
instance built with ``dataclasses.replace``.
"""

from dataclasses import dataclass, fields, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from app.domain.chat.errors import LimiteConsultasAlcanzadoError
from app.domain.chat.primitives import (
    PrimitiveConsumoProducto,
    PrimitiveControlConsultaDiaria,
    PrimitiveConversacionChat,
    PrimitiveMensajeChat,
    PrimitiveRecomendacionNutricional,
)

LIMITE_CONSULTAS_POR_DEFECTO = 3


class MomentoDelDia(str, Enum):
    """Moment of the day a product is taken."""

    MANANA = "MANANA"
    PRE_ENTRENAMIENTO = "PRE_ENTRENAMIENTO"
    POST_ENTRENAMIENTO = "POST_ENTRENAMIENTO"
    TARDE = "TARDE"
    NOCHE = "NOCHE"
    ANTES_DORMIR = "ANTES_DORMIR"


class TipoMensaje(str, Enum):
    """Kind of content carried by a chat message."""

    TEXTO = "TEXTO"
    RECOMENDACION = "RECOMENDACION"
    PLAN = "PLAN"


class EstadoConversacion(str, Enum):
    """Lifecycle state of a chat conversation."""

    ACTIVA = "ACTIVA"
    COMPLETADA = "COMPLETADA"
    ABANDONADA = "ABANDONADA"


class Prioridad(str, Enum):
    """Priority of a product recommendation."""

    ALTA = "ALTA"
    MEDIA = "MEDIA"
    BAJA = "BAJA"


class RespuestaUsuario(str, Enum):
    """The client's answer to a recommendation."""

    ACEPTADA = "ACEPTADA"
    RECHAZADA = "RECHAZADA"
    MODIFICADA = "MODIFICADA"
    PENDIENTE = "PENDIENTE"


class RolMensaje(str, Enum):
    """Author of a chat message."""

    USUARIO = "usuario"
    ASISTENTE = "asistente"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _to_record(entity: Any) -> dict[str, Any]:
    """Shallow copy of an entity's fields into a new dict."""
    return {f.name: getattr(entity, f.name) for f in fields(entity)}


@dataclass(frozen=True)
class ConsumoProducto:
    """A client's log entry for having taken a product.

    ``fue_recomendado`` is derived from ``recomendacion_id`` at creation
    and never recomputed.
    """

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

    @classmethod
    def create(
        cls,
        cliente_id: str,
        producto_id: str,
        fecha_consumo: datetime,
        cantidad: float,
        plan_id: Optional[str] = None,
        tamano: Optional[str] = None,
        momento_consumo: Optional[MomentoDelDia] = None,
        notas: Optional[str] = None,
        recomendacion_id: Optional[str] = None,
    ) -> "ConsumoProducto":
        """Register a new consumption with a fresh id and creation time."""
        return cls(
            id=_new_id(),
            cliente_id=cliente_id,
            producto_id=producto_id,
            plan_id=plan_id,
            fecha_consumo=fecha_consumo,
            cantidad=cantidad,
            tamano=tamano,
            momento_consumo=momento_consumo,
            notas=notas,
            recomendacion_id=recomendacion_id,
            fue_recomendado=bool(recomendacion_id),
            fecha_creacion=_now(),
        )

    @classmethod
    def from_primitives(cls, primitives: PrimitiveConsumoProducto) -> "ConsumoProducto":
        return cls(**primitives)

    def es_por_recomendacion(self) -> bool:
        """True when the log was flagged as recommended and still links to it."""
        return self.fue_recomendado and self.recomendacion_id is not None

    def actualizar_notas(self, nuevas_notas: Optional[str]) -> "ConsumoProducto":
        return replace(self, notas=nuevas_notas)

    def actualizar_momento(self, nuevo_momento: MomentoDelDia) -> "ConsumoProducto":
        return replace(self, momento_consumo=nuevo_momento)

    def to_primitives(self) -> PrimitiveConsumoProducto:
        return _to_record(self)  # type: ignore[return-value]


@dataclass(frozen=True)
class ControlConsultaDiaria:
    """Per-client, per-day counter of chat queries against a fixed limit.

    The counter never goes past ``limite_consultas``: ``incrementar_consulta``
    is the only operation of the entity layer that can fail.
    """

    id: str
    cliente_id: str
    fecha: date
    consultas_realizadas: int
    limite_consultas: int
    fecha_creacion: datetime
    fecha_actualizacion: datetime

    @classmethod
    def create(
        cls,
        cliente_id: str,
        fecha: date,
        limite_consultas: Optional[int] = None,
    ) -> "ControlConsultaDiaria":
        """Open the day's counter at zero.

        Args:
            cliente_id: Client the counter belongs to.
            fecha: Day being tracked.
            limite_consultas: Queries allowed that day. ``None`` means the
                default of 3; an explicit 0 is kept and blocks every query.

        Returns:
            A new ControlConsultaDiaria with ``consultas_realizadas == 0``.
        """
        now = _now()
        return cls(
            id=_new_id(),
            cliente_id=cliente_id,
            fecha=fecha,
            consultas_realizadas=0,
            limite_consultas=(
                LIMITE_CONSULTAS_POR_DEFECTO
                if limite_consultas is None
                else limite_consultas
            ),
            fecha_creacion=now,
            fecha_actualizacion=now,
        )

    @classmethod
    def from_primitives(
        cls, primitives: PrimitiveControlConsultaDiaria
    ) -> "ControlConsultaDiaria":
        return cls(**primitives)

    def puede_consultar(self) -> bool:
        return self.consultas_realizadas < self.limite_consultas

    def consultas_restantes(self) -> int:
        return max(self.limite_consultas - self.consultas_realizadas, 0)

    def incrementar_consulta(self) -> "ControlConsultaDiaria":
        """Count one more query for the day.

        Raises:
            LimiteConsultasAlcanzadoError: If the limit is already reached.
        """
        if not self.puede_consultar():
            raise LimiteConsultasAlcanzadoError(self.cliente_id, self.limite_consultas)

        return replace(
            self,
            consultas_realizadas=self.consultas_realizadas + 1,
            fecha_actualizacion=_now(),
        )

    def reiniciar_contador(self) -> "ControlConsultaDiaria":
        """Reset the counter to zero (daily rollover)."""
        return replace(self, consultas_realizadas=0, fecha_actualizacion=_now())

    def to_primitives(self) -> PrimitiveControlConsultaDiaria:
        return _to_record(self)  # type: ignore[return-value]


@dataclass(frozen=True)
class ConversacionChat:
    """A chat session between a client and the nutrition assistant.

    State moves ACTIVA -> COMPLETADA or ACTIVA -> ABANDONADA and stops there.
    Once terminal, ``estado`` and ``fecha_fin`` never change again.
    """

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

    @classmethod
    def create(
        cls,
        cliente_id: str,
        plan_id: Optional[str] = None,
        objetivo: Optional[str] = None,
        contexto: Optional[dict[str, Any]] = None,
        fecha_fin: Optional[datetime] = None,
    ) -> "ConversacionChat":
        """Start a new, active conversation.

        ``fecha_fin`` is accepted so a full record can be passed in, but a
        new conversation always starts open.
        """
        now = _now()
        return cls(
            id=_new_id(),
            cliente_id=cliente_id,
            plan_id=plan_id,
            objetivo=objetivo,
            contexto=contexto,
            estado=EstadoConversacion.ACTIVA,
            fecha_inicio=now,
            fecha_fin=None,
            fecha_creacion=now,
            fecha_actualizacion=now,
        )

    @classmethod
    def from_primitives(
        cls, primitives: PrimitiveConversacionChat
    ) -> "ConversacionChat":
        return cls(**primitives)

    def esta_activa(self) -> bool:
        return self.estado == EstadoConversacion.ACTIVA

    def finalizar(self, fecha: Optional[datetime] = None) -> "ConversacionChat":
        """Mark the conversation as completed.

        Args:
            fecha: End time. Defaults to now.

        Returns:
            A completed copy, or an unchanged copy if already closed.
        """
        if not self.esta_activa():
            return replace(self)
        now = _now()
        return replace(
            self,
            estado=EstadoConversacion.COMPLETADA,
            fecha_fin=fecha if fecha is not None else now,
            fecha_actualizacion=now,
        )

    def cancelar(self) -> "ConversacionChat":
        """Mark the conversation as abandoned, or return an unchanged copy if closed."""
        if not self.esta_activa():
            return replace(self)
        now = _now()
        return replace(
            self,
            estado=EstadoConversacion.ABANDONADA,
            fecha_fin=now,
            fecha_actualizacion=now,
        )

    def actualizar_objetivo(self, objetivo: Optional[str]) -> "ConversacionChat":
        return replace(self, objetivo=objetivo, fecha_actualizacion=_now())

    def actualizar_contexto(self, contexto: dict[str, Any]) -> "ConversacionChat":
        return replace(self, contexto=contexto, fecha_actualizacion=_now())

    def to_primitives(self) -> PrimitiveConversacionChat:
        return _to_record(self)  # type: ignore[return-value]


@dataclass(frozen=True)
class MensajeChat:
    """A single message inside a conversation."""

    id: str
    conversacion_id: str
    rol: RolMensaje
    contenido: str
    metadatos: Optional[dict[str, Any]]
    tipo: TipoMensaje
    timestamp: datetime

    @classmethod
    def create(
        cls,
        conversacion_id: str,
        rol: RolMensaje,
        contenido: str,
        tipo: TipoMensaje = TipoMensaje.TEXTO,
        metadatos: Optional[dict[str, Any]] = None,
    ) -> "MensajeChat":
        return cls(
            id=_new_id(),
            conversacion_id=conversacion_id,
            rol=rol,
            contenido=contenido,
            metadatos=metadatos,
            tipo=tipo,
            timestamp=_now(),
        )

    @classmethod
    def from_primitives(cls, primitives: PrimitiveMensajeChat) -> "MensajeChat":
        return cls(**primitives)

    def es_de_usuario(self) -> bool:
        return self.rol == RolMensaje.USUARIO

    def es_de_asistente(self) -> bool:
        return self.rol == RolMensaje.ASISTENTE

    def actualizar_contenido(self, nuevo_contenido: str) -> "MensajeChat":
        return replace(self, contenido=nuevo_contenido)

    def actualizar_metadatos(
        self, metadatos: Optional[dict[str, Any]]
    ) -> "MensajeChat":
        return replace(self, metadatos=metadatos)

    def to_primitives(self) -> PrimitiveMensajeChat:
        return _to_record(self)  # type: ignore[return-value]


@dataclass(frozen=True)
class RecomendacionNutricional:
    """A product recommendation anchored to an assistant message.

    ``respuesta_usuario`` starts PENDIENTE and is answered exactly once;
    answering stamps ``fecha_respuesta``.
    """

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

    @classmethod
    def create(
        cls,
        mensaje_id: str,
        producto_id: str,
        timing_recomendado: str,
        prioridad: Prioridad,
        razonamiento: str,
        tamano_id: Optional[str] = None,
        titulo_recomendacion: Optional[str] = None,
        icono_producto: Optional[str] = None,
        horario_especifico: Optional[datetime] = None,
        timing_adicional: Optional[str] = None,
        dosis: Optional[str] = None,
        frecuencia: Optional[str] = None,
        timing_modificado: Optional[str] = None,
    ) -> "RecomendacionNutricional":
        return cls(
            id=_new_id(),
            mensaje_id=mensaje_id,
            producto_id=producto_id,
            tamano_id=tamano_id,
            titulo_recomendacion=titulo_recomendacion,
            icono_producto=icono_producto,
            timing_recomendado=timing_recomendado,
            horario_especifico=horario_especifico,
            timing_adicional=timing_adicional,
            prioridad=prioridad,
            razonamiento=razonamiento,
            dosis=dosis,
            frecuencia=frecuencia,
            respuesta_usuario=RespuestaUsuario.PENDIENTE,
            timing_modificado=timing_modificado,
            fecha_creacion=_now(),
            fecha_respuesta=None,
        )

    @classmethod
    def from_primitives(
        cls, primitives: PrimitiveRecomendacionNutricional
    ) -> "RecomendacionNutricional":
        return cls(**primitives)

    def es_pendiente(self) -> bool:
        return self.respuesta_usuario == RespuestaUsuario.PENDIENTE

    def es_aceptada(self) -> bool:
        return self.respuesta_usuario == RespuestaUsuario.ACEPTADA

    def es_rechazada(self) -> bool:
        return self.respuesta_usuario == RespuestaUsuario.RECHAZADA

    def es_modificada(self) -> bool:
        return self.respuesta_usuario == RespuestaUsuario.MODIFICADA

    def _responder(
        self, respuesta: RespuestaUsuario, **cambios: Any
    ) -> "RecomendacionNutricional":
        # answered recommendations keep their first answer
        if not self.es_pendiente():
            return replace(self)
        return replace(
            self, respuesta_usuario=respuesta, fecha_respuesta=_now(), **cambios
        )

    def aceptar(self) -> "RecomendacionNutricional":
        return self._responder(RespuestaUsuario.ACEPTADA)

    def rechazar(self) -> "RecomendacionNutricional":
        return self._responder(RespuestaUsuario.RECHAZADA)

    def modificar_timing(self, nuevo_timing: str) -> "RecomendacionNutricional":
        """Accept the product at a different time chosen by the client."""
        return self._responder(
            RespuestaUsuario.MODIFICADA, timing_modificado=nuevo_timing
        )

    def to_primitives(self) -> PrimitiveRecomendacionNutricional:
        return _to_record(self)  # type: ignore[return-value]
