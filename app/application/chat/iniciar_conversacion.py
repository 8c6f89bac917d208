"""
Use case: Start a chat conversation for a client.

Input: IniciarConversacionCommand (cliente_id, plan_id, objetivo, contexto)
Output: ConversacionResult
Side effects: Saves the new conversation.
Failure cases: None.
"""

import logging

from app.application.chat.dtos import ConversacionResult, IniciarConversacionCommand
from app.domain.chat.entities import ConversacionChat, EstadoConversacion
from app.domain.chat.ports import ConversacionChatRepository

logger = logging.getLogger(__name__)


class IniciarConversacionUseCase:
    """Opens a new ACTIVA conversation and persists it."""

    def __init__(self, conversacion_repo: ConversacionChatRepository) -> None:
        self._conversacion_repo = conversacion_repo

    def execute(self, command: IniciarConversacionCommand) -> ConversacionResult:
        conversacion = ConversacionChat.create(
            cliente_id=command.cliente_id,
            plan_id=command.plan_id,
            objetivo=command.objetivo,
            contexto=command.contexto,
        )
        self._conversacion_repo.save(conversacion)

        logger.info(
            "Conversation %s started for cliente=%s",
            conversacion.id,
            conversacion.cliente_id,
        )

        return to_conversacion_result(conversacion)


def to_conversacion_result(conversacion: ConversacionChat) -> ConversacionResult:
    """Map a conversation entity to its output DTO."""
    return ConversacionResult(
        id=conversacion.id,
        cliente_id=conversacion.cliente_id,
        estado=EstadoConversacion(conversacion.estado).value,
        fecha_inicio=conversacion.fecha_inicio,
        fecha_fin=conversacion.fecha_fin,
    )
