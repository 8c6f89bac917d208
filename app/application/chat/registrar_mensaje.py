"""
Use case: Append a message to an active conversation.

Input: RegistrarMensajeCommand (conversacion_id, rol, contenido, tipo, metadatos)
Output: MensajeResult
Side effects: Saves the new message.
Failure cases: ConversacionNoEncontradaError, ConversacionInactivaError,
    ValueError for an unknown rol or tipo.
"""

import logging

from app.application.chat.dtos import MensajeResult, RegistrarMensajeCommand
from app.domain.chat.entities import MensajeChat, RolMensaje, TipoMensaje
from app.domain.chat.errors import (
    ConversacionInactivaError,
    ConversacionNoEncontradaError,
)
from app.domain.chat.ports import ConversacionChatRepository, MensajeChatRepository

logger = logging.getLogger(__name__)


class RegistrarMensajeUseCase:
    """Stores a user or assistant message in its conversation.

    Only ACTIVA conversations accept new messages.
    """

    def __init__(
        self,
        conversacion_repo: ConversacionChatRepository,
        mensaje_repo: MensajeChatRepository,
    ) -> None:
        self._conversacion_repo = conversacion_repo
        self._mensaje_repo = mensaje_repo

    def execute(self, command: RegistrarMensajeCommand) -> MensajeResult:
        """Run the append-message use case.

        Args:
            command: The message to append and its conversation.

        Returns:
            Identity and timestamp of the stored message.

        Raises:
            ConversacionNoEncontradaError: If the conversation does not exist.
            ConversacionInactivaError: If the conversation is closed.
            ValueError: If rol or tipo is not a known tag.
        """
        rol = RolMensaje(command.rol)
        tipo = TipoMensaje(command.tipo)

        conversacion = self._conversacion_repo.get_by_id(command.conversacion_id)
        if conversacion is None:
            raise ConversacionNoEncontradaError(command.conversacion_id)
        if not conversacion.esta_activa():
            logger.warning(
                "Rejected message for closed conversation %s", conversacion.id
            )
            raise ConversacionInactivaError(conversacion.id)

        mensaje = MensajeChat.create(
            conversacion_id=conversacion.id,
            rol=rol,
            contenido=command.contenido,
            tipo=tipo,
            metadatos=command.metadatos,
        )
        self._mensaje_repo.save(mensaje)

        logger.info(
            "Message %s (%s, %s) stored in conversation %s",
            mensaje.id,
            rol.value,
            tipo.value,
            conversacion.id,
        )

        return MensajeResult(
            id=mensaje.id,
            conversacion_id=mensaje.conversacion_id,
            rol=rol.value,
            tipo=tipo.value,
            timestamp=mensaje.timestamp,
        )
