"""
Use case: Close a chat conversation as completed or abandoned.

Input: FinalizarConversacionCommand (conversacion_id, abandonada, fecha)
Output: ConversacionResult
Side effects: Saves the closed conversation.
Failure cases: ConversacionNoEncontradaError.
"""

import logging

from app.application.chat.dtos import ConversacionResult, FinalizarConversacionCommand
from app.application.chat.iniciar_conversacion import to_conversacion_result
from app.domain.chat.errors import ConversacionNoEncontradaError
from app.domain.chat.ports import ConversacionChatRepository

logger = logging.getLogger(__name__)


class FinalizarConversacionUseCase:
    """Moves an active conversation to its terminal state.

    Closing an already closed conversation is a no-op: the stored
    state and end time are returned unchanged and nothing is saved.
    """

    def __init__(self, conversacion_repo: ConversacionChatRepository) -> None:
        self._conversacion_repo = conversacion_repo

    def execute(self, command: FinalizarConversacionCommand) -> ConversacionResult:
        """Run the close-conversation use case.

        Args:
            command: Conversation id and how to close it.

        Returns:
            The conversation after closing.

        Raises:
            ConversacionNoEncontradaError: If the conversation does not exist.
        """
        conversacion = self._conversacion_repo.get_by_id(command.conversacion_id)
        if conversacion is None:
            raise ConversacionNoEncontradaError(command.conversacion_id)

        if not conversacion.esta_activa():
            logger.info(
                "Conversation %s already closed (%s)",
                conversacion.id,
                conversacion.estado,
            )
            return to_conversacion_result(conversacion)

        if command.abandonada:
            cerrada = conversacion.cancelar()
        else:
            cerrada = conversacion.finalizar(command.fecha)

        self._conversacion_repo.save(cerrada)

        logger.info("Conversation %s closed as %s", cerrada.id, cerrada.estado)

        return to_conversacion_result(cerrada)
