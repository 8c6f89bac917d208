"""
Use case: Record the client's answer to a product recommendation.

Input: ResponderRecomendacionCommand (recomendacion_id, accion, nuevo_timing)
Output: RecomendacionResult
Side effects: Saves the answered recommendation.
Failure cases: RecomendacionNoEncontradaError, RecomendacionYaRespondidaError,
    ValueError for an unknown accion or a missing nuevo_timing.
"""

import logging

from app.application.chat.dtos import (
    RecomendacionResult,
    ResponderRecomendacionCommand,
)
from app.domain.chat.entities import RecomendacionNutricional, RespuestaUsuario
from app.domain.chat.errors import (
    RecomendacionNoEncontradaError,
    RecomendacionYaRespondidaError,
)
from app.domain.chat.ports import RecomendacionNutricionalRepository

logger = logging.getLogger(__name__)

ACCIONES = ("aceptar", "rechazar", "modificar")


class ResponderRecomendacionUseCase:
    """Applies aceptar / rechazar / modificar to a pending recommendation."""

    def __init__(self, recomendacion_repo: RecomendacionNutricionalRepository) -> None:
        self._recomendacion_repo = recomendacion_repo

    def execute(self, command: ResponderRecomendacionCommand) -> RecomendacionResult:
        """Run the answer-recommendation use case.

        Args:
            command: Recommendation id, the chosen action and, for
                "modificar", the timing the client prefers.

        Returns:
            The recommendation's answer and response time.

        Raises:
            ValueError: If accion is unknown or nuevo_timing is missing
                for "modificar".
            RecomendacionNoEncontradaError: If the recommendation does not exist.
            RecomendacionYaRespondidaError: If it was already answered.
        """
        if command.accion not in ACCIONES:
            raise ValueError(
                f"Unknown accion {command.accion!r}; expected one of {ACCIONES}"
            )
        if command.accion == "modificar" and not command.nuevo_timing:
            raise ValueError("nuevo_timing is required to modify a recommendation")

        recomendacion = self._recomendacion_repo.get_by_id(command.recomendacion_id)
        if recomendacion is None:
            raise RecomendacionNoEncontradaError(command.recomendacion_id)
        if not recomendacion.es_pendiente():
            logger.warning(
                "Recommendation %s already answered (%s)",
                recomendacion.id,
                recomendacion.respuesta_usuario,
            )
            raise RecomendacionYaRespondidaError(recomendacion.id)

        respondida = self._aplicar(recomendacion, command)
        self._recomendacion_repo.save(respondida)

        respuesta = RespuestaUsuario(respondida.respuesta_usuario).value
        logger.info("Recommendation %s answered: %s", respondida.id, respuesta)

        return RecomendacionResult(
            id=respondida.id,
            respuesta_usuario=respuesta,
            timing_modificado=respondida.timing_modificado,
            fecha_respuesta=respondida.fecha_respuesta,
        )

    @staticmethod
    def _aplicar(
        recomendacion: RecomendacionNutricional,
        command: ResponderRecomendacionCommand,
    ) -> RecomendacionNutricional:
        if command.accion == "aceptar":
            return recomendacion.aceptar()
        if command.accion == "rechazar":
            return recomendacion.rechazar()
        return recomendacion.modificar_timing(command.nuevo_timing)
