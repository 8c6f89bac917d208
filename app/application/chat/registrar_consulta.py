"""
Use case: Count one chat query against the client's daily quota.

Input: RegistrarConsultaCommand (cliente_id, fecha)
Output: ConsultaResult
Side effects: Creates the day's counter if missing; saves the incremented counter.
Failure cases: LimiteConsultasAlcanzadoError (nothing is saved).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from app.application.chat.dtos import ConsultaResult, RegistrarConsultaCommand
from app.core.config import settings
from app.domain.chat.entities import ControlConsultaDiaria
from app.domain.chat.errors import LimiteConsultasAlcanzadoError
from app.domain.chat.ports import ControlConsultaDiariaRepository

logger = logging.getLogger(__name__)


class RegistrarConsultaUseCase:
    """Orchestrates quota enforcement for a single chat query.

    Loads (or opens) the client's counter for the day and increments it.
    The counter itself refuses to go past its limit.
    """

    def __init__(
        self,
        control_repo: ControlConsultaDiariaRepository,
        limite_consultas: Optional[int] = None,
    ) -> None:
        self._control_repo = control_repo
        self._limite_consultas = (
            settings.limite_consultas_diarias
            if limite_consultas is None
            else limite_consultas
        )

    def execute(self, command: RegistrarConsultaCommand) -> ConsultaResult:
        """Run the query registration use case.

        Args:
            command: The client and day to count the query against.

        Returns:
            The quota state after counting this query.

        Raises:
            LimiteConsultasAlcanzadoError: If the day's limit is already reached.
        """
        fecha = command.fecha or datetime.now(timezone.utc).date()

        control = self._control_repo.get_by_cliente_y_fecha(command.cliente_id, fecha)
        if control is None:
            logger.info(
                "Opening daily query counter for cliente=%s, fecha=%s, limite=%d",
                command.cliente_id,
                fecha,
                self._limite_consultas,
            )
            control = ControlConsultaDiaria.create(
                cliente_id=command.cliente_id,
                fecha=fecha,
                limite_consultas=self._limite_consultas,
            )

        try:
            actualizado = control.incrementar_consulta()
        except LimiteConsultasAlcanzadoError:
            logger.warning(
                "Daily query limit reached for cliente=%s, fecha=%s (%d/%d)",
                command.cliente_id,
                fecha,
                control.consultas_realizadas,
                control.limite_consultas,
            )
            raise

        self._control_repo.save(actualizado)

        logger.info(
            "Query registered for cliente=%s: %d/%d",
            command.cliente_id,
            actualizado.consultas_realizadas,
            actualizado.limite_consultas,
        )

        return ConsultaResult(
            cliente_id=actualizado.cliente_id,
            fecha=actualizado.fecha,
            consultas_realizadas=actualizado.consultas_realizadas,
            limite_consultas=actualizado.limite_consultas,
            consultas_restantes=actualizado.consultas_restantes(),
        )
