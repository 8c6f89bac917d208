"""
Use case: Log that a client took a product.

Input: RegistrarConsumoCommand
Output: ConsumoResult
Side effects: Saves the new consumption log.
Failure cases: ValueError for an unknown momento_consumo.
"""

import logging

from app.application.chat.dtos import ConsumoResult, RegistrarConsumoCommand
from app.domain.chat.entities import ConsumoProducto, MomentoDelDia
from app.domain.chat.ports import ConsumoProductoRepository

logger = logging.getLogger(__name__)


class RegistrarConsumoUseCase:
    """Creates and persists a consumption log."""

    def __init__(self, consumo_repo: ConsumoProductoRepository) -> None:
        self._consumo_repo = consumo_repo

    def execute(self, command: RegistrarConsumoCommand) -> ConsumoResult:
        momento = (
            MomentoDelDia(command.momento_consumo)
            if command.momento_consumo is not None
            else None
        )

        consumo = ConsumoProducto.create(
            cliente_id=command.cliente_id,
            producto_id=command.producto_id,
            fecha_consumo=command.fecha_consumo,
            cantidad=command.cantidad,
            plan_id=command.plan_id,
            tamano=command.tamano,
            momento_consumo=momento,
            notas=command.notas,
            recomendacion_id=command.recomendacion_id,
        )
        self._consumo_repo.save(consumo)

        logger.info(
            "Consumption %s logged for cliente=%s, producto=%s (recomendado=%s)",
            consumo.id,
            consumo.cliente_id,
            consumo.producto_id,
            consumo.fue_recomendado,
        )

        return ConsumoResult(
            id=consumo.id,
            cliente_id=consumo.cliente_id,
            producto_id=consumo.producto_id,
            fecha_consumo=consumo.fecha_consumo,
            fue_recomendado=consumo.fue_recomendado,
        )
