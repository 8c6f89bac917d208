"""
Tests for the chat application layer (use cases).

Tests use cases with mocked ports. No real infrastructure needed.
Each test verifies orchestration logic; business rules are covered
in test_domain_chat.py.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.application.chat.dtos import (
    FinalizarConversacionCommand,
    IniciarConversacionCommand,
    RegistrarConsultaCommand,
    RegistrarConsumoCommand,
    RegistrarMensajeCommand,
    ResponderRecomendacionCommand,
)
from app.application.chat.finalizar_conversacion import FinalizarConversacionUseCase
from app.application.chat.iniciar_conversacion import IniciarConversacionUseCase
from app.application.chat.registrar_consulta import RegistrarConsultaUseCase
from app.application.chat.registrar_consumo import RegistrarConsumoUseCase
from app.application.chat.registrar_mensaje import RegistrarMensajeUseCase
from app.application.chat.responder_recomendacion import ResponderRecomendacionUseCase
from app.domain.chat.entities import (
    ConsumoProducto,
    ControlConsultaDiaria,
    ConversacionChat,
    EstadoConversacion,
    MensajeChat,
    MomentoDelDia,
    Prioridad,
    RecomendacionNutricional,
    RespuestaUsuario,
    RolMensaje,
)
from app.domain.chat.errors import (
    ConversacionInactivaError,
    ConversacionNoEncontradaError,
    LimiteConsultasAlcanzadoError,
    RecomendacionNoEncontradaError,
    RecomendacionYaRespondidaError,
)
from app.domain.chat.ports import (
    ConsumoProductoRepository,
    ControlConsultaDiariaRepository,
    ConversacionChatRepository,
    MensajeChatRepository,
    RecomendacionNutricionalRepository,
)

DIA = date(2024, 3, 15)
AHORA = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


def _saved(repo: MagicMock):
    """Return the single entity passed to repo.save()."""
    repo.save.assert_called_once()
    return repo.save.call_args.args[0]


@pytest.fixture
def control_repo() -> MagicMock:
    repo = MagicMock(spec=ControlConsultaDiariaRepository)
    repo.get_by_cliente_y_fecha.return_value = None
    return repo


@pytest.fixture
def conversacion_repo() -> MagicMock:
    return MagicMock(spec=ConversacionChatRepository)


@pytest.fixture
def recomendacion_repo() -> MagicMock:
    return MagicMock(spec=RecomendacionNutricionalRepository)


@pytest.fixture
def recomendacion() -> RecomendacionNutricional:
    return RecomendacionNutricional.create(
        mensaje_id="m1",
        producto_id="p1",
        timing_recomendado="por la mañana",
        prioridad=Prioridad.MEDIA,
        razonamiento="Aporte de proteína",
    )


class TestRegistrarConsultaUseCase:
    """Tests for the RegistrarConsultaUseCase."""

    def test_opens_counter_on_first_query(self, control_repo) -> None:
        use_case = RegistrarConsultaUseCase(control_repo, limite_consultas=3)

        result = use_case.execute(RegistrarConsultaCommand(cliente_id="c1", fecha=DIA))

        control_repo.get_by_cliente_y_fecha.assert_called_once_with("c1", DIA)
        guardado = _saved(control_repo)
        assert isinstance(guardado, ControlConsultaDiaria)
        assert guardado.consultas_realizadas == 1
        assert result.consultas_realizadas == 1
        assert result.limite_consultas == 3
        assert result.consultas_restantes == 2
        assert result.fecha == DIA

    def test_increments_existing_counter(self, control_repo) -> None:
        existente = ControlConsultaDiaria.create(cliente_id="c1", fecha=DIA, limite_consultas=5)
        existente = existente.incrementar_consulta()
        control_repo.get_by_cliente_y_fecha.return_value = existente

        result = RegistrarConsultaUseCase(control_repo).execute(
            RegistrarConsultaCommand(cliente_id="c1", fecha=DIA)
        )

        guardado = _saved(control_repo)
        assert guardado.id == existente.id
        assert result.consultas_realizadas == 2
        assert result.limite_consultas == 5

    def test_limit_reached_raises_and_does_not_save(self, control_repo) -> None:
        lleno = ControlConsultaDiaria.create(cliente_id="c1", fecha=DIA, limite_consultas=1)
        lleno = lleno.incrementar_consulta()
        control_repo.get_by_cliente_y_fecha.return_value = lleno

        with pytest.raises(LimiteConsultasAlcanzadoError):
            RegistrarConsultaUseCase(control_repo).execute(
                RegistrarConsultaCommand(cliente_id="c1", fecha=DIA)
            )

        control_repo.save.assert_not_called()

    def test_default_limit_comes_from_settings(self, control_repo, monkeypatch) -> None:
        from app.core.config import settings

        monkeypatch.setattr(settings, "limite_consultas_diarias", 7)

        result = RegistrarConsultaUseCase(control_repo).execute(
            RegistrarConsultaCommand(cliente_id="c1", fecha=DIA)
        )

        assert result.limite_consultas == 7

    def test_defaults_to_today(self, control_repo) -> None:
        result = RegistrarConsultaUseCase(control_repo).execute(
            RegistrarConsultaCommand(cliente_id="c1")
        )
        assert result.fecha == datetime.now(timezone.utc).date()


class TestConversacionUseCases:
    """Tests for starting and closing conversations."""

    def test_iniciar_saves_active_conversation(self, conversacion_repo) -> None:
        result = IniciarConversacionUseCase(conversacion_repo).execute(
            IniciarConversacionCommand(cliente_id="c1", objetivo="ganar masa")
        )

        guardada = _saved(conversacion_repo)
        assert guardada.esta_activa()
        assert guardada.objetivo == "ganar masa"
        assert result.id == guardada.id
        assert result.estado == "ACTIVA"
        assert result.fecha_fin is None

    def test_finalizar_completes(self, conversacion_repo) -> None:
        conversacion_repo.get_by_id.return_value = ConversacionChat.create(cliente_id="c1")

        result = FinalizarConversacionUseCase(conversacion_repo).execute(
            FinalizarConversacionCommand(conversacion_id="conv-1", fecha=AHORA)
        )

        guardada = _saved(conversacion_repo)
        assert guardada.estado == EstadoConversacion.COMPLETADA
        assert result.estado == "COMPLETADA"
        assert result.fecha_fin == AHORA

    def test_finalizar_abandons(self, conversacion_repo) -> None:
        conversacion_repo.get_by_id.return_value = ConversacionChat.create(cliente_id="c1")

        result = FinalizarConversacionUseCase(conversacion_repo).execute(
            FinalizarConversacionCommand(conversacion_id="conv-1", abandonada=True)
        )

        assert result.estado == "ABANDONADA"
        assert result.fecha_fin is not None

    def test_finalizar_closed_conversation_is_noop(self, conversacion_repo) -> None:
        cerrada = ConversacionChat.create(cliente_id="c1").cancelar()
        conversacion_repo.get_by_id.return_value = cerrada

        result = FinalizarConversacionUseCase(conversacion_repo).execute(
            FinalizarConversacionCommand(conversacion_id=cerrada.id)
        )

        conversacion_repo.save.assert_not_called()
        assert result.estado == "ABANDONADA"
        assert result.fecha_fin == cerrada.fecha_fin

    def test_finalizar_missing_conversation(self, conversacion_repo) -> None:
        conversacion_repo.get_by_id.return_value = None

        with pytest.raises(ConversacionNoEncontradaError) as exc_info:
            FinalizarConversacionUseCase(conversacion_repo).execute(
                FinalizarConversacionCommand(conversacion_id="nope")
            )

        assert exc_info.value.conversacion_id == "nope"


class TestRegistrarMensajeUseCase:
    """Tests for the RegistrarMensajeUseCase."""

    def test_stores_message_in_active_conversation(self, conversacion_repo) -> None:
        conversacion = ConversacionChat.create(cliente_id="c1")
        conversacion_repo.get_by_id.return_value = conversacion
        mensaje_repo = MagicMock(spec=MensajeChatRepository)

        result = RegistrarMensajeUseCase(conversacion_repo, mensaje_repo).execute(
            RegistrarMensajeCommand(
                conversacion_id=conversacion.id,
                rol="asistente",
                contenido="Te recomiendo whey después de entrenar.",
                tipo="RECOMENDACION",
                metadatos={"productos": ["p1"]},
            )
        )

        guardado = _saved(mensaje_repo)
        assert isinstance(guardado, MensajeChat)
        assert guardado.es_de_asistente()
        assert guardado.metadatos == {"productos": ["p1"]}
        assert result.rol == "asistente"
        assert result.tipo == "RECOMENDACION"
        assert result.conversacion_id == conversacion.id

    def test_rejects_closed_conversation(self, conversacion_repo) -> None:
        conversacion_repo.get_by_id.return_value = ConversacionChat.create(cliente_id="c1").finalizar()
        mensaje_repo = MagicMock(spec=MensajeChatRepository)

        with pytest.raises(ConversacionInactivaError):
            RegistrarMensajeUseCase(conversacion_repo, mensaje_repo).execute(
                RegistrarMensajeCommand(conversacion_id="conv-1", rol="usuario", contenido="hola")
            )

        mensaje_repo.save.assert_not_called()

    def test_missing_conversation(self, conversacion_repo) -> None:
        conversacion_repo.get_by_id.return_value = None

        with pytest.raises(ConversacionNoEncontradaError):
            RegistrarMensajeUseCase(conversacion_repo, MagicMock(spec=MensajeChatRepository)).execute(
                RegistrarMensajeCommand(conversacion_id="nope", rol="usuario", contenido="hola")
            )

    def test_unknown_role(self, conversacion_repo) -> None:
        with pytest.raises(ValueError):
            RegistrarMensajeUseCase(conversacion_repo, MagicMock(spec=MensajeChatRepository)).execute(
                RegistrarMensajeCommand(conversacion_id="conv-1", rol="sistema", contenido="hola")
            )

        conversacion_repo.get_by_id.assert_not_called()


class TestRegistrarConsumoUseCase:
    """Tests for the RegistrarConsumoUseCase."""

    def test_logs_recommended_consumption(self) -> None:
        repo = MagicMock(spec=ConsumoProductoRepository)

        result = RegistrarConsumoUseCase(repo).execute(
            RegistrarConsumoCommand(
                cliente_id="c1",
                producto_id="p1",
                fecha_consumo=AHORA,
                cantidad=1,
                momento_consumo="MANANA",
                recomendacion_id="r1",
            )
        )

        guardado = _saved(repo)
        assert isinstance(guardado, ConsumoProducto)
        assert guardado.momento_consumo is MomentoDelDia.MANANA
        assert guardado.es_por_recomendacion()
        assert result.fue_recomendado is True
        assert result.id == guardado.id

    def test_logs_plain_consumption(self) -> None:
        repo = MagicMock(spec=ConsumoProductoRepository)

        result = RegistrarConsumoUseCase(repo).execute(
            RegistrarConsumoCommand(cliente_id="c1", producto_id="p1", fecha_consumo=AHORA, cantidad=2)
        )

        assert _saved(repo).momento_consumo is None
        assert result.fue_recomendado is False


class TestResponderRecomendacionUseCase:
    """Tests for the ResponderRecomendacionUseCase."""

    def test_aceptar(self, recomendacion_repo, recomendacion) -> None:
        recomendacion_repo.get_by_id.return_value = recomendacion

        result = ResponderRecomendacionUseCase(recomendacion_repo).execute(
            ResponderRecomendacionCommand(recomendacion_id=recomendacion.id, accion="aceptar")
        )

        assert _saved(recomendacion_repo).es_aceptada()
        assert result.respuesta_usuario == "ACEPTADA"
        assert result.fecha_respuesta is not None

    def test_rechazar(self, recomendacion_repo, recomendacion) -> None:
        recomendacion_repo.get_by_id.return_value = recomendacion

        result = ResponderRecomendacionUseCase(recomendacion_repo).execute(
            ResponderRecomendacionCommand(recomendacion_id=recomendacion.id, accion="rechazar")
        )

        assert result.respuesta_usuario == "RECHAZADA"

    def test_modificar(self, recomendacion_repo, recomendacion) -> None:
        recomendacion_repo.get_by_id.return_value = recomendacion

        result = ResponderRecomendacionUseCase(recomendacion_repo).execute(
            ResponderRecomendacionCommand(
                recomendacion_id=recomendacion.id, accion="modificar", nuevo_timing="por la noche"
            )
        )

        guardada = _saved(recomendacion_repo)
        assert guardada.respuesta_usuario == RespuestaUsuario.MODIFICADA
        assert result.timing_modificado == "por la noche"

    def test_modificar_requires_timing(self, recomendacion_repo) -> None:
        with pytest.raises(ValueError):
            ResponderRecomendacionUseCase(recomendacion_repo).execute(
                ResponderRecomendacionCommand(recomendacion_id="r1", accion="modificar")
            )

        recomendacion_repo.get_by_id.assert_not_called()

    def test_unknown_action(self, recomendacion_repo) -> None:
        with pytest.raises(ValueError):
            ResponderRecomendacionUseCase(recomendacion_repo).execute(
                ResponderRecomendacionCommand(recomendacion_id="r1", accion="posponer")
            )

    def test_missing_recommendation(self, recomendacion_repo) -> None:
        recomendacion_repo.get_by_id.return_value = None

        with pytest.raises(RecomendacionNoEncontradaError):
            ResponderRecomendacionUseCase(recomendacion_repo).execute(
                ResponderRecomendacionCommand(recomendacion_id="nope", accion="aceptar")
            )

    def test_already_answered(self, recomendacion_repo, recomendacion) -> None:
        recomendacion_repo.get_by_id.return_value = recomendacion.rechazar()

        with pytest.raises(RecomendacionYaRespondidaError):
            ResponderRecomendacionUseCase(recomendacion_repo).execute(
                ResponderRecomendacionCommand(recomendacion_id=recomendacion.id, accion="aceptar")
            )

        recomendacion_repo.save.assert_not_called()


class TestRolMensaje:
    """The role tags used on the wire."""

    def test_tags(self) -> None:
        assert RolMensaje("usuario") is RolMensaje.USUARIO
        assert RolMensaje("asistente") is RolMensaje.ASISTENTE
