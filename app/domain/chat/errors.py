"""
Domain-specific errors for the chat bounded context.

All errors raised from the domain and application layers must be defined
here. Entities raise only LimiteConsultasAlcanzadoError; the remaining
errors are raised by use cases when a referenced aggregate is missing
or in the wrong state.
No framework imports allowed.
"""


class ChatDomainError(Exception):
    """Base error for all chat domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class LimiteConsultasAlcanzadoError(ChatDomainError):
    """Raised when a client's daily query counter is already at its limit."""

    def __init__(self, cliente_id: str, limite: int) -> None:
        super().__init__(
            "Límite de consultas alcanzado para este día. "
            f"(cliente={cliente_id}, limite={limite})"
        )
        self.cliente_id = cliente_id
        self.limite = limite


class ConversacionNoEncontradaError(ChatDomainError):
    """Raised when a conversation cannot be found."""

    def __init__(self, conversacion_id: str) -> None:
        super().__init__(f"Conversación no encontrada: {conversacion_id}")
        self.conversacion_id = conversacion_id


class ConversacionInactivaError(ChatDomainError):
    """Raised when writing to a conversation that is already closed."""

    def __init__(self, conversacion_id: str) -> None:
        super().__init__(f"La conversación ya no está activa: {conversacion_id}")
        self.conversacion_id = conversacion_id


class RecomendacionNoEncontradaError(ChatDomainError):
    """Raised when a recommendation cannot be found."""

    def __init__(self, recomendacion_id: str) -> None:
        super().__init__(f"Recomendación no encontrada: {recomendacion_id}")
        self.recomendacion_id = recomendacion_id


class RecomendacionYaRespondidaError(ChatDomainError):
    """Raised when answering a recommendation that is no longer pending."""

    def __init__(self, recomendacion_id: str) -> None:
        super().__init__(
            f"La recomendación ya fue respondida: {recomendacion_id}"
        )
        self.recomendacion_id = recomendacion_id
