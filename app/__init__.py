"""
NutriChat: nutrition coaching chat assistant.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - chat: Conversations, messages, product recommendations,
      consumption logs and the daily query quota.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - core: Configuration.
    - shared: Cross-cutting concerns (logging).

Persistence adapters live outside this package and implement
the ports declared in ``app.domain.chat.ports``.
"""
