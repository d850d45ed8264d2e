# src/atlas_operations/core/__init__.py
"""
Core do Atlas Operations.

Este pacote contém a implementação canônica do pipeline de comandos,
independente de frameworks web e de persistência.

O core é projetado para ser:
    - determinístico na ordem de execução dos estágios
    - testável de forma isolada
    - orientado a resultados explícitos (`Result`)

Componentes principais:
    - config     → configuração, transações e catálogos de mensagens
    - messages   → mensagens de falha e resolução localizada
    - pipeline   → tipos canônicos (`Result`, `Success`, `Failure`) e assinaturas
    - components → estágios do pipeline (contrato, policies, ..., callbacks)
    - contract   → contrato de referência (Pydantic + regras)
    - engine     → `Command`, o orquestrador

Limites explícitos:
    - Não contém operações de negócio concretas
    - Não depende de serviços externos
"""
