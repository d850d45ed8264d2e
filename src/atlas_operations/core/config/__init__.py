# src/atlas_operations/core/config/__init__.py

"""
Camada de configuração do Atlas Operations.

Este pacote reúne as capacidades externas consumidas pelos comandos e o
carregamento dos catálogos de mensagens.

Responsabilidades do pacote:
    - configuration → `Configuration` e `LoggingReporter`
    - transactions  → `TransactionManager` em memória, `atomic` e `Rollback`
    - loader        → carregamento de catálogos (defaults + overrides locais)
    - merge         → deep-merge determinístico de catálogos
    - errors        → hierarquia `ConfigError`

Princípios fundamentais:
    - Configuração é passada explicitamente, nunca lida de estado global
    - Overrides são sempre explícitos
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não executa comandos
    - Não conhece componentes do pipeline
"""
