# src/atlas_operations/core/engine/__init__.py
"""
Engine do Atlas Operations.

Este pacote contém o `Command`, orquestrador responsável por executar
uma operação de negócio através dos componentes do pipeline, respeitando
a ordem canônica e as regras de curto-circuito.

Princípios fundamentais:
    - A ordem de execução é fixa e documentada
    - Nenhuma decisão silenciosa: todo desvio produz um `Result` explícito
    - Efeitos colaterais só acontecem depois do commit

Limites explícitos:
    - Não define contratos, policies ou operações de domínio
    - Não depende de frameworks web ou de persistência
"""

from .command import UNDEFINED, Command

__all__ = ["Command", "UNDEFINED"]
