# src/atlas_operations/core/components/__init__.py
"""
Componentes do pipeline de comandos.

Cada componente encapsula um estágio e devolve um `Result` carimbado com
o seu `Component`:

    - contract      → validação de params e carregamento de contexto
    - policies      → autorização (primeira falha vence)
    - idempotency   → desvio quando o efeito já existe
    - preconditions → regras de negócio (todas as falhas agregadas)
    - operation     → corpo da operação
    - callbacks     → side-effects `on_success` / `on_failure`

Componentes são construídos pelo Command na definição e não guardam
estado mutável entre chamadas.
"""

from .callbacks import OnFailure, OnSuccess
from .contract import Contract
from .idempotency import Idempotency
from .operation import OperationBody
from .policies import Policies
from .preconditions import Preconditions
from .prechecks import Prechecks

__all__ = [
    "Contract",
    "Idempotency",
    "OnFailure",
    "OnSuccess",
    "OperationBody",
    "Policies",
    "Preconditions",
    "Prechecks",
]
