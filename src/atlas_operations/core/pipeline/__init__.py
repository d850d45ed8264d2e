# src/atlas_operations/core/pipeline/__init__.py
"""
# Pipeline Core — Atlas Operations

Este pacote define os **tipos canônicos** trocados entre os componentes
do pipeline de comandos e o código da aplicação.

## Componentes

- **types**
  - `Component`: estágios que produzem `Result`
  - `Result`: desfecho imutável de um estágio

- **monads**
  - `Success` / `Failure`: desfechos devolvidos por checagens, corpos e callbacks

- **signature**
  - `CallSignature`, `CheckEntry`, `BodyEntry`: adaptadores de chamada
  - `CallingConvention`, `requires_context`, `calling_convention`

## Invariantes

- Toda assinatura é inspecionada uma única vez, na definição do Command
- Nenhum tipo deste pacote conhece o Command ou a configuração
"""

from .monads import Failure, Outcome, Success
from .signature import (
    BodyEntry,
    CallingConvention,
    CallSignature,
    CheckEntry,
    calling_convention,
    requires_context,
)
from .types import Component, Result

__all__ = [
    "BodyEntry",
    "CallSignature",
    "CallingConvention",
    "CheckEntry",
    "Component",
    "Failure",
    "Outcome",
    "Result",
    "Success",
    "calling_convention",
    "requires_context",
]
