"""
Atlas Operations — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Atlas Operations.

Dois grupos distintos convivem aqui:

- Erros de programação: representam uso incorreto da biblioteca
  (checagem retornando um valor inesperado, comando sem policies,
  falha em formato desconhecido). Eles **sempre** propagam e nunca
  viram `Result`.
- `OperationFailed`: exceção levantada apenas pelas variantes
  "raising" do Command, carregando o `Result` que falhou.

Regras:
- Falhas de negócio nunca são exceções: são `Result`s com mensagens.
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .pipeline.types import Result


@dataclass(eq=False)
class OperationsException(Exception):
    """Base class para erros de programação do Atlas Operations.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - `hint` aponta onde corrigir a definição do comando
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Checagens / Corpo da operação
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidCheckResultError(OperationsException):
    """Policy, precondition ou idempotency check retornou um valor fora do protocolo."""


@dataclass(eq=False)
class InvalidOperationResultError(OperationsException):
    """O corpo da operação não retornou `Success`/`Failure` com payload válido."""


@dataclass(eq=False)
class InvalidFailureError(OperationsException):
    """Payload de falha em formato não reconhecido pelo normalizador de mensagens."""


# ---------------------------------------------------------------------------
# Definição do comando
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class MissingPoliciesError(OperationsException):
    """Comando construído sem `policy` nem `policies`."""


# ---------------------------------------------------------------------------
# Variantes "raising"
# ---------------------------------------------------------------------------

class OperationFailed(Exception):
    """
    Exceção levantada por `Command.call_or_raise` e `Command.try_call_or_raise`.

    A mensagem segue o formato:

        CreateUser failed on contract
          name - is missing

    O `Result` completo fica disponível em `result`, e `report_context()`
    devolve o snapshot serializável usado por error trackers.
    """

    def __init__(self, result: "Result") -> None:
        self.result = result
        super().__init__(self._build_message(result))

    @staticmethod
    def _build_message(result: "Result") -> str:
        lines = [f"{_operation_name(result.command)} failed on {result.component.value}"]
        for message in result.error_messages(full=True):
            lines.append(f"  {message.path_key or 'base'} - {message.render(full=True)}")
        return "\n".join(lines)

    def report_context(self) -> Dict[str, Any]:
        return self.result.to_dict(include_command=True)


def _operation_name(command: Any) -> str:
    operation = getattr(command, "operation", None)
    if operation is None:
        return "Operation"
    # funções e classes têm nome próprio; instâncias usam o nome da classe
    return getattr(operation, "__qualname__", None) or type(operation).__name__
