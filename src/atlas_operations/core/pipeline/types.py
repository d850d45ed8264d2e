# src/atlas_operations/core/pipeline/types.py
"""
Tipos canônicos do pipeline de comandos do Atlas Operations.

Este módulo define as estruturas que padronizam a comunicação entre os
componentes (contract, policies, idempotency, preconditions, operation,
callbacks) e o Command.

Componentes principais:
    - Component → enum dos estágios que podem produzir um `Result`
    - Result    → registro imutável do desfecho de um estágio

Princípios fundamentais:
    - Todo estágio devolve um `Result`, com ou sem falha
    - O `Result` diz **onde** o pipeline parou (`component`) e **por quê** (`errors`)
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - `success` é verdadeiro se, e somente se, `errors` está vazio
    - `failure` é sempre a negação de `success`
    - `merge()` nunca muta o resultado original
    - `component` é sempre um valor de `Component`

Limites explícitos:
    - Não executa estágios
    - Não resolve mensagens (apenas expõe a renderização lazy)
    - Não decide políticas de fluxo (responsabilidade do Command)

Este módulo existe para garantir que chamadores, testes e reporters
inspecionem o desfecho de qualquer comando da mesma forma.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ..messages.message import MessageSet
from .monads import Failure, Outcome, Success


class Component(str, Enum):
    """
    Estágios do pipeline capazes de produzir um `Result`.

    Os valores são strings para facilitar serialização e leitura em logs.

    Ordem de execução em `Command.call`:
        CONTRACT → POLICIES → IDEMPOTENCY → PRECONDITIONS → OPERATION

    Callbacks (`on_success`/`on_failure`) não são estágios próprios: eles
    enriquecem o `Result` do estágio OPERATION.
    """

    CONTRACT = "contract"
    POLICIES = "policies"
    IDEMPOTENCY = "idempotency"
    PRECONDITIONS = "preconditions"
    OPERATION = "operation"


PRECHECK_COMPONENTS = frozenset({Component.POLICIES, Component.PRECONDITIONS})


def _context_value_to_json(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    identifier = getattr(value, "id", None)
    if identifier is not None:
        return f"{type(value).__name__}#{identifier}"
    return type(value).__name__


@dataclass(frozen=True)
class Result:
    """
    Resultado imutável de um estágio do pipeline.

    Campos:
        component: estágio que produziu o resultado
        params: parâmetros (normalizados pelo contrato, quando já executado)
        context: contexto (enriquecido pelo contrato/idempotency/operação)
        errors: mensagens de falha; vazio em caso de sucesso
        on_success: desfechos dos callbacks de sucesso
        on_failure: desfechos dos callbacks de falha
        command: Command que produziu o resultado (anexado no ponto de entrada)

    Decisões arquiteturais:
        - `params` e `context` são copiados na construção para que mutações
          do chamador não vazem para o resultado
        - A renderização das mensagens é decidida pelo chamador em
          `error_messages(full=..., locale=...)`
    """

    component: Component
    params: Mapping[str, Any] = field(default_factory=dict)
    context: Mapping[str, Any] = field(default_factory=dict)
    errors: MessageSet = field(default_factory=MessageSet)
    on_success: Tuple[Outcome, ...] = ()
    on_failure: Tuple[Outcome, ...] = ()
    command: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "component", Component(self.component))
        object.__setattr__(self, "params", dict(self.params))
        object.__setattr__(self, "context", dict(self.context))
        object.__setattr__(self, "on_success", tuple(self.on_success))
        object.__setattr__(self, "on_failure", tuple(self.on_failure))

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------

    @property
    def success(self) -> bool:
        return self.errors.empty

    @property
    def failure(self) -> bool:
        return not self.success

    def failed_precheck(self, *codes: str) -> bool:
        """Falhou em policies ou preconditions (com algum dos `codes`, se informados)."""
        if self.success or self.component not in PRECHECK_COMPONENTS:
            return False
        if not codes:
            return True
        return bool(self.errors.codes() & {str(code) for code in codes})

    def failed_policy(self, *codes: str) -> bool:
        return self.component is Component.POLICIES and self.failed_precheck(*codes)

    def failed_precondition(self, *codes: str) -> bool:
        return self.component is Component.PRECONDITIONS and self.failed_precheck(*codes)

    # ------------------------------------------------------------------
    # Derivações
    # ------------------------------------------------------------------

    def merge(self, **changes: Any) -> "Result":
        return replace(self, **changes)

    def error_messages(self, *, full: bool = False, locale: Optional[str] = None) -> MessageSet:
        return self.errors.with_options(full=full, locale=locale)

    def to_monad(self) -> Outcome:
        return Success(self) if self.success else Failure(self)

    def to_dict(self, *, include_command: bool = False) -> Dict[str, Any]:
        """Snapshot serializável usado por reporters e error trackers."""
        payload: Dict[str, Any] = {
            "component": self.component.value,
            "params": dict(self.params),
            "context": {key: _context_value_to_json(value) for key, value in self.context.items()},
            "on_success": [outcome.to_dict() for outcome in self.on_success],
            "on_failure": [outcome.to_dict() for outcome in self.on_failure],
            "errors": self.error_messages(full=True).to_dict(),
        }
        if include_command:
            payload["command"] = self.command.to_dict() if self.command is not None else None
        return payload
