# src/atlas_operations/core/components/operation.py
"""
Componente do corpo da operação.

O corpo é o código de negócio propriamente dito. Ele recebe params e
contexto segundo a convenção de chamada resolvida na definição (ver
`core.pipeline.signature`) e deve retornar:

    - Success(mapping | None) → o mapping é mesclado no contexto
    - Failure(payload)        → o payload é normalizado em mensagens

Qualquer outro retorno, ou um `Success` com payload que não seja mapping,
é erro de programação (`InvalidOperationResultError`).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..exceptions import InvalidOperationResultError
from ..pipeline.monads import Failure, Success
from ..pipeline.signature import BodyEntry, CallingConvention
from ..pipeline.types import Component, Result
from .base import BaseComponent


class OperationBody(BaseComponent):
    component = Component.OPERATION

    def __init__(self, operation: Any, *, calling_convention: Optional[CallingConvention] = None, **options: Any) -> None:
        super().__init__(**options)
        self.entry = BodyEntry.of(operation, convention=calling_convention)

    @property
    def calling_convention(self) -> CallingConvention:
        return self.entry.convention

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Result:
        outcome = self.entry(params, context)

        if isinstance(outcome, Failure):
            return self._result(params, context, errors=self._failure_errors(outcome.value))

        if not isinstance(outcome, Success):
            raise InvalidOperationResultError(
                message=f"Operation must return Success or Failure, got {outcome!r}",
                details={"type": type(outcome).__name__},
            )

        payload = {} if outcome.value is None else outcome.value
        if not isinstance(payload, Mapping):
            raise InvalidOperationResultError(
                message=f"Operation success payload must be a mapping, got {outcome.value!r}",
                details={"type": type(outcome.value).__name__},
                hint="Retorne Success({'chave': valor}) para enriquecer o contexto.",
            )

        return self._result(params, {**context, **payload})
