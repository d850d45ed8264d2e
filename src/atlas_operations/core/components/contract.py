# src/atlas_operations/core/components/contract.py
"""
Componente de contrato.

O contrato é chamado como `contract(params, context)` e deve devolver um
objeto com `params`, `context` e `errors` (ex.: `ContractOutcome` do
`SchemaContract`, ou qualquer objeto compatível). `errors` pode ser um
`MessageSet` pronto ou falhas brutas, que são normalizadas aqui.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import InvalidCheckResultError
from ..messages.message import MessageSet
from ..pipeline.types import Component, Result
from .base import BaseComponent

_OUTCOME_FIELDS = ("params", "context", "errors")


class Contract(BaseComponent):
    component = Component.CONTRACT

    def __init__(self, contract: Any, **options: Any) -> None:
        super().__init__(**options)
        self.contract = contract

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Result:
        outcome = self.contract(params, context)

        missing = [name for name in _OUTCOME_FIELDS if not hasattr(outcome, name)]
        if missing:
            raise InvalidCheckResultError(
                message=f"Contract result is missing {', '.join(missing)}: {outcome!r}",
                details={"contract": type(self.contract).__name__},
                hint="Contratos devem retornar um objeto com params, context e errors.",
            )

        errors = outcome.errors
        if isinstance(errors, MessageSet):
            # mensagens do contrato sem resolver próprio usam o do Command
            errors = self.message_resolver.bind(errors)
        else:
            errors = self._errors(errors)

        return self._result(outcome.params, outcome.context, errors=errors)
