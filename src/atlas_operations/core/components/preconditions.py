# src/atlas_operations/core/components/preconditions.py
"""
Componente de preconditions (regras de negócio sobre o estado atual).

Diferente das policies, **todas** as preconditions são avaliadas e todas
as falhas são agregadas no mesmo `Result`.

Interpretação do retorno de cada precondition (uma lista é avaliada
item a item):
    - None / Success(...) / lista vazia → nenhuma falha
    - Failure(payload)                  → falha com o payload
    - texto, Code, Enum, dict           → falha descrita pelo próprio valor
    - booleanos, Failure sem payload    → `InvalidCheckResultError`
"""

from __future__ import annotations

from typing import Any, List, Mapping

from ..exceptions import InvalidCheckResultError
from ..pipeline.monads import Failure, Success
from ..pipeline.signature import CheckEntry
from ..pipeline.types import Component, Result
from .prechecks import Prechecks


class Preconditions(Prechecks):
    component = Component.PRECONDITIONS

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Result:
        failures: List[Any] = []
        for entry in self.entries:
            failures.extend(self._failures_of(entry, entry(params, context)))

        return self._result(params, context, errors=self._errors(failures))

    @staticmethod
    def _failures_of(entry: CheckEntry, outcome: Any) -> List[Any]:
        items = outcome if isinstance(outcome, (list, tuple)) else [outcome]
        failures = []
        for item in items:
            if item is None or isinstance(item, Success):
                continue
            if isinstance(item, bool) or (isinstance(item, Failure) and item.value is None):
                raise InvalidCheckResultError(
                    message=f"Unexpected precondition result: {item!r}",
                    details={"check": entry.name},
                    hint="Preconditions devem retornar None/Success ou descrever a falha.",
                )
            failures.append(item.value if isinstance(item, Failure) else item)
        return failures
