# src/atlas_operations/core/components/policies.py
"""
Componente de policies (autorização).

Policies recebem apenas o contexto e são avaliadas em ordem; a primeira
falha interrompe a avaliação (as seguintes não são chamadas).

Interpretação do retorno de cada policy:
    - True / Success(...)  → aprovada
    - False                → falha com código `unauthorized`
    - Failure(payload)     → falha com o payload (sem payload: `unauthorized`)
    - qualquer outro valor → `InvalidCheckResultError`
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import UNAUTHORIZED
from ..exceptions import InvalidCheckResultError
from ..pipeline.monads import Failure, Success
from ..pipeline.signature import CheckEntry
from ..pipeline.types import Component, Result
from .prechecks import Prechecks

logger = logging.getLogger(__name__)


class Policies(Prechecks):
    component = Component.POLICIES

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Result:
        for entry in self.entries:
            failure = self._failure_of(entry, entry(params, context))
            if failure is not None:
                logger.debug("Policy %s denied the operation", entry.name)
                return self._result(params, context, errors=self._failure_errors(failure))

        return self._result(params, context)

    @staticmethod
    def _failure_of(entry: CheckEntry, outcome: Any) -> Any:
        if outcome is True or isinstance(outcome, Success):
            return None
        if outcome is False:
            return UNAUTHORIZED
        if isinstance(outcome, Failure):
            return UNAUTHORIZED if outcome.value is None else outcome.value

        raise InvalidCheckResultError(
            message=f"Unexpected policy result: {outcome!r}",
            details={"check": entry.name, "type": type(outcome).__name__},
            hint="Policies devem retornar bool, Success ou Failure.",
        )
