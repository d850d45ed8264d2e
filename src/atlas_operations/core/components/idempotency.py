# src/atlas_operations/core/components/idempotency.py
"""
Componente de idempotência.

Idempotency checks recebem `(params, **context)` e detectam quando o
efeito da operação já existe. Um `Failure(payload)` significa "já feito":
o pipeline é desviado com sucesso, sem executar o corpo nem callbacks.

Decisões arquiteturais:
    - Checks devem retornar `Success`/`Failure`; qualquer outro valor é
      erro de programação
    - A primeira `Failure` interrompe a avaliação
    - O payload (mapping ou None) é mesclado **raso** no contexto; em
      colisão de chaves o payload vence
    - O desvio é reportado pelo `info_reporter`
    - O `Result` produzido nunca tem erros: o desfecho (seguir ou desviar)
      é comunicado pelo wrapper `Success`/`Failure`
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..exceptions import InvalidCheckResultError
from ..pipeline.monads import Failure, Outcome, Success
from ..pipeline.signature import CheckEntry
from ..pipeline.types import Component
from .prechecks import Prechecks

logger = logging.getLogger(__name__)


class Idempotency(Prechecks):
    component = Component.IDEMPOTENCY
    takes_params = True

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Outcome:
        for entry in self.entries:
            outcome = entry(params, context)

            if isinstance(outcome, Success):
                continue

            if isinstance(outcome, Failure):
                result = self._result(params, {**context, **self._payload(entry, outcome.value)})
                logger.debug("Idempotency check %s short-circuited the operation", entry.name)
                if self.info_reporter is not None:
                    self.info_reporter(
                        "Idempotency check failed",
                        result=result.to_dict(),
                        failed_check=entry.name,
                    )
                return Failure(result)

            raise InvalidCheckResultError(
                message=f"Unrecognized result of an idempotency check: {outcome!r}",
                details={"check": entry.name, "type": type(outcome).__name__},
                hint="Idempotency checks devem retornar Success ou Failure.",
            )

        return Success(self._result(params, context))

    @staticmethod
    def _payload(entry: CheckEntry, value: Any) -> Dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return dict(value)
        raise InvalidCheckResultError(
            message=f"Idempotency failure payload must be a mapping: {value!r}",
            details={"check": entry.name, "type": type(value).__name__},
        )
