# src/atlas_operations/core/components/callbacks.py
"""
Componentes de callbacks (`on_success` / `on_failure`).

Callbacks são side-effects disparados depois do corpo da operação:
notificações, jobs, eventos. Eles **nunca** alteram o desfecho da
operação; seus resultados ficam registrados em `Result.on_success` /
`Result.on_failure`.

Decisões arquiteturais:
    - Cada callback roda em sua própria transação; um `Failure` retornado
      reverte apenas aquela transação
    - Exceções levantadas por callbacks são capturadas e viram
      `Failure(exceção)`; callbacks irmãos continuam executando
    - Retornos que não são `Success`/`Failure` viram `Success(valor)`
    - Se algum callback falhar, o `error_reporter` é chamado uma única vez
    - `on_success` roda inteiro dentro de um único `after_commit`: com uma
      transação externa pendente, o lote só executa após o commit dela e
      o `Result` devolvido não traz desfechos de callbacks
    - `on_failure` roda imediatamente e recebe, além do contexto,
      `operation_failure` com os erros renderizados

Convenção de chamada: `callback(params, **context)` quando o primeiro
parâmetro indica params (ver `core.pipeline.signature`), caso contrário
`callback(**context)`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Tuple

from ..config.transactions import atomic
from ..pipeline.monads import Failure, Outcome, Success
from ..pipeline.signature import CheckEntry
from ..pipeline.types import Component, Result
from .base import BaseComponent

logger = logging.getLogger(__name__)


class Callbacks(BaseComponent):
    component = Component.OPERATION
    callback_name: ClassVar[str]

    def __init__(
        self,
        callbacks: Iterable[Any],
        *,
        transaction: Callable[[Callable[[], Any]], Any],
        **options: Any,
    ) -> None:
        super().__init__(**options)
        self.entries: Tuple[CheckEntry, ...] = tuple(CheckEntry.of(callback) for callback in callbacks)
        self.transaction = transaction

    def _call_entry(self, entry: CheckEntry, params: Mapping[str, Any], context: Mapping[str, Any]) -> Outcome:
        try:
            outcome = atomic(
                self.transaction,
                lambda: entry(params, context),
                rollback_if=lambda value: isinstance(value, Failure),
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Callback %s raised %s", entry.name, type(exc).__name__, exc_info=True)
            return Failure(exc)

        if isinstance(outcome, (Success, Failure)):
            return outcome
        return Success(outcome)

    def _run(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Tuple[Outcome, ...]:
        return tuple(self._call_entry(entry, params, context) for entry in self.entries)

    def _report(self, result: Result) -> Result:
        outcomes = getattr(result, self.callback_name)
        if self.error_reporter is not None and any(isinstance(outcome, Failure) for outcome in outcomes):
            self.error_reporter(
                f"Operation {self.callback_name} side-effects went sideways",
                result=result.to_dict(),
            )
        return result


class OnSuccess(Callbacks):
    callback_name = "on_success"

    def __init__(self, callbacks: Iterable[Any], *, after_commit: Callable[[Callable[[], Any]], None], **options: Any) -> None:
        super().__init__(callbacks, **options)
        self.after_commit = after_commit

    def __call__(self, result: Result) -> Result:
        if not self.entries:
            return result

        finished: Dict[str, Result] = {}

        def run() -> None:
            outcomes = self._run(result.params, result.context)
            finished["result"] = self._report(result.merge(on_success=outcomes))

        self.after_commit(run)
        # sem a chave: o lote foi adiado para o commit da transação externa
        return finished.get("result", result)


class OnFailure(Callbacks):
    callback_name = "on_failure"

    def __call__(self, result: Result) -> Result:
        if not self.entries:
            return result

        context = {**result.context, "operation_failure": result.errors.to_dict()}
        return self._report(result.merge(on_failure=self._run(result.params, context)))
