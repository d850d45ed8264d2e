# src/atlas_operations/core/components/base.py
"""Base comum dos componentes do pipeline."""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional

from ..exceptions import InvalidFailureError
from ..messages.message import MessageSet
from ..messages.normalize import build_message_set
from ..messages.resolver import MessageResolver
from ..pipeline.types import Component, Result
from ..config.configuration import Reporter


class BaseComponent:
    """
    Componente de um estágio do pipeline.

    Cada subclasse declara o `component` que carimba nos `Result`s que
    produz e recebe do Command o resolver de mensagens e os reporters.
    """

    component: ClassVar[Component]

    def __init__(
        self,
        *,
        message_resolver: MessageResolver,
        info_reporter: Optional[Reporter] = None,
        error_reporter: Optional[Reporter] = None,
    ) -> None:
        self.message_resolver = message_resolver
        self.info_reporter = info_reporter
        self.error_reporter = error_reporter

    def _result(self, params: Mapping[str, Any], context: Mapping[str, Any], **fields: Any) -> Result:
        return Result(component=self.component, params=params, context=context, **fields)

    def _errors(self, failure: Any) -> MessageSet:
        return build_message_set(failure, self.message_resolver)

    def _failure_errors(self, failure: Any) -> MessageSet:
        """Como `_errors`, mas uma falha que não produz mensagens é erro de programação."""
        errors = self._errors(failure)
        if errors.empty:
            raise InvalidFailureError(
                message=f"{self.component.value} failure produced no messages: {failure!r}",
                details={"component": self.component.value},
                hint="Falhas precisam descrever o motivo (texto, Code ou dict).",
            )
        return errors
