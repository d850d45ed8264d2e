# src/atlas_operations/core/components/prechecks.py
"""
Avaliação de listas de checagens (policies, preconditions, idempotency).

Cada checagem é adaptada uma única vez em `CheckEntry`. A lista como um
todo expõe o **contexto requerido**: a união das chaves exigidas por
cada checagem (parâmetros nomeados sem default e `context_key(s)`
declarados). O Command consulta `is_callable(context)` para decidir se
um estágio pode ser avaliado mesmo quando o contrato falhou.

Invariantes:
    - `required_context` é calculado na construção e nunca muda
    - Lista vazia exige contexto vazio, logo é sempre avaliável
"""

from __future__ import annotations

from typing import Any, ClassVar, FrozenSet, Iterable, Mapping, Tuple

from ..pipeline.signature import CheckEntry
from .base import BaseComponent


class Prechecks(BaseComponent):
    """Lista ordenada de checagens com contexto requerido pré-calculado."""

    takes_params: ClassVar[bool] = False

    def __init__(self, checks: Iterable[Any], **options: Any) -> None:
        super().__init__(**options)
        self.entries: Tuple[CheckEntry, ...] = tuple(
            CheckEntry.of(check, takes_params=self.takes_params) for check in checks
        )
        self.required_context: FrozenSet[str] = frozenset().union(
            *(entry.required_context for entry in self.entries)
        )

    def is_callable(self, context: Mapping[str, Any]) -> bool:
        return self.required_context <= set(context)
