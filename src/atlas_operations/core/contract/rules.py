# src/atlas_operations/core/contract/rules.py
"""
Regras de contrato executadas depois do schema.

Uma regra valida combinações de campos ou carrega entidades no contexto.
Ela recebe os valores validados e uma cópia mutável do contexto:

    @rule("email")
    def unique_email(values, context):
        ...

Semântica:
    - Regras com chaves só executam quando todas as chaves estão presentes
      e nenhuma falhou no schema
    - Regras sem chaves só executam quando o schema passou por inteiro
    - O retorno é um payload de falha (ou None); falhas sem `path` são
      associadas à chave da regra, quando ela tem exatamente uma

`Find` é a regra pronta para "carregar entidade por id": procura
`values["<chave>_id"]` via `lookup` e guarda o resultado em
`context["<chave>"]`, falhando com `not_found` quando nada é encontrado.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from ..errors import MISSING, NOT_FOUND
from ..messages.message import Message
from .errors import ContractDefinitionError


class Rule:
    """Regra associada a zero ou mais chaves do schema."""

    def __init__(self, *keys: str, check: Callable[[Dict[str, Any], Dict[str, Any]], Any]) -> None:
        if not callable(check):
            raise ContractDefinitionError(f"Rule check must be callable, got {check!r}")
        self.keys: Tuple[str, ...] = tuple(keys)
        self.check = check

    @property
    def default_path(self) -> Tuple[str, ...]:
        return self.keys if len(self.keys) == 1 else ()

    def applies(self, values: Dict[str, Any], failed: FrozenSet[Any], *, schema_valid: bool) -> bool:
        if not self.keys:
            return schema_valid
        return all(key in values and key not in failed for key in self.keys)

    def __call__(self, values: Dict[str, Any], context: Dict[str, Any]) -> Any:
        return self.check(values, context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(map(repr, self.keys))})"


def rule(*keys: str) -> Callable[[Callable[..., Any]], Rule]:
    """Decorator que transforma uma função `(values, context)` em `Rule`."""

    def decorate(check: Callable[..., Any]) -> Rule:
        return Rule(*keys, check=check)

    return decorate


class Find(Rule):
    """
    Carrega uma entidade no contexto a partir de um id nos params.

    Args:
        context_key: chave do contexto que receberá a entidade
        lookup: função `lookup(valor) -> entidade | None`
        field: campo dos params com o identificador (padrão `<context_key>_id`)
        optional: quando True, ausência do campo não é falha
    """

    def __init__(
        self,
        context_key: str,
        *,
        lookup: Callable[[Any], Any],
        field: Optional[str] = None,
        optional: bool = False,
    ) -> None:
        self.context_key = context_key
        self.field = field or f"{context_key}_id"
        self.lookup = lookup
        self.optional = optional
        super().__init__(self.field, check=self._find)

    @property
    def required(self) -> bool:
        return not self.optional

    def applies(self, values: Dict[str, Any], failed: FrozenSet[Any], *, schema_valid: bool) -> bool:
        return self.field not in failed

    def _find(self, values: Dict[str, Any], context: Dict[str, Any]) -> Any:
        identifier = values.get(self.field)
        if identifier is None:
            return None if self.optional else Message(key=MISSING, path=(self.field,))

        entity = self.lookup(identifier)
        if entity is None:
            return Message(key=NOT_FOUND, path=(self.field,))

        context[self.context_key] = entity
        return None

    def __repr__(self) -> str:
        return f"Find({self.context_key!r}, field={self.field!r}, optional={self.optional!r})"
