# src/atlas_operations/core/contract/schema.py
"""
Contrato de referência baseado em Pydantic.

`SchemaContract` valida params com um modelo Pydantic e, em seguida,
executa regras (`Rule`, `Find`) sobre os valores validados. O resultado
é um `ContractOutcome` com os params, o contexto enriquecido e as
mensagens de erro.

Uso por subclasse:

    class CreatePostContract(SchemaContract):
        schema = CreatePostParams
        rules = (Find("author", lookup=users.get),)

ou por instância:

    SchemaContract(CreatePostParams, rules=[...])

Decisões arquiteturais:
    - Erros do Pydantic viram `Message` com a chave de catálogo igual ao
      `type` do erro (`missing`, `string_type`, ...) e `ctx` como tokens
    - Params inválidos não levantam exceção; o contrato sempre devolve
      um `ContractOutcome`
    - Quando o schema falha, cada campo que passou é coerido isoladamente
      (`TypeAdapter` da anotação do campo) e os demais ficam como recebidos;
      regras como `Find` enxergam ids já convertidos (ex.: `"2"` → `2`)
    - Quando só as regras falham, os params são o `model_dump` do schema

Invariantes:
    - O contexto recebido nunca é mutado (regras recebem uma cópia)
    - Regras cujas chaves falharam no schema não são executadas

Limites explícitos:
    - Não implementa coerção além do que o modelo Pydantic declara
    - A coerção isolada ignora validadores de modelo e de campo
    - Não carrega entidades por conta própria (ver `Find`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..messages.message import Message, MessageSet
from ..messages.normalize import build_message_set
from ..messages.resolver import MessageResolver
from .errors import ContractDefinitionError
from .rules import Rule


@dataclass(frozen=True)
class ContractOutcome:
    """Saída de um contrato: params, contexto e erros."""

    params: Dict[str, Any]
    context: Dict[str, Any]
    errors: MessageSet = field(default_factory=MessageSet)

    @property
    def success(self) -> bool:
        return self.errors.empty

    @property
    def failure(self) -> bool:
        return not self.success


def _schema_messages(error: ValidationError, resolver: Optional[MessageResolver]) -> List[Message]:
    messages = []
    for item in error.errors():
        messages.append(
            Message(
                text=item.get("msg"),
                path=tuple(item.get("loc") or ()),
                key=item.get("type"),
                tokens=dict(item.get("ctx") or {}),
                resolver=resolver,
            )
        )
    return messages


def _field_adapters(schema: Type[BaseModel]) -> Dict[str, TypeAdapter]:
    return {
        (info.alias or name): TypeAdapter(info.rebuild_annotation())
        for name, info in schema.model_fields.items()
    }


class SchemaContract:
    """
    Contrato `(params, context) -> ContractOutcome` sobre um modelo Pydantic.

    Dependências extras (`**deps`) ficam em `self.deps`; subclasses podem
    sobrescrever `build_rules()` para montar regras que dependem delas
    (ex.: repositórios usados por `Find`).
    """

    schema: Optional[Type[BaseModel]] = None
    rules: Sequence[Rule] = ()
    message_resolver: Optional[MessageResolver] = None

    def __init__(
        self,
        schema: Optional[Type[BaseModel]] = None,
        *,
        rules: Iterable[Rule] = (),
        message_resolver: Optional[MessageResolver] = None,
        **deps: Any,
    ) -> None:
        schema = schema or type(self).schema
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise ContractDefinitionError(f"Contract schema must be a pydantic model class, got {schema!r}")

        self.schema = schema
        self.deps = deps
        self._adapters = _field_adapters(schema)
        if message_resolver is not None:
            self.message_resolver = message_resolver

        declared = tuple(type(self).rules) + tuple(rules) + tuple(self.build_rules())
        for item in declared:
            if not isinstance(item, Rule):
                raise ContractDefinitionError(f"Contract rules must be Rule instances, got {item!r}")
        self.rules = declared

    def build_rules(self) -> Sequence[Rule]:
        return ()

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> ContractOutcome:
        resolver = self.message_resolver
        raw = dict(params)

        try:
            values = self.schema.model_validate(raw).model_dump()
        except ValidationError as exc:
            errors = _schema_messages(exc, resolver)
        else:
            errors = []

        failed: FrozenSet[Any] = frozenset(message.path[0] for message in errors if message.path)
        schema_valid = not errors
        if not schema_valid:
            values = self._coerce_valid_fields(raw, failed)
        enriched = dict(context)

        rule_errors = MessageSet()
        for item in self.rules:
            if not item.applies(values, failed, schema_valid=schema_valid):
                continue
            rule_errors += build_message_set(item(values, enriched), resolver, default_path=item.default_path)

        return ContractOutcome(
            params=values,
            context=enriched,
            errors=MessageSet(errors) + rule_errors,
        )

    def _coerce_valid_fields(self, raw: Dict[str, Any], failed: FrozenSet[Any]) -> Dict[str, Any]:
        values = dict(raw)
        for key, adapter in self._adapters.items():
            if key in failed or key not in raw:
                continue
            try:
                values[key] = adapter.dump_python(adapter.validate_python(raw[key]))
            except ValidationError:
                # o campo isolado pode divergir dos validadores do modelo
                continue
        return values

    def __repr__(self) -> str:
        return f"{type(self).__name__}(schema={self.schema.__name__}, rules={list(self.rules)!r})"

