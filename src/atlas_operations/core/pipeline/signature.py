# src/atlas_operations/core/pipeline/signature.py
"""
Adaptadores de chamada para checagens, corpos de operação e callbacks.

O Atlas Operations chama código da aplicação passando valores do contexto
como argumentos nomeados. Para isso cada callable é inspecionado **uma
única vez**, no momento em que o Command é definido, e encapsulado em um
adaptador imutável:

    - CallSignature → nomes posicionais, nomes obrigatórios, `**kwargs`
    - CheckEntry    → policies, preconditions, idempotency checks e callbacks
    - BodyEntry     → corpo da operação, com convenção de chamada explícita

Convenções de chamada:
    - PARAMS_FIRST  → `fn(params, **context)`
    - CONTEXT_FIRST → `fn(*valores_do_contexto_para_os_posicionais, **params)`

A convenção vem, nesta ordem, de:
    1. argumento explícito (`Command(..., calling_convention=...)`)
    2. atributo `calling_convention` do callable (ver `calling_convention()`)
    3. inferência: primeiro parâmetro posicional-only ou chamado
       `params`, `_params`, `_`, `input` ou `attributes`

Contexto requerido:
    Um callable declara o contexto de que precisa pelos parâmetros
    nomeados sem default **e** pelos atributos `context_key` /
    `context_keys` (ver `requires_context()`). As duas fontes são unidas;
    declarar uma chave que a assinatura não usa torna o estágio mais
    restritivo, nunca mais permissivo.

Limites explícitos:
    - Não valida tipos dos argumentos
    - Não executa política de fluxo (responsabilidade dos componentes)
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

PARAMS_ARGUMENT_NAMES = frozenset({"params", "_params", "_", "input", "attributes"})

_KEYWORD_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class CallingConvention(str, Enum):
    """Como o corpo da operação (ou callback) recebe params e contexto."""

    PARAMS_FIRST = "params_first"
    CONTEXT_FIRST = "context_first"


# ---------------------------------------------------------------------------
# Decorators de declaração
# ---------------------------------------------------------------------------

def requires_context(*keys: str) -> Callable[[Any], Any]:
    """
    Declara chaves de contexto exigidas por uma checagem.

    Exemplo:
        @requires_context("user")
        def is_admin(**context):
            return context["user"].admin
    """

    def decorate(target: Any) -> Any:
        existing = tuple(getattr(target, "context_keys", ()) or ())
        target.context_keys = existing + tuple(keys)
        return target

    return decorate


def calling_convention(convention: CallingConvention) -> Callable[[Any], Any]:
    """Fixa a convenção de chamada de um corpo de operação ou callback."""

    def decorate(target: Any) -> Any:
        target.calling_convention = CallingConvention(convention)
        return target

    return decorate


def callable_name(target: Any) -> Optional[str]:
    """Nome legível de funções, métodos, classes e instâncias chamáveis."""
    if target is None:
        return None
    owner = getattr(target, "__self__", None)
    if owner is not None and inspect.ismethod(target):
        owner_name = owner.__name__ if inspect.isclass(owner) else type(owner).__name__
        return f"{owner_name}.{target.__name__}"
    if inspect.isroutine(target) or inspect.isclass(target):
        return target.__qualname__
    return type(target).__name__


def declared_context_keys(target: Any) -> Tuple[str, ...]:
    keys = []
    single = getattr(target, "context_key", None)
    if single is not None:
        keys.append(str(single))
    keys.extend(str(key) for key in (getattr(target, "context_keys", None) or ()))
    return tuple(keys)


# ---------------------------------------------------------------------------
# Assinatura
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CallSignature:
    """Forma de chamada de um callable, capturada uma única vez."""

    positional: Tuple[str, ...] = ()
    positional_only: FrozenSet[str] = frozenset()
    required: FrozenSet[str] = frozenset()
    keywords: FrozenSet[str] = frozenset()
    var_keyword: bool = True

    @classmethod
    def of(cls, target: Callable[..., Any]) -> "CallSignature":
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError):
            # builtins sem assinatura introspectável: aceita qualquer contexto
            return cls()

        parameters = list(signature.parameters.values())
        return cls(
            positional=tuple(p.name for p in parameters if p.kind in _POSITIONAL_KINDS),
            positional_only=frozenset(
                p.name for p in parameters if p.kind is inspect.Parameter.POSITIONAL_ONLY
            ),
            required=frozenset(
                p.name for p in parameters
                if p.kind in _KEYWORD_KINDS and p.default is inspect.Parameter.empty
            ),
            keywords=frozenset(p.name for p in parameters if p.kind in _KEYWORD_KINDS),
            var_keyword=any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters),
        )

    @property
    def first_positional(self) -> Optional[str]:
        return self.positional[0] if self.positional else None

    def takes_params(self) -> bool:
        first = self.first_positional
        if first is None:
            return False
        return first in self.positional_only or first in PARAMS_ARGUMENT_NAMES

    def keyword_arguments(self, values: Mapping[str, Any], *, exclude: Iterable[str] = ()) -> Dict[str, Any]:
        skipped = set(exclude)
        if self.var_keyword:
            return {key: value for key, value in values.items() if key not in skipped}
        return {
            key: value for key, value in values.items()
            if key in self.keywords and key not in skipped
        }


def resolve_calling_convention(
    target: Any,
    signature: CallSignature,
    explicit: Optional[CallingConvention] = None,
) -> CallingConvention:
    if explicit is not None:
        return CallingConvention(explicit)
    declared = getattr(target, "calling_convention", None)
    if declared is not None:
        return CallingConvention(declared)
    return CallingConvention.PARAMS_FIRST if signature.takes_params() else CallingConvention.CONTEXT_FIRST


# ---------------------------------------------------------------------------
# Adaptadores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CheckEntry:
    """
    Checagem ou callback adaptado para chamada com params/contexto.

    `takes_params=True` → `target(params, **context)`; caso contrário
    `target(**context)`. Em ambos os casos o contexto é filtrado para os
    nomes aceitos pela assinatura (a menos que ela aceite `**kwargs`).
    """

    target: Any
    signature: CallSignature
    takes_params: bool = False

    @classmethod
    def of(cls, target: Any, *, takes_params: Optional[bool] = None) -> "CheckEntry":
        if not callable(target):
            raise TypeError(f"Check must be callable, got {target!r}")
        signature = CallSignature.of(target)
        if takes_params is None:
            takes_params = resolve_calling_convention(target, signature) is CallingConvention.PARAMS_FIRST
        return cls(target=target, signature=signature, takes_params=takes_params)

    @property
    def name(self) -> str:
        return callable_name(self.target) or repr(self.target)

    @property
    def required_context(self) -> FrozenSet[str]:
        required = set(self.signature.required)
        if self.takes_params and self.signature.first_positional is not None:
            required.discard(self.signature.first_positional)
        return frozenset(required) | frozenset(declared_context_keys(self.target))

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Any:
        if self.takes_params:
            kwargs = self.signature.keyword_arguments(context, exclude=self.signature.positional[:1])
            return self.target(params, **kwargs)
        return self.target(**self.signature.keyword_arguments(context))


@dataclass(frozen=True)
class BodyEntry:
    """Corpo da operação com convenção de chamada resolvida na definição."""

    target: Any
    signature: CallSignature
    convention: CallingConvention

    @classmethod
    def of(cls, target: Any, *, convention: Optional[CallingConvention] = None) -> "BodyEntry":
        if not callable(target):
            raise TypeError(f"Operation must be callable, got {target!r}")
        signature = CallSignature.of(target)
        return cls(
            target=target,
            signature=signature,
            convention=resolve_calling_convention(target, signature, convention),
        )

    def __call__(self, params: Mapping[str, Any], context: Mapping[str, Any]) -> Any:
        if self.convention is CallingConvention.PARAMS_FIRST:
            kwargs = self.signature.keyword_arguments(context, exclude=self.signature.positional[:1])
            return self.target(params, **kwargs)

        args = [context.get(name) for name in self.signature.positional]
        kwargs = self.signature.keyword_arguments(params, exclude=self.signature.positional)
        return self.target(*args, **kwargs)
