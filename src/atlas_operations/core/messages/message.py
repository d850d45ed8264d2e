# src/atlas_operations/core/messages/message.py
"""
Mensagens canônicas do Atlas Operations.

Este módulo define as duas estruturas que todo estágio do pipeline usa
para descrever falhas:

    - Message    → uma falha individual (texto ou código, caminho, tokens, meta)
    - MessageSet → coleção ordenada e imutável de mensagens

Decisões arquiteturais:
    - A renderização é **lazy**: o texto final só é produzido quando
      `render()` / `to_dict()` é chamado, com as opções `full` e `locale`
      decididas pelo chamador
    - O caminho vazio `()` representa uma mensagem de nível base
    - Uma mensagem com código ou meta renderiza como dicionário
      (`{"text": ..., "code": ..., **meta}`); sem eles, como string pura

Invariantes:
    - Mensagens e coleções nunca são mutadas após criadas
    - A ordem de inserção é preservada em `to_dict()`
    - O resolver associado não participa de igualdade

Limites explícitos:
    - Não normaliza payloads de falha (ver `normalize`)
    - Não carrega catálogos (ver `resolver`)

Este módulo existe para que falhas de todos os estágios tenham
uma representação única, serializável e localizável.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .resolver import MessageResolver


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


_FORMATTER = string.Formatter()


def interpolate(template: str, tokens: Mapping[str, Any]) -> str:
    """Substitui `{token}` no template; tokens ausentes permanecem literais."""
    if not tokens or "{" not in template:
        return template
    try:
        return _FORMATTER.vformat(template, (), _KeepMissing(tokens))
    except (ValueError, IndexError):
        # chaves desbalanceadas ou posicionais: o texto é devolvido como veio
        return template


def humanize(value: str) -> str:
    """`not_found` -> `Not found`."""
    text = str(value).replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def path_key(path: Tuple[Any, ...]) -> Optional[str]:
    if not path:
        return None
    return ".".join(str(segment) for segment in path)


@dataclass(frozen=True)
class Message:
    """
    Falha individual produzida por um estágio.

    Campos:
    - text: texto literal (quando a falha veio como texto)
    - path: caminho do campo (`()` para nível base)
    - key: chave de catálogo usada para traduzir (códigos e erros de schema)
    - code: código de máquina exposto no `to_dict()`
    - tokens: valores interpolados no texto
    - meta: dados extras expostos junto do texto
    """

    text: Optional[str] = None
    path: Tuple[Any, ...] = ()
    key: Optional[str] = None
    code: Optional[str] = None
    tokens: Mapping[str, Any] = field(default_factory=dict)
    meta: Mapping[str, Any] = field(default_factory=dict)
    resolver: Optional["MessageResolver"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def path_key(self) -> Optional[str]:
        return path_key(self.path)

    @property
    def base(self) -> bool:
        return not self.path

    def render(self, *, full: bool = False, locale: Optional[str] = None) -> str:
        if self.resolver is not None:
            return self.resolver.render(self, full=full, locale=locale)

        text = self.text if self.text is not None else humanize(self.key or self.code or "")
        text = interpolate(text, self.tokens)
        if full and self.path:
            return f"{self.path[-1]} {text}"
        return text

    def to_value(self, *, full: bool = False, locale: Optional[str] = None) -> Any:
        text = self.render(full=full, locale=locale)
        if self.code is None and not self.meta:
            return text

        value: Dict[str, Any] = {"text": text}
        value.update(self.meta)
        if self.code is not None:
            value["code"] = self.code
        return value

    def with_resolver(self, resolver: "MessageResolver") -> "Message":
        return replace(self, resolver=resolver)


class MessageSet:
    """
    Coleção ordenada e imutável de `Message`.

    `full` e `locale` são opções de renderização carregadas pela coleção;
    `with_options()` devolve uma nova coleção com as mesmas mensagens e
    opções diferentes, sem recalcular nada.

    Exemplo:
        errors.to_dict()                          -> {"name": ["is missing"]}
        errors.with_options(full=True).to_dict()  -> {"name": ["name is missing"]}
    """

    __slots__ = ("_messages", "full", "locale")

    def __init__(
        self,
        messages: Iterable[Message] = (),
        *,
        full: bool = False,
        locale: Optional[str] = None,
    ) -> None:
        self._messages: Tuple[Message, ...] = tuple(messages)
        self.full = full
        self.locale = locale

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __add__(self, other: "MessageSet") -> "MessageSet":
        return MessageSet(self._messages + tuple(other), full=self.full, locale=self.locale)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageSet):
            return NotImplemented
        return self._messages == other._messages

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MessageSet({list(self._messages)!r})"

    @property
    def empty(self) -> bool:
        return not self._messages

    def with_options(self, *, full: Optional[bool] = None, locale: Optional[str] = None) -> "MessageSet":
        return MessageSet(
            self._messages,
            full=self.full if full is None else full,
            locale=self.locale if locale is None else locale,
        )

    def codes(self) -> FrozenSet[str]:
        return frozenset(message.code for message in self._messages if message.code is not None)

    def for_path(self, *path: Any) -> "MessageSet":
        return MessageSet(
            (message for message in self._messages if message.path == tuple(path)),
            full=self.full,
            locale=self.locale,
        )

    def to_dict(self) -> Dict[Optional[str], List[Any]]:
        rendered: Dict[Optional[str], List[Any]] = {}
        for message in self._messages:
            rendered.setdefault(message.path_key, []).append(
                message.to_value(full=self.full, locale=self.locale)
            )
        return rendered
