# src/atlas_operations/core/messages/resolver.py
"""
Resolver de mensagens do Atlas Operations.

O `MessageResolver` transforma falhas normalizadas em `Message` e, no
momento da renderização, traduz chaves/códigos para texto localizado a
partir de um catálogo declarativo (YAML/JSON).

Ordem de resolução de texto:
    1. catálogo do locale pedido (`errors.<key>`)
    2. catálogo do locale padrão
    3. texto literal da mensagem (quando existir)
    4. código "humanizado" (`not_found` -> `Not found`)

Renderização "full":
    - mensagens de nível base nunca recebem prefixo
    - mensagens com caminho recebem o rótulo do campo (seção `fields`
      do catálogo ou o último segmento do caminho), montado pelo
      template `full` do locale

Decisões arquiteturais:
    - Tradução é lazy: o resolver é guardado na mensagem e consultado
      só em `render()`
    - Nenhum estado global: cada resolver carrega seu próprio catálogo
    - O catálogo empacotado é lido uma única vez por processo

Limites explícitos:
    - Não normaliza payloads de falha (ver `normalize`)
    - Não implementa pluralização nem formatação específica de locale
"""

from __future__ import annotations

import functools
from copy import deepcopy
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..config.errors import UnknownLocaleError
from ..config.loader import load_messages
from ..errors import Code
from .message import Message, MessageSet, humanize, interpolate

CATALOG_PATH = Path(__file__).with_name("catalog.yaml")
DEFAULT_LOCALE = "en"
DEFAULT_FULL_TEMPLATE = "{field} {text}"


@functools.lru_cache(maxsize=None)
def _packaged_catalog() -> Dict[str, Any]:
    return load_messages(defaults_path=CATALOG_PATH)


def build_message(
    message: Any,
    *,
    path: Iterable[Any] = (),
    tokens: Optional[Mapping[str, Any]] = None,
    meta: Optional[Mapping[str, Any]] = None,
    resolver: Optional["MessageResolver"] = None,
) -> Message:
    """
    Cria uma `Message` a partir de texto (`str`) ou código (`Code`/`Enum`).

    Um código vira a chave de catálogo e o código exposto; texto é mantido
    literal. Um `"code"` em `meta` é promovido a código. Sem `resolver`, a
    mensagem é ligada depois (ver `Message.with_resolver`).
    """
    extra = dict(meta or {})
    code = extra.pop("code", None)
    if isinstance(code, Enum):
        code = code.value

    if isinstance(message, Enum):
        message = Code(message.value)

    if isinstance(message, Code):
        key: Optional[str] = str(message)
        text: Optional[str] = None
        code = code if code is not None else key
    else:
        key = None
        text = message

    return Message(
        text=text,
        path=tuple(path),
        key=key,
        code=None if code is None else str(code),
        tokens=dict(tokens or {}),
        meta=extra,
        resolver=resolver,
    )


class MessageResolver:
    """
    Traduz falhas em mensagens localizadas.

    Exemplo:
        resolver = MessageResolver.default()
        message = resolver(Code("unauthorized"))
        message.render()             -> "Unauthorized"
        message.render(locale="pt")  -> "Não autorizado"
    """

    def __init__(self, catalog: Mapping[str, Any], *, default_locale: str = DEFAULT_LOCALE) -> None:
        if default_locale not in catalog:
            raise UnknownLocaleError(
                f"Locale padrão '{default_locale}' ausente do catálogo; "
                f"disponíveis: {sorted(catalog)}"
            )
        self.catalog: Dict[str, Any] = deepcopy(dict(catalog))
        self.default_locale = default_locale

    @classmethod
    def default(cls) -> "MessageResolver":
        return cls(_packaged_catalog())

    @classmethod
    def from_files(
        cls,
        *,
        defaults_path: Union[str, Path] = CATALOG_PATH,
        local_path: Optional[Union[str, Path]] = None,
        default_locale: str = DEFAULT_LOCALE,
    ) -> "MessageResolver":
        catalog = load_messages(defaults_path=defaults_path, local_path=local_path)
        return cls(catalog, default_locale=default_locale)

    @property
    def locales(self) -> Tuple[str, ...]:
        return tuple(self.catalog)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageResolver):
            return NotImplemented
        return self.default_locale == other.default_locale and self.catalog == other.catalog

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MessageResolver(locales={list(self.locales)!r}, default_locale={self.default_locale!r})"

    # ------------------------------------------------------------------
    # Construção de mensagens
    # ------------------------------------------------------------------

    def __call__(
        self,
        message: Any,
        *,
        path: Iterable[Any] = (),
        tokens: Optional[Mapping[str, Any]] = None,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> Message:
        """Cria uma `Message` ligada a este resolver (ver `build_message`)."""
        return build_message(message, path=path, tokens=tokens, meta=meta, resolver=self)

    def bind(self, messages: Iterable[Message]) -> "MessageSet":
        """Liga a este resolver as mensagens que ainda não têm um."""
        return MessageSet(
            message if message.resolver is not None else message.with_resolver(self)
            for message in messages
        )

    # ------------------------------------------------------------------
    # Renderização
    # ------------------------------------------------------------------

    def translate(self, message: Message, *, locale: Optional[str] = None) -> str:
        template: Optional[str] = None
        if message.key is not None:
            template = self._lookup("errors", message.key, locale)

        if template is None:
            if message.text is not None:
                template = message.text
            else:
                template = humanize(message.key or message.code or "")

        return interpolate(template, message.tokens)

    def field_label(self, path: Tuple[Any, ...], *, locale: Optional[str] = None) -> str:
        if not path:
            return ""
        dotted = ".".join(str(segment) for segment in path)
        label = self._lookup("fields", dotted, locale)
        if label is None:
            label = self._lookup("fields", str(path[-1]), locale)
        return label if label is not None else str(path[-1])

    def render(self, message: Message, *, full: bool = False, locale: Optional[str] = None) -> str:
        text = self.translate(message, locale=locale)
        if not full or not message.path:
            return text

        template = self._locale_value("full", locale) or DEFAULT_FULL_TEMPLATE
        return interpolate(template, {"field": self.field_label(message.path, locale=locale), "text": text})

    # ------------------------------------------------------------------
    # Catálogo
    # ------------------------------------------------------------------

    def _candidates(self, locale: Optional[str]) -> Tuple[str, ...]:
        if locale is None or locale == self.default_locale:
            return (self.default_locale,)
        return (str(locale), self.default_locale)

    def _locale_value(self, name: str, locale: Optional[str]) -> Any:
        for candidate in self._candidates(locale):
            value = (self.catalog.get(candidate) or {}).get(name)
            if value is not None:
                return value
        return None

    def _lookup(self, section: str, key: str, locale: Optional[str]) -> Optional[str]:
        for candidate in self._candidates(locale):
            entries = (self.catalog.get(candidate) or {}).get(section) or {}
            value = entries.get(key)
            if value is not None:
                return str(value)
        return None
