# src/atlas_operations/core/messages/normalize.py
"""
Normalização de payloads de falha.

Checagens e corpos de operação podem devolver falhas em vários formatos.
Este módulo converte todos eles em uma forma única antes da resolução:

    {"message": <str | Code>, "path": tuple, "tokens": dict, "meta": dict}

Formatos aceitos:
    - None                       → nenhuma falha
    - str                        → texto literal
    - Code / membro de Enum      → código (texto vem do catálogo)
    - mapping                    → `message` | `text` | `error` (texto ou código),
                                   `code`, `path`, `tokens`; o restante vira `meta`
    - list / tuple               → cada item normalizado recursivamente
    - Message                    → mantida como está (já normalizada)

Qualquer outro valor (booleanos, números, objetos arbitrários, mapeamentos
sem texto nem código) é erro de programação e levanta `InvalidFailureError`.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..errors import Code
from ..exceptions import InvalidFailureError
from .message import Message, MessageSet
from .resolver import MessageResolver, build_message

_TEXT_KEYS = ("message", "text", "error")
_RESERVED_KEYS = frozenset(_TEXT_KEYS + ("code", "path", "tokens"))


def _as_path(value: Any) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _as_message(value: Any, *, source: Any) -> Any:
    if isinstance(value, (str, Enum)):
        return value
    raise InvalidFailureError(
        message=f"Unexpected failure message: {value!r}",
        details={"failure": repr(source)},
        hint="Use texto (str), Code, Enum ou um dict com 'message'/'code'.",
    )


def _normalize_mapping(failure: Mapping[str, Any]) -> Dict[str, Any]:
    message = next((failure[key] for key in _TEXT_KEYS if failure.get(key) is not None), None)
    code = failure.get("code")

    if message is None and code is None:
        raise InvalidFailureError(
            message=f"Failure mapping without message or code: {dict(failure)!r}",
            details={"keys": sorted(str(key) for key in failure)},
        )

    if message is None:
        message = Code(code.value if isinstance(code, Enum) else code)

    meta = {key: value for key, value in failure.items() if key not in _RESERVED_KEYS}
    if code is not None:
        meta["code"] = code

    return {
        "message": _as_message(message, source=failure),
        "path": _as_path(failure.get("path")),
        "tokens": dict(failure.get("tokens") or {}),
        "meta": meta,
    }


def normalize_failure(failure: Any) -> List[Any]:
    """Converte um payload de falha em uma lista de falhas normalizadas (ou `Message`s prontas)."""
    if failure is None:
        return []

    if isinstance(failure, Message):
        return [failure]

    if isinstance(failure, (list, tuple)):
        normalized: List[Any] = []
        for item in failure:
            normalized.extend(normalize_failure(item))
        return normalized

    if isinstance(failure, Mapping):
        return [_normalize_mapping(failure)]

    if isinstance(failure, (str, Enum)):
        return [{"message": failure, "path": (), "tokens": {}, "meta": {}}]

    raise InvalidFailureError(
        message=f"Unexpected failure: {failure!r}",
        details={"type": type(failure).__name__},
        hint="Falhas devem ser texto, Code, Enum, dict, Message ou listas desses valores.",
    )


def build_message_set(
    failure: Any,
    resolver: Optional[MessageResolver],
    *,
    default_path: Iterable[Any] = (),
) -> MessageSet:
    """
    Normaliza `failure` e resolve cada item em uma `Message`.

    `default_path` é aplicado aos itens que não declaram `path`
    (usado por regras de contrato associadas a um único campo). Sem
    `resolver`, as mensagens ficam para ser ligadas depois.
    """
    fallback = tuple(default_path)
    messages = []
    for item in normalize_failure(failure):
        if isinstance(item, Message):
            if not item.path and fallback:
                item = replace(item, path=fallback)
            if item.resolver is None and resolver is not None:
                item = item.with_resolver(resolver)
            messages.append(item)
            continue

        messages.append(
            build_message(
                item["message"],
                path=item["path"] or fallback,
                tokens=item["tokens"],
                meta=item["meta"],
                resolver=resolver,
            )
        )
    return MessageSet(messages)
