"""
Atlas Operations — Canonical Failure Codes (v1)

Este módulo define o padrão canônico de **códigos de falha** do Atlas
Operations e helpers de fábrica para payloads de falha.

Um código é um identificador estável de máquina (ex.: `unauthorized`),
distinto do texto humano exibido ao usuário. Como Python não possui um
tipo "símbolo", códigos são expressos por:

- `Code`: subclasse de `str` que marca o valor como código
- membros de `Enum` (o `.value` é usado como código)
- mapeamentos com a chave explícita `"code"`

Uma `str` comum é sempre texto livre.

Nenhuma decisão implícita é permitida: se o valor não é reconhecido como
texto ou código, o normalizador de mensagens levanta erro de programação.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union


class Code(str):
    """Código de falha estável (a mensagem humana vem do catálogo)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Code({str.__repr__(self)})"


# ---------------------------------------------------------------------------
# Catálogo canônico de códigos (v1)
# ---------------------------------------------------------------------------

# Policies
UNAUTHORIZED = Code("unauthorized")

# Contrato / carregamento de entidades
NOT_FOUND = Code("not_found")
MISSING = Code("missing")


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

Path = Union[str, Sequence[Any], None]


def failure(
    code: Union[str, Code],
    *,
    path: Path = None,
    text: Optional[str] = None,
    tokens: Optional[Dict[str, Any]] = None,
    **meta: Any,
) -> Dict[str, Any]:
    """
    Monta um payload de falha no formato aceito pelo normalizador.

    Exemplo:
        failure("already_published", path="post_id", post_id=10)
        -> {"code": Code("already_published"), "path": "post_id", "post_id": 10}

    `text` é opcional: quando ausente, o texto é resolvido pelo catálogo
    de mensagens no momento da renderização.
    """
    payload: Dict[str, Any] = {"code": Code(code)}
    if text is not None:
        payload["text"] = text
    if path is not None:
        payload["path"] = path
    if tokens:
        payload["tokens"] = dict(tokens)
    payload.update(meta)
    return payload


def unauthorized(**meta: Any) -> Dict[str, Any]:
    return failure(UNAUTHORIZED, **meta)


def not_found(*, path: Path, **meta: Any) -> Dict[str, Any]:
    return failure(NOT_FOUND, path=path, **meta)
