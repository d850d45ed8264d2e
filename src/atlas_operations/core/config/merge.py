# src/atlas_operations/core/config/merge.py
"""
Deep-merge canônico de catálogos de mensagens.

Um catálogo é um mapa `locale -> seção -> chave -> texto`. Aplicações
sobrescrevem apenas as chaves que precisam (ex.: trocar o texto de
`unauthorized` em `pt`) e herdam todo o resto do catálogo empacotado.

Política de merge (v1):
    - dict + dict       → merge recursivo por chave
    - seção vazia (None) → substituída pelo override
    - list              → sobrescrita total
    - escalar           → sobrescrita direta
    - conflito de tipos → `ConfigTypeConflictError`

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override` em um novo dicionário.

    Seções declaradas vazias no YAML (`fields:`) chegam como `None` e são
    tratadas como "ainda não definidas": qualquer override as substitui.

    Raises:
        ConfigTypeConflictError: Se a mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    merged: Dict[str, Any] = deepcopy(base)

    for key, value in override.items():
        current = merged.get(key)

        if key not in merged or current is None:
            merged[key] = deepcopy(value)
        elif isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, list) or type(current) is type(value):
            merged[key] = deepcopy(value)
        else:
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )

    return merged
