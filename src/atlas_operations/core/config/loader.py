# src/atlas_operations/core/config/loader.py
"""
Loader canônico de catálogos de mensagens do Atlas Operations.

O catálogo efetivo é resolvido a partir de:
    - um arquivo base (obrigatório), normalmente o `catalog.yaml` empacotado
    - um arquivo local de overrides (opcional), mantido pela aplicação

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver o catálogo final via `deep_merge`

Decisões arquiteturais:
    - Nenhum estado global é mantido: cada chamada relê os arquivos
    - O override local nunca muta o catálogo base
    - Erros estruturais são falhas fatais (`ConfigError`)

Limites explícitos:
    - Não valida se as chaves do catálogo são usadas por algum comando
    - Não traduz mensagens (ver `core.messages.resolver`)

Este módulo existe para que textos de erro sejam configuração
declarativa, e não strings espalhadas pelo código.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    InvalidConfigRootTypeError,
    MessagesNotFoundError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de catálogo e garante que a raiz seja um dicionário.

    Arquivos vazios são interpretados como catálogos vazios.

    Raises:
        MessagesNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise MessagesNotFoundError(f"Catálogo de mensagens não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Catálogo deve ter raiz dict, recebido: {type(data).__name__}"
        )

    return data


def load_messages(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve o catálogo de mensagens efetivo.

    Política de resolução:
        - O arquivo base é obrigatório
        - O arquivo local é opcional; quando existe, tem prioridade
        - A resolução utiliza `deep_merge` (dicts recursivos, escalares sobrescritos)

    Args:
        defaults_path: Caminho do catálogo base.
        local_path: Caminho opcional de overrides da aplicação.

    Returns:
        Dict[str, Any]: Catálogo `locale -> seção -> chave -> texto`.

    Raises:
        MessagesNotFoundError: Se o catálogo base não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    catalog = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            catalog = deep_merge(catalog, _load_file(local_file))

    return catalog
