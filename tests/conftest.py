# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Operations.

Este módulo define fixtures reutilizáveis que fornecem:
- reporters que gravam chamadas em memória
- uma `Configuration` determinística (transações em memória)
- um modelo Pydantic e um contrato de referência reduzidos
- um repositório em memória para carregar entidades

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Nenhuma fixture realiza I/O nem acessa banco de dados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Cada teste recebe instâncias novas (sem estado compartilhado)
    - Nenhuma fixture executa um Command

Limites explícitos:
    - Não substituir testes de integração (ver tests/adapters)
    - Não conter lógica de domínio além do mínimo para exercitar o pipeline
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pytest


class RecordingReporter:
    """Reporter que guarda `(mensagem, payload)` de cada chamada."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, message: str, **payload: Any) -> None:
        self.calls.append((message, payload))

    @property
    def messages(self) -> List[str]:
        return [message for message, _ in self.calls]


@dataclass
class User:
    id: int
    name: str
    admin: bool = False


class Repository:
    """Repositório em memória indexado por id."""

    def __init__(self, *items: Any) -> None:
        self.items = {item.id: item for item in items}

    def get(self, identifier: Any) -> Optional[Any]:
        return self.items.get(identifier)


@pytest.fixture
def info_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def error_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def configuration(info_reporter, error_reporter):
    """
    `Configuration` com reporters gravadores e transações em memória.

    Cada teste recebe um `TransactionManager` novo, portanto transações
    abertas por um teste nunca afetam outro.
    """
    from atlas_operations.core.config.configuration import Configuration

    return Configuration(info_reporter=info_reporter, error_reporter=error_reporter)


@pytest.fixture
def users() -> Repository:
    return Repository(User(1, "Ada", admin=True), User(2, "Linus"))


@pytest.fixture
def post_schema():
    """Modelo Pydantic mínimo usado pelos testes de contrato e do Command."""
    from pydantic import BaseModel, Field

    class PostParams(BaseModel):
        title: str = Field(min_length=3)
        body: str = ""
        author_id: Optional[int] = None

    return PostParams


@pytest.fixture
def post_contract(post_schema, users):
    """Contrato de referência que valida params e carrega `author`."""
    from atlas_operations.core.contract import Find, SchemaContract

    return SchemaContract(post_schema, rules=[Find("author", lookup=users.get, optional=True)])
