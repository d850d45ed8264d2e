# src/atlas_operations/core/config/transactions.py
"""
Transações em processo do Atlas Operations.

O Command executa o pipeline dentro de `configuration.transaction(block)`
e agenda os callbacks de sucesso com `configuration.after_commit(block)`.
Este módulo fornece a implementação padrão dessas duas capacidades,
sem banco de dados:

    - TransactionManager.transaction  → executa o bloco, com aninhamento
    - TransactionManager.after_commit → adia o bloco até o commit externo

Semântica:
    - Fora de transação, `after_commit` executa o bloco imediatamente
    - Dentro de transação, o bloco fica pendente no nível corrente
    - Commit de nível interno move os pendentes para o nível externo
    - Commit do nível mais externo executa os pendentes, em ordem
    - Exceção em qualquer nível descarta os pendentes daquele nível

Decisões arquiteturais:
    - O aninhamento é rastreado com `contextvars`, portanto é isolado por
      thread e por task asyncio
    - `Rollback` é o sinal usado pelo Command para reverter a transação
      quando um estágio falha, devolvendo o valor ao chamador

Limites explícitos:
    - Não persiste dados nem reverte efeitos externos ao processo
    - Para bancos relacionais, ver `atlas_operations.adapters.sqlalchemy`
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Callable, List, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Rollback(Exception):
    """Interrompe a transação corrente carregando o valor a ser devolvido."""

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value


def atomic(
    transaction: Callable[[Callable[[], T]], T],
    block: Callable[[], T],
    *,
    rollback_if: Callable[[T], bool],
) -> T:
    """
    Executa `block` dentro de `transaction`, revertendo quando `rollback_if(valor)`.

    O valor é devolvido em ambos os casos; apenas a transação difere
    (commit vs rollback).
    """

    def run() -> T:
        value = block()
        if rollback_if(value):
            raise Rollback(value)
        return value

    try:
        return transaction(run)
    except Rollback as halt:
        return halt.value


class TransactionManager:
    """Gerenciador de transações aninhadas em memória (padrão da `Configuration`)."""

    def __init__(self) -> None:
        self._levels: ContextVar[Tuple[List[Callable[[], Any]], ...]] = ContextVar(
            f"atlas_operations_transaction_{id(self)}", default=()
        )

    @property
    def in_transaction(self) -> bool:
        return bool(self._levels.get())

    def transaction(self, block: Callable[[], T]) -> T:
        pending: List[Callable[[], Any]] = []
        token = self._levels.set(self._levels.get() + (pending,))
        try:
            value = block()
        except BaseException:
            self._levels.reset(token)
            if pending:
                logger.debug("Transaction rolled back, discarding %d after-commit callbacks", len(pending))
            raise

        self._levels.reset(token)
        outer = self._levels.get()
        if outer:
            outer[-1].extend(pending)
        else:
            for callback in pending:
                callback()
        return value

    def after_commit(self, block: Callable[[], Any]) -> None:
        levels = self._levels.get()
        if levels:
            levels[-1].append(block)
        else:
            block()
