# src/atlas_operations/adapters/sqlalchemy.py
"""
Transações do Command sobre uma `Session` do SQLAlchemy.

`SQLAlchemyTransactions` fornece `transaction(block)` e `after_commit(block)`
com a mesma semântica do `TransactionManager` em memória, mas delegando a
atomicidade ao banco:

    - sessão fora de transação  → `session.begin()` (commit ao final)
    - sessão já em transação    → `session.begin_nested()` (SAVEPOINT)

Callbacks de `after_commit`:
    - registrados dentro de `transaction()` ficam pendentes no nível
      corrente e sobem de nível a cada commit interno
    - descartados quando o nível (ou a transação real) sofre rollback
    - quando a transação mais externa é da aplicação, são marcados no
      evento `after_commit` da transação raiz e executados no
      `after_transaction_end` dela, com a sessão já livre para uma nova
      transação

Exemplo:
    transactions = SQLAlchemyTransactions(lambda: session)
    command = Command(CreatePost(), ..., configuration=transactions.configuration())

Limites explícitos:
    - Não gerencia engine, conexões nem criação de sessões
    - Bancos sem SAVEPOINT não suportam comandos aninhados
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, TypeVar

from sqlalchemy import event
from sqlalchemy.orm import Session, SessionTransaction

from atlas_operations.core.config.configuration import Configuration

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEVELS = "atlas_operations.levels"
_PENDING = "atlas_operations.after_commit"
_COMMITTED = "atlas_operations.committed"
_LISTENING = "atlas_operations.listening"


def _mark_committed(session: Session) -> None:
    # SAVEPOINTs também disparam os eventos; apenas a transação raiz conta
    if session.in_nested_transaction():
        return
    session.info[_COMMITTED] = session.info.pop(_PENDING, [])


def _discard_pending(session: Session) -> None:
    if session.in_nested_transaction():
        return
    pending = session.info.pop(_PENDING, [])
    if pending:
        logger.debug("Session rolled back, discarding %d after-commit callbacks", len(pending))


def _run_committed(session: Session, transaction: SessionTransaction) -> None:
    if transaction.parent is not None:
        return
    for callback in session.info.pop(_COMMITTED, []):
        callback()


def _listen(session: Session) -> None:
    if session.info.get(_LISTENING):
        return
    session.info[_LISTENING] = True
    event.listen(session, "after_commit", _mark_committed)
    event.listen(session, "after_rollback", _discard_pending)
    event.listen(session, "after_transaction_end", _run_committed)


class SQLAlchemyTransactions:
    """Capacidades `transaction` / `after_commit` para uma sessão SQLAlchemy."""

    def __init__(self, session_provider: Callable[[], Session]) -> None:
        self.session_provider = session_provider

    def transaction(self, block: Callable[[], T]) -> T:
        session = self.session_provider()
        levels: List[List[Callable[[], Any]]] = session.info.setdefault(_LEVELS, [])
        pending: List[Callable[[], Any]] = []
        levels.append(pending)

        try:
            if session.in_transaction():
                with session.begin_nested():
                    value = block()
            else:
                with session.begin():
                    value = block()
        except BaseException:
            levels.pop()
            raise

        levels.pop()
        if levels:
            levels[-1].extend(pending)
        else:
            self._defer(session, pending)
        return value

    def after_commit(self, block: Callable[[], Any]) -> None:
        session = self.session_provider()
        levels = session.info.get(_LEVELS)
        if levels:
            levels[-1].append(block)
        else:
            self._defer(session, [block])

    def configuration(self, **overrides: Any) -> Configuration:
        """`Configuration` com `transaction`/`after_commit` deste adaptador."""
        return Configuration(transaction=self.transaction, after_commit=self.after_commit, **overrides)

    def _defer(self, session: Session, callbacks: List[Callable[[], Any]]) -> None:
        if not callbacks:
            return
        if not session.in_transaction():
            for callback in callbacks:
                callback()
            return

        _listen(session)
        session.info.setdefault(_PENDING, []).extend(callbacks)
