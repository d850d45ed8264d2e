# src/atlas_operations/core/config/configuration.py
"""
Configuração de execução compartilhada pelos comandos.

A `Configuration` agrupa as capacidades externas que o pipeline consome:

    - transaction(block)        → executa o pipeline de forma atômica
    - after_commit(block)       → adia callbacks de sucesso até o commit
    - info_reporter(msg, **kw)  → eventos informativos (ex.: idempotência)
    - error_reporter(msg, **kw) → falhas de side-effects em callbacks
    - message_resolver          → catálogo de mensagens

Decisões arquiteturais:
    - Nenhum estado global: a configuração é passada explicitamente ao
      Command; na ausência, cada Command constrói a sua
    - `transaction` e `after_commit` não informados vêm do `TransactionManager`
      padrão, compartilhado por todas as configurações padrão: o aninhamento
      vive em `contextvars` (por thread e por task), então um Command chamado
      dentro do corpo de outro enxerga a transação externa
    - Reporters padrão registram via `logging`; `None` desliga o reporter

Limites explícitos:
    - Não carrega configuração de arquivos (catálogos: ver `loader`)
    - Não conhece componentes nem Commands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from ..messages.resolver import MessageResolver
from ..pipeline.signature import callable_name
from .transactions import TransactionManager

Reporter = Callable[..., None]

_DEFAULT_TRANSACTIONS = TransactionManager()


class LoggingReporter:
    """Reporter que registra a mensagem e o payload no logger informado."""

    def __init__(self, level: int = logging.INFO, logger: Optional[logging.Logger] = None) -> None:
        self.level = level
        self.logger = logger or logging.getLogger("atlas_operations")

    def __call__(self, message: str, **payload: Any) -> None:
        self.logger.log(self.level, message, extra={"payload": payload})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoggingReporter):
            return NotImplemented
        return self.level == other.level and self.logger is other.logger

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"LoggingReporter(level={logging.getLevelName(self.level)}, logger={self.logger.name!r})"


@dataclass(frozen=True)
class Configuration:
    """Capacidades externas consumidas pelo Command."""

    transaction: Optional[Callable[[Callable[[], Any]], Any]] = None
    after_commit: Optional[Callable[[Callable[[], Any]], None]] = None
    info_reporter: Optional[Reporter] = field(default_factory=lambda: LoggingReporter(logging.INFO))
    error_reporter: Optional[Reporter] = field(default_factory=lambda: LoggingReporter(logging.ERROR))
    message_resolver: MessageResolver = field(default_factory=MessageResolver.default)

    def __post_init__(self) -> None:
        if self.transaction is None or self.after_commit is None:
            manager = _DEFAULT_TRANSACTIONS
            if self.transaction is None:
                object.__setattr__(self, "transaction", manager.transaction)
            if self.after_commit is None:
                object.__setattr__(self, "after_commit", manager.after_commit)

    def merge(self, **changes: Any) -> "Configuration":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction": callable_name(self.transaction),
            "after_commit": callable_name(self.after_commit),
            "info_reporter": callable_name(self.info_reporter),
            "error_reporter": callable_name(self.error_reporter),
            "message_resolver": repr(self.message_resolver),
        }
