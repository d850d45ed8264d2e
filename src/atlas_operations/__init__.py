# src/atlas_operations/__init__.py
"""
Atlas Operations — operações de negócio como pipelines explícitos.

Uma operação de negócio é descrita por um `Command`, que executa, nesta
ordem e dentro de uma transação:

    contrato → policies → idempotência → preconditions → corpo → callbacks

Cada estágio devolve um `Result` imutável que identifica o componente
responsável pelo desfecho, os params, o contexto e as mensagens de erro.

Princípios centrais:
    - Nenhuma decisão silenciosa: falhas viram `Result` explícito ou
      exceção de programação, nunca ambos
    - Side-effects de sucesso só rodam depois do commit
    - Mensagens são localizáveis e renderizadas sob demanda

Arquitetura em alto nível:
    - core.engine     → `Command`
    - core.components → estágios do pipeline
    - core.contract   → `SchemaContract`, `Rule`, `Find`
    - core.config     → `Configuration`, `TransactionManager`
    - adapters        → integrações opcionais (SQLAlchemy)

Limites explícitos:
    - Não define operações de domínio
    - Não depende de frameworks web
"""
# src/atlas_operations/__init__.py
from .core.config.configuration import Configuration, LoggingReporter
from .core.config.transactions import TransactionManager
from .core.contract import ContractOutcome, Find, Rule, SchemaContract, rule
from .core.engine import UNDEFINED, Command
from .core.errors import MISSING, NOT_FOUND, UNAUTHORIZED, Code, failure, not_found, unauthorized
from .core.exceptions import (
    InvalidCheckResultError,
    InvalidFailureError,
    InvalidOperationResultError,
    MissingPoliciesError,
    OperationFailed,
    OperationsException,
)
from .core.messages import Message, MessageResolver, MessageSet
from .core.pipeline import (
    CallingConvention,
    Component,
    Failure,
    Result,
    Success,
    calling_convention,
    requires_context,
)

__all__ = [
    "CallingConvention",
    "Code",
    "Command",
    "Component",
    "Configuration",
    "ContractOutcome",
    "Failure",
    "Find",
    "InvalidCheckResultError",
    "InvalidFailureError",
    "InvalidOperationResultError",
    "LoggingReporter",
    "MISSING",
    "Message",
    "MessageResolver",
    "MessageSet",
    "MissingPoliciesError",
    "NOT_FOUND",
    "OperationFailed",
    "OperationsException",
    "Result",
    "Rule",
    "SchemaContract",
    "Success",
    "TransactionManager",
    "UNAUTHORIZED",
    "UNDEFINED",
    "calling_convention",
    "failure",
    "not_found",
    "requires_context",
    "rule",
    "unauthorized",
]
