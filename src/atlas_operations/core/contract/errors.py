"""Erros canônicos do domínio de Contract (Atlas Operations).

Estes erros indicam contratos mal definidos (erro de programação).
Params inválidos nunca levantam exceção: viram mensagens no `Result`.
"""


class ContractError(Exception):
    """Erro base do domínio de contrato."""


class ContractDefinitionError(ContractError):
    """Contrato declarado com schema ou regras inválidas."""
