"""Atlas Operations — Contract (core).

Contrato de referência para o Command:
 - validação de params com modelos Pydantic
 - regras sobre valores validados
 - carregamento de entidades no contexto (`Find`)
"""

from .errors import ContractDefinitionError, ContractError  # noqa: F401
from .rules import Find, Rule, rule  # noqa: F401
from .schema import ContractOutcome, SchemaContract  # noqa: F401
