# src/atlas_operations/core/engine/command.py
"""
Command: orquestrador do pipeline de uma operação de negócio.

Um Command combina o corpo da operação com os componentes que o cercam
e executa tudo em ordem fixa:

    contract → policies → idempotency → preconditions → operation → callbacks

Fluxo de `call(params, **context)`:
    1. Tudo até o corpo da operação roda dentro de `configuration.transaction`
    2. O contrato valida params e carrega entidades no contexto
    3. Policies; se o contrato falhou e as policies não são avaliáveis
       (contexto insuficiente), devolve a falha do contrato
    4. Idempotency; um desvio devolve o resultado `idempotency` com sucesso,
       sem corpo e sem callbacks
    5. Preconditions; se o contrato falhou e elas não são avaliáveis,
       devolve a falha do contrato
    6. Falha de preconditions vence; senão, falha do contrato vence
    7. Corpo da operação
    8. Qualquer desfecho diferente de "corpo executado com sucesso" reverte
       a transação
    9. Se o corpo executou: `on_success` (adiado para o commit) ou `on_failure`

Decisões arquiteturais:
    - Policies e preconditions são avaliadas mesmo com o contrato inválido,
      desde que o contexto exigido esteja presente: o usuário vê primeiro
      "não autorizado" / "não é possível agora", e só depois erros de campos
    - Componentes são construídos uma vez, na definição; o Command é
      imutável e seguro para reuso concorrente
    - Nenhum estado global: a `Configuration` é recebida explicitamente

Invariantes:
    - Todo ponto de entrada devolve um `Result` carimbado com o Command
    - Erros de programação (checagem com retorno inválido etc.) propagam
    - O corpo nunca executa sem policies e preconditions aprovadas

Limites explícitos:
    - Não define DSL de validação (o contrato é plugável)
    - Não persiste dados (a transação é plugável)
"""

from __future__ import annotations

import logging
from dataclasses import FrozenInstanceError
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from atlas_operations.core.components import (
    Contract,
    Idempotency,
    OnFailure,
    OnSuccess,
    OperationBody,
    Policies,
    Preconditions,
)
from atlas_operations.core.config.configuration import Configuration
from atlas_operations.core.config.transactions import atomic
from atlas_operations.core.exceptions import MissingPoliciesError, OperationFailed
from atlas_operations.core.pipeline.monads import Failure
from atlas_operations.core.pipeline.signature import CallingConvention, callable_name
from atlas_operations.core.pipeline.types import Component, Result

logger = logging.getLogger(__name__)


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()

_MERGEABLE_FIELDS = (
    "contract",
    "policies",
    "idempotency",
    "preconditions",
    "on_success",
    "on_failure",
    "configuration",
    "calling_convention",
)


def _as_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise TypeError(f"params must be a mapping, got {type(params).__name__}")
    return dict(params)


def _halted(result: Result) -> bool:
    return result.failure or result.component is not Component.OPERATION


class Command:
    """Operação de negócio com contrato, checagens, corpo e callbacks."""

    def __init__(
        self,
        operation: Any,
        *,
        contract: Any,
        policies: Iterable[Any] = UNDEFINED,
        policy: Any = UNDEFINED,
        idempotency: Iterable[Any] = (),
        preconditions: Iterable[Any] = (),
        precondition: Any = None,
        on_success: Iterable[Any] = (),
        on_failure: Iterable[Any] = (),
        configuration: Optional[Configuration] = None,
        calling_convention: Optional[CallingConvention] = None,
    ) -> None:
        if policy is UNDEFINED and policies is UNDEFINED:
            raise MissingPoliciesError(
                message=f"Command for {callable_name(operation)} declares no policies",
                details={"operation": callable_name(operation)},
                hint="Declare policy=... ou policies=[...]; use policies=[] para não exigir autorização.",
            )

        combined = [] if policy is UNDEFINED else [policy]
        if policies is not UNDEFINED:
            combined.extend(policies)

        checks = list(preconditions)
        if precondition is not None:
            checks.append(precondition)

        self.operation = operation
        self.contract = contract
        self.policies: Tuple[Any, ...] = tuple(combined)
        self.idempotency: Tuple[Any, ...] = tuple(idempotency)
        self.preconditions: Tuple[Any, ...] = tuple(checks)
        self.on_success: Tuple[Any, ...] = tuple(on_success)
        self.on_failure: Tuple[Any, ...] = tuple(on_failure)
        self.configuration = configuration if configuration is not None else Configuration()
        self.calling_convention = None if calling_convention is None else CallingConvention(calling_convention)

        self._components = self._build_components()
        self._frozen = True

    # ------------------------------------------------------------------
    # Construção
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        operation_class: Any,
        contract_class: Any = None,
        *,
        configuration: Optional[Configuration] = None,
        **deps: Any,
    ) -> "Command":
        """
        Monta um Command por convenção a partir de uma classe de operação.

        Convenção:
            CreatePost               → corpo da operação
            CreatePost.Contract      → contrato (ou `contract_class`)
            CreatePost.Policy        → única policy
            CreatePost.Precondition  → precondition (opcional)

        Todas as dependências em `deps` são repassadas a cada construtor,
        que deve tolerar dependências que não usa (`**_`).
        """
        options: Dict[str, Any] = {
            "contract": (contract_class or operation_class.Contract)(**deps),
            "policies": [operation_class.Policy(**deps)],
        }
        precondition_class = getattr(operation_class, "Precondition", None)
        if precondition_class is not None:
            options["preconditions"] = [precondition_class(**deps)]

        return cls(operation_class(**deps), configuration=configuration, **options)

    def merge(self, **changes: Any) -> "Command":
        """Novo Command com os campos informados substituídos."""
        operation = changes.pop("operation", self.operation)
        fields = {name: getattr(self, name) for name in _MERGEABLE_FIELDS}
        fields.update(changes)
        return type(self)(operation, **fields)

    def _build_components(self) -> Dict[str, Any]:
        configuration = self.configuration
        resolver = getattr(self.contract, "message_resolver", None) or configuration.message_resolver
        options = {
            "message_resolver": resolver,
            "info_reporter": configuration.info_reporter,
            "error_reporter": configuration.error_reporter,
        }
        return {
            "contract": Contract(self.contract, **options),
            "policies": Policies(self.policies, **options),
            "idempotency": Idempotency(self.idempotency, **options),
            "preconditions": Preconditions(self.preconditions, **options),
            "operation": OperationBody(self.operation, calling_convention=self.calling_convention, **options),
            "on_success": OnSuccess(
                self.on_success,
                transaction=configuration.transaction,
                after_commit=configuration.after_commit,
                **options,
            ),
            "on_failure": OnFailure(self.on_failure, transaction=configuration.transaction, **options),
        }

    # ------------------------------------------------------------------
    # Pontos de entrada
    # ------------------------------------------------------------------

    def call(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """Executa o pipeline completo (ver docstring do módulo)."""
        return self._finalize(self._call(_as_params(params), context))

    def call_or_raise(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """Como `call`, mas levanta `OperationFailed` em qualquer falha."""
        result = self.call(params, **context)
        if result.failure:
            raise OperationFailed(result)
        return result

    def try_call_or_raise(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """
        Como `call`, mas levanta `OperationFailed` apenas em falhas de
        contrato ou do corpo; falhas de policies/preconditions retornam.
        """
        result = self.call(params, **context)
        if result.failure and not result.failed_precheck():
            raise OperationFailed(result)
        return result

    def validate(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """Contrato + policies + preconditions, sem idempotency, corpo ou transação."""
        return self._finalize(self._validate(_as_params(params), context))

    def is_valid(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> bool:
        return self.validate(params, **context).success

    def callable(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """
        Policies + preconditions após o contrato (que carrega o contexto).

        Falhas de contrato só aparecem quando mascaram checagens não avaliáveis.
        """
        contract_result = self._components["contract"](_as_params(params), context)
        return self._finalize(self._prechecks(contract_result))

    def is_callable(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> bool:
        return self.callable(params, **context).success

    def allowed(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """Apenas policies, sem contrato."""
        return self._finalize(self._components["policies"](_as_params(params), context))

    def is_allowed(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> bool:
        return self.allowed(params, **context).success

    def possible(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> Result:
        """Apenas preconditions, sem contrato."""
        return self._finalize(self._components["preconditions"](_as_params(params), context))

    def is_possible(self, params: Optional[Mapping[str, Any]] = None, **context: Any) -> bool:
        return self.possible(params, **context).success

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _call(self, params: Dict[str, Any], context: Dict[str, Any]) -> Result:
        result = atomic(
            self.configuration.transaction,
            lambda: self._execute_operation(params, context),
            rollback_if=_halted,
        )

        if result.component is not Component.OPERATION:
            logger.debug("%s halted on %s", callable_name(self.operation), result.component.value)
            return result

        callbacks = self._components["on_success" if result.success else "on_failure"]
        return callbacks(result)

    def _execute_operation(self, params: Dict[str, Any], context: Dict[str, Any]) -> Result:
        validation = self._validate(params, context, call_idempotency=True)
        if validation.failure or validation.component is not Component.CONTRACT:
            return validation
        return self._components["operation"](validation.params, validation.context)

    def _validate(self, params: Dict[str, Any], context: Dict[str, Any], *, call_idempotency: bool = False) -> Result:
        contract_result = self._components["contract"](params, context)
        checks_result = self._prechecks(contract_result, call_idempotency=call_idempotency)
        if checks_result.failure or checks_result.component is Component.IDEMPOTENCY:
            return checks_result
        return contract_result

    def _prechecks(self, contract_result: Result, *, call_idempotency: bool = False) -> Result:
        params, context = contract_result.params, contract_result.context
        policies = self._components["policies"]
        preconditions = self._components["preconditions"]

        # o contrato carrega entidades; sem elas as checagens não são avaliáveis
        if contract_result.failure and not policies.is_callable(context):
            return contract_result

        policies_result = policies(params, context)
        if policies_result.failure:
            return policies_result

        if call_idempotency:
            idempotency_outcome = self._components["idempotency"](params, context)
            if isinstance(idempotency_outcome, Failure):
                return idempotency_outcome.value

        if contract_result.failure and not preconditions.is_callable(context):
            return contract_result

        return preconditions(params, context)

    def _finalize(self, result: Result) -> Result:
        return result.merge(command=self)

    # ------------------------------------------------------------------
    # Inspeção
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": callable_name(self.operation),
            "contract": callable_name(self.contract),
            "policies": [callable_name(policy) for policy in self.policies],
            "idempotency": [callable_name(check) for check in self.idempotency],
            "preconditions": [callable_name(check) for check in self.preconditions],
            "on_success": [callable_name(callback) for callback in self.on_success],
            "on_failure": [callable_name(callback) for callback in self.on_failure],
            "calling_convention": self._components["operation"].calling_convention.value,
            "configuration": self.configuration.to_dict(),
        }

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f"cannot assign to field {name!r}; use merge()")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return type(self) is type(other) and self._identity() == other._identity()

    __hash__ = None  # type: ignore[assignment]

    def _identity(self) -> Tuple[Any, ...]:
        return (
            self.operation,
            self.contract,
            self.policies,
            self.idempotency,
            self.preconditions,
            self.on_success,
            self.on_failure,
            self.calling_convention,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"operation={self.operation!r}, "
            f"contract={self.contract!r}, "
            f"policies={list(self.policies)!r}, "
            f"idempotency={list(self.idempotency)!r}, "
            f"preconditions={list(self.preconditions)!r}, "
            f"on_success={list(self.on_success)!r}, "
            f"on_failure={list(self.on_failure)!r})"
        )
