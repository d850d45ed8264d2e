# tests/core/components/test_operation.py
"""
Testes do componente do corpo da operação.

Os testes asseguram que:
- `Success(mapping)` é mesclado no contexto; `Success()` mantém o contexto
- `Failure(payload)` vira mensagens no `Result`
- retornos fora do protocolo levantam `InvalidOperationResultError`
- a convenção de chamada é resolvida na construção
"""

import pytest

from atlas_operations.core.components.operation import OperationBody
from atlas_operations.core.exceptions import InvalidFailureError, InvalidOperationResultError
from atlas_operations.core.messages.resolver import MessageResolver
from atlas_operations.core.pipeline.monads import Failure, Success
from atlas_operations.core.pipeline.signature import CallingConvention
from atlas_operations.core.pipeline.types import Component


def _body(operation, **options):
    return OperationBody(operation, message_resolver=MessageResolver.default(), **options)


def test_success_payload_is_merged_into_context():
    def create(params, user):
        return Success({"post": {"title": params["title"], "author": user}})

    result = _body(create)({"title": "Hi"}, {"user": "ada"})

    assert result.component is Component.OPERATION
    assert result.success
    assert result.params == {"title": "Hi"}
    assert result.context == {"user": "ada", "post": {"title": "Hi", "author": "ada"}}


def test_success_without_payload_keeps_context():
    result = _body(lambda params: Success())({}, {"user": "ada"})

    assert result.success
    assert result.context == {"user": "ada"}


def test_failure_payload_becomes_errors():
    result = _body(lambda params: Failure({"text": "is taken", "path": "title"}))({"title": "Hi"}, {})

    assert result.failure
    assert result.errors.to_dict() == {"title": ["is taken"]}


def test_empty_failure_is_a_programming_error():
    with pytest.raises(InvalidFailureError):
        _body(lambda params: Failure())({}, {})


@pytest.mark.parametrize("value", [None, True, {"post": 1}])
def test_non_monad_return_raises(value):
    with pytest.raises(InvalidOperationResultError):
        _body(lambda params: value)({}, {})


def test_non_mapping_success_payload_raises():
    with pytest.raises(InvalidOperationResultError):
        _body(lambda params: Success(42))({}, {})


def test_context_first_operation_class():
    class Publish:
        def __call__(self, post, *, title):
            return Success({"published": (post, title)})

    body = _body(Publish())

    assert body.calling_convention is CallingConvention.CONTEXT_FIRST
    assert body({"title": "Hi"}, {"post": "p1"}).context["published"] == ("p1", "Hi")


def test_explicit_calling_convention():
    body = _body(lambda data, **context: Success({"data": data}), calling_convention=CallingConvention.PARAMS_FIRST)

    assert body({"a": 1}, {}).context == {"data": {"a": 1}}
