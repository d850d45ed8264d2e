# tests/core/components/test_policies.py
"""
Testes do componente de policies.

Os testes asseguram que:
- policies são avaliadas em ordem e a primeira falha interrompe
- `True`/`Success` aprovam; `False`/`Failure()` viram `unauthorized`
- `Failure(payload)` usa o payload como mensagem
- retornos fora do protocolo levantam `InvalidCheckResultError`
- o contexto requerido é a união das checagens
"""

import pytest

from atlas_operations.core.components.policies import Policies
from atlas_operations.core.exceptions import InvalidCheckResultError
from atlas_operations.core.messages.resolver import MessageResolver
from atlas_operations.core.pipeline.monads import Failure, Success
from atlas_operations.core.pipeline.types import Component


def _policies(*checks):
    return Policies(checks, message_resolver=MessageResolver.default())


def test_all_policies_pass():
    result = _policies(lambda: True, lambda user: Success())({}, {"user": "ada"})

    assert result.component is Component.POLICIES
    assert result.success


@pytest.mark.parametrize("denial", [False, Failure(), Failure(None)])
def test_denial_without_payload_is_unauthorized(denial):
    result = _policies(lambda: denial)({}, {})

    assert result.failure
    assert result.errors.to_dict() == {None: [{"text": "Unauthorized", "code": "unauthorized"}]}


def test_failure_payload_is_used():
    result = _policies(lambda: Failure({"code": "not_owner", "text": "Only the author can edit"}))({}, {})

    assert result.errors.to_dict() == {None: [{"text": "Only the author can edit", "code": "not_owner"}]}


def test_first_failure_stops_evaluation():
    calls = []

    def deny():
        calls.append("deny")
        return False

    def later():
        calls.append("later")
        return True

    result = _policies(deny, later)({}, {})

    assert result.failed_policy("unauthorized")
    assert calls == ["deny"]


@pytest.mark.parametrize("value", [None, "yes", 1])
def test_unexpected_result_raises(value):
    with pytest.raises(InvalidCheckResultError):
        _policies(lambda: value)({}, {})


def test_required_context_and_is_callable():
    policies = _policies(lambda user: True, lambda user, post=None: True, lambda **_: True)

    assert policies.required_context == frozenset({"user"})
    assert policies.is_callable({"user": 1})
    assert not policies.is_callable({"post": 1})
    assert _policies().is_callable({})
