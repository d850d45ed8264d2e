# tests/core/components/test_preconditions.py
"""
Testes do componente de preconditions.

Diferente das policies, todas as preconditions são avaliadas e todas
as falhas são agregadas no mesmo `Result`.
"""

import pytest

from atlas_operations.core.components.preconditions import Preconditions
from atlas_operations.core.errors import Code
from atlas_operations.core.exceptions import InvalidCheckResultError
from atlas_operations.core.messages.resolver import MessageResolver
from atlas_operations.core.pipeline.monads import Failure, Success
from atlas_operations.core.pipeline.types import Component


def _preconditions(*checks):
    return Preconditions(checks, message_resolver=MessageResolver.default())


def test_none_and_success_pass():
    result = _preconditions(lambda: None, lambda: Success(), lambda: [])({}, {})

    assert result.component is Component.PRECONDITIONS
    assert result.success


def test_all_failures_are_aggregated():
    calls = []

    def locked(post):
        calls.append("locked")
        return Code("post_locked")

    def archived(post):
        calls.append("archived")
        return Failure({"text": "is archived", "path": "post"})

    def several():
        calls.append("several")
        return ["first", None, Failure("second")]

    result = _preconditions(locked, archived, several)({}, {"post": 1})

    assert calls == ["locked", "archived", "several"]
    assert result.failed_precondition("post_locked")
    assert result.errors.to_dict() == {
        None: [{"text": "Post locked", "code": "post_locked"}, "first", "second"],
        "post": ["is archived"],
    }


@pytest.mark.parametrize("value", [True, False, Failure(), [Failure(None)]])
def test_booleans_and_empty_failures_raise(value):
    with pytest.raises(InvalidCheckResultError):
        _preconditions(lambda: value)({}, {})


def test_required_context():
    preconditions = _preconditions(lambda post: None, lambda user, **_: None)

    assert preconditions.required_context == frozenset({"post", "user"})
    assert not preconditions.is_callable({"post": 1})
