# tests/core/pipeline/test_signature.py
"""
Testes dos adaptadores de chamada (`CheckEntry`, `BodyEntry`).

Os testes asseguram que:
- a convenção de chamada é inferida pelo primeiro parâmetro
- a convenção explícita (argumento ou decorator) tem prioridade
- o contexto é filtrado para os nomes aceitos pela assinatura
- o contexto requerido une assinatura e chaves declaradas

Decisões arquiteturais:
    - Declarar uma chave que a assinatura não usa torna o estágio mais
      restritivo (sobre-aproximação), nunca mais permissivo
"""

from atlas_operations.core.pipeline.signature import (
    BodyEntry,
    CallingConvention,
    CallSignature,
    CheckEntry,
    calling_convention,
    callable_name,
    requires_context,
)


def test_params_first_is_inferred_from_conventional_names():
    def create(params, user, post=None):
        return params, user, post

    entry = BodyEntry.of(create)

    assert entry.convention is CallingConvention.PARAMS_FIRST
    assert entry({"title": "Hi"}, {"user": "ada", "extra": 1}) == ({"title": "Hi"}, "ada", None)


def test_positional_only_first_argument_takes_params():
    def create(data, /, user):
        return data, user

    assert BodyEntry.of(create).convention is CallingConvention.PARAMS_FIRST


def test_context_first_passes_positionals_from_context_and_params_as_keywords():
    def publish(post, *, title=None, **rest):
        return post, title, rest

    entry = BodyEntry.of(publish)

    assert entry.convention is CallingConvention.CONTEXT_FIRST
    assert entry({"title": "Hi", "body": "x"}, {"post": "p1"}) == ("p1", "Hi", {"body": "x"})


def test_explicit_convention_wins():
    @calling_convention(CallingConvention.CONTEXT_FIRST)
    def body(params):
        return params

    assert BodyEntry.of(body).convention is CallingConvention.CONTEXT_FIRST
    assert BodyEntry.of(body, convention=CallingConvention.PARAMS_FIRST).convention is CallingConvention.PARAMS_FIRST


def test_check_entry_filters_context():
    def is_author(user, post):
        return user == post

    entry = CheckEntry.of(is_author)

    assert entry.takes_params is False
    assert entry.required_context == frozenset({"user", "post"})
    assert entry({}, {"user": 1, "post": 1, "other": 2}) is True


def test_check_entry_with_var_keyword_receives_everything():
    def check(**context):
        return sorted(context)

    entry = CheckEntry.of(check)

    assert entry.required_context == frozenset()
    assert entry({}, {"a": 1, "b": 2}) == ["a", "b"]


def test_required_context_unions_declared_keys():
    """
    `requires_context` soma chaves ao que a assinatura exige.

    Uma policy `**context` que lê `context["user"]` só é considerada
    avaliável quando `user` está presente.
    """

    @requires_context("user")
    def is_admin(**context):
        return context["user"].admin

    class OwnerCheck:
        context_key = "post"

        def __call__(self, user, **context):
            return True

    assert CheckEntry.of(is_admin).required_context == frozenset({"user"})
    assert CheckEntry.of(OwnerCheck()).required_context == frozenset({"user", "post"})


def test_takes_params_excludes_first_argument_from_required_context():
    def already_done(params, user):
        return params, user

    entry = CheckEntry.of(already_done, takes_params=True)

    assert entry.required_context == frozenset({"user"})
    assert entry({"id": 1}, {"user": "ada", "params": "ignored"}) == ({"id": 1}, "ada")


def test_uninspectable_callables_accept_any_context():
    signature = CallSignature()

    assert signature.var_keyword is True
    assert signature.keyword_arguments({"a": 1}) == {"a": 1}


def test_callable_name():
    class Publish:
        def __call__(self):
            pass

        def run(self):
            pass

    def helper():
        pass

    assert callable_name(Publish()) == "Publish"
    assert callable_name(Publish().run) == "Publish.run"
    assert callable_name(helper).endswith("helper")
    assert callable_name(None) is None
