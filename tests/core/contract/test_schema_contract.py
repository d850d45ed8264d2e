# tests/core/contract/test_schema_contract.py
"""
Testes do contrato de referência (`SchemaContract`).

Este módulo valida a integração com Pydantic e a execução de regras:
- params válidos são normalizados pelo modelo (`model_dump`)
- erros do Pydantic viram mensagens traduzíveis pelo catálogo
- regras só executam quando suas chaves passaram pelo schema
- regras sem chaves só executam com o schema inteiro válido
- o contexto recebido nunca é mutado

Decisões arquiteturais:
    - Params inválidos nunca levantam exceção
    - Contratos mal definidos levantam `ContractDefinitionError`
"""

import pytest

try:
    from atlas_operations.core.contract import (
        ContractDefinitionError,
        ContractOutcome,
        Rule,
        SchemaContract,
        rule,
    )
    from atlas_operations.core.messages.resolver import MessageResolver
except Exception as e:  # noqa: BLE001
    ContractDefinitionError = ContractOutcome = Rule = SchemaContract = rule = MessageResolver = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o contrato de referência esteja disponível para os testes.

    Falha imediatamente quando `core.contract` (ou o Pydantic) não pode
    ser importado, em vez de produzir erros indiretos nos testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing contract modules. Implement:\n"
            "- src/atlas_operations/core/contract/schema.py (SchemaContract)\n"
            "- src/atlas_operations/core/contract/rules.py (Rule, rule, Find)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_valid_params_are_normalized(post_schema):
    _require_imports()
    outcome = SchemaContract(post_schema)({"title": "Hello", "ignored": 1}, {"user": "ada"})

    assert isinstance(outcome, ContractOutcome)
    assert outcome.success
    assert outcome.params == {"title": "Hello", "body": "", "author_id": None}
    assert outcome.context == {"user": "ada"}


def test_schema_errors_are_translated(post_schema):
    """
    Erros do Pydantic usam o `type` do erro como chave de catálogo e o
    `ctx` como tokens; o texto original do Pydantic é o fallback.
    """
    _require_imports()
    contract = SchemaContract(post_schema, message_resolver=MessageResolver.default())

    missing = contract({}, {})
    short = contract({"title": "Hi", "author_id": "abc"}, {})

    assert missing.failure
    assert missing.params == {}
    assert missing.errors.to_dict() == {"title": ["is missing"]}
    assert short.errors.to_dict() == {
        "title": ["size cannot be less than 3"],
        "author_id": ["must be an integer"],
    }
    assert short.errors.with_options(locale="pt").to_dict()["title"] == ["tamanho não pode ser menor que 3"]
    assert short.params == {"title": "Hi", "author_id": "abc"}


def test_unbound_messages_fall_back_to_pydantic_text(post_schema):
    _require_imports()
    outcome = SchemaContract(post_schema)({}, {})

    [message] = outcome.errors
    assert message.resolver is None
    assert message.key == "missing"
    assert message.render() == "Field required"


def test_keyed_rules_skip_failed_keys(post_schema):
    _require_imports()
    calls = []

    @rule("title")
    def reserved(values, context):
        calls.append(values["title"])
        return "is reserved" if values["title"] == "admin" else None

    contract = SchemaContract(post_schema, rules=[reserved], message_resolver=MessageResolver.default())

    assert contract({"title": "admin"}, {}).errors.to_dict() == {"title": ["is reserved"]}
    assert contract({"title": "ok"}, {}).errors.to_dict() == {"title": ["size cannot be less than 3"]}
    assert calls == ["admin"]


def test_keyless_rules_require_valid_schema(post_schema):
    _require_imports()
    calls = []

    def whole(values, context):
        calls.append(values)
        return {"text": "Title and body must differ"} if values["title"] == values["body"] else None

    contract = SchemaContract(post_schema, rules=[Rule(check=whole)])

    assert contract({}, {}).failure
    assert calls == []
    assert contract({"title": "same", "body": "same"}, {}).errors.to_dict() == {None: ["Title and body must differ"]}


def test_rules_enrich_a_copy_of_context(post_schema):
    _require_imports()
    context = {"user": "ada"}

    def load(values, ctx):
        ctx["slug"] = values["title"].lower()

    outcome = SchemaContract(post_schema, rules=[Rule("title", check=load)])({"title": "Hello"}, context)

    assert outcome.context == {"user": "ada", "slug": "hello"}
    assert context == {"user": "ada"}


def test_subclass_declaration_and_build_rules(post_schema, users):
    _require_imports()
    from atlas_operations.core.contract import Find

    class CreatePostContract(SchemaContract):
        schema = post_schema

        def build_rules(self):
            return [Find("author", lookup=self.deps["users"].get)]

    contract = CreatePostContract(users=users)
    outcome = contract({"title": "Hello", "author_id": 2}, {})

    assert outcome.success
    assert outcome.context["author"].name == "Linus"
    assert contract.deps == {"users": users}


def test_invalid_definitions_raise(post_schema):
    _require_imports()
    with pytest.raises(ContractDefinitionError):
        SchemaContract(dict)
    with pytest.raises(ContractDefinitionError):
        SchemaContract()
    with pytest.raises(ContractDefinitionError):
        SchemaContract(post_schema, rules=[lambda values, context: None])
    with pytest.raises(ContractDefinitionError):
        Rule("title", check="not callable")
