# tests/core/messages/test_resolver.py
"""
Testes do `MessageResolver`.

Este módulo valida a resolução de textos a partir do catálogo:
- tradução por chave no locale pedido, com fallback para o locale padrão
- fallback para o texto literal e para o código "humanizado"
- interpolação de tokens
- rótulos de campos e template da renderização "full"
- catálogo local sobrescrevendo o empacotado

Decisões arquiteturais:
    - O resolver nunca muta o catálogo recebido
    - Um locale padrão ausente do catálogo é erro de configuração
"""

from pathlib import Path

import pytest

from atlas_operations.core.config.errors import UnknownLocaleError
from atlas_operations.core.errors import UNAUTHORIZED, Code
from atlas_operations.core.messages.message import Message, MessageSet
from atlas_operations.core.messages.resolver import MessageResolver


@pytest.fixture
def resolver():
    return MessageResolver.default()


def test_code_is_translated_by_locale(resolver):
    message = resolver(UNAUTHORIZED)

    assert message.key == "unauthorized"
    assert message.code == "unauthorized"
    assert message.render() == "Unauthorized"
    assert message.render(locale="pt") == "Não autorizado"


def test_unknown_locale_falls_back_to_default(resolver):
    assert resolver(Code("missing")).render(locale="de") == "is missing"


def test_unknown_code_is_humanized(resolver):
    message = resolver(Code("already_published"))

    assert message.render() == "Already published"


def test_plain_text_is_kept_literal(resolver):
    message = resolver("Post is locked")

    assert message.key is None
    assert message.code is None
    assert message.render(locale="pt") == "Post is locked"


def test_tokens_are_interpolated(resolver):
    message = resolver(Code("greater_than"), path=("age",), tokens={"gt": 17})

    assert message.render() == "must be greater than 17"
    assert message.render(locale="pt", full=True) == "age deve ser maior que 17"


def test_meta_code_is_promoted(resolver):
    message = resolver("Custom text", meta={"code": "custom", "post_id": 1})

    assert message.code == "custom"
    assert message.meta == {"post_id": 1}
    assert message.to_value() == {"text": "Custom text", "post_id": 1, "code": "custom"}


def test_field_labels_and_full_template():
    catalog = {
        "en": {
            "full": "{field}: {text}",
            "fields": {"title": "Title", "author.name": "Author name"},
            "errors": {"missing": "is missing"},
        }
    }
    resolver = MessageResolver(catalog)

    assert resolver(Code("missing"), path=("title",)).render(full=True) == "Title: is missing"
    assert resolver(Code("missing"), path=("author", "name")).render(full=True) == "Author name: is missing"
    assert resolver(Code("missing"), path=("body",)).render(full=True) == "body: is missing"
    assert resolver(Code("missing")).render(full=True) == "is missing"


def test_catalog_is_copied():
    catalog = {"en": {"errors": {"missing": "is missing"}}}
    resolver = MessageResolver(catalog)
    catalog["en"]["errors"]["missing"] = "changed"

    assert resolver(Code("missing")).render() == "is missing"


def test_missing_default_locale_raises():
    with pytest.raises(UnknownLocaleError):
        MessageResolver({"pt": {}}, default_locale="en")


def test_from_files_applies_local_overrides(tmp_path: Path):
    local = tmp_path / "messages.yaml"
    local.write_text('en:\n  errors:\n    missing: "must be filled"\n', encoding="utf-8")

    resolver = MessageResolver.from_files(local_path=local)

    assert resolver(Code("missing")).render() == "must be filled"
    assert resolver(UNAUTHORIZED).render() == "Unauthorized"
    assert resolver != MessageResolver.default()


def test_bind_only_fills_missing_resolvers(resolver):
    other = MessageResolver({"en": {"errors": {"missing": "other"}}})
    messages = [
        Message(key="missing").with_resolver(other),
        Message(key="not_found"),
    ]

    bound = resolver.bind(messages)

    assert isinstance(bound, MessageSet)
    assert [message.render() for message in bound] == ["other", "not found"]
