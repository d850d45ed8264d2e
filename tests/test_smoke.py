# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Operations.

Este módulo garante apenas que:
- o pacote pode ser importado sem falhas estruturais
- o namespace público expõe os pontos de entrada documentados
- o catálogo de mensagens empacotado é encontrado

Limites explícitos:
    - Não testar lógica de negócio
    - Não testar fluxo de execução do Command
"""


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Importa o pacote raiz e confere que os nomes públicos existem e que o
    resolver padrão carrega o catálogo empacotado (`en` e `pt`).
    """
    import atlas_operations

    for name in atlas_operations.__all__:
        assert hasattr(atlas_operations, name), name

    resolver = atlas_operations.MessageResolver.default()
    assert {"en", "pt"} <= set(resolver.locales)
