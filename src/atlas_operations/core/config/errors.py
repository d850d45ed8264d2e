# src/atlas_operations/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Operations.

As exceções aqui definidas cobrem o carregamento e a resolução dos
catálogos de mensagens (defaults empacotados + overrides da aplicação).
Elas representam **violações estruturais explícitas**, nunca falhas de
negócio: um catálogo inválido impede a construção do resolver.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção desta camada vira `Result`

Limites explícitos:
    - Não executa comandos
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do Atlas Operations.

    Permite captura genérica de falhas de carregamento/merge de catálogos,
    separando-as de erros de programação do pipeline de comandos.
    """


class MessagesNotFoundError(ConfigError):
    """
    Arquivo base de catálogo de mensagens não encontrado.

    Decisões arquiteturais:
        - O catálogo base é obrigatório
        - O override local é opcional e ignorado quando ausente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do catálogo não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge de catálogos.

    Exemplo de conflito:
        - base:     {"en": {"errors": {"missing": "is missing"}}}
        - override: {"en": {"errors": ["is missing"]}}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class UnknownLocaleError(ConfigError):
    """O locale padrão declarado para o resolver não existe no catálogo."""
