# src/atlas_operations/core/messages/__init__.py
"""
Mensagens do Atlas Operations.

Componentes:
    - message   → `Message` e `MessageSet` (renderização lazy)
    - resolver  → `MessageResolver` (catálogo por locale)
    - normalize → conversão de payloads de falha em mensagens
    - catalog.yaml → catálogo padrão (`en`, `pt`)
"""

from .message import Message, MessageSet
from .normalize import build_message_set, normalize_failure
from .resolver import MessageResolver, build_message

__all__ = [
    "Message",
    "MessageSet",
    "MessageResolver",
    "build_message",
    "build_message_set",
    "normalize_failure",
]
