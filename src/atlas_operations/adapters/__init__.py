"""Atlas Operations — Adapters.

Integrações opcionais com bibliotecas externas:
 - sqlalchemy → `transaction` / `after_commit` sobre uma `Session`
"""
