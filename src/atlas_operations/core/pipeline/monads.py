# src/atlas_operations/core/pipeline/monads.py
"""
Valores de sucesso/falha trocados entre o pipeline e o código da aplicação.

Policies, preconditions, idempotency checks, corpos de operação e
callbacks comunicam seu desfecho com `Success(value)` ou `Failure(value)`.
São wrappers imutáveis e sem comportamento monádico além do necessário
(não há `bind`/`fmap`): o Command é quem decide o fluxo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if value is None or isinstance(value, (str, int, float, bool, list, dict)):
        return value
    return repr(value)


@dataclass(frozen=True)
class Success:
    """Desfecho bem-sucedido, opcionalmente com payload."""

    value: Any = None

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> Any:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"success": _jsonable(self.value)}


@dataclass(frozen=True)
class Failure:
    """Desfecho com falha; `value` é o payload (texto, código, dict, exceção...)."""

    value: Any = None

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"failure": _jsonable(self.value)}


Outcome = Union[Success, Failure]
