# knobguard/_helpers.py
from __future__ import annotations

from typing import Any, Optional


def num(x: Any, default: Optional[float] = None) -> Optional[float]:
    """
    Convierte a float aceptando strings con coma decimal ("13,5").
    Devuelve `default` si no es convertible.
    """
    if x is None:
        return default
    if isinstance(x, bool):
        return default
    if isinstance(x, (int, float)):
        return float(x)
    try:
        return float(str(x).strip().replace(",", "."))
    except (TypeError, ValueError):
        return default
