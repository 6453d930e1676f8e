# ========================================================================
# File:       dbmanager/helpers/core_helper.py
# Purpose:    Safe calls + small formatting helpers
# ========================================================================

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable


def safe_call(func: Callable, *args, **kwargs):
    """Calls the function and leaves exceptions to the caller; kept as the single call seam."""
    return func(*args, **kwargs)


def mask_secret(value: Any, visible: int = 0) -> str:
    if value is None or value == "":
        return ""
    text = str(value)
    if visible <= 0 or visible >= len(text):
        return "***"
    return text[:visible] + "***"


def masked(data: Dict[str, Any], secret_keys: Iterable[str] = ("password",)) -> Dict[str, Any]:
    keys = set(secret_keys)
    return {k: (mask_secret(v) if k in keys else v) for k, v in data.items()}
