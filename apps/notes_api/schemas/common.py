"""Общие утилиты и базовые типы, переиспользуемые в нескольких схемах."""
# --- Imports ---
from __future__ import annotations

from datetime import datetime, timezone


# --- Functions ---
def utc_now() -> datetime:
    return datetime.now(timezone.utc)
