"""Pydantic-схемы настройки темы."""
# --- Imports ---
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Theme = Literal["light", "dark"]


# --- Models / Classes ---
class ThemeState(BaseModel):
    theme: Theme


class UpdateThemeRequest(BaseModel):
    theme: Theme
