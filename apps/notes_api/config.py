"""Runtime configuration for API defaults."""

from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv("NOTES_DATA_DIR") or ROOT_DIR / "data")
LOGS_DIR = DATA_DIR / "logs"
LOG_LEVEL = os.getenv("NOTES_LOG_LEVEL", "INFO").strip().upper()
# Сессионные логи: ротация каждые 4 часа, до 12 файлов
LOG_ROTATION_HOURS = 4
LOG_BACKUP_COUNT = 12
STORE_DB_PATH = DATA_DIR / "store.db"

STORAGE_BACKEND = os.getenv("NOTES_STORAGE_BACKEND", "sqlite").strip().lower()

# Ключи хранилища (совместимы с данными расширения)
STORAGE_KEY = "keepNotes"
THEME_KEY = "keepNoteTheme"

DEFAULT_COLOR = "#3f51b5"
COLOR_PALETTE = ("#ffffff", "#3f51b5", "#e91e63", "#ff9800", "#4caf50", "#9c27b0")
UNTITLED = "Untitled"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"

PREVIEW_LENGTH = 80
EMPTY_STATE_MESSAGE = "No notes yet. Click the + button to start!"
