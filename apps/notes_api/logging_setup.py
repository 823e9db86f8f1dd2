"""Настройка структуры и вывода логирования.

Логи разделяются на два файла в рамках одной сессии (= один запуск бэкенда):
  - app_<SESSION_ID>.log  — серверные события (HTTP, хранилище заметок, редактор)
  - ui_<SESSION_ID>.log   — события клиента заметок (открытие редактора, поиск, тема)

Ротация и уровень задаются в config (NOTES_LOG_LEVEL). Каждая запись может
нести ``note_id``, чтобы действия над одной заметкой находились grep'ом.
Все файлы хранятся в data/logs/sessions/.
"""

from __future__ import annotations

import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .config import LOG_BACKUP_COUNT, LOG_LEVEL, LOG_ROTATION_HOURS, LOGS_DIR

# Идентификатор сессии — дата и время запуска бэкенда (один раз при импорте)
SESSION_ID: str = datetime.now().strftime("%Y-%m-%d_%H-%M")

SESSIONS_DIR: Path = LOGS_DIR / "sessions"
APP_LOG_FILE: Path = SESSIONS_DIR / f"app_{SESSION_ID}.log"
UI_LOG_FILE: Path = SESSIONS_DIR / f"ui_{SESSION_ID}.log"

CLIENT_EVENT_PREFIX = "client."


# --- Форматтеры ---

class SafeExtraFormatter(logging.Formatter):
    """Formatter со стабильными extra-полями (подставляет '-' если поле отсутствует)."""

    _EXTRA_FIELDS = ("client_ip", "method", "path", "status_code", "duration_ms", "event", "note_id", "details")

    def format(self, record: logging.LogRecord) -> str:
        for field in self._EXTRA_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return super().format(record)


# HTTP-поля нужны только серверному логу; клиентскому хватает события и заметки
_APP_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    " | event=%(event)s | note=%(note_id)s | method=%(method)s | path=%(path)s"
    " | status=%(status_code)s | duration_ms=%(duration_ms)s"
    " | ip=%(client_ip)s | details=%(details)s"
)

_UI_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(message)s"
    " | event=%(event)s | note=%(note_id)s | details=%(details)s"
)


# --- Фильтры ---

def is_client_event(record: logging.LogRecord) -> bool:
    return str(getattr(record, "event", "-")).startswith(CLIENT_EVENT_PREFIX)


class _ServerEventsFilter(logging.Filter):
    """Серверный лог: всё, кроме событий клиента заметок."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not is_client_event(record)


class _ClientEventsFilter(logging.Filter):
    """Клиентский лог: только client.*-события из /api/client-events."""

    def filter(self, record: logging.LogRecord) -> bool:
        return is_client_event(record)


# --- Хендлеры ---

def _session_handler(path: Path, formatter: logging.Formatter, log_filter: logging.Filter) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        path, when="H", interval=LOG_ROTATION_HOURS, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    handler.addFilter(log_filter)
    return handler


# --- Настройка ---

_CONFIGURED = False


def setup_logging() -> tuple[Path, Path]:
    """Настраивает логирование и возвращает пути (app_log, ui_log)."""
    global _CONFIGURED
    if _CONFIGURED:
        return APP_LOG_FILE, UI_LOG_FILE

    SESSIONS_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)

    # Убрать все существующие хендлеры
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    app_formatter = SafeExtraFormatter(_APP_FORMAT)

    # --- Консольный хендлер (все логи) ---
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(app_formatter)

    root_logger.addHandler(_session_handler(APP_LOG_FILE, app_formatter, _ServerEventsFilter()))
    root_logger.addHandler(_session_handler(UI_LOG_FILE, SafeExtraFormatter(_UI_FORMAT), _ClientEventsFilter()))
    root_logger.addHandler(stream_handler)

    _CONFIGURED = True
    root_logger.info(
        "Logging configured",
        extra={
            "event": "app.startup",
            "details": f"session={SESSION_ID} | level={LOG_LEVEL} | app_log={APP_LOG_FILE} | ui_log={UI_LOG_FILE}",
        },
    )
    return APP_LOG_FILE, UI_LOG_FILE
