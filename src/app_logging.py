"""
# path: src/app_logging.py

Единый JSON-логгер для проекта.

ВАЖНО:
- Файл НЕ должен называться logging.py, иначе он перекрывает стандартный модуль `logging`.
- Сообщение можно передавать строкой или dict'ом ({"event": ..., ...}) -
  dict разворачивается в верхний уровень JSON.
- Отдельный audit-логгер (get_audit_logger) пишет смену статусов транзакций.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


AUDIT_LOGGER_NAME = "audit.transactions"


def _json_default(value: Any) -> Any:
    """Decimal/Enum/datetime в JSON-совместимый вид."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class JsonFormatter(logging.Formatter):
    """Форматтер, превращающий LogRecord в JSON строку."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "func": record.funcName,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        extra: Optional[Dict[str, Any]] = getattr(record, "extra", None)
        if isinstance(extra, dict) and extra:
            payload.update(extra)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=_json_default)


class JsonLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter, который безопасно прокидывает user extra в record.extra."""

    def process(self, msg: Any, kwargs: Dict[str, Any]):
        user_extra = kwargs.pop("extra", None)
        kwargs["extra"] = {"extra": user_extra} if user_extra else {}
        return msg, kwargs


def get_logger(name: str) -> JsonLoggerAdapter:
    """Создаёт/возвращает настроенный JSON-логгер (stdout, idempotent)."""
    logger = logging.getLogger(name)
    logger.propagate = False

    if logger.handlers:
        return JsonLoggerAdapter(logger, {})

    level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_str, logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return JsonLoggerAdapter(logger, {})


def get_audit_logger() -> JsonLoggerAdapter:
    """
    Audit-лог: кто, что и когда поменял.
    В модели данных история не хранится - только в логах.
    """
    return get_logger(AUDIT_LOGGER_NAME)
