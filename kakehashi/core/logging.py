"""
統一ログシステム

- サーバー: 1行1JSONの構造化ログ（stderr）
- CLI: rich による人間向け表示（stderr）
いずれも stdout は使わない（CLI の --json 出力と混ざるため）。
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import KakehashiException

ROOT_LOGGER_NAME = "kakehashi"

# LogRecord の標準属性（extra として出力しない）
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

# 従業員のメッセージ本文を含みうるキー
_REDACTED_KEYS = frozenset({"text", "user_prompt", "original_message", "raw_response"})
REDACTED = "[redacted]"


def _scrub(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: REDACTED if key in _REDACTED_KEYS else value for key, value in fields.items()}


class StructuredFormatter(logging.Formatter):
    """JSON 1行のフォーマッター"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.filename}:{record.lineno}",
        }

        extra = {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}
        event_type = extra.pop("event_type", None)
        if event_type:
            entry["event"] = event_type
        if extra:
            entry["extra"] = _scrub(extra)

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["exception"] = {"type": type(error).__name__, "message": str(error)}
            if isinstance(error, KakehashiException):
                entry["exception"]["error_code"] = error.error_code
                entry["exception"]["details"] = _scrub(error.details)

        return json.dumps(entry, ensure_ascii=False, separators=(",", ":"), default=str)


class KakehashiLogger:
    """ロガーの設定と取得"""

    _configured = False

    @classmethod
    def configure(cls, log_level: str = "INFO", *, console: bool = False, force: bool = False) -> None:
        """
        "kakehashi" ロガーにハンドラーを1つだけ設定する

        Args:
            log_level: ログレベル名（不明な値は INFO）
            console: True なら rich 表示、False なら JSON
            force: 設定済みでも置き換える
        """
        if cls._configured and not force:
            return

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        for handler in list(root.handlers):
            root.removeHandler(handler)

        if console:
            handler: logging.Handler = RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredFormatter())
        root.addHandler(handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._configured:
            cls.configure()
        if not name.startswith(f"{ROOT_LOGGER_NAME}."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """"kakehashi." 配下のロガーを取得"""
    return KakehashiLogger.get_logger(name)


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """例外をトレースバック付きで記録"""
    logger.error(
        f"{type(error).__name__}: {error}",
        exc_info=error,
        extra={"event_type": "error", **(context or {})},
    )


def log_fallback(logger: logging.Logger, stage: str, reason: str, **fields: Any) -> None:
    """段階がフォールバック値で続行したことを記録"""
    logger.warning(
        f"{stage}: falling back ({reason})",
        extra={"event_type": "fallback", "stage": stage, "reason": reason, **fields},
    )


def log_business_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    """ゲートウェイの分岐などの業務イベントを記録"""
    logger.info(event, extra={"event_type": "business_event", "business_event": event, **fields})
