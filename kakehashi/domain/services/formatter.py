"""
メッセージ整形サービス
従業員のメッセージを経営者に伝えやすい形に整理する
「明日」「来週金曜日」などの相対日付は日本時間のカレンダーで具体的な日付に変換させる
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger, log_fallback

if TYPE_CHECKING:
    from ..ports.ai_port import IAIProvider

logger = get_logger("services.formatter")

JST = timezone(timedelta(hours=9), name="JST")

# datetime.weekday(): 月曜=0
WEEKDAYS = ["月", "火", "水", "木", "金", "土", "日"]

CALENDAR_DAYS = 15
_DAY_LABELS = {0: "今日", 1: "明日", 2: "明後日"}


def _weekday(day: datetime) -> str:
    return WEEKDAYS[day.weekday()]


def build_calendar(today: datetime) -> list[str]:
    """今日から14日後までの日付一覧（M/D(曜)=ラベル）"""
    entries = []
    for offset in range(CALENDAR_DAYS):
        day = today + timedelta(days=offset)
        entry = f"{day.month}/{day.day}({_weekday(day)})"
        label = _DAY_LABELS.get(offset)
        if label:
            entry += f"={label}"
        entries.append(entry)
    return entries


def build_format_prompt(today: datetime) -> str:
    """日付情報を埋め込んだシステムプロンプト"""
    date_str = f"{today.year}年{today.month}月{today.day}日({_weekday(today)})"
    tomorrow = today + timedelta(days=1)
    tomorrow_str = f"{tomorrow.month}月{tomorrow.day}日({_weekday(tomorrow)})"

    return f"""あなたはメッセージを整理するアシスタントです。
従業員からのメッセージを経営者に伝えやすい形に整理してください。

【重要】今日: {date_str}
日付カレンダー: {", ".join(build_calendar(today))}

ルール:
- 「明日」「来週金曜日」などは上のカレンダーを参照して正確な日付に変換
- 来週◯曜日 = 今週の同じ曜日の7日後
- 内容を補完したり質問したりしない
- 与えられた情報だけで整理する
- 簡潔にまとめる

例:
- 「明日休みたい」→「{tomorrow_str}の休暇を希望します」
- 「シフト変更したい」→「シフト変更を希望しています」"""


class MessageFormatter:
    """
    メッセージ整形サービス

    整形は補助機能のため、失敗しても元のメッセージをそのまま返す。
    APIキー未設定の場合も同様。
    """

    def __init__(
        self,
        ai_provider: IAIProvider,
        model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 200,
    ):
        self._ai_provider = ai_provider
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def format_for_owner(self, text: str, today: datetime | None = None) -> str:
        """
        経営者向けにメッセージを整形

        Args:
            text: 従業員の原文
            today: 基準日時（省略時は現在の日本時間）

        Returns:
            str: 整形後のテキスト（失敗時は原文）
        """
        if today is None:
            today = datetime.now(JST)
        elif today.tzinfo is not None:
            today = today.astimezone(JST)

        try:
            response = await self._ai_provider.complete(
                build_format_prompt(today),
                text,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                model=self._model,
            )
        except ConfigurationError:
            log_fallback(logger, "format", "provider not configured")
            return text
        except Exception as e:
            log_fallback(logger, "format", "completion failed", error=str(e), error_type=type(e).__name__)
            return text

        formatted = (response or "").strip()
        return formatted or text
