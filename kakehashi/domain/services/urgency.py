"""
緊急度検出サービス
医療現場など、AI処理の遅延が許されないメッセージを判定する
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models.urgency import RecommendedAction, UrgencyResult

# 緊急キーワード（検出時はAI処理を完全にバイパス）
EMERGENCY_KEYWORDS: tuple[str, ...] = (
    # 緊急を示す語
    "至急",
    "緊急",
    "急いで",
    "今すぐ",
    # 医療上の緊急事態（歯科）
    "バキューム",
    "出血",
    "大量出血",
    "アレルギー",
    "アナフィラキシー",
    "意識",
    "失神",
    "誤嚥",
    "窒息",
    "痙攣",
    # 英語
    "URGENT",
    "EMERGENCY",
    "ASAP",
)

# 優先キーワード（緊急ではないが時間的制約あり）
PRIORITY_KEYWORDS: tuple[str, ...] = (
    "すぐに",
    "急ぎで",
    "本日中",
    "至急対応",
    "患者",
    "来院",
    "診療中",
)


class UrgencyDetector:
    """
    緊急度検出器

    大文字小文字を区別しない部分文字列一致のみ。
    長い単語の一部に含まれる場合も一致とみなす（安全側に倒す）。
    """

    def __init__(
        self,
        emergency_keywords: Sequence[str] = EMERGENCY_KEYWORDS,
        priority_keywords: Sequence[str] = PRIORITY_KEYWORDS,
    ):
        # (元の表記, 小文字化した表記) を保持
        self._emergency = [(kw, kw.lower()) for kw in emergency_keywords]
        self._priority = [(kw, kw.lower()) for kw in priority_keywords]

    def detect(self, message: str) -> UrgencyResult:
        """メッセージの緊急度を判定"""
        normalized = message.lower()

        emergency_matches = [kw for kw, lowered in self._emergency if lowered in normalized]
        priority_matches = [kw for kw, lowered in self._priority if lowered in normalized]

        is_emergency = bool(emergency_matches)
        is_priority = bool(priority_matches)

        if is_emergency:
            action = RecommendedAction.BYPASS
        elif is_priority:
            action = RecommendedAction.EXPEDITE
        else:
            action = RecommendedAction.NORMAL

        return UrgencyResult(
            is_emergency=is_emergency,
            is_priority=is_priority,
            matched_keywords=emergency_matches + priority_matches,
            recommended_action=action,
        )

    def should_bypass(self, message: str) -> bool:
        """AI処理を完全にバイパスすべきか"""
        return self.detect(message).is_emergency


_default_detector = UrgencyDetector()


def detect_urgency(message: str) -> UrgencyResult:
    """既定キーワードで緊急度を判定"""
    return _default_detector.detect(message)


def should_bypass(message: str) -> bool:
    """既定キーワードでバイパス判定"""
    return _default_detector.should_bypass(message)
