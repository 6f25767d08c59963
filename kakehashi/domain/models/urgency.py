"""
緊急度モデル
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RecommendedAction(str, Enum):
    """推奨アクション"""

    BYPASS = "bypass"  # AI処理を完全にスキップ
    EXPEDITE = "expedite"  # 優先処理
    NORMAL = "normal"  # 通常処理


@dataclass(frozen=True)
class UrgencyResult:
    """緊急度判定結果"""

    is_emergency: bool
    is_priority: bool
    matched_keywords: list[str] = field(default_factory=list)
    recommended_action: RecommendedAction = RecommendedAction.NORMAL

    def to_dict(self) -> dict[str, Any]:
        """辞書形式に変換"""
        return {
            "isEmergency": self.is_emergency,
            "isPriority": self.is_priority,
            "matchedKeywords": list(self.matched_keywords),
            "recommendedAction": self.recommended_action.value,
        }
