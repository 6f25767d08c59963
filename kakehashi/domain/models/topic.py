"""
規制トピックモデル
法的助言にあたるため、AIが扱わないトピックの判定結果
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BlockedTopicCategory(str, Enum):
    """ブロック対象トピックのカテゴリ"""

    COMPENSATION = "compensation"  # 給与・賃金
    TERMINATION = "termination"  # 退職・解雇
    LEAVE = "leave"  # 休暇・シフト
    WORKING_HOURS = "working_hours"  # 労働時間
    UNION_PROTECTED = "union_protected"  # 労働組合活動（法的保護）
    HARASSMENT = "harassment"  # ハラスメント


@dataclass(frozen=True)
class ReferralLink:
    """外部相談窓口"""

    name: str
    url: str

    def format(self) -> str:
        return f"{self.name}: {self.url}"


@dataclass(frozen=True)
class BlockedTopic:
    """検出されたトピック1件"""

    category: BlockedTopicCategory
    matched_text: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "matchedText": self.matched_text,
            "message": self.message,
        }


@dataclass(frozen=True)
class BlockedTopicResult:
    """トピックフィルタ結果"""

    blocked_topics: list[BlockedTopic] = field(default_factory=list)
    cleaned_message: str | None = None

    @property
    def is_blocked(self) -> bool:
        return bool(self.blocked_topics)

    @property
    def categories(self) -> list[BlockedTopicCategory]:
        return [topic.category for topic in self.blocked_topics]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "isBlocked": self.is_blocked,
            "blockedTopics": [topic.to_dict() for topic in self.blocked_topics],
        }
        if self.cleaned_message is not None:
            data["cleanedMessage"] = self.cleaned_message
        return data
