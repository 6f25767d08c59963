"""
Domain Models
ゲートウェイの値オブジェクト（1回の呼び出し内でのみ存在し、永続化しない）
"""

from .coaching import (
    CoachingOptions,
    CoachingResult,
    NVCBreakdown,
    TransformStyle,
    TransformSuggestion,
)
from .emotion import (
    EmotionAnalysis,
    EmotionLabel,
    RiskAssessment,
    RiskLevel,
)
from .topic import (
    BlockedTopic,
    BlockedTopicCategory,
    BlockedTopicResult,
    ReferralLink,
)
from .translation import (
    TranslationDirection,
    TranslationResult,
)
from .urgency import (
    RecommendedAction,
    UrgencyResult,
)

__all__ = [
    # 緊急度
    "RecommendedAction",
    "UrgencyResult",
    # 規制トピック
    "BlockedTopicCategory",
    "BlockedTopic",
    "BlockedTopicResult",
    "ReferralLink",
    # 感情・リスク
    "EmotionLabel",
    "EmotionAnalysis",
    "RiskLevel",
    "RiskAssessment",
    # コーチング
    "TransformStyle",
    "NVCBreakdown",
    "TransformSuggestion",
    "CoachingOptions",
    "CoachingResult",
    # 翻訳
    "TranslationDirection",
    "TranslationResult",
]
