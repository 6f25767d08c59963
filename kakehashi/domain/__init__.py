"""
Kakehashi Domain Layer
ゲートウェイのビジネスロジックとドメインモデル
"""

from __future__ import annotations

from .models import (
    BlockedTopicResult,
    CoachingOptions,
    CoachingResult,
    EmotionAnalysis,
    RiskAssessment,
    RiskLevel,
    TransformSuggestion,
    UrgencyResult,
)

__all__ = [
    "UrgencyResult",
    "BlockedTopicResult",
    "EmotionAnalysis",
    "RiskAssessment",
    "RiskLevel",
    "TransformSuggestion",
    "CoachingOptions",
    "CoachingResult",
]
