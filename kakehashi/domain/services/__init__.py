"""
Domain Services
ゲートウェイを構成する各段階のサービス
"""

from .emotion import EmotionService
from .formatter import MessageFormatter
from .gateway import CoachingGateway
from .legal_filter import LegalTopicFilter, check_blocked_topics, get_referral_link
from .rewriter import RewriteService, generate_quick_summary
from .translation import TranslationService
from .urgency import UrgencyDetector, detect_urgency, should_bypass

__all__ = [
    # 決定的な判定
    "UrgencyDetector",
    "detect_urgency",
    "should_bypass",
    "LegalTopicFilter",
    "check_blocked_topics",
    "get_referral_link",
    # AI段階
    "EmotionService",
    "RewriteService",
    "generate_quick_summary",
    # 統合
    "CoachingGateway",
    # 翻訳・整形
    "TranslationService",
    "MessageFormatter",
]
