"""
Kakehashi - 職場コミュニケーション仲介AI

従業員から経営者へのメッセージを、信頼の境界を越える前に
分類・フィルタ・言い換えするコーチングゲートウェイ:
- 緊急メッセージはAIを通さず即時送信
- 給与・退職などの規制トピックは公的窓口へ案内
- 威圧的な表現には建設的な言い換え案を提示
"""

from importlib.metadata import PackageNotFoundError, version as _dist_version
from pathlib import Path
import tomllib


def _read_version() -> str:
    try:
        return _dist_version("kakehashi")
    except PackageNotFoundError:
        _pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        with _pyproject.open("rb") as _f:
            return tomllib.load(_f)["project"]["version"]


__version__: str = _read_version()

# ===== Domain Models =====
from .domain.models import (
    BlockedTopicCategory,
    BlockedTopicResult,
    CoachingOptions,
    CoachingResult,
    EmotionAnalysis,
    EmotionLabel,
    RecommendedAction,
    RiskAssessment,
    RiskLevel,
    TransformStyle,
    TransformSuggestion,
    TranslationDirection,
    TranslationResult,
    UrgencyResult,
)

# ===== Ports (Interfaces) =====
from .domain.ports import IAIProvider

# ===== Domain Services =====
from .domain.services import (
    CoachingGateway,
    EmotionService,
    LegalTopicFilter,
    MessageFormatter,
    RewriteService,
    TranslationService,
    UrgencyDetector,
    check_blocked_topics,
    detect_urgency,
    generate_quick_summary,
    get_referral_link,
    should_bypass,
)


# ===== Adapters (lazy import) =====
# アダプターは aiohttp に依存するため遅延インポート
def get_openai_adapter():
    from .adapters.ai.openai import OpenAIAdapter

    return OpenAIAdapter


# ===== API (lazy import) =====
def get_app():
    from .api.main import app

    return app


def create_app():
    from .api.main import create_app as _create_app

    return _create_app()


__all__ = [
    # Version
    "__version__",
    # Domain Models
    "UrgencyResult",
    "RecommendedAction",
    "BlockedTopicCategory",
    "BlockedTopicResult",
    "EmotionLabel",
    "EmotionAnalysis",
    "RiskLevel",
    "RiskAssessment",
    "TransformStyle",
    "TransformSuggestion",
    "CoachingOptions",
    "CoachingResult",
    "TranslationDirection",
    "TranslationResult",
    # Ports
    "IAIProvider",
    # Domain Services
    "UrgencyDetector",
    "detect_urgency",
    "should_bypass",
    "LegalTopicFilter",
    "check_blocked_topics",
    "get_referral_link",
    "EmotionService",
    "RewriteService",
    "generate_quick_summary",
    "CoachingGateway",
    "TranslationService",
    "MessageFormatter",
    # Adapters (lazy)
    "get_openai_adapter",
    # API (lazy)
    "get_app",
    "create_app",
]
