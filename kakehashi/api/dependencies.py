"""
API Dependencies
依存性注入の設定
"""

from typing import Optional

from ..adapters.ai.openai import OpenAIAdapter
from ..core.config import get_settings
from ..domain.models import CoachingOptions
from ..domain.ports.ai_port import IAIProvider
from ..domain.services.emotion import EmotionService
from ..domain.services.formatter import MessageFormatter
from ..domain.services.gateway import CoachingGateway
from ..domain.services.rewriter import RewriteService
from ..domain.services.translation import TranslationService


# === シングルトンインスタンス ===

_ai_provider: Optional[IAIProvider] = None
_gateway: Optional[CoachingGateway] = None
_translation_service: Optional[TranslationService] = None
_formatter: Optional[MessageFormatter] = None


# === 依存性取得関数 ===

def get_ai_provider() -> IAIProvider:
    """
    AIプロバイダーを取得（OpenAI）

    キー未設定でも生成する。AIを呼ばない分岐（緊急・規制トピック・短文）は
    キーなしで動き、実際の呼び出し時に ConfigurationError になる。
    """
    global _ai_provider
    if _ai_provider is None:
        settings = get_settings()
        _ai_provider = OpenAIAdapter(
            api_key=settings.ai.openai_api_key,
            model=settings.ai.classifier_model,
            timeout=settings.ai.openai_timeout,
            base_url=settings.ai.openai_base_url,
        )
    return _ai_provider


def get_gateway() -> CoachingGateway:
    """コーチングゲートウェイを取得"""
    global _gateway
    if _gateway is None:
        settings = get_settings()
        ai_provider = get_ai_provider()
        _gateway = CoachingGateway(
            ai_provider=ai_provider,
            emotion_service=EmotionService(ai_provider, model=settings.ai.classifier_model),
            rewrite_service=RewriteService(ai_provider, model=settings.ai.rewriter_model),
            default_options=CoachingOptions(
                min_message_length=settings.gateway.min_message_length,
                force_analysis=settings.gateway.force_analysis,
            ),
        )
    return _gateway


def get_translation_service() -> TranslationService:
    """翻訳サービスを取得"""
    global _translation_service
    if _translation_service is None:
        _translation_service = TranslationService(
            get_ai_provider(), model=get_settings().ai.translation_model
        )
    return _translation_service


def get_formatter() -> MessageFormatter:
    """メッセージ整形サービスを取得"""
    global _formatter
    if _formatter is None:
        _formatter = MessageFormatter(
            get_ai_provider(), model=get_settings().ai.translation_model
        )
    return _formatter


# === テスト用リセット関数 ===

def reset_dependencies() -> None:
    """依存性をリセット（テスト用）"""
    global _ai_provider, _gateway, _translation_service, _formatter
    _ai_provider = None
    _gateway = None
    _translation_service = None
    _formatter = None


def set_ai_provider(ai_provider: IAIProvider) -> None:
    """AIプロバイダーを設定（テスト用）"""
    global _ai_provider
    _ai_provider = ai_provider
