"""
統合設定管理

pydantic-settings を使用した型安全な設定管理
- 環境変数から自動読み込み
- バリデーション付き
- デフォルト値対応
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AISettings(BaseSettings):
    """AI プロバイダー設定"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY", description="OpenAI API キー")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL", description="OpenAI API ベースURL"
    )
    openai_timeout: int = Field(default=60, alias="OPENAI_TIMEOUT", description="API タイムアウト(秒)")

    # 段階ごとのモデル（分類は軽量モデル、言い換えは高性能モデル）
    classifier_model: str = Field(
        default="gpt-4o-mini", alias="KAKEHASHI_CLASSIFIER_MODEL", description="感情・リスク分類モデル"
    )
    rewriter_model: str = Field(
        default="gpt-4o", alias="KAKEHASHI_REWRITER_MODEL", description="言い換え生成モデル"
    )
    translation_model: str = Field(
        default="gpt-4o-mini", alias="KAKEHASHI_TRANSLATION_MODEL", description="翻訳・整形モデル"
    )

    @property
    def is_configured(self) -> bool:
        """API キーが設定済みか"""
        return bool(self.openai_api_key)


class GatewaySettings(BaseSettings):
    """コーチングゲートウェイ設定"""

    model_config = SettingsConfigDict(env_prefix="KAKEHASHI_")

    min_message_length: int = Field(default=10, description="AI分析をスキップする最小文字数")
    force_analysis: bool = Field(default=False, description="低リスクでも言い換えを生成")

    @field_validator("min_message_length")
    @classmethod
    def validate_min_length(cls, v: int) -> int:
        """負の値は 0 として扱う"""
        return max(v, 0)


class SecuritySettings(BaseSettings):
    """セキュリティ設定"""

    model_config = SettingsConfigDict(env_prefix="KAKEHASHI_", populate_by_name=True)

    # API 認証（カンマ区切り文字列で指定）
    api_keys_str: str = Field(
        default="",
        alias="KAKEHASHI_API_KEYS",
        description="許可された API キー（カンマ区切り）"
    )
    api_key_header: str = Field(default="X-API-Key", description="API キーヘッダー名")

    # レート制限
    rate_limit_enabled: bool = Field(default=True, description="レート制限を有効化")
    rate_limit_requests: int = Field(default=100, description="レート制限: リクエスト数")
    rate_limit_window: int = Field(default=60, description="レート制限: ウィンドウ(秒)")

    @property
    def api_keys(self) -> List[str]:
        """API キーリストを取得"""
        if not self.api_keys_str:
            return []
        return [k.strip() for k in self.api_keys_str.split(",") if k.strip()]


class KakehashiSettings(BaseSettings):
    """Kakehashi 全体設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # 基本設定
    debug: bool = Field(default=False, alias="KAKEHASHI_DEBUG", description="デバッグモード")
    log_level: str = Field(default="INFO", alias="KAKEHASHI_LOG_LEVEL", description="ログレベル")

    # サブ設定
    ai: AISettings = Field(default_factory=AISettings)
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    # API サーバー設定
    api_host: str = Field(default="127.0.0.1", alias="API_HOST", description="API サーバーホスト")
    api_port: int = Field(default=8000, alias="API_PORT", description="API サーバーポート")

    @classmethod
    def load(cls) -> "KakehashiSettings":
        """設定をロード（サブ設定も含む）"""
        return cls(
            ai=AISettings(),
            gateway=GatewaySettings(),
            security=SecuritySettings(),
        )


@lru_cache()
def get_settings() -> KakehashiSettings:
    """
    設定を取得（キャッシュ付き）

    使用例:
        settings = get_settings()
        print(settings.ai.classifier_model)
        print(settings.gateway.min_message_length)
    """
    return KakehashiSettings.load()


def reload_settings() -> KakehashiSettings:
    """設定を再読み込み"""
    get_settings.cache_clear()
    return get_settings()
