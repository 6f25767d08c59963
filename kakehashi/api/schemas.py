"""
API Schemas
Pydanticモデル定義
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.models import CoachingResult, TranslationDirection, TranslationResult


class _CamelRequest(BaseModel):
    """camelCase/snake_case どちらのキーも受け付けるリクエスト"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === コーチング分析 ===


class AnalyzeOptions(_CamelRequest):
    """分析オプション"""

    min_message_length: int | None = Field(None, ge=0, description="AI分析をスキップする最小文字数")
    force_analysis: bool | None = Field(None, description="低リスクでも言い換えを生成")


class AnalyzeRequest(_CamelRequest):
    """分析リクエスト"""

    message: str = Field(..., min_length=1, description="従業員のメッセージ")
    options: AnalyzeOptions | None = None


class AnalyzeResponse(BaseModel):
    """分析レスポンス"""

    success: bool = True
    data: CoachingResult


# === 翻訳 ===


class TranslateRequest(_CamelRequest):
    """翻訳リクエスト"""

    text: str = Field(..., min_length=1, description="原文")
    direction: TranslationDirection
    context: str | None = Field(None, description="背景情報（会話履歴など）")


class TranslateResponse(BaseModel):
    """翻訳レスポンス"""

    success: bool = True
    data: TranslationResult


# === メッセージ整形 ===


class FormatMessageRequest(_CamelRequest):
    """整形リクエスト"""

    message: str = Field(..., min_length=1, description="従業員のメッセージ")


class FormatMessageResponse(BaseModel):
    """整形レスポンス"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    formatted_message: str


# === システム ===


class HealthResponse(BaseModel):
    """ヘルスチェックレスポンス"""

    status: str
    service: str = "coaching-gateway"
    timestamp: datetime
    version: str
    components: dict[str, bool]


class APIInfoResponse(BaseModel):
    """API情報レスポンス"""

    service: str
    version: str
    description: str
    features: list[str]
