"""
感情・リスク分析サービス
LLMで感情（ラッセルの円環モデル）とハラスメントリスクを並行して評価する

ゲートウェイは必ず結果を返す必要があるため、
パース失敗・検証失敗・通信失敗はすべてフォールバック値に変換する。
APIキー未設定（ConfigurationError）だけはそのまま伝播させる。
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from ...core.exceptions import ConfigurationError
from ...core.llm_json import parse_llm_response
from ...core.logging import get_logger, log_fallback
from ..models.base import CamelModel
from ..models.emotion import EmotionAnalysis, RiskAssessment

if TYPE_CHECKING:
    from ..ports.ai_port import IAIProvider

logger = get_logger("services.emotion")

ModelT = TypeVar("ModelT", bound=CamelModel)

EMOTION_ANALYSIS_PROMPT = """あなたは職場コミュニケーションの感情分析エキスパートです。
与えられたメッセージを分析し、以下のJSON形式で結果を返してください。

分析観点：
1. valence: 感情の正負（-1: 非常にネガティブ, 0: 中立, 1: 非常にポジティブ）
2. arousal: 感情の強度（0: 穏やか, 1: 高揚/興奮）
3. emotions: 検出された主要な感情（複数可）
   anger, fear, disgust, sadness, joy, surprise, trust, anticipation,
   frustration, anxiety, contempt, neutral のいずれか
4. confidence: 分析の確信度（0-1）

回答はJSON形式のみで、説明は不要です。"""

RISK_ASSESSMENT_PROMPT = """あなたは職場のハラスメント・パワハラ防止の専門家です。
以下のメッセージを評価し、JSON形式で結果を返してください。

評価基準：
1. aggressionScore (0-100の整数): 攻撃的・威圧的表現の度合い
   - 0-20: 問題なし
   - 21-50: やや注意が必要
   - 51-80: 高リスク（パワハラと受け取られる可能性）
   - 81-100: 非常に高リスク（明確なハラスメント）

2. psychSafetyImpact (-10 to +10): 受け手の心理的安全性への影響
   - マイナス: 心理的安全性を損なう
   - プラス: 心理的安全性を高める

3. riskLevel: "low" | "medium" | "high" | "critical"

4. concerns: 具体的な懸念点のリスト

回答はJSON形式のみで返してください。"""


class EmotionService:
    """
    感情・リスク分析サービス

    - 感情分析とリスク評価はそれぞれ独立したLLM呼び出し
    - analyze_message は両方を並行実行し、両方の完了を待つ
    - 片方の失敗はもう片方の結果に影響しない
    """

    def __init__(
        self,
        ai_provider: IAIProvider,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        self._ai_provider = ai_provider
        self._model = model
        self._temperature = temperature

    async def analyze_emotion(self, message: str) -> EmotionAnalysis:
        """感情を分析（失敗時は中立のフォールバック）"""
        return await self._classify(
            stage="emotion",
            system_prompt=EMOTION_ANALYSIS_PROMPT,
            message=message,
            schema=EmotionAnalysis,
            fallback=EmotionAnalysis.fallback(),
        )

    async def assess_risk(self, message: str) -> RiskAssessment:
        """リスクを評価（失敗時は medium のフォールバック）"""
        return await self._classify(
            stage="risk",
            system_prompt=RISK_ASSESSMENT_PROMPT,
            message=message,
            schema=RiskAssessment,
            fallback=RiskAssessment.fallback(),
        )

    async def analyze_message(self, message: str) -> tuple[EmotionAnalysis, RiskAssessment]:
        """
        感情分析とリスク評価を並行実行

        Returns:
            tuple: (感情分析結果, リスク評価結果)
        """
        emotion, risk = await asyncio.gather(
            self.analyze_emotion(message),
            self.assess_risk(message),
        )
        return emotion, risk

    async def _classify(
        self,
        stage: str,
        system_prompt: str,
        message: str,
        schema: type[ModelT],
        fallback: ModelT,
    ) -> ModelT:
        try:
            response = await self._ai_provider.complete(
                system_prompt,
                message,
                json_mode=True,
                temperature=self._temperature,
                model=self._model,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            log_fallback(logger, stage, "completion failed", error=str(e), error_type=type(e).__name__)
            return fallback

        result = parse_llm_response(response, schema)
        if not result.success:
            log_fallback(logger, stage, "parse failed", error=result.error)
            return fallback

        return result.data
