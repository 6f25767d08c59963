"""
言い換え生成サービス
非暴力コミュニケーション（NVC）の観点で、建設的な表現への言い換え案を生成する
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.exceptions import ConfigurationError
from ...core.llm_json import load_json, validate_payload
from ...core.logging import get_logger, log_fallback
from ..models.coaching import TransformSuggestion
from ..models.emotion import EmotionAnalysis, RiskAssessment, RiskLevel

if TYPE_CHECKING:
    from ..ports.ai_port import IAIProvider

logger = get_logger("services.rewriter")

NVC_TRANSLATION_PROMPT = """あなたは非暴力コミュニケーション（NVC）のエキスパートです。
職場でのメッセージを、より建設的で相手に受け入れられやすい表現に変換してください。

変換の際は以下の観点を考慮：
1. 事実と評価を分離する
2. 感情を「私は〜と感じている」の形で表現
3. 相手を非難せず、自分のニーズを明確にする
4. 具体的で実行可能なリクエストにする

3つの異なるスタイルで提案を作成してください：

1. factual（事実ベース）: 感情を排除し、事実と具体的な依頼のみ
2. supportive（支援的）: 相手への配慮を示しつつ依頼
3. collaborative（協調的）: チームとしての解決を志向

各提案にはその変換を選んだ理由（rationale）も含めてください。
可能であれば nvcAnalysis（observation, feeling, need, request）も付けてください。

JSON形式で回答（suggestions配列として）：
{
  "suggestions": [
    {
      "style": "factual",
      "transformedText": "...",
      "rationale": "..."
    },
    ...
  ]
}"""

# リスクレベルごとの要約文
QUICK_SUMMARIES: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "⚠️ このメッセージは受け手に強い威圧感を与える可能性があります。送信前に表現を見直すことを強くお勧めします。",
    RiskLevel.HIGH: "🔶 やや強い表現が含まれています。相手の立場を考慮した言い換えを検討してください。",
    RiskLevel.MEDIUM: "💡 より建設的な表現への言い換え案があります。参考にしてみてください。",
    RiskLevel.LOW: "✅ このメッセージは適切なトーンです。",
}


def generate_quick_summary(risk: RiskAssessment) -> str:
    """リスクレベルに応じた一行サマリー（AI呼び出しなし）"""
    return QUICK_SUMMARIES[risk.risk_level]


def build_context_prompt(
    message: str, emotion: EmotionAnalysis, risk: RiskAssessment
) -> str:
    """元メッセージと分析結果を埋め込んだユーザープロンプト"""
    emotions = ", ".join(label.value for label in emotion.emotions)
    concerns = ", ".join(risk.concerns)
    return f"""
元のメッセージ: "{message}"

分析結果:
- 感情価（valence）: {emotion.valence}
- 興奮度（arousal）: {emotion.arousal}
- 検出感情: {emotions}
- 攻撃性スコア: {risk.aggression_score}/100
- 心理的安全性への影響: {risk.psych_safety_impact}
- リスクレベル: {risk.risk_level.value}
- 懸念点: {concerns}

この分析を踏まえて、より建設的な表現への変換提案を作成してください。"""


class RewriteService:
    """
    言い換え生成サービス

    リトライは行わない。応答全体が使えない場合は空リストを返し、
    検証に失敗した個々の提案は捨てる（補完・捏造はしない）。
    """

    def __init__(
        self,
        ai_provider: IAIProvider,
        model: str | None = None,
        temperature: float = 0.7,
    ):
        self._ai_provider = ai_provider
        self._model = model
        self._temperature = temperature

    async def generate_transform_suggestions(
        self,
        message: str,
        emotion: EmotionAnalysis,
        risk: RiskAssessment,
    ) -> list[TransformSuggestion]:
        """
        言い換え案を生成

        Args:
            message: 元のメッセージ
            emotion: 感情分析結果
            risk: リスク評価結果

        Returns:
            list[TransformSuggestion]: 検証済みの提案（0件以上）
        """
        try:
            response = await self._ai_provider.complete(
                NVC_TRANSLATION_PROMPT,
                build_context_prompt(message, emotion, risk),
                json_mode=True,
                temperature=self._temperature,
                model=self._model,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            log_fallback(logger, "rewrite", "completion failed", error=str(e), error_type=type(e).__name__)
            return []

        try:
            payload = load_json(response)
        except ValueError as e:
            log_fallback(logger, "rewrite", "parse failed", error=str(e))
            return []

        raw_suggestions = payload.get("suggestions") if isinstance(payload, dict) else None
        if not isinstance(raw_suggestions, list):
            log_fallback(logger, "rewrite", "suggestions array missing")
            return []

        suggestions: list[TransformSuggestion] = []
        for index, item in enumerate(raw_suggestions):
            result = validate_payload(item, TransformSuggestion)
            if result.success:
                suggestions.append(result.data)
            else:
                logger.warning(
                    "Dropped invalid suggestion",
                    extra={"event_type": "suggestion_dropped", "index": index, "error": result.error},
                )

        return suggestions
