"""
感情・リスク分析サービスのテスト

フォールバックの確認:
- 通信失敗・パース失敗・検証失敗はすべてフォールバック値になる
- 感情分析とリスク評価は互いに独立して失敗する
"""

import asyncio

import pytest

from kakehashi.core.exceptions import ConfigurationError, ExternalServiceError
from kakehashi.domain.models import EmotionAnalysis, EmotionLabel, RiskAssessment, RiskLevel
from kakehashi.domain.services.emotion import (
    EMOTION_ANALYSIS_PROMPT,
    RISK_ASSESSMENT_PROMPT,
    EmotionService,
)

from tests.mocks import MockAIProvider, emotion_json, risk_json


class ConcurrentProvider(MockAIProvider):
    """両方の呼び出しが同時に進行中でないと応答しないプロバイダー"""

    def __init__(self, responses):
        super().__init__(responses)
        self._both_started = asyncio.Event()

    async def complete(self, system_prompt, user_prompt, **kwargs):
        self.calls.append({"system_prompt": system_prompt})
        if len(self.calls) == 2:
            self._both_started.set()
        await asyncio.wait_for(self._both_started.wait(), timeout=1.0)
        return self.responses[system_prompt]


class TestEmotionAnalysis:
    """感情分析のテスト"""

    @pytest.mark.asyncio
    async def test_valid_response(self):
        """正常な応答はそのまま使う"""
        provider = MockAIProvider({EMOTION_ANALYSIS_PROMPT: emotion_json()})
        service = EmotionService(provider, model="classifier")

        emotion = await service.analyze_emotion("なんでできないんだ")

        assert emotion.valence == -0.8
        assert emotion.emotions == [EmotionLabel.ANGER, EmotionLabel.FRUSTRATION]
        call = provider.calls[0]
        assert call["json_mode"] is True
        assert call["model"] == "classifier"
        assert call["user_prompt"] == "なんでできないんだ"

    @pytest.mark.asyncio
    async def test_fenced_response(self):
        """コードブロックで囲まれた応答も読める"""
        provider = MockAIProvider({EMOTION_ANALYSIS_PROMPT: f"```json\n{emotion_json()}\n```"})

        emotion = await EmotionService(provider).analyze_emotion("テスト")

        assert emotion.confidence == 0.9

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back(self):
        """JSONでない応答はフォールバック"""
        provider = MockAIProvider({EMOTION_ANALYSIS_PROMPT: "分析できませんでした"})

        emotion = await EmotionService(provider).analyze_emotion("テスト")

        assert emotion == EmotionAnalysis.fallback()
        assert emotion.valence == 0.0
        assert emotion.arousal == 0.5
        assert emotion.emotions == [EmotionLabel.NEUTRAL]
        assert emotion.confidence == 0.0

    @pytest.mark.asyncio
    async def test_out_of_range_falls_back(self):
        """範囲外の値はフォールバック"""
        provider = MockAIProvider({EMOTION_ANALYSIS_PROMPT: emotion_json(arousal=1.5)})

        emotion = await EmotionService(provider).analyze_emotion("テスト")

        assert emotion == EmotionAnalysis.fallback()


class TestRiskAssessment:
    """リスク評価のテスト"""

    @pytest.mark.asyncio
    async def test_valid_response(self):
        provider = MockAIProvider({RISK_ASSESSMENT_PROMPT: risk_json()})

        risk = await EmotionService(provider).assess_risk("テスト")

        assert risk.risk_level == RiskLevel.CRITICAL
        assert risk.aggression_score == 85
        assert risk.requires_human_decision is True

    @pytest.mark.asyncio
    async def test_transport_failure_falls_back_to_medium(self):
        """通信失敗は medium / 50 のフォールバック"""
        provider = MockAIProvider(default=ExternalServiceError("timeout", service_name="openai"))

        risk = await EmotionService(provider).assess_risk("テスト")

        assert risk.risk_level == RiskLevel.MEDIUM
        assert risk.aggression_score == 50
        assert risk.psych_safety_impact == 0.0
        assert risk.concerns == ["Analysis could not be completed"]

    @pytest.mark.asyncio
    async def test_non_integer_score_falls_back(self):
        """整数でないスコアはフォールバック"""
        provider = MockAIProvider({RISK_ASSESSMENT_PROMPT: risk_json(aggression_score=12.5)})

        risk = await EmotionService(provider).assess_risk("テスト")

        assert risk == RiskAssessment.fallback()

    def test_human_decision_by_score(self):
        """medium でも攻撃性スコアが50を超えれば人間の判断が必要"""
        risk = RiskAssessment(
            aggression_score=51, psych_safety_impact=0, risk_level=RiskLevel.MEDIUM, concerns=[]
        )
        assert risk.requires_human_decision is True

        risk = RiskAssessment(
            aggression_score=50, psych_safety_impact=0, risk_level=RiskLevel.MEDIUM, concerns=[]
        )
        assert risk.requires_human_decision is False


class TestAnalyzeMessage:
    """並行実行のテスト"""

    @pytest.mark.asyncio
    async def test_runs_both_concurrently(self):
        """感情分析とリスク評価は同時に実行される"""
        provider = ConcurrentProvider({
            EMOTION_ANALYSIS_PROMPT: emotion_json(),
            RISK_ASSESSMENT_PROMPT: risk_json(),
        })

        emotion, risk = await EmotionService(provider).analyze_message("テスト")

        assert emotion.emotions == [EmotionLabel.ANGER, EmotionLabel.FRUSTRATION]
        assert risk.risk_level == RiskLevel.CRITICAL

    @pytest.mark.asyncio
    async def test_one_branch_fails_independently(self):
        """片方の失敗はもう片方に影響しない"""
        provider = MockAIProvider({
            EMOTION_ANALYSIS_PROMPT: ExternalServiceError("boom", service_name="openai"),
            RISK_ASSESSMENT_PROMPT: risk_json(risk_level="high", aggression_score=60),
        })

        emotion, risk = await EmotionService(provider).analyze_message("テスト")

        assert emotion == EmotionAnalysis.fallback()
        assert risk.risk_level == RiskLevel.HIGH
        assert risk.aggression_score == 60
        assert provider.call_count == 2

    @pytest.mark.asyncio
    async def test_both_fail(self):
        """両方失敗しても例外は送出しない"""
        provider = MockAIProvider(default=RuntimeError("unexpected"))

        emotion, risk = await EmotionService(provider).analyze_message("テスト")

        assert emotion == EmotionAnalysis.fallback()
        assert risk == RiskAssessment.fallback()

    @pytest.mark.asyncio
    async def test_missing_api_key_propagates(self):
        """キー未設定はフォールバックせず伝播"""
        provider = MockAIProvider(default=ConfigurationError("OPENAI_API_KEY environment variable is required"))

        with pytest.raises(ConfigurationError):
            await EmotionService(provider).analyze_message("テスト")
