"""
言い換え生成サービスのテスト
"""

import pytest

from kakehashi.core.exceptions import ConfigurationError, ExternalServiceError
from kakehashi.domain.models import EmotionAnalysis, RiskAssessment, RiskLevel, TransformStyle
from kakehashi.domain.services.rewriter import (
    NVC_TRANSLATION_PROMPT,
    QUICK_SUMMARIES,
    RewriteService,
    build_context_prompt,
    generate_quick_summary,
)

from tests.mocks import SAMPLE_SUGGESTION, MockAIProvider, suggestions_json

EMOTION = EmotionAnalysis.fallback()
RISK = RiskAssessment(
    aggression_score=70,
    psych_safety_impact=-5,
    risk_level=RiskLevel.HIGH,
    concerns=["命令口調", "人格否定"],
)


class TestRewriteService:
    """RewriteService のテスト"""

    @pytest.mark.asyncio
    async def test_valid_suggestions(self):
        """検証済みの提案を返す"""
        provider = MockAIProvider({
            NVC_TRANSLATION_PROMPT: suggestions_json(
                SAMPLE_SUGGESTION,
                {
                    "style": "collaborative",
                    "transformedText": "一緒に手順を見直しませんか",
                    "rationale": "チームでの解決を志向",
                    "nvcAnalysis": {
                        "observation": "同じミスが3回あった",
                        "feeling": "困っている",
                        "need": "確実な作業",
                        "request": "手順の見直し",
                    },
                },
            )
        })
        service = RewriteService(provider, model="rewriter")

        suggestions = await service.generate_transform_suggestions("テスト", EMOTION, RISK)

        assert [s.style for s in suggestions] == [TransformStyle.FACTUAL, TransformStyle.COLLABORATIVE]
        assert suggestions[0].nvc_analysis is None
        assert suggestions[1].nvc_analysis.need == "確実な作業"
        assert provider.calls[0]["model"] == "rewriter"
        assert provider.calls[0]["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_invalid_items_are_dropped(self):
        """不正な提案は捨て、正しい提案だけ残す"""
        provider = MockAIProvider({
            NVC_TRANSLATION_PROMPT: suggestions_json(
                {"style": "aggressive", "transformedText": "x", "rationale": "y"},
                {"style": "supportive", "transformedText": "", "rationale": "空"},
                {"style": "request", "rationale": "本文なし"},
                SAMPLE_SUGGESTION,
            )
        })

        suggestions = await RewriteService(provider).generate_transform_suggestions("テスト", EMOTION, RISK)

        assert len(suggestions) == 1
        assert suggestions[0].transformed_text == SAMPLE_SUGGESTION["transformedText"]

    @pytest.mark.asyncio
    async def test_unparseable_returns_empty(self):
        provider = MockAIProvider({NVC_TRANSLATION_PROMPT: "提案はありません"})

        assert await RewriteService(provider).generate_transform_suggestions("テスト", EMOTION, RISK) == []

    @pytest.mark.asyncio
    async def test_missing_suggestions_key_returns_empty(self):
        provider = MockAIProvider({NVC_TRANSLATION_PROMPT: '{"items": []}'})

        assert await RewriteService(provider).generate_transform_suggestions("テスト", EMOTION, RISK) == []

    @pytest.mark.asyncio
    async def test_transport_failure_returns_empty(self):
        provider = MockAIProvider(default=ExternalServiceError("HTTP 500", service_name="openai", status_code=500))

        assert await RewriteService(provider).generate_transform_suggestions("テスト", EMOTION, RISK) == []

    @pytest.mark.asyncio
    async def test_missing_api_key_propagates(self):
        provider = MockAIProvider(default=ConfigurationError("OPENAI_API_KEY environment variable is required"))

        with pytest.raises(ConfigurationError):
            await RewriteService(provider).generate_transform_suggestions("テスト", EMOTION, RISK)

    def test_context_prompt_includes_analysis(self):
        """ユーザープロンプトに分析結果が含まれる"""
        prompt = build_context_prompt("早くしろ", EMOTION, RISK)

        assert '元のメッセージ: "早くしろ"' in prompt
        assert "攻撃性スコア: 70/100" in prompt
        assert "リスクレベル: high" in prompt
        assert "懸念点: 命令口調, 人格否定" in prompt
        assert "検出感情: neutral" in prompt


class TestQuickSummary:
    """要約文のテスト"""

    @pytest.mark.parametrize("level", list(RiskLevel))
    def test_summary_per_level(self, level):
        risk = RiskAssessment(aggression_score=0, psych_safety_impact=0, risk_level=level, concerns=[])
        assert generate_quick_summary(risk) == QUICK_SUMMARIES[level]

    def test_low_summary(self):
        assert generate_quick_summary(RiskAssessment.safe()) == "✅ このメッセージは適切なトーンです。"

    def test_critical_summary(self):
        risk = RiskAssessment(aggression_score=90, psych_safety_impact=-9, risk_level=RiskLevel.CRITICAL, concerns=[])
        assert generate_quick_summary(risk).startswith("⚠️ このメッセージは受け手に強い威圧感")
