"""
テスト共通フィクスチャ
"""

import pytest

from kakehashi.domain.services.emotion import EMOTION_ANALYSIS_PROMPT, RISK_ASSESSMENT_PROMPT
from kakehashi.domain.services.rewriter import NVC_TRANSLATION_PROMPT
from tests.mocks import SAMPLE_SUGGESTION, MockAIProvider, emotion_json, risk_json, suggestions_json


@pytest.fixture
def critical_provider():
    """critical 判定を返すプロバイダー"""
    return MockAIProvider({
        EMOTION_ANALYSIS_PROMPT: emotion_json(),
        RISK_ASSESSMENT_PROMPT: risk_json(),
        NVC_TRANSLATION_PROMPT: suggestions_json(SAMPLE_SUGGESTION),
    })


@pytest.fixture
def low_risk_provider():
    """low 判定を返すプロバイダー"""
    return MockAIProvider({
        EMOTION_ANALYSIS_PROMPT: emotion_json(valence=0.6, arousal=0.2, emotions=["trust"]),
        RISK_ASSESSMENT_PROMPT: risk_json(aggression_score=5, psych_safety_impact=3, risk_level="low", concerns=[]),
        NVC_TRANSLATION_PROMPT: suggestions_json(SAMPLE_SUGGESTION),
    })
