"""
翻訳サービスのテスト
"""

import json

import pytest

from kakehashi.core.exceptions import ExternalServiceError, TranslationError
from kakehashi.domain.models import TranslationDirection
from kakehashi.domain.services.translation import (
    EMPLOYEE_TO_OWNER_PROMPT,
    OWNER_TO_EMPLOYEE_PROMPT,
    TranslationService,
    build_user_prompt,
)

from tests.mocks import MockAIProvider

TRANSLATION = json.dumps({
    "translatedText": "来月のシフトについてご相談させてください。",
    "clarificationNeeded": False,
    "summary": "シフトの相談",
}, ensure_ascii=False)


class TestTranslationService:
    """TranslationService のテスト"""

    @pytest.mark.asyncio
    async def test_employee_to_owner(self):
        provider = MockAIProvider({EMPLOYEE_TO_OWNER_PROMPT: TRANSLATION})
        service = TranslationService(provider, model="translator")

        result = await service.translate_employee_to_owner("来月のシフトどうなってるんですか")

        assert result.translated_text == "来月のシフトについてご相談させてください。"
        assert result.clarification_needed is False
        assert result.clarification_question is None
        assert result.summary == "シフトの相談"
        call = provider.calls[0]
        assert call["json_mode"] is True
        assert call["model"] == "translator"
        assert call["user_prompt"] == "【従業員の原文】\n来月のシフトどうなってるんですか"

    @pytest.mark.asyncio
    async def test_owner_to_employee_with_context(self):
        """背景情報はプロンプトの先頭に入る"""
        provider = MockAIProvider({OWNER_TO_EMPLOYEE_PROMPT: TRANSLATION})
        service = TranslationService(provider)

        await service.translate_owner_to_employee("無理", context="シフト変更の依頼への回答")

        assert provider.calls[0]["system_prompt"] == OWNER_TO_EMPLOYEE_PROMPT
        assert provider.calls[0]["user_prompt"] == (
            "【背景情報】\nシフト変更の依頼への回答\n\n【経営者の原文】\n無理"
        )

    @pytest.mark.asyncio
    async def test_direction_as_string(self):
        provider = MockAIProvider({OWNER_TO_EMPLOYEE_PROMPT: TRANSLATION})

        await TranslationService(provider).translate("了解", "owner_to_employee")

        assert provider.calls[0]["system_prompt"] == OWNER_TO_EMPLOYEE_PROMPT

    @pytest.mark.asyncio
    async def test_unknown_direction(self):
        with pytest.raises(ValueError):
            await TranslationService(MockAIProvider()).translate("了解", "sideways")

    @pytest.mark.asyncio
    async def test_clarification_question(self):
        provider = MockAIProvider(default=json.dumps({
            "translatedText": "例の件について確認させてください。",
            "clarificationNeeded": True,
            "clarificationQuestion": "「例の件」とは何を指していますか？",
            "summary": "確認依頼",
        }, ensure_ascii=False))

        result = await TranslationService(provider).translate("例の件どうなった", TranslationDirection.EMPLOYEE_TO_OWNER)

        assert result.clarification_needed is True
        assert result.clarification_question == "「例の件」とは何を指していますか？"

    @pytest.mark.asyncio
    async def test_unparseable_raises(self):
        """パースできない応答は TranslationError"""
        provider = MockAIProvider(default="翻訳できません")

        with pytest.raises(TranslationError) as exc_info:
            await TranslationService(provider).translate_employee_to_owner("テスト")

        assert exc_info.value.error_code == "TranslationError"
        assert exc_info.value.details["direction"] == "employee_to_owner"
        assert exc_info.value.details["raw_response"] == "翻訳できません"

    @pytest.mark.asyncio
    async def test_missing_field_raises(self):
        provider = MockAIProvider(default='{"translatedText": "x"}')

        with pytest.raises(TranslationError):
            await TranslationService(provider).translate_employee_to_owner("テスト")

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        """通信失敗はそのまま伝播"""
        provider = MockAIProvider(default=ExternalServiceError("HTTP 500", service_name="openai", status_code=500))

        with pytest.raises(ExternalServiceError):
            await TranslationService(provider).translate_employee_to_owner("テスト")


def test_build_user_prompt_without_context():
    assert build_user_prompt("本文", "【ラベル】") == "【ラベル】\n本文"
