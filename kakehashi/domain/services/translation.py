"""
翻訳サービス

「回答」ではなく「翻訳」を行う。
- 従業員の質問 → 経営者に伝わるマイルドで明確な表現に
- 経営者の回答 → 従業員にわかりやすい表現に

ゲートウェイと異なり、失敗は呼び出し側に伝える（翻訳できなかったことを知る必要があるため）。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.exceptions import TranslationError
from ...core.llm_json import parse_llm_response
from ...core.logging import get_logger
from ..models.translation import TranslationDirection, TranslationResult

if TYPE_CHECKING:
    from ..ports.ai_port import IAIProvider

logger = get_logger("services.translation")

EMPLOYEE_TO_OWNER_PROMPT = """あなたは職場コミュニケーションの翻訳者です。
従業員からの質問や相談を、経営者に伝えるためにわかりやすく整理してください。

【重要なルール】
1. 意図を変えない（言いたいことの本質は維持）
2. 感情的な表現を中立的に変換
3. 具体的で明確な質問形式に整理
4. 攻撃的・批判的なトーンを除去
5. 相手との比較（「○○さんより〜」）は除去

【出力形式】
JSON形式で返してください：
{
  "translatedText": "翻訳後のテキスト",
  "clarificationNeeded": true/false（意図が不明確な場合はtrue）,
  "clarificationQuestion": "確認したい質問（clarificationNeededがtrueの場合）",
  "summary": "この質問の要点を一行で"
}"""

OWNER_TO_EMPLOYEE_PROMPT = """あなたは職場コミュニケーションの翻訳者です。
経営者からの回答を、従業員にわかりやすく伝えるために整理してください。

【重要なルール】
1. 意図を変えない（伝えたいことの本質は維持）
2. 専門用語をわかりやすく言い換え
3. 威圧的・上から目線のトーンを除去
4. 具体的で行動可能な内容に
5. 感謝・配慮の言葉を適切に追加

【出力形式】
JSON形式で返してください：
{
  "translatedText": "翻訳後のテキスト",
  "clarificationNeeded": true/false（意図が不明確な場合はtrue）,
  "clarificationQuestion": "確認したい質問（clarificationNeededがtrueの場合）",
  "summary": "この回答の要点を一行で"
}"""

# 方向ごとの (システムプロンプト, 原文ラベル)
_DIRECTION_CONFIG: dict[TranslationDirection, tuple[str, str]] = {
    TranslationDirection.EMPLOYEE_TO_OWNER: (EMPLOYEE_TO_OWNER_PROMPT, "【従業員の原文】"),
    TranslationDirection.OWNER_TO_EMPLOYEE: (OWNER_TO_EMPLOYEE_PROMPT, "【経営者の原文】"),
}


def build_user_prompt(text: str, label: str, context: str | None = None) -> str:
    """背景情報（任意）と原文からユーザープロンプトを組み立てる"""
    if context:
        return f"【背景情報】\n{context}\n\n{label}\n{text}"
    return f"{label}\n{text}"


class TranslationService:
    """翻訳サービス"""

    def __init__(
        self,
        ai_provider: IAIProvider,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        self._ai_provider = ai_provider
        self._model = model
        self._temperature = temperature

    async def translate(
        self,
        text: str,
        direction: TranslationDirection | str,
        context: str | None = None,
    ) -> TranslationResult:
        """
        指定方向に翻訳

        Raises:
            ExternalServiceError など: AI呼び出しの失敗はそのまま伝播
            TranslationError: 応答のパース・検証失敗
        """
        direction = TranslationDirection(direction)
        system_prompt, label = _DIRECTION_CONFIG[direction]

        response = await self._ai_provider.complete(
            system_prompt,
            build_user_prompt(text, label, context),
            json_mode=True,
            temperature=self._temperature,
            model=self._model,
        )

        result = parse_llm_response(response, TranslationResult)
        if not result.success:
            logger.error(
                "Translation response could not be parsed",
                extra={"event_type": "translation_parse_error", "direction": direction.value, "error": result.error},
            )
            raise TranslationError(
                f"Failed to parse translation response: {result.error}",
                direction=direction.value,
                raw_response=response,
            )

        return result.data

    async def translate_employee_to_owner(
        self, text: str, context: str | None = None
    ) -> TranslationResult:
        """従業員のメッセージを経営者向けに翻訳"""
        return await self.translate(text, TranslationDirection.EMPLOYEE_TO_OWNER, context)

    async def translate_owner_to_employee(
        self, text: str, context: str | None = None
    ) -> TranslationResult:
        """経営者のメッセージを従業員向けに翻訳"""
        return await self.translate(text, TranslationDirection.OWNER_TO_EMPLOYEE, context)
