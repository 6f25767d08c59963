"""
AIプロバイダーポート
言語モデルの補完APIへのアクセスを抽象化
"""

from abc import ABC, abstractmethod


class IAIProvider(ABC):
    """
    AIプロバイダーインターフェース

    LLM API（OpenAI等）へのアクセスを抽象化。実装で切り替え可能。
    セッション状態を持たず、並行呼び出しで共有して安全であること。
    """

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_mode: bool = False,
        temperature: float = 0.3,
        max_tokens: int | None = None,
        model: str | None = None,
    ) -> str:
        """
        補完テキストを生成

        Args:
            system_prompt: システムプロンプト
            user_prompt: ユーザープロンプト
            json_mode: JSONのみを返す厳格モード
            temperature: サンプリング温度
            max_tokens: 最大トークン数（オプション）
            model: モデル名（省略時は既定モデル）

        Returns:
            str: 生の応答テキスト
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        AI APIの健全性チェック

        Returns:
            bool: 正常に動作しているか
        """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """
        既定のモデル名

        Returns:
            str: モデル名
        """
