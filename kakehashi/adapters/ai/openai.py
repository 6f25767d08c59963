"""
OpenAI AIアダプター
OpenAI Chat Completions API への接続実装
"""

import asyncio

import aiohttp

from ...core.exceptions import ConfigurationError, ExternalServiceError
from ...domain.ports.ai_port import IAIProvider

SERVICE_NAME = "openai"


class OpenAIAdapter(IAIProvider):
    """
    OpenAI AIアダプター

    状態を持たないため、1インスタンスを並行リクエストで共有してよい。
    レート制限・リトライは行わない。
    APIキーが空でも生成でき、呼び出した時点で ConfigurationError になる。
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: int = 60,
        base_url: str = "https://api.openai.com/v1",
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

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

        Raises:
            ConfigurationError: APIキー未設定時
            ExternalServiceError: API呼び出し失敗時
        """
        if not self.is_configured:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")

        request_body = self._build_request_body(
            system_prompt, user_prompt, json_mode, temperature, max_tokens, model
        )

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=request_body,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise ExternalServiceError(
                            f"OpenAI API error: HTTP {response.status} - {error_text}",
                            service_name=SERVICE_NAME,
                            status_code=response.status,
                        )

                    response_data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"OpenAI API request failed: {e}", service_name=SERVICE_NAME
            ) from e

        return self._extract_content(response_data)

    def _build_request_body(
        self,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool,
        temperature: float,
        max_tokens: int | None,
        model: str | None,
    ) -> dict:
        request_body = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }

        if json_mode:
            request_body["response_format"] = {"type": "json_object"}

        if max_tokens:
            request_body["max_tokens"] = max_tokens

        return request_body

    def _extract_content(self, response_data: dict) -> str:
        if "choices" not in response_data or not response_data["choices"]:
            raise ExternalServiceError("No choices in OpenAI response", service_name=SERVICE_NAME)

        choice = response_data["choices"][0]
        if "message" not in choice or "content" not in choice["message"]:
            raise ExternalServiceError(
                "Invalid response structure from OpenAI API", service_name=SERVICE_NAME
            )

        response_text = choice["message"]["content"]

        if not response_text or not response_text.strip():
            raise ExternalServiceError("Empty response from OpenAI API", service_name=SERVICE_NAME)

        return response_text

    async def health_check(self) -> bool:
        """
        OpenAI APIの健全性チェック

        Returns:
            bool: 正常に動作しているか（キー未設定なら False）
        """
        if not self.is_configured:
            return False
        try:
            response = await self.complete(
                system_prompt="Reply with 'OK' only.",
                user_prompt="Hello",
                max_tokens=10,
            )
            return len(response) > 0
        except ExternalServiceError:
            return False

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def model_name(self) -> str:
        """既定のモデル名"""
        return self.model
