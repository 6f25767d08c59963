"""
カスタム例外クラス
階層的な例外処理によるエラーハンドリングの統一
"""

from typing import Any


class KakehashiException(Exception):
    """Kakehashiアプリケーションのベース例外クラス"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(KakehashiException):
    """設定関連のエラー"""


class BusinessLogicError(KakehashiException):
    """ビジネスロジック関連のエラー"""


class ExternalServiceError(KakehashiException):
    """外部サービス（OpenAI APIなど）関連のエラー"""

    def __init__(self, message: str, service_name: str = "unknown",
                 status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.details['service_name'] = service_name
        if status_code:
            self.details['status_code'] = status_code


class TranslationError(BusinessLogicError):
    """翻訳処理関連のエラー（応答のパース・検証失敗）"""

    def __init__(self, message: str, direction: str | None = None,
                 raw_response: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if direction:
            self.details['direction'] = direction
        if raw_response is not None:
            self.details['raw_response'] = raw_response[:200]
