"""
翻訳モデル
"""

from enum import Enum

from .base import CamelModel


class TranslationDirection(str, Enum):
    """翻訳方向"""

    EMPLOYEE_TO_OWNER = "employee_to_owner"
    OWNER_TO_EMPLOYEE = "owner_to_employee"


class TranslationResult(CamelModel):
    """翻訳結果"""

    translated_text: str
    clarification_needed: bool
    clarification_question: str | None = None
    summary: str
