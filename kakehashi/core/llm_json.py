"""
LLM応答のJSONパース・スキーマ検証ユーティリティ

例外を送出せず、成功/失敗をタグ付き結果として返す。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# ```json ... ``` ブロック
_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass(frozen=True)
class ParseResult(Generic[ModelT]):
    """パース結果（成功時は data、失敗時は error を持つ）"""

    success: bool
    data: ModelT | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: ModelT) -> "ParseResult[ModelT]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ParseResult[ModelT]":
        return cls(success=False, error=error)


def extract_json_text(content: str) -> str:
    """マークダウンのコードブロックがあれば中身を取り出す"""
    match = _CODE_FENCE_PATTERN.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()


def load_json(content: str | None) -> Any:
    """
    LLM応答をJSONとして読み込む

    Raises:
        ValueError: 空の応答、または不正なJSON
    """
    if not content or not content.strip():
        raise ValueError("Empty response content")
    try:
        return json.loads(extract_json_text(content))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e.msg}") from e


def _describe_validation_error(error: PydanticValidationError) -> str:
    issues = [
        f"{'.'.join(str(p) for p in issue['loc']) or '<root>'}: {issue['msg']}"
        for issue in error.errors()
    ]
    return "Validation error: " + ", ".join(issues)


def validate_payload(payload: Any, schema: type[ModelT]) -> ParseResult[ModelT]:
    """パース済みオブジェクトをスキーマで検証"""
    try:
        return ParseResult.ok(schema.model_validate(payload))
    except PydanticValidationError as e:
        return ParseResult.fail(_describe_validation_error(e))


def parse_llm_response(content: str | None, schema: type[ModelT]) -> ParseResult[ModelT]:
    """
    LLM応答をパースしてスキーマ検証する

    Args:
        content: LLMの生テキスト応答
        schema: 検証に使う pydantic モデル

    Returns:
        ParseResult: 成功時は検証済みモデル、失敗時はエラー内容
    """
    try:
        payload = load_json(content)
    except ValueError as e:
        return ParseResult.fail(str(e))
    return validate_payload(payload, schema)
