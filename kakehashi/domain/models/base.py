"""
モデル基底クラス
LLM応答・APIのキーはcamelCase、Python属性はsnake_case
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase/snake_case の両方で入力を受け付ける不変モデル"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """辞書形式に変換（camelCase、JSON互換）"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
