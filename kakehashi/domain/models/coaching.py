"""
コーチングモデル
言い換え提案とゲートウェイの最終結果
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import Field

from .base import CamelModel
from .emotion import EmotionAnalysis, RiskAssessment


class TransformStyle(str, Enum):
    """言い換えスタイル"""

    FACTUAL = "factual"  # 事実ベース
    SUPPORTIVE = "supportive"  # 支援的
    REQUEST = "request"  # 依頼形式
    COLLABORATIVE = "collaborative"  # 協調的


class NVCBreakdown(CamelModel):
    """非暴力コミュニケーション（NVC）の4要素"""

    observation: str  # 評価を交えない事実
    feeling: str  # 送り手の感情
    need: str  # 満たされていないニーズ
    request: str  # 具体的で実行可能な依頼


class TransformSuggestion(CamelModel):
    """言い換え提案"""

    style: TransformStyle
    transformed_text: str = Field(min_length=1)
    rationale: str
    nvc_analysis: NVCBreakdown | None = None


@dataclass(frozen=True)
class CoachingOptions:
    """ゲートウェイ処理オプション"""

    # これより短いメッセージはAI分析をスキップ
    min_message_length: int = 10
    # 低リスクでも言い換えを生成
    force_analysis: bool = False


class CoachingResult(CamelModel):
    """
    コーチング結果

    ゲートウェイが外部に返す唯一の成果物。生成後は変更しない。
    """

    original_message: str
    emotion: EmotionAnalysis
    risk: RiskAssessment
    suggestions: list[TransformSuggestion] = Field(default_factory=list)
    blocked_topics: list[str] = Field(default_factory=list)
    requires_human_decision: bool
    summary: str
