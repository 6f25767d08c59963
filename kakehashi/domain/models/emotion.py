"""
感情・リスクモデル
ラッセルの円環モデルに基づく感情分析と、職場ハラスメント観点のリスク評価
"""

from enum import Enum

from pydantic import Field

from .base import CamelModel


class EmotionLabel(str, Enum):
    """検出対象の感情ラベル（12種）"""

    ANGER = "anger"
    FEAR = "fear"
    DISGUST = "disgust"
    SADNESS = "sadness"
    JOY = "joy"
    SURPRISE = "surprise"
    TRUST = "trust"
    ANTICIPATION = "anticipation"
    FRUSTRATION = "frustration"
    ANXIETY = "anxiety"
    CONTEMPT = "contempt"
    NEUTRAL = "neutral"


class RiskLevel(str, Enum):
    """リスクレベル"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 人間の判断を必要とするリスクレベル
HUMAN_DECISION_LEVELS = {RiskLevel.HIGH, RiskLevel.CRITICAL}


class EmotionAnalysis(CamelModel):
    """
    感情分析結果

    valence: -1（非常にネガティブ）〜 1（非常にポジティブ）
    arousal: 0（穏やか）〜 1（高揚・興奮）
    """

    valence: float = Field(ge=-1.0, le=1.0)
    arousal: float = Field(ge=0.0, le=1.0)
    emotions: list[EmotionLabel]
    confidence: float = Field(ge=0.0, le=1.0)

    @classmethod
    def fallback(cls) -> "EmotionAnalysis":
        """分析失敗時の中立的な結果"""
        return cls(
            valence=0.0,
            arousal=0.5,
            emotions=[EmotionLabel.NEUTRAL],
            confidence=0.0,
        )

    @classmethod
    def neutral(cls, confidence: float = 0.0) -> "EmotionAnalysis":
        """AI分析を行わない場合の中性の結果"""
        return cls(
            valence=0.0,
            arousal=0.0,
            emotions=[EmotionLabel.NEUTRAL],
            confidence=confidence,
        )


class RiskAssessment(CamelModel):
    """リスク評価結果"""

    # 攻撃的・威圧的表現の度合い
    aggression_score: int = Field(ge=0, le=100)
    # 受け手の心理的安全性への影響
    psych_safety_impact: float = Field(ge=-10.0, le=10.0)
    risk_level: RiskLevel
    concerns: list[str]

    @property
    def requires_human_decision(self) -> bool:
        """送信前に人間の判断が必要か"""
        return self.risk_level in HUMAN_DECISION_LEVELS or self.aggression_score > 50

    @classmethod
    def fallback(cls) -> "RiskAssessment":
        """
        分析失敗時の結果

        「問題なし」と誤認されないよう medium を返す。
        """
        return cls(
            aggression_score=50,
            psych_safety_impact=0.0,
            risk_level=RiskLevel.MEDIUM,
            concerns=["Analysis could not be completed"],
        )

    @classmethod
    def safe(cls, concerns: list[str] | None = None) -> "RiskAssessment":
        """リスク計算を行わない分岐用の low 評価"""
        return cls(
            aggression_score=0,
            psych_safety_impact=0.0,
            risk_level=RiskLevel.LOW,
            concerns=concerns or [],
        )
