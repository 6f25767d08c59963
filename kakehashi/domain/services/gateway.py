"""
コーチングゲートウェイ
緊急度検出・法的トピックフィルタ・感情/リスク分析・言い換え生成を統合し、
1件のメッセージに対する単一の判定結果を返す

評価順序（最後以外はそれぞれ早期リターン）:
1. 緊急   : AIを通さずそのまま送信
2. ブロック: 規制トピックのため人間の判断に委ねる
3. 短文   : 分析不要として問題なしを返す
4. 完全分析: 分類 → 条件付き言い換え → 要約
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.logging import get_logger, log_business_event
from ..models.coaching import CoachingOptions, CoachingResult, TransformSuggestion
from ..models.emotion import EmotionAnalysis, EmotionLabel, RiskAssessment, RiskLevel
from ..models.topic import BlockedTopicResult
from .emotion import EmotionService
from .legal_filter import LegalTopicFilter
from .rewriter import RewriteService, generate_quick_summary
from .urgency import UrgencyDetector

if TYPE_CHECKING:
    from ..ports.ai_port import IAIProvider

logger = get_logger("services.gateway")

EMERGENCY_SUMMARY = "🚨 緊急メッセージとして検出されました。フィルタなしで送信されます。"
BLOCKED_HEADER = "⚠️ この内容はシステムで取り扱えません。"
BLOCKED_CONCERN = "法的リスクのあるトピックが含まれています"
TRIVIAL_SUMMARY = "✅ このメッセージは問題ありません。"
PRIORITY_PREFIX = "⚡ 優先メッセージとして処理されます。"


def message_length(message: str) -> int:
    """UTF-16 のコード単位で数えた長さ（絵文字などのサロゲートペアは2）"""
    return len(message.encode("utf-16-le", "surrogatepass")) // 2


class CoachingGateway:
    """
    コーチングゲートウェイ

    状態を持たないため、複数メッセージを並行に処理してよい。
    リトライは行わない（呼び出し側の責務）。
    """

    def __init__(
        self,
        ai_provider: IAIProvider,
        emotion_service: EmotionService | None = None,
        rewrite_service: RewriteService | None = None,
        urgency_detector: UrgencyDetector | None = None,
        topic_filter: LegalTopicFilter | None = None,
        default_options: CoachingOptions | None = None,
    ):
        self.ai_provider = ai_provider
        self.emotion_service = emotion_service or EmotionService(ai_provider=ai_provider)
        self.rewrite_service = rewrite_service or RewriteService(ai_provider=ai_provider)
        self.urgency_detector = urgency_detector or UrgencyDetector()
        self.topic_filter = topic_filter or LegalTopicFilter()
        self.default_options = default_options or CoachingOptions()

    async def process_message(
        self, message: str, options: CoachingOptions | None = None
    ) -> CoachingResult:
        """
        メッセージを処理してコーチング結果を返す

        Args:
            message: 従業員のメッセージ（空でないこと。検証は呼び出し側）
            options: 処理オプション（省略時は既定値）

        Returns:
            CoachingResult: 判定結果
        """
        opts = options or self.default_options

        # 1. 緊急: 全処理をバイパス
        if self.urgency_detector.should_bypass(message):
            log_business_event(logger, "gateway_bypass", message_length=message_length(message))
            return self._emergency_result(message)

        # 2. 規制トピック: 法的セーフガード
        blocked = self.topic_filter.check(message)
        if blocked.is_blocked:
            log_business_event(
                logger,
                "gateway_blocked",
                categories=[category.value for category in blocked.categories],
            )
            return self._blocked_result(message, blocked)

        # 3. 短文: AI分析をスキップ
        length = message_length(message)
        if length < opts.min_message_length and not opts.force_analysis:
            log_business_event(logger, "gateway_trivial", message_length=length)
            return self._trivial_result(message)

        # 4. 完全分析
        return await self._full_analysis(message, opts)

    async def _full_analysis(self, message: str, opts: CoachingOptions) -> CoachingResult:
        emotion, risk = await self.emotion_service.analyze_message(message)

        # 緊急判定は通過済み。ここでは優先フラグのみ使う
        urgency = self.urgency_detector.detect(message)

        suggestions: list[TransformSuggestion] = []
        if risk.risk_level != RiskLevel.LOW or opts.force_analysis:
            suggestions = await self.rewrite_service.generate_transform_suggestions(
                message, emotion, risk
            )

        summary = generate_quick_summary(risk)
        if urgency.is_priority and not urgency.is_emergency:
            summary = f"{PRIORITY_PREFIX}\n\n{summary}"

        log_business_event(
            logger,
            "gateway_analyzed",
            risk_level=risk.risk_level.value,
            aggression_score=risk.aggression_score,
            suggestion_count=len(suggestions),
            is_priority=urgency.is_priority,
        )

        return CoachingResult(
            original_message=message,
            emotion=emotion,
            risk=risk,
            suggestions=suggestions,
            blocked_topics=[],
            requires_human_decision=risk.requires_human_decision,
            summary=summary,
        )

    def _emergency_result(self, message: str) -> CoachingResult:
        return CoachingResult(
            original_message=message,
            emotion=EmotionAnalysis(
                valence=0.0,
                arousal=1.0,
                emotions=[EmotionLabel.ANTICIPATION],
                confidence=0.5,
            ),
            risk=RiskAssessment.safe(),
            suggestions=[],
            blocked_topics=[],
            requires_human_decision=False,
            summary=EMERGENCY_SUMMARY,
        )

    def _blocked_result(self, message: str, blocked: BlockedTopicResult) -> CoachingResult:
        warnings = [topic.message for topic in blocked.blocked_topics]

        # 相談窓口のないカテゴリは黙って省く
        referral_lines = []
        for topic in blocked.blocked_topics:
            link = self.topic_filter.get_referral_link(topic.category)
            if link is not None:
                referral_lines.append(link.format())

        summary = (
            f"{BLOCKED_HEADER}\n\n"
            + "\n".join(warnings)
            + "\n\n参考リンク:\n"
            + "\n".join(referral_lines)
        )

        return CoachingResult(
            original_message=message,
            emotion=EmotionAnalysis.neutral(confidence=0.0),
            risk=RiskAssessment.safe(concerns=[BLOCKED_CONCERN]),
            suggestions=[],
            blocked_topics=warnings,
            requires_human_decision=True,
            summary=summary,
        )

    def _trivial_result(self, message: str) -> CoachingResult:
        return CoachingResult(
            original_message=message,
            emotion=EmotionAnalysis.neutral(confidence=0.5),
            risk=RiskAssessment.safe(),
            suggestions=[],
            blocked_topics=[],
            requires_human_decision=False,
            summary=TRIVIAL_SUMMARY,
        )
