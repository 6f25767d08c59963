"""
緊急度検出のテスト
"""

from kakehashi.domain.models import RecommendedAction
from kakehashi.domain.services.urgency import (
    UrgencyDetector,
    detect_urgency,
    should_bypass,
)


class TestUrgencyDetector:
    """UrgencyDetector のテスト"""

    def test_emergency_keyword_bypasses(self):
        """緊急キーワードはバイパス"""
        result = detect_urgency("至急来てください")

        assert result.is_emergency is True
        assert result.recommended_action == RecommendedAction.BYPASS
        assert "至急" in result.matched_keywords

    def test_medical_emergency(self):
        """医療上の緊急事態"""
        assert should_bypass("患者さんが出血しています") is True
        assert should_bypass("アナフィラキシーの疑いがあります") is True

    def test_case_insensitive(self):
        """英語キーワードは大文字小文字を区別しない"""
        assert should_bypass("urgent: please check") is True
        assert should_bypass("Need this asap") is True

    def test_priority_keyword_expedites(self):
        """優先キーワードは expedite"""
        result = detect_urgency("本日中に確認をお願いします")

        assert result.is_emergency is False
        assert result.is_priority is True
        assert result.recommended_action == RecommendedAction.EXPEDITE
        assert result.matched_keywords == ["本日中"]

    def test_normal_message(self):
        """キーワードなしは normal"""
        result = detect_urgency("資料ありがとうございました")

        assert result.is_emergency is False
        assert result.is_priority is False
        assert result.matched_keywords == []
        assert result.recommended_action == RecommendedAction.NORMAL

    def test_emergency_and_priority_both_reported(self):
        """緊急と優先の両方に一致した場合は緊急を優先し、一致語は緊急→優先の順"""
        result = detect_urgency("至急対応お願いします")

        assert result.is_emergency is True
        assert result.is_priority is True
        assert result.recommended_action == RecommendedAction.BYPASS
        assert result.matched_keywords == ["至急", "至急対応"]

    def test_substring_inside_longer_word(self):
        """長い語の一部でも一致とみなす"""
        # 「意識」は「無意識」にも一致する
        assert should_bypass("無意識にやっていました") is True

    def test_custom_keywords(self):
        """キーワードを差し替えられる"""
        detector = UrgencyDetector(emergency_keywords=["火事"], priority_keywords=["締切"])

        assert detector.should_bypass("火事です") is True
        assert detector.should_bypass("至急") is False
        assert detector.detect("締切が近い").is_priority is True

    def test_to_dict_is_camel_case(self):
        """辞書変換は camelCase"""
        data = detect_urgency("ASAP").to_dict()

        assert data == {
            "isEmergency": True,
            "isPriority": False,
            "matchedKeywords": ["ASAP"],
            "recommendedAction": "bypass",
        }
