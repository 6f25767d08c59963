"""
法的トピックフィルタ
雇用に関する規制トピックはAIが回答・言い換えしない（無資格の法的助言にあたるため）
該当時は定型メッセージと公的な相談窓口を返す
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.topic import (
    BlockedTopic,
    BlockedTopicCategory,
    BlockedTopicResult,
    ReferralLink,
)


@dataclass(frozen=True)
class TopicRule:
    """トピック判定ルール"""

    pattern: re.Pattern
    category: BlockedTopicCategory
    message: str


# 判定順に並べる（全カテゴリを評価し、短絡しない）
BLOCKED_TOPIC_RULES: tuple[TopicRule, ...] = (
    TopicRule(
        pattern=re.compile(r"給与|賃金|時給|昇給|ボーナス|賞与|手当|残業代"),
        category=BlockedTopicCategory.COMPENSATION,
        message="給与・賃金に関する内容は、直接の話し合いまたは社会保険労務士にご相談ください。",
    ),
    TopicRule(
        pattern=re.compile(r"退職|辞職|離職|解雇|クビ|辞めたい|辞める"),
        category=BlockedTopicCategory.TERMINATION,
        message="退職に関する事項は、直接の話し合いまたは労働基準監督署にご相談ください。",
    ),
    TopicRule(
        pattern=re.compile(r"有給|有休|休暇|欠勤|シフト変更"),
        category=BlockedTopicCategory.LEAVE,
        message="休暇・シフトに関する調整は、直接お話しいただくことをお勧めします。",
    ),
    TopicRule(
        pattern=re.compile(r"残業|労働時間|休日出勤|深夜勤務|36協定"),
        category=BlockedTopicCategory.WORKING_HOURS,
        message="労働時間に関する内容は、社会保険労務士または労働基準監督署にご相談ください。",
    ),
    TopicRule(
        pattern=re.compile(r"組合|ストライキ|団体交渉|労働争議"),
        category=BlockedTopicCategory.UNION_PROTECTED,
        message="労働組合活動に関する内容は法的に保護されており、このシステムでは取り扱いません。",
    ),
    TopicRule(
        pattern=re.compile(r"パワハラ|セクハラ|モラハラ|いじめ|嫌がらせ"),
        category=BlockedTopicCategory.HARASSMENT,
        message="ハラスメントに関するご相談は、専門の相談窓口または弁護士にご連絡ください。",
    ),
)

# カテゴリごとの外部相談窓口
REFERRAL_LINKS: dict[BlockedTopicCategory, ReferralLink] = {
    BlockedTopicCategory.COMPENSATION: ReferralLink(
        name="全国社会保険労務士会連合会",
        url="https://www.shakaihokenroumushi.jp/",
    ),
    BlockedTopicCategory.TERMINATION: ReferralLink(
        name="厚生労働省 総合労働相談コーナー",
        url="https://www.mhlw.go.jp/general/seido/chihou/kaiketu/soudan.html",
    ),
    BlockedTopicCategory.LEAVE: ReferralLink(
        name="労働条件相談ほっとライン",
        url="https://www.check-roudou.mhlw.go.jp/lp/hotline/",
    ),
    BlockedTopicCategory.WORKING_HOURS: ReferralLink(
        name="労働基準監督署",
        url="https://www.mhlw.go.jp/stf/seisakunitsuite/bunya/koyou_roudou/roudoukijun/location.html",
    ),
    BlockedTopicCategory.UNION_PROTECTED: ReferralLink(
        name="中央労働委員会",
        url="https://www.mhlw.go.jp/churoi/",
    ),
    BlockedTopicCategory.HARASSMENT: ReferralLink(
        name="ハラスメント悩み相談室",
        url="https://harasu-soudan.mhlw.go.jp/",
    ),
}


class LegalTopicFilter:
    """
    規制トピックフィルタ

    各ルールについて重複しない全マッチを収集し、
    1件以上あればカテゴリとして記録する。
    """

    def __init__(
        self,
        rules: tuple[TopicRule, ...] = BLOCKED_TOPIC_RULES,
        referral_links: dict[BlockedTopicCategory, ReferralLink] | None = None,
    ):
        self._rules = rules
        self._referral_links = REFERRAL_LINKS if referral_links is None else referral_links

    def check(self, message: str) -> BlockedTopicResult:
        """メッセージに規制トピックが含まれるか判定"""
        blocked_topics: list[BlockedTopic] = []

        for rule in self._rules:
            matches = rule.pattern.findall(message)
            if matches:
                blocked_topics.append(
                    BlockedTopic(
                        category=rule.category,
                        matched_text=", ".join(matches),
                        message=rule.message,
                    )
                )

        return BlockedTopicResult(
            blocked_topics=blocked_topics,
            cleaned_message=None if blocked_topics else message,
        )

    def get_referral_link(self, category: BlockedTopicCategory | str) -> ReferralLink | None:
        """カテゴリの相談窓口を取得（未登録・不明なカテゴリは None）"""
        try:
            key = BlockedTopicCategory(category)
        except ValueError:
            return None
        return self._referral_links.get(key)


_default_filter = LegalTopicFilter()


def check_blocked_topics(message: str) -> BlockedTopicResult:
    """既定ルールで規制トピックを判定"""
    return _default_filter.check(message)


def get_referral_link(category: BlockedTopicCategory | str) -> ReferralLink | None:
    """既定の相談窓口を取得"""
    return _default_filter.get_referral_link(category)
