"""Discipline and psychology metrics.

Rule adherence over logged trades, checklist pass rates, recorded emotions
and the P&L left behind by missed trades.
"""

from collections.abc import Iterable

from goldjournal.models import (
    EMOTION_LEVELS,
    RULE_CHECK_ITEMS,
    EmotionBucket,
    MissedTradeSummary,
    PotentialTrade,
    Reflection,
    RuleAdherence,
    RuleCheck,
    RuleCheckBucket,
    Trade,
)


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def rule_adherence(trades: Iterable[Trade]) -> RuleAdherence:
    """Percentage of trades marked as taken according to plan.

    Returns:
        RuleAdherence with a rate of 0 when there are no trades.
    """
    total = 0
    followed = 0
    for trade in trades:
        total += 1
        if trade.rules_followed:
            followed += 1

    return RuleAdherence(
        total_trades=total,
        rules_followed=followed,
        rules_broken=total - followed,
        adherence_rate=_percent(followed, total),
    )


def rule_check_breakdown(checks: Iterable[RuleCheck]) -> list[RuleCheckBucket]:
    """Pass rate for each checklist item.

    Skipped items count toward neither passed nor answered. Always returns
    one bucket per item, in checklist order.
    """
    passed = dict.fromkeys(RULE_CHECK_ITEMS, 0)
    answered = dict.fromkeys(RULE_CHECK_ITEMS, 0)
    for check in checks:
        for item in RULE_CHECK_ITEMS:
            value = getattr(check, item)
            if value is None:
                continue
            answered[item] += 1
            if value:
                passed[item] += 1

    return [
        RuleCheckBucket(
            item=item,
            passed=passed[item],
            answered=answered[item],
            pass_rate=_percent(passed[item], answered[item]),
        )
        for item in RULE_CHECK_ITEMS
    ]


def by_emotion(reflections: Iterable[Reflection]) -> list[EmotionBucket]:
    """Count each emotion before, during and after trades.

    Emotions that were never recorded are omitted.
    """
    counts = {emotion: [0, 0, 0] for emotion in EMOTION_LEVELS}
    for reflection in reflections:
        stages = (reflection.pre_emotion, reflection.during_emotion, reflection.post_emotion)
        for index, emotion in enumerate(stages):
            if emotion is not None:
                counts[emotion][index] += 1

    return [
        EmotionBucket(emotion=emotion, pre=pre, during=during, post=post)
        for emotion, (pre, during, post) in counts.items()
        if pre or during or post
    ]


def summarize_missed(potential_trades: Iterable[PotentialTrade]) -> MissedTradeSummary:
    """Total and average P&L of missed trades plus the most common reason.

    Missing P&L counts as 0 in both the total and the average. When reasons
    tie, the one seen first wins.
    """
    count = 0
    total = 0.0
    reasons: dict[str, int] = {}
    for trade in potential_trades:
        count += 1
        total += trade.potential_pnl or 0.0
        if trade.reason:
            reasons[trade.reason] = reasons.get(trade.reason, 0) + 1

    top_reason = None
    top_count = 0
    for reason, seen in reasons.items():
        if seen > top_count:
            top_reason, top_count = reason, seen

    return MissedTradeSummary(
        count=count,
        total_potential_pnl=total,
        avg_potential_pnl=total / count if count else 0.0,
        top_reason=top_reason,
        top_reason_count=top_count,
    )
