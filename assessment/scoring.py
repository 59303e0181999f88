# assessment/scoring.py
"""
Scoring engine for the security assessment.

Folds an Answer Record (one score per question, in question order) into a
total, per-category aggregates and a security level, plus the insight and
baseline-comparison helpers used by the results views.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Any

from assessment.questions import QUESTIONS, Question, categories
from assessment.config import (
    POINTS_PER_QUESTION,
    SECURITY_LEVELS,
    COMPARISON_BASELINES,
    BASELINE_RANKS,
)


@dataclass(frozen=True)
class CategoryAggregate:
    total: int
    possible: int
    percentage: int
    questions: int = 0
    average_score: int = 0


@dataclass(frozen=True)
class SecurityLevel:
    label: str
    title: str
    description: str
    color: str
    icon: str
    recommendations: Tuple[str, ...]
    insight: str


def _round_half_up(numerator: int, denominator: int) -> int:
    """round(100 * numerator / denominator) with .5 rounding up, in integer math."""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def check_record_length(answers: Sequence[int], questions: Sequence[Question] = QUESTIONS) -> None:
    """Reject an Answer Record that is longer than the question bank."""
    if len(answers) > len(questions):
        raise IndexError(
            f"Answer record has {len(answers)} entries but the question bank has only {len(questions)}"
        )


def total_score(answers: Sequence[int], questions: Sequence[Question] = QUESTIONS) -> int:
    check_record_length(answers, questions)
    return sum(answers)


def overall_percentage(total: int, max_score: int) -> int:
    return _round_half_up(total, max_score)


def category_aggregates(
    answers: Sequence[int], questions: Sequence[Question] = QUESTIONS
) -> Dict[str, CategoryAggregate]:
    """
    Compute total/possible/percentage for every category in the bank.

    ``possible`` counts every question of the category whether or not it has
    been answered yet, so it never depends on the answers given.

    Args:
        answers: Answer Record, at most as long as ``questions``
        questions: Question bank

    Returns:
        Mapping of category -> CategoryAggregate in category declaration order

    Raises:
        IndexError: if the record is longer than the bank
    """
    check_record_length(answers, questions)

    totals: Dict[str, int] = {}
    possible: Dict[str, int] = {}
    answered: Dict[str, int] = {}
    for category in categories(questions):
        totals[category] = 0
        possible[category] = 0
        answered[category] = 0

    for question in questions:
        possible[question.category] += POINTS_PER_QUESTION

    for index, score in enumerate(answers):
        category = questions[index].category
        totals[category] += score
        answered[category] += 1

    result: Dict[str, CategoryAggregate] = {}
    for category in totals:
        count = answered[category]
        result[category] = CategoryAggregate(
            total=totals[category],
            possible=possible[category],
            percentage=_round_half_up(totals[category], possible[category]),
            questions=count,
            average_score=(2 * totals[category] + count) // (2 * count) if count else 0,
        )
    return result


def security_level(total: int, max_score: int) -> SecurityLevel:
    """
    Classify an overall score into one of the four security levels.

    Lower bounds are inclusive and compared on the exact (unrounded)
    percentage, so 0.9 * max is a Champion and one point less is not.
    """
    for level in SECURITY_LEVELS:
        if max_score > 0 and 100 * total >= level["min_percentage"] * max_score:
            return _level_from_config(level)
    return _level_from_config(SECURITY_LEVELS[-1])


def _level_from_config(level: Dict[str, Any]) -> SecurityLevel:
    return SecurityLevel(
        label=level["label"],
        title=level["title"],
        description=level["description"],
        color=level["color"],
        icon=level["icon"],
        recommendations=tuple(level["recommendations"]),
        insight=level["insight"],
    )


def weakest_categories(
    aggregates: Dict[str, CategoryAggregate], n: int = 3
) -> List[Tuple[str, CategoryAggregate]]:
    """Lowest-percentage categories first; ties keep declaration order."""
    ranked = sorted(aggregates.items(), key=lambda item: item[1].percentage)
    return ranked[:n]


def strongest_categories(
    aggregates: Dict[str, CategoryAggregate], n: int = 3
) -> List[Tuple[str, CategoryAggregate]]:
    """Highest-percentage categories first; ties keep declaration order."""
    ranked = sorted(aggregates.items(), key=lambda item: -item[1].percentage)
    return ranked[:n]


def answer_severity(answers: Sequence[int]) -> Dict[str, int]:
    """Count critical (0), moderate (1-3) and low (4-6) severity answers."""
    critical = sum(1 for score in answers if score == 0)
    moderate = sum(1 for score in answers if 0 < score <= 3)
    low = sum(1 for score in answers if 3 < score <= 6)
    return {
        "critical": critical,
        "moderate": moderate,
        "low": low,
        "total": critical + moderate + low,
    }


def security_insights(
    aggregates: Dict[str, CategoryAggregate], total: int, max_score: int
) -> List[str]:
    """Short insight lines for the results page."""
    percentage = 100 * total / max_score if max_score > 0 else 0
    insights: List[str] = []

    if percentage >= 90:
        insights.append("🌟 Exceptional security posture - you're in the top 10% of users!")
    elif percentage >= 70:
        insights.append("✅ Solid security foundation with room for strategic improvements.")
    elif percentage >= 50:
        insights.append("⚠️ Moderate security level - focus on critical gaps first.")
    else:
        insights.append("🚨 Multiple security vulnerabilities need immediate attention.")

    weakest = weakest_categories(aggregates, n=1)
    if weakest:
        category, aggregate = weakest[0]
        if aggregate.percentage < 30:
            insights.append(f"🔴 {category} is critically weak and needs immediate focus.")
        elif aggregate.percentage < 60:
            insights.append(f"🟡 {category} shows significant room for improvement.")

    strongest = strongest_categories(aggregates, n=1)
    if strongest:
        category, aggregate = strongest[0]
        if aggregate.percentage >= 90:
            insights.append(f"🟢 Excellent {category} practices - keep it up!")

    account = aggregates.get("Account Security")
    awareness = aggregates.get("Digital Awareness")
    if account and awareness and account.percentage < 50 and awareness.percentage < 50:
        insights.append("⚠️ Low account security + poor awareness = high risk of credential theft.")

    return insights


def compare_to_baselines(total: int, max_score: int) -> Dict[str, Any]:
    """
    Compare the user's percentage with published baseline groups.

    Returns:
        Dict with ``user_score`` (float percentage), ``comparisons`` (one
        entry per baseline group) and ``rank``
    """
    percentage = 100 * total / max_score if max_score > 0 else 0.0
    comparisons = [
        {
            "group": group,
            "baseline": baseline,
            "difference": round(percentage - baseline, 1),
            "better_than": percentage > baseline,
        }
        for group, baseline in COMPARISON_BASELINES.items()
    ]
    rank = BASELINE_RANKS[-1][1]
    for threshold, name in BASELINE_RANKS:
        if percentage >= threshold:
            rank = name
            break
    return {"user_score": percentage, "comparisons": comparisons, "rank": rank}
