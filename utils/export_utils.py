"""
Export utilities for assessment results (plain-text report and CSV)
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from assessment.config import SECURITY_RESOURCES
from assessment.scoring import CategoryAggregate, SecurityLevel, overall_percentage
from recommendations.deriver import Recommendation


def export_filename(on: Optional[date] = None) -> str:
    """PrivScore_Results_<MM-DD-YYYY>.txt"""
    on = on or date.today()
    return f"PrivScore_Results_{on.strftime('%m-%d-%Y')}.txt"


def export_text(
    total: int,
    max_score: int,
    level: SecurityLevel,
    recommendations: Sequence[Recommendation],
    aggregates: Dict[str, CategoryAggregate],
    generated_on: Optional[date] = None,
    advice: Optional[List[str]] = None,
) -> str:
    """
    Render the plain-text results report.

    Args:
        total: Total score
        max_score: Maximum possible score
        level: Security level for the total
        recommendations: Derived recommendations, in rank order
        aggregates: Category aggregates in declaration order
        generated_on: Report date (today when omitted)
        advice: Optional advice lines (already carrying their source marker)

    Returns:
        The report text
    """
    generated_on = generated_on or date.today()
    lines = [
        "PrivScore Security Assessment Results",
        f"Generated on: {generated_on.strftime('%m/%d/%Y')}",
        "",
        "=== OVERALL SCORE ===",
        f"Score: {total}/{max_score} ({overall_percentage(total, max_score)}%)",
        f"Security Level: {level.title}",
        level.description,
        "",
        "=== CATEGORY BREAKDOWN ===",
    ]
    for category, aggregate in aggregates.items():
        lines.append(f"{category}: {aggregate.total}/{aggregate.possible} ({aggregate.percentage}%)")

    lines += ["", "=== TOP RECOMMENDATIONS ==="]
    for index, rec in enumerate(recommendations, start=1):
        lines.append(f"{index}. [{rec.priority}] {rec.action}")
        lines.append(f"   {rec.description}")
        lines.append("")

    if advice:
        lines.append("=== PERSONALIZED ADVICE ===")
        lines += [f"• {item}" for item in advice]
        lines.append("")

    lines.append("=== SECURITY RESOURCES ===")
    lines += [f"• {resource['title']}: {resource['url']}" for resource in SECURITY_RESOURCES]
    return "\n".join(lines) + "\n"


def category_frame(aggregates: Dict[str, CategoryAggregate]) -> pd.DataFrame:
    """One row per category: score, possible, percentage, answered count."""
    rows = [
        {
            "Category": category,
            "Score": aggregate.total,
            "Possible": aggregate.possible,
            "Percentage": aggregate.percentage,
            "Answered": aggregate.questions,
        }
        for category, aggregate in aggregates.items()
    ]
    return pd.DataFrame(rows, columns=["Category", "Score", "Possible", "Percentage", "Answered"])


def export_csv(aggregates: Dict[str, CategoryAggregate]) -> str:
    return category_frame(aggregates).to_csv(index=False)
