# recommendations/risk_patterns.py
"""
Risk pattern analysis over a completed Answer Record.

Every answer scoring 0 is a critical risk. Critical answers tag their
category, and combinations of them add cross-category patterns. The
analysis is only defined for a complete record.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from assessment.config import (
    RISK_LEVEL_THRESHOLDS,
    RISK_LEVELS,
    MULTIPLE_CRITICAL_THRESHOLD,
    CREDENTIAL_THEFT_ACCOUNT_THRESHOLD,
    CREDENTIAL_THEFT_AWARENESS_THRESHOLD,
    ENDPOINT_WEAKNESS_THRESHOLD,
)
from assessment.questions import QUESTIONS, Question
from assessment.scoring import check_record_length

# Category of a critical answer -> pattern tag
CATEGORY_PATTERNS: Dict[str, str] = {
    "Account Security": "high_account_risk",
    "Digital Awareness": "social_engineering_vulnerable",
    "Device Security": "device_vulnerability",
}

PATTERN_EXPLANATIONS: Dict[str, str] = {
    "high_account_risk": "Your account security practices put you at high risk of credential theft",
    "social_engineering_vulnerable": "You may be susceptible to phishing and social engineering attacks",
    "device_vulnerability": "Unprotected or outdated devices leave you open to malware and exploits",
    "multiple_critical_vulnerabilities": (
        "Multiple critical security gaps significantly increase your attack surface"
    ),
    "high_credential_theft_risk": (
        "Weak account protection combined with low scam awareness makes stolen credentials likely"
    ),
    "endpoint_security_weakness": (
        "Several device security gaps mean a single compromised device could expose everything"
    ),
}


class IncompleteAssessmentError(ValueError):
    """Risk analysis requested before every question was answered."""


@dataclass(frozen=True)
class RiskAnalysis:
    patterns: Tuple[str, ...]   # unique tags, first-seen order
    risk_level: str
    critical_count: int

    @property
    def details(self) -> Dict[str, str]:
        return RISK_LEVELS[self.risk_level]


def risk_level_for(critical_count: int) -> str:
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if critical_count >= threshold:
            return level
    return RISK_LEVEL_THRESHOLDS[-1][1]


def pattern_explanation(tag: str) -> str:
    return PATTERN_EXPLANATIONS.get(tag, tag)


def analyze_risk_patterns(
    answers: Sequence[int], questions: Sequence[Question] = QUESTIONS
) -> RiskAnalysis:
    """
    Detect risk patterns in a complete Answer Record.

    Args:
        answers: Answer Record, exactly one score per question
        questions: Question bank (for the category of each index)

    Returns:
        RiskAnalysis with deduplicated patterns, risk level and critical count

    Raises:
        IndexError: if the record is longer than the bank
        IncompleteAssessmentError: if the record is shorter than the bank
    """
    check_record_length(answers, questions)
    if len(answers) < len(questions):
        raise IncompleteAssessmentError(
            f"Risk analysis needs all {len(questions)} answers, got {len(answers)}"
        )

    tags: List[str] = []
    critical_by_category: Dict[str, int] = {}
    critical = 0

    for index, score in enumerate(answers):
        if score != 0:
            continue
        critical += 1
        category = questions[index].category
        critical_by_category[category] = critical_by_category.get(category, 0) + 1
        tag = CATEGORY_PATTERNS.get(category)
        if tag:
            tags.append(tag)

    if critical >= MULTIPLE_CRITICAL_THRESHOLD:
        tags.append("multiple_critical_vulnerabilities")
    if (
        critical_by_category.get("Account Security", 0) >= CREDENTIAL_THEFT_ACCOUNT_THRESHOLD
        and critical_by_category.get("Digital Awareness", 0) >= CREDENTIAL_THEFT_AWARENESS_THRESHOLD
    ):
        tags.append("high_credential_theft_risk")
    if critical_by_category.get("Device Security", 0) >= ENDPOINT_WEAKNESS_THRESHOLD:
        tags.append("endpoint_security_weakness")

    return RiskAnalysis(
        patterns=tuple(dict.fromkeys(tags)),
        risk_level=risk_level_for(critical),
        critical_count=critical,
    )
