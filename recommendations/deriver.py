# recommendations/deriver.py
"""
Recommendation deriver.

Turns an Answer Record into at most three prioritized action items:
question-specific recommendations for a few high-value questions first,
then canned category recommendations for the weakest categories, and a
"maintain" item for excellent results. The output depends only on the
answers; there is no randomness and no clock.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from assessment.config import (
    WEAK_ANSWER_THRESHOLD,
    MAX_RECOMMENDATIONS,
    CATEGORY_PRIORITY_BUCKETS,
    PRIORITY_LEVELS,
    SECURITY_LEVELS,
)
from assessment.questions import QUESTIONS, Question, max_score
from assessment.scoring import CategoryAggregate, category_aggregates, check_record_length, total_score


@dataclass(frozen=True)
class Recommendation:
    priority: str
    category: str
    action: str
    description: str
    steps: Tuple[str, ...]
    impact: str = ""
    time_to_implement: str = ""


# =============================================================================
# Question-specific recommendations (keyed by question index)
# =============================================================================

def _two_factor(score: int) -> Optional[Recommendation]:
    if score == 0:
        return Recommendation(
            priority="CRITICAL",
            category="Account Security",
            action="Set up two-factor authentication immediately",
            description="You have no 2FA protection. This single step prevents 99% of account takeovers.",
            impact="Prevents 99% of account takeovers",
            time_to_implement="15 minutes",
            steps=(
                "Go to accounts.google.com → Security → 2-Step Verification",
                "Add your phone number for verification codes",
                "Repeat for banking, social media, and work accounts",
                "Consider using Google Authenticator app for extra security",
            ),
        )
    if score == 5:
        return Recommendation(
            priority="HIGH",
            category="Account Security",
            action="Complete two-factor authentication setup",
            description="You've started but need to add 2FA to ALL important accounts.",
            impact="Comprehensive account protection",
            time_to_implement="30 minutes",
            steps=(
                "List all your important accounts (email, banking, social media, work)",
                "Check which ones already have 2FA enabled",
                "Add 2FA to remaining accounts, starting with banking",
                "Use authenticator apps instead of SMS when possible",
            ),
        )
    return None


def _password_manager(score: int) -> Optional[Recommendation]:
    if score != 0:
        return None
    return Recommendation(
        priority="CRITICAL",
        category="Account Security",
        action="Stop reusing passwords - get a password manager",
        description="Using the same password everywhere means one breach exposes everything.",
        impact="Protects all accounts from credential stuffing attacks",
        time_to_implement="1 hour",
        steps=(
            "Download Bitwarden (free) or 1Password",
            "Import existing passwords from your browser",
            "Generate new unique passwords for email and banking first",
            "Never reuse passwords again",
        ),
    )


def _automatic_updates(score: int) -> Optional[Recommendation]:
    if score > 3:
        return None
    return Recommendation(
        priority="CRITICAL" if score == 0 else "HIGH",
        category="Device Security",
        action="Enable automatic updates on all devices",
        description="Outdated devices are vulnerable to known security exploits.",
        impact="Protects against known vulnerabilities",
        time_to_implement="20 minutes",
        steps=(
            "Enable automatic updates on your phone (Settings → Software Update)",
            "Enable automatic updates on Windows (Settings → Update & Security)",
            "Enable automatic updates on Mac (System Preferences → Software Update)",
            "Set apps to auto-update in app stores",
        ),
    )


def _phishing(score: int) -> Optional[Recommendation]:
    if score != 0:
        return None
    return Recommendation(
        priority="HIGH",
        category="Digital Awareness",
        action="Learn to identify phishing attempts",
        description="You've fallen for scams before. Build recognition skills.",
        impact="Prevents social engineering attacks",
        time_to_implement="2 hours learning",
        steps=(
            "Take free phishing awareness training online",
            "Learn warning signs: urgent language, spelling errors, odd sender addresses",
            "Always verify unexpected requests by calling the company directly",
            "Use official websites instead of clicking email links",
        ),
    )


QUESTION_OVERRIDES: Dict[int, Callable[[int], Optional[Recommendation]]] = {
    0: _two_factor,
    1: _password_manager,
    6: _automatic_updates,
    9: _phishing,
}

# =============================================================================
# Category templates: (action, description, impact, time, steps)
# =============================================================================

CATEGORY_TEMPLATES: Dict[str, Tuple[str, str, str, str, Tuple[str, ...]]] = {
    "Account Security": (
        "Strengthen account security practices",
        "Multiple account security improvements needed.",
        "Reduces account takeover risk",
        "1-2 hours",
        ("Review and strengthen passwords", "Enable 2FA on remaining accounts",
         "Remove unnecessary app permissions"),
    ),
    "Device Security": (
        "Improve device security posture",
        "Your devices need better protection against threats.",
        "Prevents malware and unauthorized access",
        "1 hour",
        ("Install security software on all devices", "Enable automatic updates",
         "Use VPN for public Wi-Fi"),
    ),
    "Data Protection": (
        "Create secure backup strategy",
        "Protect your important data from loss or ransomware.",
        "Prevents data loss",
        "2 hours setup",
        ("Set up cloud backup for important files", "Create local backup to external drive",
         "Test restore process monthly"),
    ),
    "Digital Awareness": (
        "Develop threat recognition skills",
        "Improve your ability to spot and avoid online threats.",
        "Prevents social engineering attacks",
        "2-3 hours learning",
        ("Take phishing awareness training", "Learn current scam techniques",
         "Practice suspicious email identification"),
    ),
    "Privacy Protection": (
        "Enhance privacy controls",
        "Better control over your personal information sharing.",
        "Reduces data exposure",
        "1 hour",
        ("Review social media privacy settings", "Audit app permissions",
         "Use privacy-focused browser"),
    ),
    "Mobile & Smart Home": (
        "Secure mobile and IoT devices",
        "Strengthen security for connected devices.",
        "Prevents device compromise",
        "1 hour",
        ("Use strong device lock screens", "Change default IoT passwords",
         "Review location tracking settings"),
    ),
    "Personal Data Management": (
        "Monitor and manage data exposure",
        "Stay informed about your data in breaches.",
        "Early breach detection",
        "30 minutes",
        ("Check Have I Been Pwned regularly", "Set up breach notifications",
         "Never share verification codes"),
    ),
}

GENERAL_TEMPLATE = (
    "Create comprehensive security plan",
    "Develop a systematic approach to your digital security.",
    "Overall security improvement",
    "2 hours",
    ("Assess current security practices", "Prioritize highest-impact improvements",
     "Create security maintenance schedule"),
)

MAINTAIN_EXCELLENT = Recommendation(
    priority="EXCELLENT",
    category="General Security",
    action="Maintain your excellent security practices",
    description="You have outstanding security habits. Keep up the great work!",
    impact="Sustained high security posture",
    time_to_implement="Ongoing",
    steps=(
        "Review security settings quarterly",
        "Stay updated on current threats",
        "Help others improve their security",
        "Consider advanced security training",
    ),
)


def priority_for_percentage(percentage: int) -> str:
    """Priority of a category recommendation, from the category's percentage."""
    for threshold, priority in CATEGORY_PRIORITY_BUCKETS:
        if percentage >= threshold:
            return priority
    return CATEGORY_PRIORITY_BUCKETS[-1][1]


def priority_description(priority: str) -> str:
    return PRIORITY_LEVELS.get(priority, {}).get("description", "")


def category_recommendation(category: str, percentage: int) -> Recommendation:
    action, description, impact, time_to_implement, steps = CATEGORY_TEMPLATES.get(
        category, GENERAL_TEMPLATE
    )
    return Recommendation(
        priority=priority_for_percentage(percentage),
        category=category if category in CATEGORY_TEMPLATES else "General Security",
        action=action,
        description=description,
        impact=impact,
        time_to_implement=time_to_implement,
        steps=steps,
    )


def derive_recommendations(
    answers: Sequence[int],
    questions: Sequence[Question] = QUESTIONS,
    aggregates: Optional[Dict[str, CategoryAggregate]] = None,
) -> List[Recommendation]:
    """
    Derive the ranked recommendation list for an Answer Record.

    Args:
        answers: Answer Record (may be partial)
        questions: Question bank
        aggregates: Precomputed category aggregates for ``answers``

    Returns:
        Between one and three recommendations

    Raises:
        IndexError: if the record is longer than the bank
    """
    check_record_length(answers, questions)
    recommendations: List[Recommendation] = []

    for index, score in enumerate(answers):
        if score >= WEAK_ANSWER_THRESHOLD:
            continue
        override = QUESTION_OVERRIDES.get(index)
        if override is None:
            continue
        recommendation = override(score)
        if recommendation is not None:
            recommendations.append(recommendation)

    if len(recommendations) < MAX_RECOMMENDATIONS:
        if aggregates is None:
            aggregates = category_aggregates(answers, questions)
        # sorted() is stable, so ties keep category declaration order
        ranked = sorted(aggregates.items(), key=lambda item: item[1].percentage)
        covered = {recommendation.category for recommendation in recommendations}
        for category, aggregate in ranked:
            if len(recommendations) >= MAX_RECOMMENDATIONS:
                break
            if aggregate.percentage >= 100 or category in covered:
                continue
            recommendations.append(category_recommendation(category, aggregate.percentage))
            covered.add(category)

    champion_floor = SECURITY_LEVELS[0]["min_percentage"]
    if not recommendations and 100 * total_score(answers, questions) >= champion_floor * max_score(questions):
        recommendations.append(MAINTAIN_EXCELLENT)

    return recommendations[:MAX_RECOMMENDATIONS]
