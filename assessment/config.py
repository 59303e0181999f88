"""
Assessment Configuration

This file contains the tunable constants of the assessment: the security
level buckets, priority and risk level tables, the comparison baselines
shown on the results page, the static resource links and the recent
incident feed. Scoring, recommendation and risk code read these values
instead of hardcoding them.

Author: PrivScore
Date: 2025
"""

from typing import Dict, Any, List, Tuple

# =============================================================================
# SCORING
# =============================================================================

POINTS_PER_QUESTION = 10

# An answer scoring below this is considered weak and may trigger a
# question-specific recommendation.
WEAK_ANSWER_THRESHOLD = 7

MAX_RECOMMENDATIONS = 3

# =============================================================================
# SECURITY LEVELS (lower bound inclusive, checked top-down)
# =============================================================================

SECURITY_LEVELS: List[Dict[str, Any]] = [
    {
        "min_percentage": 90,
        "label": "Champion",
        "title": "Security Champion",
        "description": "Excellent security practices! You're well-protected against most threats.",
        "color": "green",
        "icon": "award",
        "recommendations": [
            "Maintain your excellent security habits",
            "Help others improve their security",
            "Stay updated on emerging threats",
            "Consider advanced security certifications",
        ],
        "insight": (
            "You're in the top 10% of security-conscious users. Your practices significantly "
            "reduce your risk of cyber attacks."
        ),
    },
    {
        "min_percentage": 70,
        "label": "Aware",
        "title": "Security Aware",
        "description": "Good foundation with some areas to strengthen for better protection.",
        "color": "blue",
        "icon": "shield",
        "recommendations": [
            "Address remaining security gaps",
            "Automate security processes where possible",
            "Regular security reviews",
            "Advanced threat protection tools",
        ],
        "insight": (
            "You have solid security fundamentals but could benefit from addressing a few key "
            "vulnerabilities."
        ),
    },
    {
        "min_percentage": 50,
        "label": "Developing",
        "title": "Developing Security",
        "description": "You've taken some important steps, but significant vulnerabilities remain.",
        "color": "yellow",
        "icon": "info",
        "recommendations": [
            "Focus on critical vulnerabilities first",
            "Implement basic security tools",
            "Create security habits and routines",
            "Regular password and account reviews",
        ],
        "insight": (
            "You're on the right track but need to prioritize the most critical security "
            "measures to reduce your risk."
        ),
    },
    {
        "min_percentage": 0,
        "label": "At Risk",
        "title": "At Risk",
        "description": "Your current practices leave you vulnerable to common security threats.",
        "color": "red",
        "icon": "alert-circle",
        "recommendations": [
            "Immediate action required on all fronts",
            "Start with two-factor authentication",
            "Use a password manager",
            "Enable automatic updates",
            "Basic security awareness training",
        ],
        "insight": (
            "Your security posture needs immediate attention. Multiple critical vulnerabilities "
            "put you at high risk of cyber attacks."
        ),
    },
]

# =============================================================================
# RECOMMENDATION PRIORITIES
# =============================================================================

PRIORITY_LEVELS: Dict[str, Dict[str, str]] = {
    "CRITICAL": {"color": "red", "description": "Immediate action required - high security risk"},
    "HIGH": {"color": "orange", "description": "Important security improvement needed"},
    "MEDIUM": {"color": "blue", "description": "Recommended security enhancement"},
    "LOW": {"color": "gray", "description": "Optional security improvement"},
    "EXCELLENT": {"color": "green", "description": "Excellent security practices - maintain current level"},
    "MAINTENANCE": {"color": "purple", "description": "Regular maintenance recommended"},
}

# Category percentage -> priority for category-level recommendations. Uses the
# same bucket edges as the security levels.
CATEGORY_PRIORITY_BUCKETS: List[Tuple[int, str]] = [
    (90, "MAINTENANCE"),
    (70, "LOW"),
    (50, "MEDIUM"),
    (0, "HIGH"),
]

# =============================================================================
# RISK LEVELS
# =============================================================================

# criticalRisks count -> risk level, checked top-down.
RISK_LEVEL_THRESHOLDS: List[Tuple[int, str]] = [
    (6, "EXTREME"),
    (4, "HIGH"),
    (2, "MODERATE"),
    (0, "LOW"),
]

MULTIPLE_CRITICAL_THRESHOLD = 3
CREDENTIAL_THEFT_ACCOUNT_THRESHOLD = 2
CREDENTIAL_THEFT_AWARENESS_THRESHOLD = 1
ENDPOINT_WEAKNESS_THRESHOLD = 2

RISK_LEVELS: Dict[str, Dict[str, str]] = {
    "EXTREME": {
        "color": "red",
        "description": "Multiple critical vulnerabilities detected",
        "action_required": "Immediate comprehensive security overhaul needed",
        "threat_level": "Very High",
    },
    "HIGH": {
        "color": "orange",
        "description": "Several important security gaps identified",
        "action_required": "Prompt action needed to address key vulnerabilities",
        "threat_level": "High",
    },
    "MODERATE": {
        "color": "yellow",
        "description": "Some security improvements recommended",
        "action_required": "Regular security maintenance and improvements",
        "threat_level": "Medium",
    },
    "LOW": {
        "color": "green",
        "description": "Good security posture with minor areas for improvement",
        "action_required": "Maintain current practices and stay vigilant",
        "threat_level": "Low",
    },
}

# =============================================================================
# COMPARISON BASELINES
# =============================================================================

COMPARISON_BASELINES: Dict[str, int] = {
    "General Public": 64,
    "Tech Savvy": 78,
    "Security Professionals": 92,
}

# percentage -> rank, checked top-down
BASELINE_RANKS: List[Tuple[int, str]] = [
    (92, "Expert"),
    (78, "Advanced"),
    (64, "Average"),
    (0, "Beginner"),
]

# =============================================================================
# RESOURCES
# =============================================================================

SECURITY_RESOURCES: List[Dict[str, str]] = [
    {
        "title": "Two-Factor Authentication Guide",
        "url": "https://www.cisa.gov/secure-our-world/turn-on-multifactor-authentication",
    },
    {
        "title": "Check for Data Breaches",
        "url": "https://haveibeenpwned.com/",
    },
    {
        "title": "NIST Password Security Guide",
        "url": "https://www.nist.gov/cybersecurity/how-do-i-create-good-password",
    },
    {
        "title": "Avoid Phishing Attacks",
        "url": "https://www.cisa.gov/news-events/news/avoiding-social-engineering-and-phishing-attacks",
    },
]

SECURITY_INCIDENTS: List[Dict[str, str]] = [
    {
        "title": "Oracle Cloud Security Breach Exposes 6 Million Records",
        "date": "March 21, 2025",
        "description": (
            "Threat actor compromised Oracle Cloud SSO and LDAP systems, affecting over 140,000 "
            "tenants. Check if your company uses Oracle Cloud services."
        ),
        "severity": "high",
    },
    {
        "title": "Yale New Haven Health System Data Breach",
        "date": "February 2025",
        "description": (
            "Healthcare data breach affects approximately 5.6 million patients. Personal and "
            "medical information potentially compromised."
        ),
        "severity": "high",
    },
    {
        "title": "Western Sydney University Student Data Exposed",
        "date": "February 2025",
        "description": (
            "Personal information of 10,000 current and former students compromised through "
            "single sign-on system breach."
        ),
        "severity": "medium",
    },
]


def get_security_incidents() -> List[Dict[str, str]]:
    """Recent incidents shown alongside the results."""
    return list(SECURITY_INCIDENTS)
