# recommendations package
from .deriver import (
    Recommendation,
    derive_recommendations,
    priority_for_percentage,
    priority_description
)
from .risk_patterns import (
    RiskAnalysis,
    IncompleteAssessmentError,
    analyze_risk_patterns,
    pattern_explanation,
    risk_level_for
)

__all__ = [
    'Recommendation',
    'derive_recommendations',
    'priority_for_percentage',
    'priority_description',
    'RiskAnalysis',
    'IncompleteAssessmentError',
    'analyze_risk_patterns',
    'pattern_explanation',
    'risk_level_for'
]
