# assessment package
from .questions import AnswerChoice, Question, QUESTIONS, get_questions, get_question, get_question_by_id, categories, max_score
from .scoring import (
    CategoryAggregate,
    SecurityLevel,
    total_score,
    category_aggregates,
    security_level,
    overall_percentage,
    weakest_categories,
    strongest_categories,
    answer_severity,
    security_insights,
    compare_to_baselines,
)

__all__ = [
    'AnswerChoice',
    'Question',
    'QUESTIONS',
    'get_questions',
    'get_question',
    'get_question_by_id',
    'categories',
    'max_score',
    'CategoryAggregate',
    'SecurityLevel',
    'total_score',
    'category_aggregates',
    'security_level',
    'overall_percentage',
    'weakest_categories',
    'strongest_categories',
    'answer_severity',
    'security_insights',
    'compare_to_baselines',
]
