# assessment/session.py
"""
Answer Record lifecycle.

The record grows by exactly one score per interaction (answer or skip),
shrinks by one on "back", and is cleared on reset. Every mutation bumps
``generation`` so advice requests started before the mutation can be
recognised as stale when their result arrives.
"""

from __future__ import annotations
from typing import Sequence

from state import AssessmentState
from assessment.questions import QUESTIONS, Question
from assessment.config import POINTS_PER_QUESTION
from operation.logging import get_logger

logger = get_logger(__name__)


def new_state() -> AssessmentState:
    return AssessmentState(
        answers=[],
        show_results=False,
        generation=0,
        previous_score=None,
    )


def _bump(state: AssessmentState) -> None:
    state["generation"] = state.get("generation", 0) + 1


def current_index(state: AssessmentState) -> int:
    """Index of the next question to answer."""
    return len(state.get("answers", []))


def is_complete(state: AssessmentState, questions: Sequence[Question] = QUESTIONS) -> bool:
    return len(state.get("answers", [])) >= len(questions)


def record_answer(
    state: AssessmentState, score: int, questions: Sequence[Question] = QUESTIONS
) -> bool:
    """
    Append a score for the current question.

    Args:
        state: Assessment state, mutated in place
        score: Points awarded by the selected choice
        questions: Question bank

    Returns:
        True if the score was recorded, False if the assessment was already
        complete (answers are not accepted again until reset)

    Raises:
        ValueError: if the score is outside [0, POINTS_PER_QUESTION]
    """
    if not 0 <= score <= POINTS_PER_QUESTION:
        raise ValueError(f"Score must be between 0 and {POINTS_PER_QUESTION}, got {score}")
    if is_complete(state, questions):
        logger.debug("Ignoring answer: assessment already complete")
        return False

    answers = list(state.get("answers", []))
    answers.append(score)
    state["answers"] = answers
    _bump(state)

    if len(answers) == len(questions):
        state["show_results"] = True
        logger.info(f"Assessment complete with total score {sum(answers)}")
    return True


def skip_question(state: AssessmentState, questions: Sequence[Question] = QUESTIONS) -> bool:
    """Skipping records a score of 0."""
    return record_answer(state, 0, questions)


def go_back(state: AssessmentState) -> bool:
    """Drop the last recorded score. Returns False when there is nothing to undo."""
    answers = list(state.get("answers", []))
    if not answers:
        return False
    answers.pop()
    state["answers"] = answers
    state["show_results"] = False
    _bump(state)
    return True


def reset(state: AssessmentState, questions: Sequence[Question] = QUESTIONS) -> None:
    """Clear the record, remembering the last completed total as ``previous_score``."""
    if is_complete(state, questions):
        state["previous_score"] = sum(state["answers"])
    state["answers"] = []
    state["show_results"] = False
    _bump(state)
    logger.info("Assessment reset")


def begin_request(state: AssessmentState) -> int:
    """Token for an advice request started now."""
    return state.get("generation", 0)


def is_current(state: AssessmentState, token: int) -> bool:
    """True while no mutation happened since ``begin_request`` returned ``token``."""
    return state.get("generation", 0) == token
