# app.py
from __future__ import annotations
from datetime import date
from typing import Optional

from dotenv import load_dotenv

from advice import AdviceService
from assessment import QUESTIONS, max_score, category_aggregates, security_level, total_score
from assessment.scoring import weakest_categories, security_insights, compare_to_baselines
from assessment.session import (
    new_state,
    current_index,
    is_complete,
    record_answer,
    skip_question,
    go_back,
    reset,
    begin_request,
    is_current,
)
from operation.logging import get_logger, set_correlation_id, setup_logging_from_env
from recommendations import analyze_risk_patterns, derive_recommendations, pattern_explanation
from state import AssessmentState
from utils.export_utils import export_filename, export_text

logger = get_logger(__name__)

HELP_TEXT = "Commands: <number> answer | s skip | b back | h why does this matter? | r restart | e export | q quit"

# ---------------------------
# Rendering
# ---------------------------

def render_question(state: AssessmentState) -> str:
    index = current_index(state)
    question = QUESTIONS[index]
    lines = [f"\n[{index + 1}/{len(QUESTIONS)}] {question.category}", question.prompt]
    for number, choice in enumerate(question.choices, start=1):
        lines.append(f"  {number}) {choice.label}")
    return "\n".join(lines)


def render_results(state: AssessmentState, service: AdviceService) -> str:
    answers = state["answers"]
    total = total_score(answers)
    maximum = max_score()
    aggregates = category_aggregates(answers)
    level = security_level(total, maximum)
    comparison = compare_to_baselines(total, maximum)

    lines = [
        "\n=== Your PrivScore ===",
        f"Score: {total}/{maximum}  -  {level.title}",
        level.description,
    ]
    previous = state.get("previous_score")
    if previous is not None:
        lines.append(f"Change since last run: {total - previous:+d} points")
    lines.append(f"Rank: {comparison['rank']}")
    lines += [f"  {insight}" for insight in security_insights(aggregates, total, maximum)]

    lines.append("\nCategory breakdown:")
    for category, aggregate in aggregates.items():
        lines.append(f"  {category:<26} {aggregate.total:>3}/{aggregate.possible:<3} {aggregate.percentage:>3}%")

    lines.append("\nTop recommendations:")
    for number, rec in enumerate(derive_recommendations(answers, aggregates=aggregates), start=1):
        lines.append(f"  {number}. [{rec.priority}] {rec.action} ({rec.time_to_implement})")
        lines += [f"     - {step}" for step in rec.steps]

    risk = analyze_risk_patterns(answers)
    lines.append(f"\nRisk level: {risk.risk_level} ({risk.critical_count} critical answers)")
    lines += [f"  • {pattern_explanation(tag)}" for tag in risk.patterns]

    weak_areas = [category for category, aggregate in weakest_categories(aggregates) if aggregate.percentage < 100]
    token = begin_request(state)
    advice = service.personalized_advice(weak_areas)
    if is_current(state, token):
        lines.append("\nPersonalized advice:")
        lines += [f"  {item}" for item in advice]
    return "\n".join(lines)


def handle_input(state: AssessmentState, text: str, service: AdviceService) -> Optional[str]:
    """
    Apply one line of user input.

    Returns:
        Text to print, or None when the user quits
    """
    command = text.strip().lower()
    if command in ("q", "quit", "exit"):
        return None
    if command in ("r", "restart"):
        reset(state)
        return "Restarting the assessment." + render_question(state)
    if command in ("b", "back"):
        if not go_back(state):
            return "Already at the first question." + render_question(state)
        return render_question(state)

    if is_complete(state):
        if command in ("e", "export"):
            return _export(state)
        return "Assessment complete. Type r to restart, e to export or q to quit."

    question = QUESTIONS[current_index(state)]
    prefix = ""
    if command in ("h", "help", "?"):
        return service.question_explanation(question) + "\n" + HELP_TEXT
    if command in ("s", "skip"):
        skip_question(state)
    elif command.isdigit() and 1 <= int(command) <= len(question.choices):
        choice = question.choices[int(command) - 1]
        record_answer(state, choice.score)
        prefix = f"Tip: {choice.tip}\n"
    else:
        return HELP_TEXT

    if is_complete(state):
        return prefix + render_results(state, service) + "\n\nType e to export, r to restart or q to quit."
    return prefix + render_question(state)


def _export(state: AssessmentState) -> str:
    answers = state["answers"]
    total = total_score(answers)
    aggregates = category_aggregates(answers)
    report = export_text(
        total,
        max_score(),
        security_level(total, max_score()),
        derive_recommendations(answers, aggregates=aggregates),
        aggregates,
    )
    filename = export_filename(date.today())
    with open(filename, "w", encoding="utf-8") as f:
        f.write(report)
    logger.info(f"Exported results to {filename}")
    return f"Results saved to {filename}"

# ---------------------------
# Run (simple REPL)
# ---------------------------
if __name__ == "__main__":
    load_dotenv()  # optional HUGGING_FACE_API_KEY / PRIVSCORE_* settings
    setup_logging_from_env()
    set_correlation_id()

    service = AdviceService()
    state = new_state()

    print("Welcome to PrivScore! Answer each question to see how well you're protected online.")
    print(HELP_TEXT)
    print(render_question(state))

    while True:
        reply = handle_input(state, input("> "), service)
        if reply is None:
            break
        print(reply)
