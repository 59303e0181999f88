"""
Advice Service Prompts and Generation Parameters

This file contains the prompt templates sent to the remote text-generation
models, the per-task generation parameters, and the user-facing messages
shown around AI/expert advice.
"""

from typing import Dict, Any, List

# Source markers prefixed to every piece of advice text
AI_MARKER = "🤖 AI: "
EXPERT_MARKER = "📋 Expert: "

# Personalized advice prompt (long-form task)
ADVICE_PROMPT_TEMPLATE = (
    "Give 3 cybersecurity recommendations for someone with weaknesses in: {areas}. "
    "Be specific and practical."
)

ADVICE_PARAMETERS: Dict[str, Any] = {
    "max_length": 300,
    "temperature": 0.8,
    "do_sample": True,
}

# Question explanation prompts, tried in order. Short low-temperature calls
# sometimes just echo the prompt, so later phrasings word it differently.
EXPLANATION_PROMPT_TEMPLATES: List[str] = [
    'Explain in simple terms why this cybersecurity question is important: "{question}". '
    "Give a practical reason in 1-2 sentences.",
    "Why does {category} matter for personal cybersecurity? Answer in two short sentences "
    'about this question: "{question}"',
    "A friend asks: {question} In one or two sentences, explain what could go wrong if "
    "they ignore this.",
]

EXPLANATION_PARAMETERS: Dict[str, Any] = {
    "max_length": 120,
    "temperature": 0.7,
    "do_sample": True,
}

# Tiny request used by the connection test
CONNECTION_TEST_PROMPT = "Test"
CONNECTION_TEST_PARAMETERS: Dict[str, Any] = {"max_length": 20}


def advice_prompt(weak_areas: List[str]) -> str:
    areas = ", ".join(weak_areas) if weak_areas else "general security"
    return ADVICE_PROMPT_TEMPLATE.format(areas=areas)


def explanation_prompts(question: str, category: str) -> List[str]:
    return [template.format(question=question, category=category) for template in EXPLANATION_PROMPT_TEMPLATES]


# Advice Messages Class
class AdviceMessages:
    """User-facing messages around AI and expert advice."""

    @staticmethod
    def ai_badge() -> str:
        return "🟢 AI-generated"

    @staticmethod
    def expert_badge() -> str:
        return "📋 Expert advice"

    @staticmethod
    def ai_disabled() -> str:
        """Shown when no transport is configured."""
        return (
            "AI features are not configured. You're seeing expert-written advice, "
            "which is always available."
        )

    @staticmethod
    def connection_result(success: bool, mode: str, message: str, time_ms: float) -> str:
        status = "✅" if success else "❌"
        return f"{status} {mode} connection: {message} ({time_ms:.0f} ms)"
