# advice/extraction.py
"""
Pure text extraction for remote text-generation responses.

Responses arrive as a bare string, an object with ``generated_text`` or
``text``, or a list of such objects. These functions turn any of those into
at most three candidate strings and apply the quality gate; nothing here
touches the network, so every edge case can be tested with literal fixtures.
"""

from __future__ import annotations
import re
from typing import Any, List, Optional

from advice.errors import ExtractionInsufficient

# Quality gate on the final joined text
MIN_TEXT_LENGTH = 30
MAX_TEXT_LENGTH = 500

# Plausible length of a single sentence or paragraph
MIN_SENTENCE_LENGTH = 20
MAX_SENTENCE_LENGTH = 300

MAX_ITEMS = 3

_NUMBERED_ITEM = re.compile(r"^\s*\d+[.)]\s+(.+?)\s*$", re.MULTILINE)
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_WHITESPACE = re.compile(r"\s+")


def normalize_response(raw: Any) -> Optional[str]:
    """
    Reduce any supported response shape to a single text blob.

    Returns:
        The text, or None when the shape is not recognised
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        for key in ("generated_text", "text"):
            value = raw.get(key)
            if isinstance(value, str):
                return value
        return None
    if isinstance(raw, list):
        for item in raw:
            text = normalize_response(item)
            if text is not None:
                return text
        return None
    return None


def strip_prompt_echo(text: str, prompt: str) -> str:
    """Remove the prompt when the model echoed it (or part of it) at the start."""
    text = text.lstrip()
    prompt = prompt.strip()
    if not prompt:
        return text
    if text.startswith(prompt):
        return text[len(prompt):].lstrip()
    if prompt.startswith(text.rstrip()):
        # the whole response is a truncated echo
        return ""
    return text


def _clean(item: str) -> str:
    return _WHITESPACE.sub(" ", item).strip().strip('"').strip()


def _within_range(item: str) -> bool:
    return MIN_SENTENCE_LENGTH <= len(item) <= MAX_SENTENCE_LENGTH


def numbered_items(text: str) -> List[str]:
    items = [_clean(match) for match in _NUMBERED_ITEM.findall(text)]
    return [item for item in items if item and len(item) <= MAX_SENTENCE_LENGTH][:MAX_ITEMS]


def sentences(text: str) -> List[str]:
    parts = [_clean(part) for part in _SENTENCE_BREAK.split(text)]
    return [part for part in parts if _within_range(part)][:MAX_ITEMS]


def paragraphs(text: str) -> List[str]:
    parts = [_clean(part) for part in _PARAGRAPH_BREAK.split(text)]
    return [part for part in parts if _within_range(part)][:MAX_ITEMS]


def extract_candidates(raw: Any, prompt: str = "") -> List[str]:
    """
    Extract up to three candidate strings from a raw response.

    Tries numbered list items first, then sentences, then paragraphs.

    Args:
        raw: Provider-shaped response
        prompt: The prompt that was sent, stripped if echoed

    Returns:
        Candidate strings; empty when nothing usable was found
    """
    text = normalize_response(raw)
    if text is None:
        return []
    text = strip_prompt_echo(text, prompt)
    if not text.strip():
        return []

    for strategy in (numbered_items, sentences, paragraphs):
        found = strategy(text)
        if found:
            return found
    return []


def passes_quality_gate(text: str) -> bool:
    return MIN_TEXT_LENGTH <= len(text.strip()) <= MAX_TEXT_LENGTH


def extract_advice(raw: Any, prompt: str = "") -> List[str]:
    """
    Advice items from a response, or raise if they fail the quality gate.

    Raises:
        ExtractionInsufficient: no candidates, or joined text too short/long
    """
    items = extract_candidates(raw, prompt)
    if not items:
        raise ExtractionInsufficient("No usable text in response")
    if not passes_quality_gate(" ".join(items)):
        raise ExtractionInsufficient(f"Extracted text failed quality gate ({len(' '.join(items))} chars)")
    return items


def extract_explanation(raw: Any, prompt: str = "") -> str:
    """
    A one or two sentence explanation from a response.

    Raises:
        ExtractionInsufficient: no candidates, or text too short/long
    """
    items = extract_candidates(raw, prompt)
    explanation = " ".join(items[:2]).strip()
    if explanation and explanation[-1] not in ".!?":
        explanation += "."
    if not explanation or not passes_quality_gate(explanation):
        raise ExtractionInsufficient("Explanation missing or failed quality gate")
    return explanation
