"""
Unit tests for advice/extraction.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import unittest
from advice.errors import ExtractionInsufficient
from advice.extraction import (
    normalize_response,
    strip_prompt_echo,
    numbered_items,
    extract_candidates,
    extract_advice,
    extract_explanation,
)

TWO_SENTENCES = (
    "Weak passwords let attackers walk into every account you own. "
    "Two-factor authentication stops most of those takeovers cold."
)


class TestExtraction(unittest.TestCase):
    """Test cases for response text extraction."""

    def setUp(self):
        """Set up test fixtures."""
        self.prompt = "Explain why backups matter."

    def test_normalize_shapes(self):
        """Strings, generated_text/text objects and lists are understood."""
        self.assertEqual(normalize_response("plain"), "plain")
        self.assertEqual(normalize_response({"generated_text": "a"}), "a")
        self.assertEqual(normalize_response({"text": "b"}), "b")
        self.assertEqual(normalize_response([{"other": 1}, {"generated_text": "c"}]), "c")
        self.assertIsNone(normalize_response({"generated_text": 5}))
        self.assertIsNone(normalize_response(42))
        self.assertIsNone(normalize_response([]))
        self.assertIsNone(normalize_response(None))

    def test_strip_prompt_echo(self):
        """An echoed prompt is removed."""
        self.assertEqual(strip_prompt_echo(self.prompt + " Because disks fail.", self.prompt),
                         "Because disks fail.")
        self.assertEqual(strip_prompt_echo("Explain why", self.prompt), "")
        self.assertEqual(strip_prompt_echo("Something else", self.prompt), "Something else")
        self.assertEqual(strip_prompt_echo("Anything", ""), "Anything")

    def test_numbered_items(self):
        """Numbered list items are preferred and capped at three."""
        text = "1. Use a password manager\n2) Turn on 2FA\n3. Update devices\n4. Back up files"
        self.assertEqual(numbered_items(text), ["Use a password manager", "Turn on 2FA", "Update devices"])
        self.assertEqual(extract_candidates(text), ["Use a password manager", "Turn on 2FA", "Update devices"])

    def test_sentences(self):
        """Sentences shorter than the minimum are dropped."""
        candidates = extract_candidates("Too short. " + TWO_SENTENCES)
        self.assertEqual(candidates, [
            "Weak passwords let attackers walk into every account you own.",
            "Two-factor authentication stops most of those takeovers cold.",
        ])

    def test_unusable_responses(self):
        """Nothing usable yields no candidates."""
        self.assertEqual(extract_candidates(None), [])
        self.assertEqual(extract_candidates({"error": "loading"}), [])
        self.assertEqual(extract_candidates(self.prompt, self.prompt), [])
        self.assertEqual(extract_candidates("   "), [])

    def test_short_text_rejected(self):
        """A ten character reply fails the quality gate."""
        with self.assertRaises(ExtractionInsufficient):
            extract_advice("too short!")
        with self.assertRaises(ExtractionInsufficient):
            extract_explanation("too short!")

    def test_two_sentence_explanation_accepted(self):
        """A two sentence reply of about 120 characters passes."""
        self.assertEqual(extract_explanation([{"generated_text": TWO_SENTENCES}]), TWO_SENTENCES)

    def test_explanation_gets_final_period(self):
        text = "1. Ransomware can lock every file you have on the laptop"
        self.assertEqual(extract_explanation(text), "Ransomware can lock every file you have on the laptop.")

    def test_explanation_strips_echo(self):
        raw = [{"generated_text": self.prompt + " " + TWO_SENTENCES}]
        self.assertEqual(extract_explanation(raw, self.prompt), TWO_SENTENCES)

    def test_advice_too_long(self):
        """Joined advice over the maximum length is rejected."""
        item = "Enable multi factor authentication everywhere " * 6
        text = "\n".join(f"{n}. {item.strip()}" for n in range(1, 4))
        with self.assertRaises(ExtractionInsufficient):
            extract_advice(text)


if __name__ == '__main__':
    unittest.main()
