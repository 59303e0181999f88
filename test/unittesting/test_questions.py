"""
Unit tests for assessment/questions.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import unittest
from assessment.questions import (
    QUESTIONS,
    get_questions,
    get_question,
    get_question_by_id,
    categories,
    max_score,
)


class TestQuestionBank(unittest.TestCase):
    """Test cases for the question bank."""

    def setUp(self):
        """Set up test fixtures."""
        self.questions = get_questions()

    def test_question_count(self):
        """The bank holds eighteen questions with ids q1..q18 in order."""
        self.assertEqual(len(self.questions), 18)
        self.assertEqual([q.id for q in self.questions], [f"q{i}" for i in range(1, 19)])

    def test_every_question_spans_zero_to_ten(self):
        """Each question offers a best answer worth 10 and a worst worth 0."""
        for question in self.questions:
            with self.subTest(question=question.id):
                scores = [choice.score for choice in question.choices]
                self.assertEqual(max(scores), 10)
                self.assertEqual(min(scores), 0)
                self.assertGreaterEqual(len(question.choices), 3)
                for choice in question.choices:
                    self.assertTrue(choice.label)
                    self.assertTrue(choice.tip)

    def test_categories_in_declaration_order(self):
        """Categories are listed in the order they first appear."""
        self.assertEqual(categories(), [
            "Account Security",
            "Data Protection",
            "Device Security",
            "Digital Awareness",
            "Privacy Protection",
            "Mobile & Smart Home",
            "Personal Data Management",
        ])

    def test_indices_used_by_question_recommendations(self):
        """Questions with bespoke recommendations keep their positions."""
        self.assertEqual(QUESTIONS[0].category, "Account Security")
        self.assertIn("two-step verification", QUESTIONS[0].prompt)
        self.assertIn("passwords", QUESTIONS[1].prompt)
        self.assertEqual(QUESTIONS[6].category, "Device Security")
        self.assertEqual(QUESTIONS[9].category, "Digital Awareness")

    def test_max_score(self):
        """Maximum score is ten points per question."""
        self.assertEqual(max_score(), 180)
        self.assertEqual(sum(q.max_score for q in self.questions), max_score())

    def test_get_question_by_index(self):
        """Test getting a question by index."""
        self.assertEqual(get_question(0).id, "q1")
        self.assertEqual(get_question(17).id, "q18")

    def test_get_question_by_index_out_of_range(self):
        """Out-of-range index raises IndexError."""
        with self.assertRaises(IndexError):
            get_question(18)
        with self.assertRaises(IndexError):
            get_question(-1)

    def test_get_question_by_id_not_found(self):
        """Unknown id raises ValueError."""
        self.assertEqual(get_question_by_id("q7").category, "Device Security")
        with self.assertRaises(ValueError):
            get_question_by_id("nonexistent_id")

    def test_choice_for_score(self):
        """choice_for_score returns the matching choice or None."""
        question = QUESTIONS[1]
        self.assertEqual(question.choice_for_score(7).label, "I save them in my browser")
        self.assertIsNone(question.choice_for_score(4))


if __name__ == '__main__':
    unittest.main()
