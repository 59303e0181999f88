"""
Unit tests for recommendations/deriver.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import unittest
from assessment.questions import QUESTIONS
from recommendations.deriver import (
    derive_recommendations,
    priority_for_percentage,
    priority_description,
    category_recommendation,
    MAINTAIN_EXCELLENT,
)


class TestRecommendationDeriver(unittest.TestCase):
    """Test cases for the recommendation deriver."""

    def setUp(self):
        """Set up test fixtures."""
        self.count = len(QUESTIONS)

    def _answers(self, default=10, **overrides):
        answers = [default] * self.count
        for key, score in overrides.items():
            answers[int(key[1:])] = score
        return answers

    def test_all_zeros(self):
        """Worst record yields the three critical question-specific items."""
        recs = derive_recommendations([0] * self.count)
        self.assertEqual([r.priority for r in recs], ["CRITICAL", "CRITICAL", "CRITICAL"])
        self.assertEqual([r.action for r in recs], [
            "Set up two-factor authentication immediately",
            "Stop reusing passwords - get a password manager",
            "Enable automatic updates on all devices",
        ])

    def test_all_tens(self):
        """Perfect record yields the single maintain item."""
        self.assertEqual(derive_recommendations([10] * self.count), [MAINTAIN_EXCELLENT])

    def test_partial_two_factor(self):
        """Partial 2FA gets the HIGH override and nothing else."""
        recs = derive_recommendations(self._answers(i0=5))
        self.assertEqual(len(recs), 1)
        self.assertEqual(recs[0].priority, "HIGH")
        self.assertEqual(recs[0].action, "Complete two-factor authentication setup")

    def test_slow_updates(self):
        """Infrequent updates get a HIGH override."""
        recs = derive_recommendations(self._answers(i6=3))
        self.assertEqual(recs[0].priority, "HIGH")
        self.assertEqual(recs[0].category, "Device Security")

    def test_category_fallback(self):
        """Without an override a weak category gets its template."""
        recs = derive_recommendations(self._answers(i6=7))
        self.assertEqual(len(recs), 1)
        self.assertEqual(recs[0].action, "Improve device security posture")
        self.assertEqual(recs[0].priority, "MAINTENANCE")

    def test_category_fill_in_order(self):
        """Categories fill remaining slots weakest first, ties in declaration order."""
        recs = derive_recommendations([])
        self.assertEqual([r.category for r in recs],
                         ["Account Security", "Data Protection", "Device Security"])
        self.assertTrue(all(r.priority == "HIGH" for r in recs))

    def test_no_duplicate_categories(self):
        """A category covered by an override is not repeated."""
        recs = derive_recommendations(self._answers(i0=0, i1=0, i2=0))
        categories = [r.category for r in recs]
        self.assertEqual(categories, ["Account Security", "Account Security"])

    def test_cardinality_and_determinism(self):
        """Every record yields one to three items, the same each time."""
        records = [
            [0] * self.count,
            [10] * self.count,
            [5] * self.count,
            [7] * self.count,
            [10, 0] * (self.count // 2),
            [3, 7, 10] * (self.count // 3),
            [],
            [10] * 5,
        ]
        for answers in records:
            with self.subTest(answers=answers):
                first = derive_recommendations(answers)
                self.assertGreaterEqual(len(first), 1)
                self.assertLessEqual(len(first), 3)
                self.assertEqual(first, derive_recommendations(answers))

    def test_record_too_long(self):
        """A record longer than the bank is rejected."""
        with self.assertRaises(IndexError):
            derive_recommendations([10] * (self.count + 1))

    def test_priority_buckets(self):
        """Category percentages map onto priorities."""
        self.assertEqual(priority_for_percentage(95), "MAINTENANCE")
        self.assertEqual(priority_for_percentage(90), "MAINTENANCE")
        self.assertEqual(priority_for_percentage(75), "LOW")
        self.assertEqual(priority_for_percentage(50), "MEDIUM")
        self.assertEqual(priority_for_percentage(10), "HIGH")

    def test_unknown_category(self):
        """Unknown categories get the general template."""
        rec = category_recommendation("Quantum Safety", 10)
        self.assertEqual(rec.category, "General Security")
        self.assertEqual(rec.action, "Create comprehensive security plan")

    def test_priority_description(self):
        """Known priorities have a description."""
        self.assertTrue(priority_description("CRITICAL"))
        self.assertEqual(priority_description("UNKNOWN"), "")


if __name__ == '__main__':
    unittest.main()
