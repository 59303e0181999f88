"""
Unit tests for assessment/scoring.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import unittest
from assessment.questions import QUESTIONS, max_score
from assessment.scoring import (
    total_score,
    overall_percentage,
    category_aggregates,
    security_level,
    weakest_categories,
    strongest_categories,
    answer_severity,
    security_insights,
    compare_to_baselines,
)


class TestScoring(unittest.TestCase):
    """Test cases for the scoring engine."""

    def setUp(self):
        """Set up test fixtures."""
        self.all_tens = [10] * len(QUESTIONS)
        self.all_zeros = [0] * len(QUESTIONS)

    def test_total_score(self):
        """Total is the plain sum of the record."""
        self.assertEqual(total_score(self.all_tens), 180)
        self.assertEqual(total_score([]), 0)
        self.assertEqual(total_score([10, 5, 0, 7]), 22)

    def test_possible_counts_every_question(self):
        """Possible points per category do not depend on how many were answered."""
        expected = {
            "Account Security": 30,
            "Data Protection": 30,
            "Device Security": 30,
            "Digital Awareness": 30,
            "Privacy Protection": 30,
            "Mobile & Smart Home": 20,
            "Personal Data Management": 10,
        }
        for answers in ([], [10, 5], self.all_tens):
            aggregates = category_aggregates(answers)
            self.assertEqual(list(aggregates.keys()), list(expected.keys()))
            self.assertEqual({k: v.possible for k, v in aggregates.items()}, expected)

    def test_partial_record(self):
        """Unanswered questions contribute zero."""
        aggregates = category_aggregates([10, 5])
        account = aggregates["Account Security"]
        self.assertEqual(account.total, 15)
        self.assertEqual(account.percentage, 50)
        self.assertEqual(account.questions, 2)
        self.assertEqual(account.average_score, 8)
        self.assertEqual(aggregates["Device Security"].percentage, 0)
        self.assertEqual(aggregates["Device Security"].questions, 0)

    def test_percentage_rounds_half_up(self):
        """Category percentages round .5 upward."""
        answers = [10] * 17 + [5]
        self.assertEqual(category_aggregates(answers)["Personal Data Management"].percentage, 50)
        answers = [10, 10, 5] + [10] * 15
        # 25 / 30 = 83.33
        self.assertEqual(category_aggregates(answers)["Account Security"].percentage, 83)
        self.assertEqual(overall_percentage(1, 8), 13)
        self.assertEqual(overall_percentage(0, 0), 0)

    def test_record_longer_than_bank(self):
        """A record longer than the bank is rejected."""
        with self.assertRaises(IndexError):
            category_aggregates([10] * 19)
        with self.assertRaises(IndexError):
            total_score([10] * (len(QUESTIONS) + 1))
        self.assertEqual(total_score(self.all_tens), max_score())

    def test_security_level_boundaries(self):
        """Level floors are inclusive and compared exactly."""
        cases = [
            (180, "Champion"),
            (162, "Champion"),
            (161, "Aware"),
            (126, "Aware"),
            (125, "Developing"),
            (90, "Developing"),
            (89, "At Risk"),
            (0, "At Risk"),
        ]
        for total, label in cases:
            with self.subTest(total=total):
                self.assertEqual(security_level(total, max_score()).label, label)

    def test_security_level_fields(self):
        """Level carries display fields."""
        level = security_level(180, 180)
        self.assertEqual(level.title, "Security Champion")
        self.assertEqual(level.color, "green")
        self.assertTrue(level.recommendations)
        self.assertEqual(security_level(0, 0).label, "At Risk")

    def test_weakest_and_strongest(self):
        """Ties keep declaration order."""
        aggregates = category_aggregates(self.all_zeros)
        weakest = [name for name, _ in weakest_categories(aggregates)]
        self.assertEqual(weakest, ["Account Security", "Data Protection", "Device Security"])

        answers = [10] * 3 + [0] * 15
        strongest = strongest_categories(category_aggregates(answers), n=1)
        self.assertEqual(strongest[0][0], "Account Security")

    def test_answer_severity(self):
        """Answers are bucketed by how low they score."""
        severity = answer_severity([0, 3, 5, 7, 10, 0])
        self.assertEqual(severity, {"critical": 2, "moderate": 1, "low": 1, "total": 4})

    def test_security_insights(self):
        """Insights describe the overall posture and extremes."""
        aggregates = category_aggregates(self.all_zeros)
        insights = security_insights(aggregates, 0, 180)
        self.assertTrue(insights[0].startswith("🚨"))
        self.assertTrue(any("credential theft" in line for line in insights))

        insights = security_insights(category_aggregates(self.all_tens), 180, 180)
        self.assertTrue(insights[0].startswith("🌟"))
        self.assertTrue(any("Excellent" in line for line in insights))

    def test_compare_to_baselines(self):
        """Comparison lists every baseline group and a rank."""
        result = compare_to_baselines(180, 180)
        self.assertEqual(result["rank"], "Expert")
        self.assertEqual(result["user_score"], 100.0)
        self.assertEqual(len(result["comparisons"]), 3)
        self.assertTrue(all(c["better_than"] for c in result["comparisons"]))

        result = compare_to_baselines(0, 180)
        self.assertEqual(result["rank"], "Beginner")
        self.assertFalse(any(c["better_than"] for c in result["comparisons"]))


if __name__ == '__main__':
    unittest.main()
