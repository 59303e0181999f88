"""
User flow tests: a full assessment driven through the command-line front-end,
from the first question to the exported report.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import tempfile
import unittest
from datetime import date

import app
from advice import AdviceConfig, AdviceService
from assessment.questions import QUESTIONS
from assessment.session import new_state
from operation.monitoring.metrics import MetricsRegistry
from prompts.advice_prompts import EXPERT_MARKER
from utils.export_utils import export_filename


class TestFullAssessmentFlow(unittest.TestCase):
    """Walk through the quiz the way a user would."""

    def setUp(self):
        """Set up test fixtures."""
        self.state = new_state()
        self.service = AdviceService(AdviceConfig(ai_enabled=False), registry=MetricsRegistry(),
                                     sleep=lambda seconds: None)
        self.original_cwd = os.getcwd()
        self.tmpdir = tempfile.TemporaryDirectory()
        os.chdir(self.tmpdir.name)

    def tearDown(self):
        os.chdir(self.original_cwd)
        self.tmpdir.cleanup()

    def send(self, text):
        return app.handle_input(self.state, text, self.service)

    def test_best_answers_to_export(self):
        """Choosing the best answer everywhere ends as a Security Champion."""
        print("\n=== Flow: best answers ===")
        reply = ""
        for index in range(len(QUESTIONS)):
            reply = self.send("1")
            self.assertTrue(reply.startswith("Tip: "))
            if index < len(QUESTIONS) - 1:
                self.assertIn(f"[{index + 2}/{len(QUESTIONS)}]", reply)

        self.assertTrue(self.state["show_results"])
        self.assertIn("Score: 180/180  -  Security Champion", reply)
        self.assertIn("Maintain your excellent security practices", reply)
        self.assertIn("Risk level: LOW", reply)
        self.assertIn(EXPERT_MARKER, reply)

        # no more answers once complete
        self.assertIn("Assessment complete", self.send("2"))
        self.assertEqual(len(self.state["answers"]), len(QUESTIONS))

        reply = self.send("e")
        filename = export_filename(date.today())
        self.assertIn(filename, reply)
        with open(filename, encoding="utf-8") as f:
            report = f.read()
        self.assertIn("Score: 180/180 (100%)", report)
        self.assertIn("[EXCELLENT] Maintain your excellent security practices", report)

    def test_skipping_everything(self):
        """Skipping every question scores zero with extreme risk."""
        print("\n=== Flow: skip all ===")
        reply = ""
        for _ in QUESTIONS:
            reply = self.send("s")
        self.assertEqual(self.state["answers"], [0] * len(QUESTIONS))
        self.assertIn("Score: 0/180  -  At Risk", reply)
        self.assertIn("Risk level: EXTREME", reply)
        self.assertIn("[CRITICAL] Set up two-factor authentication immediately", reply)

    def test_back_and_restart(self):
        """Back undoes one answer; restart remembers the finished score."""
        self.assertIn("Already at the first question.", self.send("b"))
        self.send("1")
        self.send("3")
        self.assertEqual(self.state["answers"], [10, 3])
        self.send("b")
        self.assertEqual(self.state["answers"], [10])

        for _ in range(len(QUESTIONS) - 1):
            self.send("1")
        self.assertTrue(self.state["show_results"])

        self.assertIn("Restarting", self.send("r"))
        self.assertEqual(self.state["answers"], [])
        self.assertEqual(self.state["previous_score"], 180)

        for _ in QUESTIONS:
            reply = self.send("s")
        self.assertIn("Change since last run: -180 points", reply)

    def test_help_and_unknown_input(self):
        """Help shows an explanation; anything else shows the command list."""
        reply = self.send("h")
        self.assertTrue(reply.startswith(EXPERT_MARKER))
        self.assertEqual(self.state["answers"], [])
        self.assertEqual(self.send("9"), app.HELP_TEXT)
        self.assertEqual(self.send("banana"), app.HELP_TEXT)
        self.assertIsNone(self.send("q"))


if __name__ == '__main__':
    unittest.main()
