#!/usr/bin/env python3

from __future__ import annotations

import unittest

from webui.report_builder import build_risk_report


class RiskReportBuilderTests(unittest.TestCase):
    def test_report_structure_with_probability(self) -> None:
        report = build_risk_report(
            explanation="• Uses fake bank link\n• Claims urgent action needed",
            status="High Risk",
            probability="80%",
            summary="This looks safe to ignore.",
        )

        self.assertEqual(report["schema_version"], "1.0")
        self.assertIn("generated_at", report)
        self.assertEqual(report["indicators"], ["Fake bank link", "Claims urgent action needed"])
        self.assertEqual(report["risk"]["key"], "very_high")
        self.assertEqual(report["risk_percentage"], 80.0)
        self.assertEqual(report["status_label"], "Very High Risk Content")
        self.assertTrue(report["summary_inconsistent"])
        self.assertNotIn("pattern_indicators", report)
        self.assertNotIn("blended_risk_percentage", report)

    def test_status_only_report_uses_tier_label(self) -> None:
        report = build_risk_report(explanation="", status="Normal conversation")
        self.assertEqual(report["indicators"], [])
        self.assertEqual(report["risk"]["key"], "normal")
        self.assertIsNone(report["risk_percentage"])
        self.assertEqual(report["status_label"], "Normal Conversation")
        self.assertFalse(report["summary_inconsistent"])

    def test_content_adds_pattern_indicators_and_blend(self) -> None:
        report = build_risk_report(
            explanation="I detected a request for banking credentials.",
            probability="40%",
            content="Send your password and credit card number now, urgent!",
        )
        self.assertIn("Request for personal data", report["pattern_indicators"])
        self.assertLessEqual(len(report["pattern_indicators"]), 5)
        self.assertIsInstance(report["blended_risk_percentage"], int)
        self.assertGreaterEqual(report["blended_risk_percentage"], 50)

    def test_content_without_probability_skips_blend(self) -> None:
        report = build_risk_report(explanation="", content="Send your password and credit card number now.")
        self.assertIn("pattern_indicators", report)
        self.assertNotIn("blended_risk_percentage", report)
        self.assertEqual(report["risk"]["key"], "unknown")


if __name__ == "__main__":
    unittest.main()
