#!/usr/bin/env python3

from __future__ import annotations

import time
import unittest

from Indicator_Engine.indicator_extractor import condense_indicator, extract_threat_indicators


class IndicatorExtractorTests(unittest.TestCase):
    def test_empty_and_missing_input_yield_no_indicators(self) -> None:
        self.assertEqual(extract_threat_indicators(""), [])
        self.assertEqual(extract_threat_indicators(None), [])

    def test_bullet_list_items_are_condensed_with_verb_templates(self) -> None:
        text = "• Uses fake bank link\n• Claims urgent action needed\n• Has spelling dọng errors"
        indicators = extract_threat_indicators(text)
        self.assertEqual(
            indicators,
            ["Fake bank link", "Claims urgent action needed", "Spelling dọng errors"],
        )

    def test_numbered_list_ignores_hyphenated_words(self) -> None:
        text = "1. Suspicious sender address\n2. Too-good-to-be-true offer"
        indicators = extract_threat_indicators(text)
        self.assertEqual(indicators, ["Suspicious sender address", "Too-good-to-be-true offer"])

    def test_numbered_items_are_appended_after_bullet_items(self) -> None:
        text = (
            "Red flags:\n"
            "- Sender domain mismatch\n"
            "Additional notes:\n"
            "1. Requests gift card payment\n"
        )
        indicators = extract_threat_indicators(text)
        self.assertEqual(indicators, ["Sender domain mismatch", "Requests gift card payment"])

    def test_short_bullet_items_are_discarded(self) -> None:
        text = "* ok\n* Pressure to act immediately"
        self.assertEqual(extract_threat_indicators(text), ["Pressure to act immediately"])

    def test_introduction_phrase_sentences_are_used_when_no_lists(self) -> None:
        text = (
            "The message is risky. Red flags include: the sender impersonates a courier. "
            "A delivery fee is requested! The tracking page is fake."
        )
        indicators = extract_threat_indicators(text)
        self.assertEqual(
            indicators,
            ["The sender impersonates a", "A delivery fee is", "The tracking page is"],
        )

    def test_introduction_phrase_catalog_order_breaks_ties(self) -> None:
        text = "Red flags: spoofed logo shown. Indicators include: unusual payment request."
        indicators = extract_threat_indicators(text)
        self.assertEqual(indicators, ["Unusual payment request"])

    def test_key_phrase_stage_collects_every_matching_phrase(self) -> None:
        text = "I detected a request for your banking password. This is likely an impersonation scam!"
        indicators = extract_threat_indicators(text)
        self.assertEqual(indicators, ["A request for your", "An impersonation scam"])

    def test_plain_prose_falls_back_to_leading_sentences(self) -> None:
        text = "This message looks odd. It has weird formatting. It asks for money."
        indicators = extract_threat_indicators(text)
        self.assertEqual(indicators, ["This message looks odd", "Weird formatting", "It asks for money"])

    def test_output_is_capped_deduplicated_and_capitalized(self) -> None:
        lines = [
            "• contains hidden redirect link",
            "• contains hidden redirect link",
            "• asks for account password now",
            "• promises unrealistic cash prize",
            "• spoofs the bank logo badly",
            "• pressures reader with deadline threats",
            "• mentions unknown courier company",
        ]
        indicators = extract_threat_indicators("\n".join(lines))
        self.assertEqual(len(indicators), 5)
        self.assertEqual(len(set(indicators)), 5)
        self.assertEqual(indicators[0], "Hidden redirect link")
        for item in indicators:
            self.assertGreater(len(item), 3)
            self.assertTrue(item[0].isupper())

    def test_repeated_calls_return_identical_output(self) -> None:
        text = "Suspicious due to mismatched sender details. It has an urgent tone."
        self.assertEqual(extract_threat_indicators(text), extract_threat_indicators(text))

    def test_introduction_phrase_without_sentences_does_not_stop_the_scan(self) -> None:
        text = "This contains a spoofed invoice. Red flags:"
        self.assertEqual(extract_threat_indicators(text), ["A spoofed invoice"])

    def test_key_phrase_stage_handles_long_unterminated_text(self) -> None:
        text = "i detected " * 6000
        started = time.perf_counter()
        indicators = extract_threat_indicators(text)
        self.assertLess(time.perf_counter() - started, 1.0)
        self.assertEqual(indicators, ["I detected i detected"])

    def test_condense_prefers_first_matching_template(self) -> None:
        self.assertEqual(condense_indicator("Message includes a shortened URL"), "a shortened URL")
        self.assertEqual(condense_indicator("Written with urgency and threats"), "urgency and threats")

    def test_condense_templates_match_inside_words(self) -> None:
        self.assertEqual(condense_indicator("Causes financial loss quickly"), "financial loss quickly")
        self.assertEqual(condense_indicator("Refuses to share identity details"), "to share identity details")

    def test_condense_falls_back_to_leading_words(self) -> None:
        self.assertEqual(condense_indicator("Spoofed sender, unusual domain"), "Spoofed sender")
        self.assertEqual(condense_indicator("\"Odd greeting used here today"), "Odd greeting used here")


if __name__ == "__main__":
    unittest.main()
