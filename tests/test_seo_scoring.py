import math
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docscore import InvalidInputError, score_seo  # noqa: E402
from docscore.core.config.scoring import SEO_CRITERIA  # noqa: E402
from docscore.features.keywords import count_term_occurrences, normalize_keywords  # noqa: E402

FILLER = "Lorem ipsum dolor sit amet. " * 40

WELL_FORMED = (
    "<h1>Python Testing Guide</h1>"
    "<p>Python testing keeps releases calm. Write small tests first.</p>"
    "<h2>Why testing helps</h2>"
    "<p>Tests catch bugs early. They also document intent.</p>"
    "<ul><li>Fast feedback</li><li>Safer refactors</li></ul>"
    "<p>Run the suite on every change. Keep it quick.</p>"
    "<p>Review failures the same day. Fix the root cause.</p>"
    '<img src="chart.png" alt="Test timing chart">'
    '<a href="/docs">Docs</a>'
)
GOOD_TITLE = "Python Testing Guide for Busy Engineers"
GOOD_META = (
    "Learn practical Python testing habits: small fast tests, quick feedback loops, "
    "and safer refactors for teams that ship every single day."
)


class SEOScoringTests(unittest.TestCase):
    def _titles(self, report):
        return [item.title for item in report.recommendations]

    def test_empty_markup_has_zero_words_and_finite_scores(self):
        report = score_seo("")
        self.assertEqual(report.readability.word_count, 0)
        self.assertEqual(report.overall, 0)
        self.assertEqual(report.grade, "Poor")
        for result in report.criteria.values():
            self.assertEqual(result.score, 0)
            self.assertTrue(math.isfinite(result.score))
        self.assertTrue(math.isfinite(report.readability.flesch_score))

    def test_missing_h1_is_critical(self):
        report = score_seo("<p>Some text without heading</p>")
        missing = [item for item in report.recommendations if item.title == "Missing H1 Heading"]
        self.assertEqual(len(missing), 1)
        self.assertEqual(missing[0].category, "critical")
        self.assertEqual(missing[0].impact, "high")

    def test_absent_keyword_has_low_density(self):
        report = score_seo(f"<p>{FILLER}</p>", ["React"])
        self.assertEqual(report.readability.word_count, 200)
        signal = report.keyword_signals[0]
        self.assertEqual(signal.term, "React")
        self.assertEqual(signal.occurrence_count, 0)
        self.assertEqual(signal.density_percent, 0.0)
        self.assertEqual(signal.distribution_tier, "low")
        self.assertIn('Low Keyword Density: "React"', self._titles(report))
        self.assertFalse(report.criteria["keywords"].passed)

    def test_keyword_matching_is_whole_term(self):
        report = score_seo(
            "<h1>React basics</h1><p>Reactive streams are not react components. React!</p>",
            ["react"],
            title="Reactive programming",
        )
        signal = report.keyword_signals[0]
        self.assertEqual(signal.occurrence_count, 3)
        self.assertFalse(signal.in_title)
        self.assertTrue(signal.in_opening_paragraph)
        self.assertEqual(signal.heading_occurrence_count, 1)

    def test_symbol_terms_are_escaped(self):
        self.assertEqual(count_term_occurrences("I write C++ and C.", "c++"), 1)
        self.assertEqual(count_term_occurrences("node.js and nodexjs", "node.js"), 1)

    def test_unclosed_paragraphs_do_not_leak_into_opening(self):
        report = score_seo("<h1>Guide</h1><p>Intro text here.<p>React appears later.", ["React"])
        self.assertFalse(report.keyword_signals[0].in_opening_paragraph)
        self.assertEqual(report.structure.paragraph_count, 2)
        self.assertNotIn("Long Paragraphs", self._titles(report))

    def test_keywords_are_deduplicated(self):
        self.assertEqual(normalize_keywords(["React", "react ", "  ", "Vue  js"]), ["React", "Vue js"])
        report = score_seo("<p>React</p>", ["React", "REACT"])
        self.assertEqual(len(report.keyword_signals), 1)

    def test_no_keywords_scores_zero(self):
        report = score_seo(WELL_FORMED)
        self.assertEqual(report.criteria["keywords"].score, 0)
        self.assertFalse(report.criteria["keywords"].passed)

    def test_well_formed_document(self):
        report = score_seo(WELL_FORMED, ["testing"], title=GOOD_TITLE, meta_description=GOOD_META)
        self.assertEqual(report.structure.h1_count, 1)
        self.assertEqual(report.criteria["structure"].score, 100)
        self.assertEqual(report.criteria["meta"].score, 100)
        self.assertTrue(report.criteria["meta"].passed)
        self.assertEqual(report.criteria["technical"].score, 70)
        self.assertNotIn("Missing H1 Heading", self._titles(report))
        self.assertNotIn("Missing Title", self._titles(report))

    def test_meta_lengths(self):
        report = score_seo("<p>Body</p>", title="Short", meta_description="Tiny")
        self.assertEqual(report.criteria["meta"].score, 50)
        titles = self._titles(report)
        self.assertIn("Title Could Be Longer", titles)
        self.assertIn("Meta Description Too Short", titles)

        report = score_seo("<p>Body</p>", title="x" * 61, meta_description="y" * 161)
        titles = self._titles(report)
        self.assertIn("Title Too Long", titles)
        self.assertIn("Meta Description Too Long", titles)

    def test_multiple_h1_warning(self):
        report = score_seo("<h1>One</h1><h1>Two</h1><p>Text</p>")
        self.assertIn("Multiple H1 Headings", self._titles(report))

    def test_images_without_alt(self):
        report = score_seo('<h1>T</h1><img src="a.png"><img src="b.png" alt="B">')
        self.assertIn("Missing Image Alt Text", self._titles(report))

    def test_technical_thresholds(self):
        self.assertEqual(score_seo(FILLER).criteria["technical"].score, 70)
        self.assertEqual(score_seo(FILLER * 2).criteria["technical"].score, 85)
        self.assertEqual(score_seo(FILLER * 5).criteria["technical"].score, 100)
        self.assertIn("Comprehensive Content", self._titles(score_seo(FILLER * 5)))

    def test_weights_sum_to_100(self):
        report = score_seo(WELL_FORMED)
        self.assertEqual(set(report.criteria), set(SEO_CRITERIA))
        self.assertEqual(sum(item.weight for item in report.criteria.values()), 100)

    def test_scores_are_bounded(self):
        samples = ["", "a", FILLER, WELL_FORMED, "<h1>" + "word " * 3000 + "</h1>", "<<<>>>"]
        for sample in samples:
            report = score_seo(sample, ["word", "lorem"], title="t", meta_description="m")
            self.assertGreaterEqual(report.overall, 0)
            self.assertLessEqual(report.overall, 100)
            for result in report.criteria.values():
                self.assertGreaterEqual(result.score, 0)
                self.assertLessEqual(result.score, 100)

    def test_recommendations_are_ordered_by_priority(self):
        report = score_seo(f"<p>{FILLER}</p>", ["React", "Vue"])
        priorities = [item.priority for item in report.recommendations]
        self.assertEqual(priorities, sorted(priorities, reverse=True))
        self.assertEqual(len(set(self._titles(report))), len(report.recommendations))
        self.assertEqual(report.top_recommendations(3), report.recommendations[:3])

    def test_idempotent(self):
        first = score_seo(WELL_FORMED, ["testing"], title=GOOD_TITLE)
        second = score_seo(WELL_FORMED, ["testing"], title=GOOD_TITLE)
        self.assertEqual(first.model_dump(), second.model_dump())

    def test_invalid_inputs_raise(self):
        with self.assertRaises(InvalidInputError):
            score_seo(None)
        with self.assertRaises(InvalidInputError):
            score_seo("text", "react")
        with self.assertRaises(InvalidInputError):
            score_seo("text", [1])
        with self.assertRaises(InvalidInputError):
            score_seo("text", title=5)
        with self.assertRaises(ValueError):
            score_seo("text", meta_description=["x"])


if __name__ == "__main__":
    unittest.main()
