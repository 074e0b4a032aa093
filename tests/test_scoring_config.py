import sys
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docscore import score_ats, score_seo  # noqa: E402
from docscore.core.config.scoring import (  # noqa: E402
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    ScoringConfigError,
    load_scoring_config,
)


class ScoringConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        handle.write(text)
        handle.close()
        path = Path(handle.name)
        self.addCleanup(path.unlink)
        return path

    def test_shipped_yaml_matches_code_defaults(self):
        config = load_scoring_config()
        self.assertEqual(config.seo, DEFAULT_SCORING_CONFIG.seo)
        self.assertEqual(config.ats, DEFAULT_SCORING_CONFIG.ats)
        self.assertEqual(config.seo.criteria["keywords"].weight, 25)
        self.assertIn("c++", config.ats.industry_keywords)

    def test_partial_override_keeps_defaults(self):
        path = self._write("ats:\n  min_skills: 2\n")
        config = load_scoring_config(path)
        self.assertEqual(config.ats.min_skills, 2)
        self.assertEqual(config.ats.recommended_skills, DEFAULT_SCORING_CONFIG.ats.recommended_skills)
        self.assertEqual(config.seo, DEFAULT_SCORING_CONFIG.seo)

    def test_empty_file_uses_defaults(self):
        self.assertEqual(load_scoring_config(self._write("")), DEFAULT_SCORING_CONFIG)

    def test_missing_file_raises(self):
        with self.assertRaises(ScoringConfigError) as ctx:
            load_scoring_config(PROJECT_ROOT / "config" / "does-not-exist.yaml")
        self.assertIn("does-not-exist.yaml", str(ctx.exception))

    def test_non_mapping_raises(self):
        with self.assertRaises(ScoringConfigError):
            load_scoring_config(self._write("- just\n- a list\n"))

    def test_invalid_yaml_raises(self):
        with self.assertRaises(ScoringConfigError):
            load_scoring_config(self._write("seo: [unclosed\n"))

    def test_bad_weights_raise(self):
        path = self._write(
            "seo:\n"
            "  criteria:\n"
            "    keywords: {weight: 20, pass_threshold: 40}\n"
            "    readability: {weight: 20, pass_threshold: 60}\n"
            "    structure: {weight: 20, pass_threshold: 60}\n"
            "    meta: {weight: 20, pass_threshold: 75}\n"
            "    technical: {weight: 15, pass_threshold: 85}\n"
        )
        with self.assertRaises(ScoringConfigError) as ctx:
            load_scoring_config(path)
        self.assertIn("sum to 100", str(ctx.exception))

    def test_missing_criterion_fails_validation(self):
        with self.assertRaises(ValidationError):
            ScoringConfig.model_validate({"ats": {"criteria": {"keywords": {"weight": 100, "pass_threshold": 60}}}})

    def test_unordered_grades_fail_validation(self):
        with self.assertRaises(ValidationError):
            ScoringConfig.model_validate(
                {"seo": {"grades": [{"min_score": 40, "label": "Low"}, {"min_score": 80, "label": "High"}]}}
            )

    def test_invalid_quantification_pattern_fails_validation(self):
        with self.assertRaises(ValidationError):
            ScoringConfig.model_validate({"ats": {"quantification_patterns": ["(unclosed"]}})

    def test_lexicons_are_normalized(self):
        config = ScoringConfig.model_validate({"ats": {"weak_phrases": ["Worked On", "worked on ", ""]}})
        self.assertEqual(config.ats.weak_phrases, ("worked on",))

    def test_config_is_passed_explicitly(self):
        custom = ScoringConfig.model_validate({"seo": {"title_min_chars": 1, "title_max_chars": 5}})
        default_report = score_seo("<p>Body</p>", title="Short")
        custom_report = score_seo("<p>Body</p>", title="Short", config=custom)
        self.assertEqual(default_report.criteria["meta"].score, 25)
        self.assertEqual(custom_report.criteria["meta"].score, 50)

        lenient = ScoringConfig.model_validate({"ats": {"min_skills": 0}})
        record = {"personal": {"summary": "Python developer"}}
        self.assertGreater(
            score_ats(record, config=lenient).criteria["keywords"].score,
            score_ats(record).criteria["keywords"].score,
        )


if __name__ == "__main__":
    unittest.main()
