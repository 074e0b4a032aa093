import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docscore import CVRecord, InvalidInputError, score_ats  # noqa: E402
from docscore.core.config.scoring import ATS_CRITERIA, DEFAULT_SCORING_CONFIG, ScoringConfig  # noqa: E402
from docscore.features.cv_signals import (  # noqa: E402
    detect_date_format,
    extract_job_keywords,
    score_length,
    split_bullets,
)
from docscore.services.ats_scoring import coerce_profile  # noqa: E402

ATS_CONFIG = DEFAULT_SCORING_CONFIG.ats


def _profile(**overrides):
    data = {
        "personal": {
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "phone": "+1 555 123 4567",
            "jobTitle": "Backend Engineer",
            "linkedin": "https://linkedin.com/in/janedoe",
            "summary": (
                "Backend engineer with eight years building Python services, data pipelines "
                "and developer tooling for product teams."
            ),
        },
        "experience": [
            {
                "title": "Senior Engineer",
                "company": "Acme",
                "startDate": "2020",
                "description": (
                    "<ul><li>Led migration of 12 projects to Kubernetes</li>"
                    "<li>Reduced API latency by 40% with Redis caching</li>"
                    "<li>Mentored 5 people across two teams</li></ul>"
                ),
            },
            {
                "title": "Engineer",
                "company": "Initech",
                "startDate": "2016",
                "description": "Built data pipelines serving 200 users in Python and SQL\nAutomated deployments with Docker",
            },
        ],
        "education": [{"degree": "BSc Computer Science", "school": "State University"}],
        "skills": ["Python", "SQL", "Docker", "Kubernetes", "Redis", "AWS", "Terraform", "GraphQL"],
    }
    data.update(overrides)
    return data


class ATSScoringTests(unittest.TestCase):
    def test_empty_record_fails_structure_with_details(self):
        report = score_ats(CVRecord())
        structure = report.criteria["structure"]
        self.assertFalse(structure.passed)
        self.assertGreater(len(structure.details), 1)
        self.assertEqual(structure.score, 0)
        self.assertEqual(
            sorted(report.sections.missing_sections), ["education", "experience", "skills", "summary"]
        )

    def test_empty_record_scores(self):
        report = score_ats({})
        self.assertEqual(report.criteria["keywords"].score, 0)
        self.assertEqual(report.criteria["quantification"].score, 0)
        self.assertEqual(report.criteria["action_verbs"].score, 0)
        self.assertEqual(report.criteria["length"].score, 0)
        self.assertEqual(report.criteria["formatting"].score, 65)
        self.assertEqual(report.overall, 13)
        self.assertEqual(report.grade, "Poor")
        titles = [item.title for item in report.recommendations]
        self.assertIn("Missing Section: Work Experience", titles)
        self.assertEqual(report.recommendations[0].category, "critical")
        self.assertNotIn("success", [item.category for item in report.recommendations])

    def test_quantified_achievements(self):
        record = {"experience": [{"description": "Increased sales by 30%. Reduced costs by $50k."}]}
        report = score_ats(record)
        self.assertGreater(report.criteria["quantification"].score, 50)

        bullets = {"experience": [{"description": "<ul><li>Increased sales by 30%</li><li>Reduced costs by $50k</li></ul>"}]}
        signal = score_ats(bullets).signals.quantification
        self.assertEqual(signal.total_bullets, 2)
        self.assertEqual(signal.quantified_bullets, 2)

    def test_currency_and_count_claims_are_quantified(self):
        for description in (
            "Resolved 300 support tickets every week",
            "Closed deals worth €2M in the first year",
            "Managed a budget of £500k for the platform",
            "Cut hosting spend by ¥1,200,000 annually",
        ):
            signal = score_ats({"experience": [{"description": description}]}).signals.quantification
            self.assertEqual(signal.quantified_bullets, 1, description)
            self.assertEqual(signal.score, 100, description)

    def test_few_skills_penalty_is_configurable(self):
        record = {"personal": {"summary": "Python developer"}}
        relaxed = ScoringConfig.model_validate({"ats": {"few_skills_penalty": 0}})
        default_score = score_ats(record).signals.keyword_match.score
        relaxed_score = score_ats(record, config=relaxed).signals.keyword_match.score
        self.assertEqual(relaxed_score - default_score, ATS_CONFIG.few_skills_penalty)

    def test_unquantified_bullets_fail(self):
        record = {"experience": [{"description": "Improved the onboarding flow\nWrote internal documentation"}]}
        report = score_ats(record)
        self.assertEqual(report.criteria["quantification"].score, 0)
        self.assertIn("Quantify Achievements", [item.title for item in report.recommendations])

    def test_weak_phrases_are_reported(self):
        record = {
            "experience": [
                {"description": "Responsible for the team roadmap.\nWorked on the website redesign."}
            ]
        }
        report = score_ats(record)
        signal = report.signals.action_verbs
        self.assertEqual(signal.weak_phrases, ["responsible for", "worked on"])
        self.assertTrue(any("weak" in detail for detail in report.criteria["action_verbs"].details))
        titles = [item.title for item in report.recommendations]
        self.assertIn('Replace Weak Phrase: "responsible for"', titles)
        self.assertIn('Replace Weak Phrase: "worked on"', titles)

    def test_strong_profile(self):
        report = score_ats(_profile())
        self.assertEqual(report.sections.missing_sections, [])
        self.assertTrue(report.criteria["structure"].passed)
        self.assertTrue(report.criteria["quantification"].passed)
        self.assertTrue(report.criteria["formatting"].passed)
        self.assertGreaterEqual(report.signals.quantification.quantified_bullets, 3)
        self.assertIn("led", report.signals.action_verbs.strong_verbs)

    def test_job_description_never_lowers_keyword_score(self):
        record = _profile()
        without = score_ats(record)
        with_unrelated = score_ats(record, "Seeking a florist. Flowers, flowers and more flowers.")
        with_related = score_ats(record, "Python engineer with Kubernetes and Docker. Python platform work.")
        base = without.criteria["keywords"].score
        self.assertGreaterEqual(with_unrelated.criteria["keywords"].score, base)
        self.assertGreaterEqual(with_related.criteria["keywords"].score, base)
        self.assertIn("python", with_related.signals.keyword_match.matched_job_keywords)
        self.assertIn("flowers", with_unrelated.signals.keyword_match.missing_job_keywords)
        self.assertIn(
            'Job Keyword Missing: "flowers"', [item.title for item in with_unrelated.recommendations]
        )

    def test_adding_skills_never_lowers_keyword_score(self):
        skills = ["Python", "Docker", "AWS", "SQL", "React", "Kubernetes", "Terraform"]
        previous = -1
        for count in range(len(skills) + 1):
            report = score_ats(_profile(skills=skills[:count]))
            score = report.criteria["keywords"].score
            self.assertGreaterEqual(score, previous)
            previous = score

    def test_weights_sum_to_100(self):
        report = score_ats(_profile())
        self.assertEqual(list(report.criteria), list(ATS_CRITERIA))
        self.assertEqual(sum(item.weight for item in report.criteria.values()), 100)

    def test_bounds_and_idempotence(self):
        for record in ({}, _profile(), _profile(experience=[{"description": "was " * 400}])):
            first = score_ats(record, "python python docker")
            second = score_ats(record, "python python docker")
            self.assertEqual(first.model_dump(), second.model_dump())
            self.assertGreaterEqual(first.overall, 0)
            self.assertLessEqual(first.overall, 100)

    def test_formatting_issues(self):
        record = _profile(
            personal={
                "fullName": "Jane",
                "email": "jane.example.com",
                "phone": "123",
                "linkedin": "janedoe",
                "website": "janedoe.dev",
            },
            experience=[
                {"startDate": "2020", "description": "Short"},
                {"startDate": "March 2018", "description": "Another entry that is long enough"},
            ],
        )
        signal = score_ats(record).signals.formatting
        # 100 - 15 - 10 - 10 - 10 (dates) - 10 (one thin description) - 5 - 5
        self.assertEqual(signal.score, 35)
        self.assertEqual(len(signal.issues), 7)

    def test_camel_case_mapping_is_accepted(self):
        record = coerce_profile({"personal": {"fullName": "Jane Doe", "jobTitle": "Engineer"}})
        self.assertEqual(record.personal.full_name, "Jane Doe")
        self.assertEqual(record.personal.job_title, "Engineer")
        snake = coerce_profile({"personal": {"full_name": "Jane Doe"}})
        self.assertEqual(snake.personal.full_name, "Jane Doe")

    def test_invalid_inputs_raise(self):
        with self.assertRaises(InvalidInputError):
            score_ats("not a record")
        with self.assertRaises(InvalidInputError):
            score_ats({"experience": "nope"})
        with self.assertRaises(InvalidInputError):
            score_ats({}, job_description=42)

    def test_job_keyword_extraction(self):
        keywords = extract_job_keywords(
            "We need Python and Docker. Python experience with cloud platforms; cloud platforms matter.",
            ATS_CONFIG,
        )
        self.assertEqual(keywords, ["python", "docker", "cloud", "platforms"])
        self.assertEqual(extract_job_keywords("", ATS_CONFIG), [])

    def test_bullet_splitting(self):
        bullets = split_bullets("<p>First achievement line</p><p>short</p>• Another bullet here<br>Third line item")
        self.assertEqual(bullets, ["First achievement line", "Another bullet here", "Third line item"])

    def test_length_bands(self):
        self.assertEqual(score_length(0, ATS_CONFIG), 0)
        self.assertEqual(score_length(150, ATS_CONFIG), 25)
        self.assertEqual(score_length(350, ATS_CONFIG), 70)
        self.assertEqual(score_length(600, ATS_CONFIG), 100)
        self.assertEqual(score_length(900, ATS_CONFIG), 85)
        self.assertEqual(score_length(1500, ATS_CONFIG), 60)

    def test_date_formats(self):
        self.assertEqual(detect_date_format("2020"), "YYYY")
        self.assertEqual(detect_date_format("01/2020"), "MM/YYYY")
        self.assertEqual(detect_date_format("March 2020"), "Month YYYY")
        self.assertEqual(detect_date_format("2020-01"), "OTHER")


if __name__ == "__main__":
    unittest.main()
