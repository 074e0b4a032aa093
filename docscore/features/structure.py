from __future__ import annotations

import re
from typing import Literal

from pydantic import Field

from docscore.core.config.scoring import ATSScoringConfig, SEOScoringConfig
from docscore.core.numbers import clamp_score
from docscore.parsing import DocumentOutline, count_words, strip_markup
from docscore.schemas.base import CamelModel
from docscore.schemas.cv import CVRecord

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

_SINGLE_H1_POINTS = 25
_H2_POINTS = 20
_LIST_POINTS = 15
_PARAGRAPH_POINTS = 15
_PARAGRAPH_UNIT_POINTS = 5
_ALL_ALT_POINTS = 25
_PARTIAL_ALT_POINTS = 10

_REQUIRED_SECTIONS = ("summary", "experience", "education", "skills")
_SHORT_SUMMARY_PENALTY = 20
_SINGLE_EXPERIENCE_PENALTY = 10
_FEW_SKILLS_PENALTY = 10
_MISSING_TITLE_PENALTY = 10
_MISSING_LINKS_PENALTY = 5

SectionStatus = Literal["missing", "weak"]


class ContentStructure(CamelModel):
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    paragraph_count: int = 0
    average_paragraph_length: float = 0.0
    list_count: int = 0
    image_count: int = 0
    images_with_alt: int = 0
    link_count: int = 0
    internal_links: int = 0
    external_links: int = 0


class SectionFinding(CamelModel):
    section: str
    label: str
    status: SectionStatus
    detail: str


class SectionReport(CamelModel):
    score: int = Field(ge=0, le=100)
    present_sections: list[str] = Field(default_factory=list)
    findings: list[SectionFinding] = Field(default_factory=list)
    summary_word_count: int = 0
    experience_count: int = 0
    education_count: int = 0
    skill_count: int = 0

    @property
    def missing_sections(self) -> list[str]:
        return [item.section for item in self.findings if item.status == "missing"]

    @property
    def details(self) -> list[str]:
        if not self.findings:
            return ["Excellent structure: all key sections complete"]
        return [item.detail for item in self.findings]


def is_internal_link(href: str) -> bool:
    value = (href or "").strip()
    return not value.startswith("//") and not _SCHEME_RE.match(value)


def analyze_markup_structure(outline: DocumentOutline) -> ContentStructure:
    paragraph_lengths = outline.paragraph_word_counts
    internal = sum(1 for link in outline.links if is_internal_link(link.href))
    return ContentStructure(
        h1_count=outline.heading_count(1),
        h2_count=outline.heading_count(2),
        h3_count=outline.heading_count(3),
        paragraph_count=len(paragraph_lengths),
        average_paragraph_length=(
            sum(paragraph_lengths) / len(paragraph_lengths) if paragraph_lengths else 0.0
        ),
        list_count=outline.list_count,
        image_count=len(outline.images),
        images_with_alt=sum(1 for image in outline.images if image.has_alt),
        link_count=len(outline.links),
        internal_links=internal,
        external_links=len(outline.links) - internal,
    )


def score_markup_structure(structure: ContentStructure, config: SEOScoringConfig) -> tuple[int, list[str]]:
    score = 0
    details: list[str] = []

    if structure.h1_count == 1:
        score += _SINGLE_H1_POINTS
        details.append("Exactly one H1 heading")
    elif structure.h1_count == 0:
        details.append("No H1 heading")
    else:
        details.append(f"{structure.h1_count} H1 headings (expected one)")

    if structure.h2_count > 0:
        score += _H2_POINTS
        details.append(f"{structure.h2_count} H2 subheading(s)")
    else:
        details.append("No H2 subheadings")

    if structure.list_count > 0:
        score += _LIST_POINTS
        details.append(f"{structure.list_count} list(s)")
    else:
        details.append("No bullet or numbered lists")

    if structure.paragraph_count > config.paragraph_target:
        score += _PARAGRAPH_POINTS
    else:
        score += structure.paragraph_count * _PARAGRAPH_UNIT_POINTS
    details.append(
        f"{structure.paragraph_count} paragraph(s), "
        f"{round(structure.average_paragraph_length)} words on average"
    )

    if structure.image_count > 0:
        if structure.images_with_alt == structure.image_count:
            score += _ALL_ALT_POINTS
        else:
            score += _PARTIAL_ALT_POINTS
        details.append(f"{structure.images_with_alt} of {structure.image_count} image(s) have alt text")
    else:
        details.append("No images")

    return score, details


def analyze_cv_sections(record: CVRecord, config: ATSScoringConfig) -> SectionReport:
    findings: list[SectionFinding] = []
    present: list[str] = []

    summary_words = count_words(strip_markup(record.personal.summary))
    if summary_words == 0:
        findings.append(
            SectionFinding(
                section="summary",
                label="Professional Summary",
                status="missing",
                detail="Missing professional summary (aim for 50-100 words)",
            )
        )
    else:
        present.append("summary")

    if not record.experience:
        findings.append(
            SectionFinding(
                section="experience",
                label="Work Experience",
                status="missing",
                detail="No work experience added",
            )
        )
    else:
        present.append("experience")

    if not record.education:
        findings.append(
            SectionFinding(
                section="education",
                label="Education",
                status="missing",
                detail="No education entries; add your educational background",
            )
        )
    else:
        present.append("education")

    skills = [skill for skill in record.skills if skill.strip()]
    if not skills:
        findings.append(
            SectionFinding(
                section="skills",
                label="Skills",
                status="missing",
                detail="No skills listed; skills are critical for ATS matching",
            )
        )
    else:
        present.append("skills")

    score = 100 * len(present) / len(_REQUIRED_SECTIONS)

    if 0 < summary_words < config.summary_min_words:
        score -= _SHORT_SUMMARY_PENALTY
        findings.append(
            SectionFinding(
                section="summary",
                label="Professional Summary",
                status="weak",
                detail=(
                    f"Professional summary is too short ({summary_words} words); "
                    f"aim for at least {config.summary_min_words}"
                ),
            )
        )
    if len(record.experience) == 1:
        score -= _SINGLE_EXPERIENCE_PENALTY
        findings.append(
            SectionFinding(
                section="experience",
                label="Work Experience",
                status="weak",
                detail="Add more work experience entries for a stronger profile",
            )
        )
    if 0 < len(skills) < config.recommended_skills:
        score -= _FEW_SKILLS_PENALTY
        findings.append(
            SectionFinding(
                section="skills",
                label="Skills",
                status="weak",
                detail=f"Only {len(skills)} skills listed; competitive CVs list 10-15",
            )
        )
    if not record.personal.job_title.strip():
        score -= _MISSING_TITLE_PENALTY
        findings.append(
            SectionFinding(
                section="job_title",
                label="Professional Title",
                status="weak",
                detail="Missing professional title or headline",
            )
        )
    if not record.personal.linkedin.strip() and not record.personal.website.strip():
        score -= _MISSING_LINKS_PENALTY
        findings.append(
            SectionFinding(
                section="links",
                label="Online Presence",
                status="weak",
                detail="Add a LinkedIn profile or personal website for credibility",
            )
        )

    return SectionReport(
        score=clamp_score(score),
        present_sections=present,
        findings=findings,
        summary_word_count=summary_words,
        experience_count=len(record.experience),
        education_count=len(record.education),
        skill_count=len(skills),
    )
