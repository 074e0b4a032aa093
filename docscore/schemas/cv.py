from __future__ import annotations

from pydantic import ConfigDict, Field

from .base import CamelModel

_RECORD_CONFIG = ConfigDict(frozen=True)


class CVPersonal(CamelModel):
    model_config = _RECORD_CONFIG

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    website: str = ""
    linkedin: str = ""
    job_title: str = ""
    summary: str = ""


class CVExperience(CamelModel):
    model_config = _RECORD_CONFIG

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class CVEducation(CamelModel):
    model_config = _RECORD_CONFIG

    degree: str = ""
    school: str = ""
    location: str = ""
    year: str = ""


class CVCertificate(CamelModel):
    model_config = _RECORD_CONFIG

    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""
    description: str = ""


class CVLanguage(CamelModel):
    model_config = _RECORD_CONFIG

    language: str = ""
    proficiency: str = ""


class CVRecord(CamelModel):
    model_config = _RECORD_CONFIG

    personal: CVPersonal = Field(default_factory=CVPersonal)
    experience: tuple[CVExperience, ...] = ()
    education: tuple[CVEducation, ...] = ()
    skills: tuple[str, ...] = ()
    certifications: tuple[CVCertificate, ...] = ()
    languages: tuple[CVLanguage, ...] = ()

    def all_text(self) -> str:
        """Every free-text field of the record joined with spaces, in document order."""
        parts: list[str] = [self.personal.full_name, self.personal.job_title, self.personal.summary]
        parts.extend(f"{item.title} {item.company} {item.description}" for item in self.experience)
        parts.extend(f"{item.degree} {item.school}" for item in self.education)
        parts.extend(self.skills)
        parts.extend(f"{item.name} {item.description}" for item in self.certifications)
        parts.extend(item.language for item in self.languages)
        return " ".join(part for part in parts if part and part.strip())
