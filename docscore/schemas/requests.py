from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import CamelModel


class SEOScoreRequest(CamelModel):
    content: str = Field(default="", max_length=500_000)
    keywords: list[str] = Field(default_factory=list, max_length=50)
    title: str | None = Field(default=None, max_length=500)
    meta_description: str | None = Field(default=None, max_length=2000)


class ATSScoreRequest(CamelModel):
    # Validated into a CVRecord by the scorer so field errors name the CV path.
    profile: dict[str, Any] = Field(default_factory=dict)
    job_description: str | None = Field(default=None, max_length=50_000)
