from __future__ import annotations

from pydantic import BaseModel, Field


class OutlineImage(BaseModel):
    src: str = ""
    alt: str = ""

    @property
    def has_alt(self) -> bool:
        return bool(self.alt.strip())


class OutlineLink(BaseModel):
    href: str
    text: str = ""


class OutlineHeading(BaseModel):
    level: int = Field(ge=1, le=6)
    text: str


class DocumentOutline(BaseModel):
    text: str = ""
    headings: list[OutlineHeading] = Field(default_factory=list)
    paragraphs: list[str] = Field(default_factory=list)
    paragraph_word_counts: list[int] = Field(default_factory=list)
    first_paragraph: str = ""
    list_count: int = 0
    images: list[OutlineImage] = Field(default_factory=list)
    links: list[OutlineLink] = Field(default_factory=list)

    @property
    def heading_texts(self) -> list[str]:
        return [heading.text for heading in self.headings if heading.text]

    def heading_count(self, level: int) -> int:
        return sum(1 for heading in self.headings if heading.level == level)
