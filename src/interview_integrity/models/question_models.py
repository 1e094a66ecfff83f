"""
Pydantic models for stored interview questions and their content status.
"""
from enum import Enum
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Question(BaseModel):
    """A stored practice question."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(description="Unique identifier of the question")
    title: str = Field(description="Display title of the question")
    category: Literal["DSA", "SYSTEM_DESIGN", "BEHAVIORAL"] = Field(
        description="Question category: 'DSA', 'SYSTEM_DESIGN' or 'BEHAVIORAL'"
    )
    topic: str = Field(default="", description="Topic within the category")
    domain: str = Field(default="", description="Interview domain, e.g. DSA or SYSTEM_DESIGN")
    problem_statement: str = Field(
        default="",
        alias="problemStatement",
        description="Full problem text shown to the candidate"
    )
    content: str = Field(
        default="",
        description="Body text, usually a copy of the problem statement"
    )
    difficulty: Optional[Literal["EASY", "MEDIUM", "HARD"]] = Field(
        default=None,
        description="Difficulty level"
    )
    external_source: Optional[str] = Field(
        default=None,
        alias="externalSource",
        description="Name of the site the question was imported from"
    )
    external_id: Optional[str] = Field(
        default=None,
        alias="externalId",
        description="Identifier of the question on the external site"
    )

    @field_validator("topic", "domain", "problem_statement", "content", mode="before")
    @classmethod
    def null_text_as_empty(cls, value):
        # Optional text columns come out of the platform export as null
        return "" if value is None else value


class QuestionFilter(BaseModel):
    """
    Storage-agnostic query over questions.

    All set criteria must hold. An empty filter matches every question.
    """
    id: Optional[str] = None
    title_contains: Optional[str] = None
    text_contains_any: List[str] = Field(
        default_factory=list,
        description="Match if the problem statement contains any of these substrings"
    )
    category: Optional[str] = None

    def matches(self, question: Question) -> bool:
        if self.id is not None and question.id != self.id:
            return False
        if self.title_contains is not None and self.title_contains not in question.title:
            return False
        if self.category is not None and question.category != self.category:
            return False
        if self.text_contains_any and not any(
            needle in question.problem_statement for needle in self.text_contains_any
        ):
            return False
        return True


class ContentStatus(str, Enum):
    """Whether a question body is usable as-is."""
    COMPLETE = "complete"
    DEGRADED = "degraded"


class Classification(BaseModel):
    """Outcome of inspecting one question body."""
    status: ContentStatus
    reason: Optional[Literal["empty", "link_only", "link_reference"]] = Field(
        default=None,
        description="Why the body is degraded: 'empty', 'link_only' or 'link_reference'"
    )
    links: List[str] = Field(default_factory=list)
    link_fraction: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def is_degraded(self) -> bool:
        return self.status == ContentStatus.DEGRADED
