"""
Pydantic models for integrity audits and pre-authored corrections.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from interview_integrity.models.question_models import QuestionFilter


class Correction(BaseModel):
    """A hand-authored replacement body for one known degraded question."""
    label: str = Field(description="Short operator-facing name of the correction")
    match: QuestionFilter = Field(description="Predicate selecting the record to fix")
    replacement: str = Field(description="Full replacement problem statement")


class DegradedQuestionRef(BaseModel):
    """Reference to a question found degraded during an audit."""
    id: str
    title: str
    excerpt: str = Field(description="Truncated start of the stored problem statement")
    reason: Optional[str] = None


class RepairFailure(BaseModel):
    """A record that could not be read or repaired."""
    question_id: Optional[str] = None
    title: Optional[str] = None
    error_type: str
    message: str


class AuditReport(BaseModel):
    """Result of one audit run over the question corpus."""
    audit_timestamp: str = Field(description="ISO timestamp when the audit ran")
    total_questions: int = Field(default=0, description="Number of questions scanned")
    degraded: List[DegradedQuestionRef] = Field(
        default_factory=list,
        description="Questions classified as degraded during the scan"
    )
    repairs_applied: int = Field(default=0, description="Number of successful repairs")
    repaired_ids: List[str] = Field(default_factory=list)
    failures: List[RepairFailure] = Field(default_factory=list)

    @property
    def degraded_count(self) -> int:
        return len(self.degraded)

    @property
    def outstanding(self) -> List[DegradedQuestionRef]:
        """Degraded questions still needing manual follow-up."""
        repaired = set(self.repaired_ids)
        return [ref for ref in self.degraded if ref.id not in repaired]

    @property
    def is_clean(self) -> bool:
        return not self.outstanding and not self.failures
