"""
Data models for question integrity checks and backend probing.
"""

from interview_integrity.models.question_models import (
    Question,
    QuestionFilter,
    ContentStatus,
    Classification,
)
from interview_integrity.models.backend_models import (
    ModelDescriptor,
    ProbeResult,
)
from interview_integrity.models.audit_models import (
    Correction,
    DegradedQuestionRef,
    RepairFailure,
    AuditReport,
)

__all__ = [
    "Question",
    "QuestionFilter",
    "ContentStatus",
    "Classification",
    "ModelDescriptor",
    "ProbeResult",
    "Correction",
    "DegradedQuestionRef",
    "RepairFailure",
    "AuditReport",
]
