"""
Core functionality for question integrity checks and backend probing.
"""

from interview_integrity.core.classifier import classify, classify_text, is_degraded
from interview_integrity.core.repair import CorrectionTable, QuestionRepairer, load_corrections
from interview_integrity.core.prober import GenerationBackendProber, probe_backend
from interview_integrity.core.auditor import QuestionIntegrityAuditor, audit

__all__ = [
    "classify",
    "classify_text",
    "is_degraded",
    "CorrectionTable",
    "QuestionRepairer",
    "load_corrections",
    "GenerationBackendProber",
    "probe_backend",
    "QuestionIntegrityAuditor",
    "audit",
]
