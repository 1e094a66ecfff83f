"""
Interview Question Integrity Toolkit.

Maintenance tools for an interview-practice platform: detect and repair
questions stored as bare links, and verify that the Gemini backend is
usable before it generates or validates question content.
"""

__version__ = "1.0.0"
__author__ = "Interview Platform Development Team"

from interview_integrity.core.auditor import QuestionIntegrityAuditor
from interview_integrity.core.prober import GenerationBackendProber
from interview_integrity.core.repair import QuestionRepairer

__all__ = [
    "QuestionIntegrityAuditor",
    "GenerationBackendProber",
    "QuestionRepairer",
]
