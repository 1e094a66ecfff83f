"""
Question storage collaborators.
"""

from interview_integrity.storage.base import QuestionStore
from interview_integrity.storage.memory import InMemoryQuestionStore
from interview_integrity.storage.json_store import JsonQuestionStore

__all__ = [
    "QuestionStore",
    "InMemoryQuestionStore",
    "JsonQuestionStore",
]
