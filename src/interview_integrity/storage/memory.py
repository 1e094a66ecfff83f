"""
In-memory question store, used for dry runs and tests.
"""
from typing import Any, Dict, Iterable, List, Optional

from interview_integrity.errors import NotFoundError, StorageError
from interview_integrity.models.question_models import Question, QuestionFilter
from interview_integrity.storage.base import QuestionStore


class InMemoryQuestionStore(QuestionStore):
    """Keeps questions in a dict keyed by id, in insertion order."""

    def __init__(self, questions: Optional[Iterable[Question]] = None):
        self._questions: Dict[str, Question] = {}
        for question in questions or []:
            self._questions[question.id] = question

    def find_many(self, query: QuestionFilter) -> List[Question]:
        return [q for q in self._questions.values() if query.matches(q)]

    def find_first(self, query: QuestionFilter) -> Optional[Question]:
        for question in self._questions.values():
            if query.matches(question):
                return question
        return None

    def update(self, question_id: str, fields: Dict[str, Any]) -> Question:
        current = self._questions.get(question_id)
        if current is None:
            raise NotFoundError(f"Question '{question_id}' not found")

        unknown = set(fields) - set(Question.model_fields)
        if unknown:
            raise StorageError(f"Unknown question fields: {', '.join(sorted(unknown))}")
        if "id" in fields:
            raise StorageError("Question id cannot be changed")

        updated = current.model_copy(update=fields)
        self._questions[question_id] = updated
        return updated
