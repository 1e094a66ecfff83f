"""
Storage interface for the question table.

The integrity tools only ever need three capabilities from storage:
list questions, fetch one question, and update fields of one question.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from interview_integrity.models.question_models import Question, QuestionFilter


class QuestionStore(ABC):
    """
    Abstract question storage.

    Stores are context managers: a handle is acquired on enter and
    released on exit, including when a batch fails part way.
    """

    @abstractmethod
    def find_many(self, query: QuestionFilter) -> List[Question]:
        """Return every question matching the filter."""

    @abstractmethod
    def find_first(self, query: QuestionFilter) -> Optional[Question]:
        """Return the first matching question, or None."""

    @abstractmethod
    def update(self, question_id: str, fields: Dict[str, Any]) -> Question:
        """
        Overwrite the given fields of one question in a single write.

        Raises:
            NotFoundError: No question has this id.
            StorageError: Unknown field or failed write. The stored record
                is left untouched in that case.
        """

    def malformed_records(self) -> List[Tuple[str, str]]:
        """(id, reason) pairs for stored rows the last scan could not read."""
        return []

    def open(self) -> "QuestionStore":
        return self

    def close(self) -> None:
        pass

    def __enter__(self) -> "QuestionStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
