"""
Question store backed by a JSON export of the question table.

The file holds either a list of question records or an object with a
"questions" list. Records keep any extra columns (rubric, idealAnswer,
...) untouched; only the updated fields are rewritten.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from interview_integrity.errors import NotFoundError, StorageError
from interview_integrity.models.question_models import Question, QuestionFilter
from interview_integrity.storage.base import QuestionStore


def _record_id(record: Any) -> Optional[str]:
    if isinstance(record, dict) and record.get("id") is not None:
        return str(record["id"])
    return None


class JsonQuestionStore(QuestionStore):
    """Read and update questions in a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._records: Optional[List[Dict[str, Any]]] = None
        self._wrapped = False
        self._malformed: List[Tuple[str, str]] = []

    def open(self) -> "JsonQuestionStore":
        """Load the question table from disk."""
        if not self.path.exists():
            raise StorageError(f"Question file '{self.path}' not found.")

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read '{self.path}': {e}") from e

        if isinstance(data, dict) and isinstance(data.get("questions"), list):
            self._wrapped = True
            self._records = data["questions"]
        elif isinstance(data, list):
            self._wrapped = False
            self._records = data
        else:
            raise StorageError(
                f"'{self.path}' must contain a list of questions or a 'questions' list.")
        return self

    def close(self) -> None:
        self._records = None
        self._malformed = []

    def find_many(self, query: QuestionFilter) -> List[Question]:
        """
        Return every readable question matching the filter.

        Rows that do not validate as questions are skipped and kept in
        malformed_records() so one bad row cannot hide the rest of the table.
        """
        self._malformed = []
        questions = []
        for record in self._loaded():
            question = self._parse_or_skip(record)
            if question is not None and query.matches(question):
                questions.append(question)
        return questions

    def find_first(self, query: QuestionFilter) -> Optional[Question]:
        for record in self._loaded():
            question = self._parse_or_skip(record)
            if question is not None and query.matches(question):
                return question
        return None

    def malformed_records(self) -> List[Tuple[str, str]]:
        return list(self._malformed)

    def update(self, question_id: str, fields: Dict[str, Any]) -> Question:
        records = self._loaded()

        index = next(
            (i for i, record in enumerate(records) if _record_id(record) == question_id),
            None
        )
        if index is None:
            raise NotFoundError(f"Question '{question_id}' not found in '{self.path}'")

        unknown = set(fields) - set(Question.model_fields)
        if unknown:
            raise StorageError(f"Unknown question fields: {', '.join(sorted(unknown))}")
        if "id" in fields:
            raise StorageError("Question id cannot be changed")

        updated_record = dict(records[index])
        for name, value in fields.items():
            updated_record[self._column_for(name, updated_record)] = value

        new_records = list(records)
        new_records[index] = updated_record
        self._write(new_records)

        # Only swap in the new table once it is safely on disk
        self._records = new_records
        return self._parse(updated_record)

    def _loaded(self) -> List[Dict[str, Any]]:
        if self._records is None:
            self.open()
        return self._records

    def _parse(self, record: Any) -> Question:
        if not isinstance(record, dict):
            raise StorageError(f"Malformed question record in '{self.path}': not an object")
        try:
            return Question.model_validate(record)
        except ValidationError as e:
            raise StorageError(
                f"Malformed question record '{record.get('id', '?')}' in '{self.path}': {e}"
            ) from e

    def _parse_or_skip(self, record: Any) -> Optional[Question]:
        try:
            return self._parse(record)
        except StorageError as e:
            entry = (_record_id(record) or "?", str(e))
            if entry not in self._malformed:
                self._malformed.append(entry)
            return None

    @staticmethod
    def _column_for(field_name: str, record: Dict[str, Any]) -> str:
        """Write back under whichever key the record already uses."""
        alias = Question.model_fields[field_name].alias
        if alias and (alias in record or field_name not in record):
            return alias
        return field_name

    def _write(self, records: List[Dict[str, Any]]) -> None:
        payload = {"questions": records} if self._wrapped else records
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StorageError(f"Could not write '{self.path}': {e}") from e
