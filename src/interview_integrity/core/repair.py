"""
Content repair engine.

Applies a fully authored replacement body to exactly one stored question
and confirms the write. Corrections for known degraded questions are kept
as data (a correction table) rather than per-record code.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from interview_integrity import config
from interview_integrity.core.classifier import classify_text
from interview_integrity.errors import (
    NotFoundError,
    ReplacementValidationError,
    StorageError,
)
from interview_integrity.models.audit_models import Correction
from interview_integrity.models.question_models import Question, QuestionFilter
from interview_integrity.storage.base import QuestionStore


class CorrectionTable:
    """Ordered collection of pre-authored corrections."""

    def __init__(self, corrections: Optional[Iterable[Correction]] = None):
        self.corrections: List[Correction] = list(corrections or [])

    @classmethod
    def from_dicts(cls, entries: Iterable[Dict[str, Any]]) -> "CorrectionTable":
        return cls(Correction.model_validate(entry) for entry in entries)

    @classmethod
    def default(cls) -> "CorrectionTable":
        """Table built from config.DEFAULT_CORRECTIONS."""
        return cls.from_dicts(config.DEFAULT_CORRECTIONS)

    def find_for(self, question: Question) -> Optional[Correction]:
        """Return the first correction whose predicate matches the question."""
        for correction in self.corrections:
            if correction.match.matches(question):
                return correction
        return None

    def extend(self, other: "CorrectionTable") -> None:
        self.corrections.extend(other.corrections)

    def __len__(self) -> int:
        return len(self.corrections)

    def __iter__(self):
        return iter(self.corrections)


def load_corrections(path: Union[str, Path]) -> CorrectionTable:
    """
    Load a correction table from a JSON file.

    The file holds a list of {"label", "match", "replacement"} objects,
    or an object with a "corrections" list.
    """
    corrections_path = Path(path)
    if not corrections_path.exists():
        raise FileNotFoundError(f"Corrections file '{path}' not found.")

    with open(corrections_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("corrections", [])
    return CorrectionTable.from_dicts(data)


class QuestionRepairer:
    """Overwrite degraded question bodies with authored replacements."""

    def __init__(self, store: QuestionStore, verbose: bool = True):
        """
        Args:
            store: Question storage to read from and write to.
            verbose: Print a line per repair.
        """
        self.store = store
        self.verbose = verbose

    def validate_replacement(self, replacement_text: str, category: Optional[str] = None) -> None:
        """Reject replacement bodies that are empty or still a bare link."""
        classification = classify_text(replacement_text, category=category)
        if classification.is_degraded:
            raise ReplacementValidationError(
                f"Replacement text is degraded ({classification.reason}); "
                "provide a full problem statement with Input, Output and Example sections."
            )

    def repair(self, question_id: str, replacement_text: str) -> Question:
        """
        Replace the problem statement and content of one question.

        Args:
            question_id: Id of the question to fix.
            replacement_text: Full authored problem statement.

        Returns:
            The updated question as stored.

        Raises:
            ReplacementValidationError: The replacement is itself degraded.
            NotFoundError: No question has this id.
            StorageError: The write failed or did not take effect.
        """
        self.validate_replacement(replacement_text)

        question = self.store.find_first(QuestionFilter(id=question_id))
        if question is None:
            raise NotFoundError(f"Question '{question_id}' not found")

        self.validate_replacement(replacement_text, question.category)
        return self._write(question, replacement_text)

    def apply_correction(self, correction: Correction) -> Question:
        """
        Apply one correction table entry to the record it matches.

        Raises:
            NotFoundError: No question matches the correction's predicate.
        """
        self.validate_replacement(correction.replacement)

        question = self.store.find_first(correction.match)
        if question is None:
            raise NotFoundError(f"Question '{correction.label}' not found")

        self.validate_replacement(correction.replacement, question.category)
        return self._write(question, correction.replacement)

    def _write(self, question: Question, replacement_text: str) -> Question:
        updated = self.store.update(
            question.id,
            {"problem_statement": replacement_text, "content": replacement_text}
        )

        if (updated.id != question.id
                or updated.problem_statement != replacement_text
                or updated.content != replacement_text):
            raise StorageError(f"Update of question '{question.id}' did not take effect")

        if self.verbose:
            print(f"  ✓ Updated \"{question.title}\" ({question.id}) with full text")
        return updated
