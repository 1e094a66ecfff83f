"""
Question Integrity Auditor.

Scans the whole question corpus, reports questions whose problem
statement has degraded into a bare link, and applies pre-authored
corrections where one exists. Everything else is left for manual
follow-up.

The corpus is fetched in one find_many() call. That is fine for a
maintenance run over a few thousand questions; a much larger table needs
batched retrieval in the store.
"""
import sys
import json
import argparse
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from interview_integrity import config
from interview_integrity.core.classifier import classify
from interview_integrity.core.repair import CorrectionTable, QuestionRepairer, load_corrections
from interview_integrity.errors import IntegrityError
from interview_integrity.models.audit_models import (
    AuditReport,
    DegradedQuestionRef,
    RepairFailure,
)
from interview_integrity.models.question_models import Question, QuestionFilter
from interview_integrity.storage.base import QuestionStore
from interview_integrity.storage.json_store import JsonQuestionStore


def _excerpt(text: str, length: Optional[int] = None) -> str:
    length = length or config.EXCERPT_LENGTH
    flat = " ".join((text or "").split())
    return flat if len(flat) <= length else flat[:length] + "..."


class QuestionIntegrityAuditor:
    """Audit stored questions and repair the known degraded ones."""

    def __init__(
        self,
        store: QuestionStore,
        corrections: Optional[CorrectionTable] = None,
        verbose: bool = True
    ):
        """
        Initialize the auditor.

        Args:
            store: Question storage to scan and update.
            corrections: Pre-authored corrections. Defaults to CorrectionTable.default()
            verbose: Print progress to stdout.
        """
        self.store = store
        self.corrections = corrections if corrections is not None else CorrectionTable.default()
        self.verbose = verbose
        self.repairer = QuestionRepairer(store, verbose=verbose)

    def audit(self, apply_repairs: bool = True) -> AuditReport:
        """
        Classify every question and repair those with a known correction.

        Args:
            apply_repairs: Apply matching corrections. When False, only report.

        Returns:
            AuditReport for this run
        """
        questions = self.store.find_many(QuestionFilter())

        report = AuditReport(
            audit_timestamp=datetime.now().isoformat(),
            total_questions=len(questions)
        )

        if self.verbose:
            print(f"Scanning {len(questions)} questions...")

        for question_id, reason in self.store.malformed_records():
            report.failures.append(RepairFailure(
                question_id=question_id,
                error_type="StorageError",
                message=reason
            ))
            if self.verbose:
                print(f"  ✗ Skipped unreadable record {question_id}: {reason}")

        degraded_questions: List[Question] = []
        for question in questions:
            classification = classify(question)
            if classification.is_degraded:
                degraded_questions.append(question)
                report.degraded.append(DegradedQuestionRef(
                    id=question.id,
                    title=question.title,
                    excerpt=_excerpt(question.problem_statement),
                    reason=classification.reason
                ))

        if not apply_repairs:
            return report

        for question in degraded_questions:
            correction = self.corrections.find_for(question)
            if correction is None:
                continue

            try:
                self.repairer.repair(question.id, correction.replacement)
            except IntegrityError as e:
                report.failures.append(RepairFailure(
                    question_id=question.id,
                    title=question.title,
                    error_type=type(e).__name__,
                    message=str(e)
                ))
                if self.verbose:
                    print(f"  ✗ Could not repair \"{question.title}\" ({question.id}): {e}")
                continue

            report.repairs_applied += 1
            report.repaired_ids.append(question.id)

        return report

    def apply_corrections(self) -> AuditReport:
        """
        Apply every correction in the table to whatever record it matches.

        Unlike audit(), this does not require the record to be degraded.
        A correction whose record is missing is reported as a failure.
        """
        report = AuditReport(audit_timestamp=datetime.now().isoformat())

        for correction in self.corrections:
            try:
                updated = self.repairer.apply_correction(correction)
            except IntegrityError as e:
                report.failures.append(RepairFailure(
                    title=correction.label,
                    error_type=type(e).__name__,
                    message=str(e)
                ))
                if self.verbose:
                    print(f"  ⚠️ {e}")
                continue

            report.repairs_applied += 1
            report.repaired_ids.append(updated.id)

        return report

    def find_link_questions(self) -> List[Question]:
        """Questions whose problem statement contains 'http' or 'www.' at all."""
        return self.store.find_many(QuestionFilter(text_contains_any=["http", "www."]))

    def display_report(self, report: AuditReport, max_samples: int = 20):
        """
        Print a human readable summary of an audit.

        Args:
            report: AuditReport to summarize
            max_samples: Maximum number of degraded questions to list
        """
        print("\n" + "="*70)
        print("QUESTION INTEGRITY AUDIT")
        print("="*70)

        print(f"\nTotal Questions: {report.total_questions}")
        print(f"Degraded Questions: {report.degraded_count}")
        print(f"Repairs Applied: {report.repairs_applied}")

        if report.degraded:
            print("\n" + "-"*70)
            print("DEGRADED QUESTIONS")
            print("-"*70)
            repaired = set(report.repaired_ids)
            for ref in report.degraded[:max_samples]:
                marker = "✓" if ref.id in repaired else "•"
                print(f"  {marker} {ref.title} ({ref.id}) [{ref.reason}]: {ref.excerpt}")
            if report.degraded_count > max_samples:
                print(f"  ... and {report.degraded_count - max_samples} more")

        if report.failures:
            print("\n" + "-"*70)
            print("FAILURES")
            print("-"*70)
            for failure in report.failures:
                label = failure.title or failure.question_id
                print(f"  ✗ {label}: {failure.error_type}: {failure.message}")

        print()
        if report.is_clean:
            print("✓ No problems found.")
        else:
            print(f"⚠️ {len(report.outstanding)} question(s) need manual follow-up, "
                  f"{len(report.failures)} record(s) failed.")
        print("\n" + "="*70 + "\n")

    def save_report(self, report: AuditReport, output_file: str = None):
        """
        Save the audit report to a JSON file.

        Args:
            report: AuditReport to save
            output_file: Output file path (defaults to output/audit_report.json)
        """
        if output_file is None:
            output_file = Path(config.OUTPUT_DIR) / config.AUDIT_REPORT_JSON

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report.model_dump(), f, indent=2, ensure_ascii=False)

        print(f"✓ Audit report saved to: {output_path}")


def audit(
    store: QuestionStore,
    corrections: Optional[CorrectionTable] = None,
    apply_repairs: bool = True
) -> AuditReport:
    """Run one quiet audit over the store."""
    auditor = QuestionIntegrityAuditor(store, corrections=corrections, verbose=False)
    return auditor.audit(apply_repairs=apply_repairs)


def main(argv: Optional[List[str]] = None) -> int:
    """Audit a question table export and repair known degraded questions."""
    parser = argparse.ArgumentParser(
        description="Find questions stored as bare links and apply known corrections.")
    parser.add_argument("questions_file", help="JSON export of the question table")
    parser.add_argument("--corrections", default=None,
                        help="JSON file with extra corrections (label, match, replacement)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Report degraded questions without writing any repair")
    parser.add_argument("--report", default=None,
                        help="Where to save the JSON report (defaults to output/audit_report.json)")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    args = parser.parse_args(argv)

    print("="*70)
    print("QUESTION CONTENT INTEGRITY CHECK")
    print("="*70 + "\n")

    try:
        corrections = CorrectionTable.default()
        if args.corrections:
            corrections.extend(load_corrections(args.corrections))
        print(f"Loaded {len(corrections)} correction(s)")

        with JsonQuestionStore(args.questions_file) as store:
            auditor = QuestionIntegrityAuditor(
                store, corrections=corrections, verbose=not args.quiet)
            report = auditor.audit(apply_repairs=not args.dry_run)
            auditor.display_report(report)
            auditor.save_report(report, args.report)

        return 0 if report.is_clean else 1

    except FileNotFoundError as e:
        print(f"\n✗ ERROR: {e}")
        return 1
    except ValueError as e:
        print(f"\n✗ ERROR: Invalid corrections file: {e}")
        return 1
    except IntegrityError as e:
        print(f"\n✗ ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
