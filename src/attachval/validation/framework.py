"""Core validation framework for attachment metadata.

Validators are built once from their options (``check_validity`` runs
there) and then applied to any number of records. Each attached file is
validated on its own and produces one verdict; failing verdicts are
registered on the record's error collection.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..collaborators import AttachmentResolver, MetadataProvider
from ..errors import ErrorKind
from ..models import FileMetadata, FileRef, Record, Verdict

logger = logging.getLogger(__name__)


class AttachmentValidator(ABC):
    """Base class for attachment validators."""

    def __init__(self, **options: Any):
        self.options = dict(options)
        self.check_validity()

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator type, reported with every error."""
        pass

    @abstractmethod
    def check_validity(self) -> None:
        """Verify the options at setup time.

        Raises:
            ConfigurationError: If the options cannot be used
        """
        pass

    @abstractmethod
    def validate(self, record: Any, attribute: str, file: FileRef, metadata: FileMetadata) -> Verdict:
        """Evaluate one file's metadata and return its verdict."""
        pass

    def error_options(self, file: FileRef) -> dict[str, Any]:
        """Options passed along with every error for ``file``."""
        error_options: dict[str, Any] = {
            "validator_type": self.name,
            "filename": file.filename,
        }
        if self.options.get("message"):
            error_options["message"] = self.options["message"]
        return error_options

    def report(self, record: Any, attribute: str, verdict: Verdict, file: FileRef) -> None:
        """Register a failing verdict on the record's errors."""
        if verdict.valid:
            return
        error_options = self.error_options(file)
        error_options.update(verdict.context)
        record.errors.add(attribute, verdict.kind, **error_options)

    def validate_each(
        self,
        record: Any,
        attribute: str,
        resolver: AttachmentResolver,
        provider: MetadataProvider,
    ) -> bool:
        """Validate every file attached to ``attribute``.

        Returns:
            True if all attached files are valid (or none is attached)
        """
        files = resolver.attachments_for(record, attribute)
        if not files:
            return True

        all_valid = True
        for file in files:
            metadata = provider.metadata_for(file)
            verdict = self.validate(record, attribute, file, metadata)
            logger.debug(f"{self.name} {attribute} {file}: {verdict}")
            if not verdict.valid:
                self.report(record, attribute, verdict, file)
                all_valid = False
        return all_valid


def missing_metadata() -> Verdict:
    return Verdict.violation(ErrorKind.MEDIA_METADATA_MISSING)


@dataclass
class ValidationReport:
    """Summary of validating a batch of records."""
    records: list[Record] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def invalid_records(self) -> list[Record]:
        return [record for record in self.records if record.errors]

    @property
    def valid(self) -> bool:
        return not self.invalid_records

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = all valid, 1 = violations found."""
        return 0 if self.valid else 1

    def increment_counter(self, name: str, value: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "records": [
                {
                    "id": record.id,
                    "valid": record.valid,
                    "errors": record.errors.to_dict(),
                }
                for record in self.records
            ],
        }


class RecordValidator:
    """Runs the validators configured per attribute against records."""

    def __init__(self, resolver: AttachmentResolver, provider: MetadataProvider):
        self.resolver = resolver
        self.provider = provider
        self.validators: dict[str, list[AttachmentValidator]] = {}

    def add_validator(self, attribute: str, validator: AttachmentValidator) -> None:
        self.validators.setdefault(attribute, []).append(validator)

    def validate_record(self, record: Record) -> bool:
        """Validate all configured attributes of one record.

        Every validator runs even after an earlier one failed, so the record
        collects the errors of all attributes.
        """
        valid = True
        for attribute, validators in self.validators.items():
            for validator in validators:
                if not validator.validate_each(record, attribute, self.resolver, self.provider):
                    valid = False
        return valid

    def validate(self, records: list[Record]) -> ValidationReport:
        """Validate a batch of records."""
        report = ValidationReport()

        logger.info(f"Validating {len(records)} records")
        logger.info(f"Running validators for {len(self.validators)} attributes")

        for record in records:
            report.records.append(record)
            report.increment_counter("records_checked")
            for attribute in self.validators:
                report.increment_counter(
                    "files_checked", len(self.resolver.attachments_for(record, attribute))
                )
            if not self.validate_record(record):
                report.increment_counter("records_invalid")
                for entry in record.errors:
                    report.increment_counter(entry.kind.value)

        logger.info(f"Validation completed: {report.counters.get('records_invalid', 0)} invalid records")
        return report
