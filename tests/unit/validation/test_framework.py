"""Tests for validation framework core functionality."""

import pytest

from attachval.collaborators import MappingMetadataProvider, RecordAttachmentResolver
from attachval.config import AttachvalConfig, AttributeConfig
from attachval.errors import ConfigurationError, ErrorKind
from attachval.models import FileMetadata, FileRef, Record, Verdict
from attachval.validation.content_type import ContentTypeValidator
from attachval.validation.dimension import DimensionValidator
from attachval.validation.framework import (
    AttachmentValidator,
    RecordValidator,
    ValidationReport,
)
from attachval.validation.options import Range
from attachval.validation.registry import build_validators, validators_for


@pytest.fixture
def provider():
    return MappingMetadataProvider({
        "small.png": FileMetadata(width=50, height=50, content_type="image/png"),
        "large.png": FileMetadata(width=2000, height=1000, content_type="image/png"),
        "doc.pdf": FileMetadata(content_type="application/pdf"),
    })


@pytest.fixture
def records():
    return [
        Record(id="ok", attachments={"avatar": [FileRef("small.png")]}),
        Record(id="too-large", attachments={"avatar": [FileRef("large.png")]}),
        Record(id="empty"),
        Record(id="pdf", attachments={"avatar": [FileRef("doc.pdf")]}),
    ]


class AlwaysInvalid(AttachmentValidator):
    """Validator used to exercise the base class."""

    @property
    def name(self) -> str:
        return "always_invalid"

    def check_validity(self) -> None:
        pass

    def validate(self, record, attribute, file, metadata):
        return Verdict.violation(ErrorKind.MEDIA_METADATA_MISSING)


class TestAttachmentValidator:
    """Test the validator base class."""

    def test_error_options(self):
        validator = AlwaysInvalid(message="custom")
        assert validator.error_options(FileRef("a.png")) == {
            "validator_type": "always_invalid",
            "filename": "a.png",
            "message": "custom",
        }

    def test_validate_each_reports_file_identity(self):
        record = Record(id="1", attachments={"gallery": [FileRef("a.png"), FileRef("b.png")]})
        validator = AlwaysInvalid()

        valid = validator.validate_each(record, "gallery", RecordAttachmentResolver(), MappingMetadataProvider())

        assert valid is False
        assert [str(entry) for entry in record.errors] == [
            "gallery: media_metadata_missing (a.png)",
            "gallery: media_metadata_missing (b.png)",
        ]


class TestValidationReport:
    """Test ValidationReport class."""

    def test_empty_report_is_valid(self):
        report = ValidationReport()
        assert report.valid
        assert report.exit_code == 0

    def test_invalid_record(self):
        record = Record(id="1")
        record.errors.add("avatar", ErrorKind.MEDIA_METADATA_MISSING)
        report = ValidationReport(records=[record, Record(id="2")])

        assert not report.valid
        assert report.exit_code == 1
        assert [r.id for r in report.invalid_records] == ["1"]

    def test_to_dict(self):
        record = Record(id="1")
        record.errors.add("avatar", ErrorKind.DIMENSION_WIDTH_NOT_EQUAL_TO, length=10)
        report = ValidationReport(records=[record])
        report.increment_counter("records_checked")

        assert report.to_dict() == {
            "valid": False,
            "exit_code": 1,
            "counters": {"records_checked": 1},
            "records": [
                {
                    "id": "1",
                    "valid": False,
                    "errors": {
                        "avatar": [{"kind": "dimension_width_not_equal_to", "options": {"length": 10}}]
                    },
                }
            ],
        }


class TestRecordValidator:
    """Test running validators over records."""

    def test_validate_records(self, provider, records):
        record_validator = RecordValidator(RecordAttachmentResolver(), provider)
        record_validator.add_validator("avatar", DimensionValidator(max=Range(1000, 1000)))

        report = record_validator.validate(records)

        assert [r.id for r in report.invalid_records] == ["too-large", "pdf"]
        assert report.counters["records_checked"] == 4
        assert report.counters["files_checked"] == 3
        assert report.counters["records_invalid"] == 2
        assert report.counters["dimension_max_not_included_in"] == 1
        assert report.counters["media_metadata_missing"] == 1

    def test_all_validators_run(self, provider, records):
        record_validator = RecordValidator(RecordAttachmentResolver(), provider)
        record_validator.add_validator("avatar", DimensionValidator(min=Range(100, 100)))
        record_validator.add_validator("avatar", ContentTypeValidator(**{"in": "image/png"}))

        pdf = records[3]
        assert record_validator.validate_record(pdf) is False
        assert pdf.errors.kinds("avatar") == [
            ErrorKind.MEDIA_METADATA_MISSING,
            ErrorKind.CONTENT_TYPE_INVALID,
        ]

    def test_record_without_attachments_is_valid(self, provider):
        record_validator = RecordValidator(RecordAttachmentResolver(), provider)
        record_validator.add_validator("avatar", DimensionValidator(width=10))
        assert record_validator.validate_record(Record(id="empty"))


class TestRegistry:
    """Test building validators from configuration."""

    def test_validators_for_attribute(self):
        attribute_config = AttributeConfig(
            dimension={"width": {"in": [10, 20]}},
            contentType=["png", "image/jpeg"],
            message="Invalid image",
        )
        validators = validators_for("avatar", attribute_config)

        assert [type(v) for v in validators] == [DimensionValidator, ContentTypeValidator]
        assert all(v.options["message"] == "Invalid image" for v in validators)

    def test_missing_dimension_option(self):
        with pytest.raises(ConfigurationError):
            validators_for("avatar", AttributeConfig(dimension={}))

    def test_invalid_content_type(self):
        with pytest.raises(ConfigurationError):
            validators_for("avatar", AttributeConfig(content_type=["xxx/invalid1"]))

    def test_duplicate_message_option(self):
        attribute_config = AttributeConfig(dimension={"width": 10, "message": "a"}, message="b")
        with pytest.raises(ConfigurationError, match="Invalid dimension options for avatar"):
            validators_for("avatar", attribute_config)

    def test_build_validators(self, provider):
        config = AttachvalConfig(attributes={
            "avatar": AttributeConfig(dimension={"max": [1000, 1000]}),
            "document": AttributeConfig(content_type="application/pdf"),
        })
        record_validator = build_validators(config, RecordAttachmentResolver(), provider)

        assert set(record_validator.validators) == {"avatar", "document"}
        assert isinstance(record_validator.validators["document"][0], ContentTypeValidator)
