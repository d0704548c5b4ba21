"""Tests for the content type validator."""

import pytest

from attachval.errors import ConfigurationError, ErrorKind
from attachval.models import FileMetadata, FileRef, Record
from attachval.validation.content_type import ContentTypeValidator, to_mime_type


def check(options, content_type, record=None):
    validator = ContentTypeValidator(**options)
    metadata = FileMetadata(width=1, height=1, content_type=content_type)
    return validator.validate(record, "document", FileRef("file.bin"), metadata)


class TestToMimeType:
    """Test MIME type resolution."""

    def test_mime_type(self):
        assert to_mime_type("image/png") == "image/png"

    def test_mime_type_is_lowercased(self):
        assert to_mime_type("Image/PNG") == "image/png"

    def test_extension(self):
        assert to_mime_type("png") == "image/png"
        assert to_mime_type(".pdf") == "application/pdf"

    @pytest.mark.parametrize("value", ["xxx/invalid1", "image", "image/", "not-an-extension-xyz"])
    def test_invalid(self, value):
        assert to_mime_type(value) is None


class TestCheckValidity:
    """Test setup-time option checks."""

    def test_no_option(self):
        with pytest.raises(ConfigurationError, match="You must pass either :with, :in or :not"):
            ContentTypeValidator()

    def test_invalid_content_type_in(self):
        with pytest.raises(ConfigurationError, match="xxx/invalid1") as exc_info:
            ContentTypeValidator(**{"in": ["xxx/invalid1", "xxx/invalid2"]})
        assert exc_info.value.option == "in"

    def test_invalid_content_type_with(self):
        with pytest.raises(ConfigurationError):
            ContentTypeValidator(**{"with": "xxx/invalid1"})

    def test_error_types(self):
        assert set(ContentTypeValidator.ERROR_TYPES) == {
            ErrorKind.CONTENT_TYPE_INVALID,
            ErrorKind.CONTENT_TYPE_FORBIDDEN,
            ErrorKind.MEDIA_METADATA_MISSING,
        }

    def test_callable_options_checked_per_call(self):
        validator = ContentTypeValidator(**{"in": lambda record: ["image/png"]})
        assert callable(validator.options["in"])


class TestValidate:
    """Test content type evaluation."""

    def test_allowed(self):
        assert check({"in": ["image/png", "image/jpeg"]}, "image/png").valid

    def test_allowed_by_extension(self):
        assert check({"with": "png"}, "image/png").valid

    def test_parameters_ignored(self):
        assert check({"in": "text/plain"}, "text/plain; charset=utf-8").valid

    def test_not_allowed(self):
        verdict = check({"in": ["image/png", "image/jpeg"]}, "application/pdf")
        assert verdict.kind == ErrorKind.CONTENT_TYPE_INVALID
        assert verdict.context == {
            "content_type": "application/pdf",
            "authorized_types": "image/png, image/jpeg",
        }

    def test_forbidden(self):
        verdict = check({"not": ["application/pdf"]}, "application/pdf")
        assert verdict.kind == ErrorKind.CONTENT_TYPE_FORBIDDEN
        assert verdict.context == {"content_type": "application/pdf"}

    def test_forbidden_wins_over_allowed(self):
        verdict = check({"in": "image/png", "not": "png"}, "image/png")
        assert verdict.kind == ErrorKind.CONTENT_TYPE_FORBIDDEN

    def test_not_forbidden(self):
        assert check({"not": "application/pdf"}, "image/png").valid

    def test_missing_content_type(self):
        assert check({"in": "image/png"}, None).kind == ErrorKind.MEDIA_METADATA_MISSING

    def test_dynamic_option(self):
        options = {"in": lambda record: record.allowed}
        record = Record(id="1", attributes={"allowed": ["image/gif"]})
        assert check(options, "image/gif", record).valid
        assert not check(options, "image/png", record).valid
