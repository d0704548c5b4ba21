"""Content type validator: checks the MIME type of attached files."""

import logging
import mimetypes
import re
from typing import Any

from ..errors import ConfigurationError, ErrorKind
from ..models import FileMetadata, FileRef, Verdict
from .framework import AttachmentValidator, missing_metadata
from .options import is_dynamic, resolve

logger = logging.getLogger(__name__)

# IANA top-level media types
TOP_LEVEL_TYPES = {
    "application",
    "audio",
    "font",
    "image",
    "message",
    "model",
    "multipart",
    "text",
    "video",
}

MIME_TYPE_PATTERN = re.compile(r"^([a-z]+)/([a-z0-9][a-z0-9!#$&^_.+-]*)$")


def to_mime_type(value: str) -> str | None:
    """Turn ``"image/png"``, ``"png"`` or ``".png"`` into a MIME type.

    Returns None when the value is neither a well-formed MIME type with a
    registered top-level type nor a known file extension.
    """
    value = value.strip().lower()
    if "/" in value:
        match = MIME_TYPE_PATTERN.match(value)
        if match and match.group(1) in TOP_LEVEL_TYPES:
            return value
        return None
    mime_type, _ = mimetypes.guess_type(f"file.{value.lstrip('.')}")
    return mime_type


class ContentTypeValidator(AttachmentValidator):
    """Validate the content type of attached files.

    Options:
        in / with: allowed content types
        not: forbidden content types
    """

    AVAILABLE_CHECKS = ("in", "with", "not")
    ERROR_TYPES = (
        ErrorKind.CONTENT_TYPE_INVALID,
        ErrorKind.CONTENT_TYPE_FORBIDDEN,
        ErrorKind.MEDIA_METADATA_MISSING,
    )

    @property
    def name(self) -> str:
        return "content_type"

    def check_validity(self) -> None:
        if not any(self.options.get(check) is not None for check in self.AVAILABLE_CHECKS):
            raise ConfigurationError(
                "You must pass either :with, :in or :not to the validator"
            )
        for check in self.AVAILABLE_CHECKS:
            value = self.options.get(check)
            if value is None or is_dynamic(value):
                continue
            self._mime_types(check, value)

    def _mime_types(self, check: str, value: Any) -> list[str]:
        values = [value] if isinstance(value, str) else list(value)
        mime_types = []
        for item in values:
            mime_type = to_mime_type(str(item))
            if mime_type is None:
                raise ConfigurationError(
                    f"You must pass valid content types to the validator: "
                    f"'{item}' is not a registered MIME type",
                    option=check,
                )
            mime_types.append(mime_type)
        return mime_types

    def authorized_types(self, record: Any) -> tuple[list[str], list[str]]:
        """Allowed and forbidden MIME types for ``record``."""
        allowed: list[str] = []
        for check in ("in", "with"):
            value = resolve(self.options.get(check), record)
            if value is not None:
                allowed.extend(self._mime_types(check, value))

        forbidden: list[str] = []
        value = resolve(self.options.get("not"), record)
        if value is not None:
            forbidden = self._mime_types("not", value)
        return allowed, forbidden

    def validate(self, record: Any, attribute: str, file: FileRef, metadata: FileMetadata) -> Verdict:
        if not metadata.content_type:
            return missing_metadata()

        allowed, forbidden = self.authorized_types(record)
        content_type = metadata.content_type.split(";")[0].strip().lower()

        if content_type in forbidden:
            logger.debug(f"Forbidden content type {content_type} for {file}")
            return Verdict.violation(ErrorKind.CONTENT_TYPE_FORBIDDEN, content_type=content_type)
        if allowed and content_type not in allowed:
            logger.debug(f"Rejected content type {content_type} for {file}")
            return Verdict.violation(
                ErrorKind.CONTENT_TYPE_INVALID,
                content_type=content_type,
                authorized_types=", ".join(allowed),
            )
        return Verdict.ok()
