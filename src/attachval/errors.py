"""Error kinds, configuration errors and per-record error collection."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """User-facing error message keys."""
    MEDIA_METADATA_MISSING = "media_metadata_missing"

    DIMENSION_MIN_NOT_INCLUDED_IN = "dimension_min_not_included_in"
    DIMENSION_MAX_NOT_INCLUDED_IN = "dimension_max_not_included_in"
    DIMENSION_WIDTH_NOT_INCLUDED_IN = "dimension_width_not_included_in"
    DIMENSION_HEIGHT_NOT_INCLUDED_IN = "dimension_height_not_included_in"
    DIMENSION_WIDTH_NOT_GREATER_THAN_OR_EQUAL_TO = "dimension_width_not_greater_than_or_equal_to"
    DIMENSION_HEIGHT_NOT_GREATER_THAN_OR_EQUAL_TO = "dimension_height_not_greater_than_or_equal_to"
    DIMENSION_WIDTH_NOT_LESS_THAN_OR_EQUAL_TO = "dimension_width_not_less_than_or_equal_to"
    DIMENSION_HEIGHT_NOT_LESS_THAN_OR_EQUAL_TO = "dimension_height_not_less_than_or_equal_to"
    DIMENSION_WIDTH_NOT_EQUAL_TO = "dimension_width_not_equal_to"
    DIMENSION_HEIGHT_NOT_EQUAL_TO = "dimension_height_not_equal_to"

    CONTENT_TYPE_INVALID = "content_type_invalid"
    CONTENT_TYPE_FORBIDDEN = "content_type_forbidden"

    @classmethod
    def for_axis(cls, axis: str, check: str) -> "ErrorKind":
        """Look up the per-axis kind, e.g. ``for_axis("width", "not_equal_to")``."""
        return cls(f"dimension_{axis}_{check}")


class ConfigurationError(ValueError):
    """Raised when validator options are malformed.

    Configuration errors are fatal: they surface when the validator is built
    (or, for record-dependent options, when they are resolved) and are never
    turned into per-record validation errors.
    """

    def __init__(self, message: str, option: str | None = None):
        self.option = option
        super().__init__(message)


@dataclass
class ErrorEntry:
    """A single error registered on a record attribute."""
    attribute: str
    kind: ErrorKind
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def filename(self) -> str | None:
        return self.options.get("filename")

    def __str__(self) -> str:
        location = f" ({self.filename})" if self.filename else ""
        return f"{self.attribute}: {self.kind.value}{location}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "attribute": self.attribute,
            "kind": self.kind.value,
            "options": dict(self.options),
        }


class ErrorCollection:
    """Errors accumulated on a record while its attributes are validated."""

    def __init__(self) -> None:
        self._entries: list[ErrorEntry] = []

    def add(self, attribute: str, kind: ErrorKind, **options: Any) -> ErrorEntry:
        """Register an error for ``attribute``."""
        entry = ErrorEntry(attribute, ErrorKind(kind), options)
        self._entries.append(entry)
        logger.debug(f"Registered error {entry}")
        return entry

    def for_attribute(self, attribute: str) -> list[ErrorEntry]:
        return [entry for entry in self._entries if entry.attribute == attribute]

    def kinds(self, attribute: str | None = None) -> list[ErrorKind]:
        entries = self._entries if attribute is None else self.for_attribute(attribute)
        return [entry.kind for entry in entries]

    def clear(self) -> None:
        self._entries.clear()

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Group entries by attribute for JSON output."""
        grouped: dict[str, list[dict[str, Any]]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.attribute, []).append(
                {"kind": entry.kind.value, "options": dict(entry.options)}
            )
        return grouped

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
