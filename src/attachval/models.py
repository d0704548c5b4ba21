"""Models for attachments, their metadata and validation verdicts."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from attachval.errors import ErrorCollection, ErrorKind


@dataclass(frozen=True)
class FileRef:
    """Identity of one attached file."""
    filename: str
    key: str | None = None

    def __str__(self) -> str:
        return self.filename


class FileMetadata(BaseModel):
    """Metadata extracted from an attached file.

    Dimensions that could not be extracted are represented as ``0`` so the
    metadata gate can reject them before any constraint is evaluated.
    """
    width: int = 0
    height: int = 0
    content_type: str | None = Field(alias="contentType", default=None)

    @field_validator("width", "height", mode="before")
    @classmethod
    def coerce_dimension(cls, v):
        if v is None or isinstance(v, bool):
            return 0
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            pass
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            # unparseable or non-finite
            return 0

    @property
    def has_dimensions(self) -> bool:
        return self.width > 0 and self.height > 0

    def value_for(self, axis: str) -> int:
        return getattr(self, axis)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


@dataclass(frozen=True)
class Verdict:
    """Outcome of validating one file: valid, or the violated kind plus context."""
    kind: ErrorKind | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls) -> "Verdict":
        return cls()

    @classmethod
    def violation(cls, kind: ErrorKind, **context: Any) -> "Verdict":
        return cls(kind=ErrorKind(kind), context=context)

    @property
    def valid(self) -> bool:
        return self.kind is None

    def __str__(self) -> str:
        if self.valid:
            return "valid"
        if not self.context:
            return self.kind.value
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.kind.value} ({details})"


@dataclass
class Record:
    """A host record owning attachments and collecting validation errors."""
    id: str
    attachments: dict[str, list[FileRef]] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)
    errors: ErrorCollection = field(default_factory=ErrorCollection)

    def __getattr__(self, name: str) -> Any:
        # Plain attributes are exposed for record-dependent options.
        attributes = self.__dict__.get("attributes", {})
        if name in attributes:
            return attributes[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def valid(self) -> bool:
        return not self.errors
