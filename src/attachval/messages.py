"""Default English messages for validation errors."""

from typing import Any, Mapping

from .errors import ErrorEntry, ErrorKind

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MEDIA_METADATA_MISSING: "is not a valid media file",
    ErrorKind.DIMENSION_MIN_NOT_INCLUDED_IN: "must be greater than or equal to {width} x {height} pixel",
    ErrorKind.DIMENSION_MAX_NOT_INCLUDED_IN: "must be less than or equal to {width} x {height} pixel",
    ErrorKind.DIMENSION_WIDTH_NOT_INCLUDED_IN: "width is not included between {min} and {max} pixel",
    ErrorKind.DIMENSION_HEIGHT_NOT_INCLUDED_IN: "height is not included between {min} and {max} pixel",
    ErrorKind.DIMENSION_WIDTH_NOT_GREATER_THAN_OR_EQUAL_TO: "width must be greater than or equal to {length} pixel",
    ErrorKind.DIMENSION_HEIGHT_NOT_GREATER_THAN_OR_EQUAL_TO: "height must be greater than or equal to {length} pixel",
    ErrorKind.DIMENSION_WIDTH_NOT_LESS_THAN_OR_EQUAL_TO: "width must be less than or equal to {length} pixel",
    ErrorKind.DIMENSION_HEIGHT_NOT_LESS_THAN_OR_EQUAL_TO: "height must be less than or equal to {length} pixel",
    ErrorKind.DIMENSION_WIDTH_NOT_EQUAL_TO: "width must be equal to {length} pixel",
    ErrorKind.DIMENSION_HEIGHT_NOT_EQUAL_TO: "height must be equal to {length} pixel",
    ErrorKind.CONTENT_TYPE_INVALID: "has an invalid content type {content_type} (authorized content types are {authorized_types})",
    ErrorKind.CONTENT_TYPE_FORBIDDEN: "has a forbidden content type {content_type}",
}


class _Interpolation(dict):
    """Leave unknown placeholders untouched instead of failing."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class MessageCatalog:
    """Renders error entries to human-readable messages.

    Templates use ``str.format`` placeholders filled from the error options;
    a custom ``message`` option replaces the template.
    """

    def __init__(self, overrides: Mapping[ErrorKind | str, str] | None = None):
        self.templates: dict[ErrorKind, str] = dict(DEFAULT_MESSAGES)
        for kind, template in (overrides or {}).items():
            self.templates[ErrorKind(kind)] = template

    def template_for(self, kind: ErrorKind) -> str:
        return self.templates.get(ErrorKind(kind), ErrorKind(kind).value)

    def render(self, kind: ErrorKind, **options: Any) -> str:
        template = options.get("message") or self.template_for(kind)
        return template.format_map(_Interpolation(options))

    def full_message(self, entry: ErrorEntry) -> str:
        """Message prefixed with the attribute, e.g. ``avatar width must be ...``."""
        return f"{entry.attribute} {self.render(entry.kind, **entry.options)}"
