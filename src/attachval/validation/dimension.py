"""Dimension validator: checks pixel width and height of attached files."""

import logging
from typing import Any

from ..errors import ConfigurationError, ErrorKind
from ..models import FileMetadata, FileRef, Verdict
from .framework import AttachmentValidator, missing_metadata
from .options import AXES, Bounds, Exact, NormalizedOptions, normalize, static_options

logger = logging.getLogger(__name__)


class DimensionValidator(AttachmentValidator):
    """Validate width/height against exact values, bounds or ranges.

    Global ``min``/``max`` ranges take priority over the ``width`` and
    ``height`` options, which are ignored whenever either is present.
    """

    AVAILABLE_CHECKS = ("width", "height", "min", "max")
    ERROR_TYPES = (
        ErrorKind.DIMENSION_MIN_NOT_INCLUDED_IN,
        ErrorKind.DIMENSION_MAX_NOT_INCLUDED_IN,
        ErrorKind.DIMENSION_WIDTH_NOT_INCLUDED_IN,
        ErrorKind.DIMENSION_HEIGHT_NOT_INCLUDED_IN,
        ErrorKind.DIMENSION_WIDTH_NOT_GREATER_THAN_OR_EQUAL_TO,
        ErrorKind.DIMENSION_HEIGHT_NOT_GREATER_THAN_OR_EQUAL_TO,
        ErrorKind.DIMENSION_WIDTH_NOT_LESS_THAN_OR_EQUAL_TO,
        ErrorKind.DIMENSION_HEIGHT_NOT_LESS_THAN_OR_EQUAL_TO,
        ErrorKind.DIMENSION_WIDTH_NOT_EQUAL_TO,
        ErrorKind.DIMENSION_HEIGHT_NOT_EQUAL_TO,
        ErrorKind.MEDIA_METADATA_MISSING,
    )

    @property
    def name(self) -> str:
        return "dimension"

    def check_validity(self) -> None:
        if not any(self.options.get(check) is not None for check in self.AVAILABLE_CHECKS):
            raise ConfigurationError(
                "You must pass either :width, :height, :min or :max to the validator"
            )
        # record-dependent options are checked when resolved
        normalize(static_options(self.options))

    def validate(self, record: Any, attribute: str, file: FileRef, metadata: FileMetadata) -> Verdict:
        normalized = normalize(self.options, record)
        return self.evaluate(normalized, metadata)

    @staticmethod
    def gate(metadata: FileMetadata) -> Verdict:
        """Reject metadata without positive width and height."""
        if metadata.width <= 0 or metadata.height <= 0:
            return missing_metadata()
        return Verdict.ok()

    @classmethod
    def evaluate(cls, normalized: NormalizedOptions, metadata: FileMetadata) -> Verdict:
        """Apply normalized constraints to ``metadata``.

        Global constraints return on the first violation. Axis constraints
        evaluate width then height and keep the last violation found.
        """
        verdict = cls.gate(metadata)
        if not verdict.valid:
            return verdict

        if normalized.has_global:
            if normalized.width is not None or normalized.height is not None:
                logger.debug("Ignoring width/height options, min/max take priority")
            return cls._evaluate_global(normalized, metadata)

        verdict = Verdict.ok()
        for axis in AXES:
            axis_verdict = cls._evaluate_axis(axis, normalized.axis(axis), metadata.value_for(axis))
            if not axis_verdict.valid:
                verdict = axis_verdict
        return verdict

    @staticmethod
    def _evaluate_global(normalized: NormalizedOptions, metadata: FileMetadata) -> Verdict:
        lower = normalized.min
        if lower is not None and (
            (lower.width is not None and metadata.width < lower.width)
            or (lower.height is not None and metadata.height < lower.height)
        ):
            return Verdict.violation(
                ErrorKind.DIMENSION_MIN_NOT_INCLUDED_IN, width=lower.width, height=lower.height
            )

        upper = normalized.max
        if upper is not None and (
            (upper.width is not None and metadata.width > upper.width)
            or (upper.height is not None and metadata.height > upper.height)
        ):
            return Verdict.violation(
                ErrorKind.DIMENSION_MAX_NOT_INCLUDED_IN, width=upper.width, height=upper.height
            )

        return Verdict.ok()

    @staticmethod
    def _evaluate_axis(axis: str, spec: Exact | Bounds | None, value: int) -> Verdict:
        if spec is None:
            return Verdict.ok()

        if isinstance(spec, Bounds):
            if spec.is_range:
                if value < spec.min or value > spec.max:
                    return Verdict.violation(
                        ErrorKind.for_axis(axis, "not_included_in"), min=spec.min, max=spec.max
                    )
            elif spec.min is not None and value < spec.min:
                return Verdict.violation(
                    ErrorKind.for_axis(axis, "not_greater_than_or_equal_to"), length=spec.min
                )
            elif spec.max is not None and value > spec.max:
                return Verdict.violation(
                    ErrorKind.for_axis(axis, "not_less_than_or_equal_to"), length=spec.max
                )
        elif value != spec.value:
            return Verdict.violation(ErrorKind.for_axis(axis, "not_equal_to"), length=spec.value)

        return Verdict.ok()
