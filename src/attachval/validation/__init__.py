"""Attachment validators.

Dimension and content type validators share the framework in
``framework``: options are checked once at setup, then every attached file
is validated on its own and failing verdicts are reported on the record.
"""

from .content_type import ContentTypeValidator
from .dimension import DimensionValidator
from .framework import AttachmentValidator, RecordValidator, ValidationReport
from .options import Bounds, Exact, MaxPair, MinPair, NormalizedOptions, Range, normalize

__all__ = [
    "AttachmentValidator",
    "RecordValidator",
    "ValidationReport",
    "DimensionValidator",
    "ContentTypeValidator",
    "Range",
    "Exact",
    "Bounds",
    "MinPair",
    "MaxPair",
    "NormalizedOptions",
    "normalize",
]
