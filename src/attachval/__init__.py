"""attachval - Metadata validation for file attachments.

attachval checks metadata extracted from uploaded files (pixel dimensions,
content type) against declarative per-attribute constraints and records
structured, localizable errors on the owning record.
"""

__version__ = "0.1.0"
__author__ = "attachval"
__description__ = "Metadata validation for file attachments"

from attachval.config import AttachvalConfig
from attachval.errors import ConfigurationError, ErrorKind

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "AttachvalConfig",
    "ConfigurationError",
    "ErrorKind",
]
