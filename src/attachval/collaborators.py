"""Attachment resolution and metadata lookup.

Validators never read files themselves: attachments are resolved through an
``AttachmentResolver`` and their metadata through a ``MetadataProvider``.
The in-memory implementations here back the CLI and the tests.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from .models import FileMetadata, FileRef, Record

logger = logging.getLogger(__name__)


class AttachmentResolver(ABC):
    """Resolves the files attached to a record attribute."""

    @abstractmethod
    def attachments_for(self, record: Any, attribute: str) -> Sequence[FileRef]:
        """Ordered files attached to ``attribute``; empty if none."""
        pass


class MetadataProvider(ABC):
    """Supplies already-extracted metadata for a file."""

    @abstractmethod
    def metadata_for(self, file: FileRef) -> FileMetadata:
        pass


class RecordAttachmentResolver(AttachmentResolver):
    """Reads attachments from ``Record.attachments``."""

    def attachments_for(self, record: Any, attribute: str) -> Sequence[FileRef]:
        attachments = getattr(record, "attachments", None) or {}
        return list(attachments.get(attribute, []))


class MappingMetadataProvider(MetadataProvider):
    """Metadata held in memory, keyed by file key (or filename)."""

    def __init__(self, metadata: Mapping[str, FileMetadata] | None = None):
        self._metadata: dict[str, FileMetadata] = dict(metadata or {})

    def add(self, file: FileRef, metadata: FileMetadata) -> None:
        self._metadata[self._key(file)] = metadata

    def metadata_for(self, file: FileRef) -> FileMetadata:
        # Unknown files have no extractable metadata.
        return self._metadata.get(self._key(file), FileMetadata())

    @staticmethod
    def _key(file: FileRef) -> str:
        return file.key or file.filename


def load_manifest(manifest_path: Path) -> tuple[list[Record], MappingMetadataProvider]:
    """Load records and attachment metadata from a JSON manifest.

    Record ``attributes`` can be referenced from dimension options with
    ``{"attribute": "maxWidth"}``. The manifest has the form::

        {"records": [{"id": "1",
                      "attributes": {"maxWidth": 800},
                      "attachments": {"avatar": [
                          {"filename": "a.png", "width": 120, "height": 80,
                           "contentType": "image/png"}]}}]}

    Args:
        manifest_path: Path to the manifest file

    Returns:
        Records and a metadata provider for their attachments

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest is not valid JSON or malformed
    """
    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in manifest {manifest_path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("records"), list):
        raise ValueError(f"Manifest {manifest_path} must contain a 'records' list")

    provider = MappingMetadataProvider()
    records: list[Record] = []

    for i, entry in enumerate(data["records"]):
        if not isinstance(entry, dict):
            raise ValueError(f"Record {i} in manifest {manifest_path} must be an object")
        attributes = entry.get("attributes", {})
        attachments = entry.get("attachments", {})
        if not isinstance(attributes, dict) or not isinstance(attachments, dict):
            raise ValueError(
                f"Record {i} in manifest {manifest_path}: 'attributes' and 'attachments' must be objects"
            )

        record = Record(id=str(entry.get("id", i)), attributes=dict(attributes))
        for attribute, files in attachments.items():
            if isinstance(files, dict):
                files = [files]
            if not isinstance(files, list):
                raise ValueError(f"Attachments of {attribute} in record {record.id} must be a list")
            refs = []
            for j, file_data in enumerate(files):
                if not isinstance(file_data, dict):
                    raise ValueError(
                        f"File {j} of {attribute} in record {record.id} must be an object"
                    )
                filename = file_data.get("filename") or f"{attribute}-{j}"
                ref = FileRef(filename=filename, key=f"{record.id}/{attribute}/{j}")
                try:
                    provider.add(ref, FileMetadata.model_validate(file_data))
                except ValidationError as e:
                    raise ValueError(
                        f"Invalid metadata for {filename} in record {record.id}: {e}"
                    )
                refs.append(ref)
            record.attachments[attribute] = refs
        records.append(record)

    logger.info(f"Loaded {len(records)} records from {manifest_path}")
    return records, provider
