"""Build validators from configuration."""

import logging

from ..collaborators import AttachmentResolver, MetadataProvider
from ..config import AttachvalConfig, AttributeConfig
from ..errors import ConfigurationError
from .content_type import ContentTypeValidator
from .dimension import DimensionValidator
from .framework import AttachmentValidator, RecordValidator

logger = logging.getLogger(__name__)


def validators_for(attribute: str, attribute_config: AttributeConfig) -> list[AttachmentValidator]:
    """Instantiate the validators configured for one attribute.

    Raises:
        ConfigurationError: If the options of a validator are malformed
    """
    common = {"message": attribute_config.message} if attribute_config.message else {}
    validators: list[AttachmentValidator] = []

    if attribute_config.dimension is not None:
        try:
            validators.append(DimensionValidator(**attribute_config.dimension, **common))
        except TypeError as e:
            raise ConfigurationError(f"Invalid dimension options for {attribute}: {e}")

    if attribute_config.content_type is not None:
        validators.append(ContentTypeValidator(**{"in": attribute_config.content_type}, **common))

    return validators


def build_validators(
    config: AttachvalConfig,
    resolver: AttachmentResolver,
    provider: MetadataProvider,
) -> RecordValidator:
    """Create a RecordValidator with every configured attribute validator."""
    record_validator = RecordValidator(resolver, provider)

    for attribute, attribute_config in config.attributes.items():
        for validator in validators_for(attribute, attribute_config):
            logger.debug(f"Configured {validator.name} validator for {attribute}")
            record_validator.add_validator(attribute, validator)

    return record_validator
