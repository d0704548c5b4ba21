"""Option normalization for attachment validators.

Raw validator options accept several shapes per axis:

- an exact value: ``{"width": 100}``
- independent bounds: ``{"width": {"min": 10, "max": 20}}``
- an inclusive range: ``{"width": {"in": Range(10, 20)}}``

and global ``min``/``max`` ranges read as ``width..height``:
``{"min": Range(100, 200)}``. Any option may also be a callable taking the
record, or ``{"attribute": name}`` to read one of its attributes, so
options are resolved again on every validation call.
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

AXES = ("width", "height")


@dataclass(frozen=True)
class Range:
    """Inclusive range ``low..high``."""
    low: Any
    high: Any

    @property
    def first(self) -> Any:
        return self.low

    @property
    def last(self) -> Any:
        return self.high


@dataclass(frozen=True)
class Exact:
    """Axis value must equal ``value``."""
    value: Any


@dataclass(frozen=True)
class Bounds:
    """Independent inclusive lower/upper bounds; either may be absent."""
    min: Any = None
    max: Any = None

    @property
    def is_range(self) -> bool:
        return self.min is not None and self.max is not None


@dataclass(frozen=True)
class MinPair:
    width: Any = None
    height: Any = None


@dataclass(frozen=True)
class MaxPair:
    width: Any = None
    height: Any = None


AxisSpec = Exact | Bounds


@dataclass(frozen=True)
class NormalizedOptions:
    """Canonical constraints for a single validation call."""
    width: AxisSpec | None = None
    height: AxisSpec | None = None
    min: MinPair | None = None
    max: MaxPair | None = None

    @property
    def has_global(self) -> bool:
        return self.min is not None or self.max is not None

    def axis(self, name: str) -> AxisSpec | None:
        return getattr(self, name)


def as_range(value: Any) -> Range | None:
    """Coerce a range-shaped value to ``Range``; ``None`` if it is not one.

    Accepts ``Range``, a non-empty ``range`` (its smallest and largest
    members) and a two-item list or tuple of numbers.
    """
    if isinstance(value, range):
        if len(value) == 0:
            return None
        return Range(min(value), max(value))
    if isinstance(value, Range):
        low, high = value.low, value.high
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        low, high = value
    else:
        return None
    if _is_number(low) and _is_number(high):
        return Range(low, high)
    return None


def is_reference(value: Any) -> bool:
    """True for ``{"attribute": name}``, a reference to a record attribute."""
    return (
        isinstance(value, Mapping)
        and set(value) == {"attribute"}
        and isinstance(value["attribute"], str)
    )


def is_dynamic(value: Any) -> bool:
    """True if ``value`` can only be known once a record is given."""
    return (callable(value) and not isinstance(value, type)) or is_reference(value)


def resolve(value: Any, record: Any) -> Any:
    """Evaluate a record-dependent option value."""
    if is_reference(value):
        name = value["attribute"]
        try:
            return getattr(record, name)
        except AttributeError:
            raise ConfigurationError(f"Record has no attribute {name!r}", option=name)
    if callable(value) and not isinstance(value, type):
        return value(record)
    return value


def static_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Drop record-dependent values, including those inside axis mappings."""
    static: dict[str, Any] = {}
    for name, value in options.items():
        if is_dynamic(value):
            continue
        if isinstance(value, Mapping):
            value = {key: item for key, item in value.items() if not is_dynamic(item)}
        static[name] = value
    return static


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _axis_spec(name: str, value: Any, record: Any) -> AxisSpec | None:
    value = resolve(value, record)
    if value is None:
        return None

    if isinstance(value, (Range, range)):
        raise ConfigurationError(
            f":{name} range must be given as {{'in': range}}", option=name
        )

    if isinstance(value, Mapping):
        unknown = set(value) - {"in", "min", "max"}
        if unknown:
            raise ConfigurationError(
                f"Unknown :{name} option(s): {', '.join(sorted(unknown))}", option=name
            )
        if "in" in value:
            bounds = resolve(value["in"], record)
            range_value = as_range(bounds)
            if range_value is None:
                raise ConfigurationError(":in must be a Range of numbers", option=name)
            return Bounds(min=range_value.low, max=range_value.high)
        bounds = Bounds(
            min=resolve(value.get("min"), record),
            max=resolve(value.get("max"), record),
        )
        for bound in (bounds.min, bounds.max):
            if bound is not None and not _is_number(bound):
                raise ConfigurationError(
                    f":{name} min and max must be numbers, got {bound!r}", option=name
                )
        return bounds

    if not _is_number(value):
        raise ConfigurationError(
            f":{name} must be a number, a bounds mapping or {{'in': range}}", option=name
        )
    return Exact(value)


def _global_range(name: str, value: Any, record: Any) -> Range | None:
    value = resolve(value, record)
    if value is None:
        return None
    range_value = as_range(value)
    if range_value is None:
        raise ConfigurationError(f":{name} must be a Range (width..height)", option=name)
    return range_value


def normalize(options: Mapping[str, Any], record: Any = None) -> NormalizedOptions:
    """Flatten raw dimension options into ``NormalizedOptions``.

    Args:
        options: Raw validator options
        record: Record the options are resolved against

    Returns:
        NormalizedOptions snapshot for one validation call

    Raises:
        ConfigurationError: If an option has the wrong shape
    """
    width = _axis_spec("width", options.get("width"), record)
    height = _axis_spec("height", options.get("height"), record)

    min_range = _global_range("min", options.get("min"), record)
    max_range = _global_range("max", options.get("max"), record)

    normalized = NormalizedOptions(
        width=width,
        height=height,
        min=MinPair(min_range.first, min_range.last) if min_range else None,
        max=MaxPair(max_range.first, max_range.last) if max_range else None,
    )
    logger.debug(f"Normalized dimension options: {normalized}")
    return normalized
