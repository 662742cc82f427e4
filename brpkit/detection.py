"""Recognise BRP error messages and judge type serialization support."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Union

from .constants import BRP_ERROR_CODE_INVALID_REQUEST
from .errors import FormatDiscoveryError

COMPONENT_FORMAT_ERROR_CODE = BRP_ERROR_CODE_INVALID_REQUEST
RESOURCE_FORMAT_ERROR_CODE = -23501

TIER_SERIALIZATION = 1
TIER_DIRECT_DISCOVERY = 2
TIER_DETERMINISTIC = 3
TIER_GENERIC_FALLBACK = 4

TRANSFORM_SEQUENCE_REGEX = re.compile(r"expected a sequence of (\d+) f32 values")
EXPECTED_TYPE_REGEX = re.compile(r"expected `([a-zA-Z_:]+(?::[a-zA-Z_:]+)*)`")
ACCESS_ERROR_REGEX = re.compile(
    r"Error accessing element with `([^`]+)` access(?:\s*\(offset \d+\))?: (.+)"
)
TYPE_MISMATCH_REGEX = re.compile(
    r"Expected ([a-zA-Z0-9_\[\]]+) access to access a ([a-zA-Z0-9_]+), "
    r"found a ([a-zA-Z0-9_]+) instead\."
)
VARIANT_TYPE_MISMATCH_REGEX = re.compile(
    r"Expected variant ([a-zA-Z0-9_\[\]]+) access to access a ([a-zA-Z0-9_]+) variant, "
    r"found a ([a-zA-Z0-9_]+) variant instead\."
)
MISSING_FIELD_REGEX = re.compile(
    r"The ([a-zA-Z0-9_]+) accessed doesn't have (?:an? )?[`\"]([^`\"]+)[`\"] field"
)
UNKNOWN_COMPONENT_REGEX = re.compile(r"Unknown component type: `([^`]+)`")
TUPLE_STRUCT_PATH_REGEX = re.compile(r"(?:at path|path)\s+[`\"]?([^`\"\s]+)[`\"]?")
MATH_TYPE_ARRAY_REGEX = re.compile(
    r"(Vec2|Vec3|Vec4|Quat)\s+(?:expects?|requires?|needs?)\s+array"
)
UNKNOWN_COMPONENT_TYPE_REGEX = re.compile(
    r"Unknown component type(?::\s*)?[`']?([^`'\s]+)[`']?"
)
ENUM_UNIT_VARIANT_REGEX = re.compile(
    r"Expected variant field access to access a ([a-zA-Z]+) variant, "
    r"found a ([a-zA-Z]+) variant instead"
)
ENUM_UNIT_VARIANT_ACCESS_ERROR_REGEX = re.compile(
    r"Error accessing element with `([^`]+)` access(?:\s*\(offset \d+\))?: "
    r"Expected variant field access to access a ([a-zA-Z]+) variant, "
    r"found a ([a-zA-Z]+) variant instead"
)


@dataclass(frozen=True)
class TransformSequence:
    """A transform expects a sequence of f32 values."""

    expected_count: int


@dataclass(frozen=True)
class ExpectedType:
    """A specific type was expected."""

    expected_type: str


@dataclass(frozen=True)
class MathTypeArray:
    """A math type expects array format."""

    math_type: str


@dataclass(frozen=True)
class UnknownComponentType:
    """A component type was not recognised (loose form)."""

    component_type: str


@dataclass(frozen=True)
class TupleStructAccess:
    """A tuple struct was accessed at the given path."""

    field_path: str


@dataclass(frozen=True)
class AccessError:
    """Bevy reported an error accessing an element."""

    access: str
    error_type: str


@dataclass(frozen=True)
class TypeMismatch:
    """An access expected one kind of type and found another."""

    expected: str
    actual: str
    access: str
    is_variant: bool


@dataclass(frozen=True)
class MissingField:
    """A struct or tuple lacks the accessed field."""

    field_name: str
    type_name: str


@dataclass(frozen=True)
class UnknownComponent:
    """BRP did not know the component type path."""

    component_path: str


@dataclass(frozen=True)
class EnumUnitVariantMutation:
    """A field access was attempted on the wrong kind of enum variant."""

    expected_variant_type: str
    actual_variant_type: str


@dataclass(frozen=True)
class EnumUnitVariantAccessError:
    """An element access failed because of the enum variant kind."""

    access: str
    expected_variant_type: str
    actual_variant_type: str


ErrorPattern = Union[
    TransformSequence,
    ExpectedType,
    MathTypeArray,
    UnknownComponentType,
    TupleStructAccess,
    AccessError,
    TypeMismatch,
    MissingField,
    UnknownComponent,
    EnumUnitVariantMutation,
    EnumUnitVariantAccessError,
]


@dataclass
class TierInfo:
    """Outcome of one format discovery tier."""

    tier: int
    tier_name: str
    action: str
    success: bool = False

    def mark_success(self, action: str) -> None:
        """Mark the tier as successful with a new action description."""
        self.success = True
        self.action = action


class TierManager:
    """Records the tiers run during format discovery."""

    def __init__(self) -> None:
        self._tiers: list[TierInfo] = []

    def start_tier(self, tier: int, name: str, action: str) -> None:
        """Begin recording a new tier."""
        self._tiers.append(TierInfo(tier, name, action))

    def complete_tier(self, success: bool, action: str) -> None:
        """Finish the most recent tier, if any."""
        if not self._tiers:
            return
        last = self._tiers[-1]
        if success:
            last.mark_success(action)
        else:
            last.action = action

    def to_list(self) -> list[TierInfo]:
        """Return the recorded tiers in order."""
        return list(self._tiers)


def match_error_pattern(message: str) -> ErrorPattern | None:
    """Return the first known pattern that ``message`` matches, by priority."""
    if m := ENUM_UNIT_VARIANT_ACCESS_ERROR_REGEX.search(message):
        return EnumUnitVariantAccessError(m[1], m[2], m[3])
    if m := ACCESS_ERROR_REGEX.search(message):
        return AccessError(access=m[1], error_type=m[2])
    if m := TYPE_MISMATCH_REGEX.search(message):
        return TypeMismatch(expected=m[2], actual=m[3], access=m[1], is_variant=False)
    if m := VARIANT_TYPE_MISMATCH_REGEX.search(message):
        return TypeMismatch(expected=m[2], actual=m[3], access=m[1], is_variant=True)
    if m := ENUM_UNIT_VARIANT_REGEX.search(message):
        return EnumUnitVariantMutation(m[1], m[2])
    if m := MISSING_FIELD_REGEX.search(message):
        return MissingField(field_name=m[2], type_name=m[1])
    if m := UNKNOWN_COMPONENT_REGEX.search(message):
        return UnknownComponent(m[1])
    if (m := TRANSFORM_SEQUENCE_REGEX.search(message)) and m[1].isascii():
        return TransformSequence(int(m[1]))
    if m := EXPECTED_TYPE_REGEX.search(message):
        return ExpectedType(m[1])
    if m := MATH_TYPE_ARRAY_REGEX.search(message):
        return MathTypeArray(m[1])
    if m := TUPLE_STRUCT_PATH_REGEX.search(message):
        return TupleStructAccess(m[1])
    if m := UNKNOWN_COMPONENT_TYPE_REGEX.search(message):
        return UnknownComponentType(m[1])
    return None


def extract_crate_name(type_name: str) -> str:
    """Return the crate part of a fully qualified type name."""
    return type_name.split("::", 1)[0]


def _single_type_diagnostic(type_name: str, schema: Any) -> str:
    reflect = schema.get("reflectTypes") if isinstance(schema, dict) else None
    reflect_types = (
        [item for item in reflect if isinstance(item, str)]
        if isinstance(reflect, list)
        else []
    )
    has_serialize = "Serialize" in reflect_types
    has_deserialize = "Deserialize" in reflect_types
    if has_serialize and has_deserialize:
        return f"Type `{type_name}` has proper serialization support"
    if not has_serialize and not has_deserialize:
        missing = "Serialize and Deserialize"
    elif not has_serialize:
        missing = "Serialize"
    else:
        missing = "Deserialize"
    return (
        f"Type `{type_name}` cannot be used with BRP because it lacks {missing} trait(s). "
        f"Available traits: {', '.join(reflect_types)}. "
        "To fix this, the type definition needs both #[derive(Serialize, Deserialize)] "
        "AND #[reflect(Serialize, Deserialize)] attributes."
    )


def analyze_schema_for_type(type_name: str, schema_data: Any) -> str:
    """Return a diagnostic on whether ``type_name`` supports serialization.

    ``schema_data`` is a registry schema response, either an object keyed by
    type path or an array of schemas carrying ``typePath``.
    """
    if isinstance(schema_data, dict):
        if type_name in schema_data:
            return _single_type_diagnostic(type_name, schema_data[type_name])
    elif isinstance(schema_data, list):
        for schema in schema_data:
            if isinstance(schema, dict) and schema.get("typePath") == type_name:
                return _single_type_diagnostic(type_name, schema)
    else:
        raise FormatDiscoveryError(
            "Unexpected schema response format: neither an array nor an object"
        )
    return (
        f"Type `{type_name}` not found in registry schema. "
        "This type may not be registered with BRP or may not exist."
    )


def _path_at(message: str, start: int) -> str | None:
    rest = message[start:]
    end = next((i for i, ch in enumerate(rest) if ch in " '\"\n"), len(rest))
    path = rest[:end]
    if path.startswith(".") or "." in path:
        return path
    return None


def extract_path_from_error_context(error_message: str) -> str | None:
    """Find a field path in phrases like ``at path .a.b`` or ``path '.a.b'``."""
    pos = error_message.find("at path ")
    if pos >= 0:
        return _path_at(error_message, pos + 8)
    pos = error_message.find("path '")
    if pos < 0:
        pos = error_message.find('path "')
    if pos < 0:
        return None
    return _path_at(error_message, pos + 6)


def tier_info_to_debug_strings(tier_info: Iterable[TierInfo]) -> list[str]:
    """Render tier outcomes as debug lines, headed when there are any."""
    lines = [
        f"  {'SUCCESS' if info.success else 'FAILED'} Tier {info.tier}: "
        f"{info.tier_name} - {info.action}"
        for info in tier_info
    ]
    if not lines:
        return []
    return ["Tiered Format Discovery Results:", *lines]