"""Map field accesses on colour and math types to tuple index paths."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ComponentType(Enum):
    """Colour and math types whose fields can be addressed by name."""

    LINEAR_RGBA = "LinearRgba"
    SRGBA = "Srgba"
    HSLA = "Hsla"
    HSVA = "Hsva"
    HWBA = "Hwba"
    LABA = "Laba"
    LCHA = "Lcha"
    OKLABA = "Oklaba"
    OKLCHA = "Oklcha"
    XYZA = "Xyza"
    VEC2 = "Vec2"
    VEC3 = "Vec3"
    VEC4 = "Vec4"
    QUAT = "Quat"
    IVEC2 = "IVec2"
    IVEC3 = "IVec3"
    IVEC4 = "IVec4"
    UVEC2 = "UVec2"
    UVEC3 = "UVec3"
    UVEC4 = "UVec4"
    DVEC2 = "DVec2"
    DVEC3 = "DVec3"
    DVEC4 = "DVec4"

    def is_color(self) -> bool:
        """Whether this is one of the colour types."""
        return self in _COLOR_TYPES

    def is_lab_based(self) -> bool:
        """Whether this colour type has Lab ``a`` and ``b`` components."""
        return self in _LAB_TYPES


_COLOR_TYPES = frozenset(
    {
        ComponentType.LINEAR_RGBA,
        ComponentType.SRGBA,
        ComponentType.HSLA,
        ComponentType.HSVA,
        ComponentType.HWBA,
        ComponentType.LABA,
        ComponentType.LCHA,
        ComponentType.OKLABA,
        ComponentType.OKLCHA,
        ComponentType.XYZA,
    }
)

_LAB_TYPES = frozenset({ComponentType.LABA, ComponentType.OKLABA})


class ColorField(Enum):
    """Named fields of colour types."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ALPHA = "alpha"
    HUE = "hue"
    SATURATION = "saturation"
    LIGHTNESS = "lightness"
    VALUE = "value"
    WHITENESS = "whiteness"
    BLACKNESS = "blackness"
    CHROMA = "chroma"
    A = "a"
    B = "b"


class MathField(Enum):
    """Named fields of vector and quaternion types."""

    X = "x"
    Y = "y"
    Z = "z"
    W = "w"


Field = ColorField | MathField


@dataclass(frozen=True)
class FieldAccess:
    """A named field accessed on a specific component type."""

    component_type: ComponentType
    field: ColorField | MathField


_CT = ComponentType
_RGB = (_CT.LINEAR_RGBA, _CT.SRGBA, _CT.XYZA)
_LAB_LIKE = (_CT.LABA, _CT.LCHA, _CT.OKLABA, _CT.OKLCHA)
_HUE_FIRST = (_CT.HSLA, _CT.HSVA, _CT.HWBA)
_LAB = (_CT.LABA, _CT.OKLABA)
_LCH = (_CT.LCHA, _CT.OKLCHA)


def _pairs(types: tuple[ComponentType, ...], field: ColorField) -> set:
    return {(component_type, field) for component_type in types}


_COLOR_INDEX: dict[tuple[ComponentType, ColorField], str] = {}
for _pair in (
    _pairs(_LAB_LIKE, ColorField.LIGHTNESS)
    | _pairs(_RGB, ColorField.RED)
    | _pairs(_HUE_FIRST, ColorField.HUE)
):
    _COLOR_INDEX[_pair] = ".0.0"
for _pair in (
    _pairs(_RGB, ColorField.GREEN)
    | _pairs((_CT.HSLA, _CT.HSVA), ColorField.SATURATION)
    | _pairs((_CT.HWBA,), ColorField.WHITENESS)
    | _pairs(_LAB, ColorField.A)
    | _pairs(_LCH, ColorField.CHROMA)
):
    _COLOR_INDEX[_pair] = ".0.1"
for _pair in (
    _pairs((_CT.HSLA,), ColorField.LIGHTNESS)
    | _pairs(_RGB, ColorField.BLUE)
    | _pairs((_CT.HSVA,), ColorField.VALUE)
    | _pairs((_CT.HWBA,), ColorField.BLACKNESS)
    | _pairs(_LAB, ColorField.B)
    | _pairs(_LCH, ColorField.HUE)
):
    _COLOR_INDEX[_pair] = ".0.2"

_MATH_INDEX = {
    MathField.X: ".0.0",
    MathField.Y: ".0.1",
    MathField.Z: ".0.2",
    MathField.W: ".0.3",
}


def _map_color_field(component_type: ComponentType, field: ColorField) -> str:
    index = _COLOR_INDEX.get((component_type, field))
    if index is not None:
        return index
    if field is ColorField.ALPHA:
        return ".0.3"
    return ".invalid"


def map_field_to_tuple_index(field_access: FieldAccess) -> str:
    """Return the tuple index path that addresses ``field_access``.

    Colour types are wrapped in a tuple variant, so their data lives under
    ``.0``; math types are given the same shape.
    """
    field = field_access.field
    if isinstance(field, ColorField):
        return _map_color_field(field_access.component_type, field)
    return _MATH_INDEX[field]


_COLOR_NAMES = {
    "red": ColorField.RED,
    "r": ColorField.RED,
    "green": ColorField.GREEN,
    "g": ColorField.GREEN,
    "blue": ColorField.BLUE,
    "b": ColorField.BLUE,
    "alpha": ColorField.ALPHA,
    "hue": ColorField.HUE,
    "h": ColorField.HUE,
    "saturation": ColorField.SATURATION,
    "s": ColorField.SATURATION,
    "lightness": ColorField.LIGHTNESS,
    "l": ColorField.LIGHTNESS,
    "value": ColorField.VALUE,
    "v": ColorField.VALUE,
    "whiteness": ColorField.WHITENESS,
    "w": ColorField.WHITENESS,
    "blackness": ColorField.BLACKNESS,
    "chroma": ColorField.CHROMA,
    "c": ColorField.CHROMA,
}

_MATH_NAMES = {field.value: field for field in MathField}


def parse_field_name(
    field_name: str, component_type: ComponentType
) -> ColorField | MathField | None:
    """Return the field that ``field_name`` names on ``component_type``, if any."""
    lowered = field_name.lower()
    if component_type.is_color():
        if lowered == "a":
            return ColorField.A if component_type.is_lab_based() else ColorField.ALPHA
        return _COLOR_NAMES.get(lowered)
    return _MATH_NAMES.get(lowered)