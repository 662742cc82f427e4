"""Parse field paths such as ``.LinearRgba.red`` into field accesses."""

from __future__ import annotations

from .field_mapper import ComponentType, FieldAccess, parse_field_name


def parse_component_type(component_name: str) -> ComponentType | None:
    """Return the component type named exactly ``component_name``, if known."""
    try:
        return ComponentType(component_name)
    except ValueError:
        return None


def parse_path_to_field_access(path: str) -> FieldAccess | None:
    """Parse ``.Type.field`` into a :class:`FieldAccess`.

    Simple paths such as ``.x`` give ``None`` and are left to fallback logic.
    """
    if path.startswith(".") and path.count(".") == 1:
        return None
    parts = path.split(".")
    if len(parts) < 3 or parts[0]:
        return None
    component_type = parse_component_type(parts[1])
    if component_type is None:
        return None
    field = parse_field_name(parts[2], component_type)
    if field is None:
        return None
    return FieldAccess(component_type, field)


def is_enum_variant(name: str) -> bool:
    """Whether ``name`` looks like an enum variant (ASCII uppercase first)."""
    return bool(name) and name[0].isascii() and name[0].isupper()


_GENERIC_INDEX = {
    **dict.fromkeys(("red", "r", "hue", "h", "lightness", "l", "x"), ".0.0"),
    **dict.fromkeys(
        ("green", "g", "saturation", "s", "y", "whiteness", "chroma", "c"), ".0.1"
    ),
    **dict.fromkeys(("blue", "b", "value", "v", "z", "blackness"), ".0.2"),
    **dict.fromkeys(("alpha", "w"), ".0.3"),
}


def parse_generic_enum_field_access(path: str) -> str | None:
    """Map ``.Variant.field`` on an arbitrary enum variant to a tuple path."""
    parts = path.split(".")
    if len(parts) < 3 or parts[0] or not parts[1] or not parts[2]:
        return None
    variant_name, field_name = parts[1], parts[2]
    if not is_enum_variant(variant_name):
        return None
    index = _GENERIC_INDEX.get(field_name)
    if index is not None:
        return index
    if field_name == "a":
        return ".0.1" if "Lab" in variant_name else ".0.3"
    return ".0." + ".".join(parts[2:])