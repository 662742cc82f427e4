import pytest

from brpkit.field_mapper import (
    ColorField,
    ComponentType,
    FieldAccess,
    MathField,
    map_field_to_tuple_index,
)
from brpkit.path_parser import (
    is_enum_variant,
    parse_component_type,
    parse_generic_enum_field_access,
    parse_path_to_field_access,
)


def test_parse_path_to_field_access():
    assert parse_path_to_field_access(".LinearRgba.red") == FieldAccess(
        ComponentType.LINEAR_RGBA, ColorField.RED
    )
    assert parse_path_to_field_access(".Hsla.saturation") == FieldAccess(
        ComponentType.HSLA, ColorField.SATURATION
    )
    assert parse_path_to_field_access(".Vec3.x") == FieldAccess(
        ComponentType.VEC3, MathField.X
    )
    assert parse_path_to_field_access(".Laba.a") == FieldAccess(
        ComponentType.LABA, ColorField.A
    )
    assert parse_path_to_field_access(".LinearRgba.a") == FieldAccess(
        ComponentType.LINEAR_RGBA, ColorField.ALPHA
    )


@pytest.mark.parametrize(
    "path", ["Vec3.x", ".Unknown.x", ".Vec3.red", ".Vec3", ""]
)
def test_parse_path_to_field_access_rejects(path):
    assert parse_path_to_field_access(path) is None


def test_parse_component_type():
    assert parse_component_type("LinearRgba") is ComponentType.LINEAR_RGBA
    assert parse_component_type("Vec3") is ComponentType.VEC3
    assert parse_component_type("Quat") is ComponentType.QUAT
    assert parse_component_type("UVec4") is ComponentType.UVEC4
    assert parse_component_type("InvalidType") is None
    assert parse_component_type("vec3") is None


def test_is_enum_variant():
    assert is_enum_variant("LinearRgba")
    assert is_enum_variant("SomeVariant")
    assert not is_enum_variant("lowercase")
    assert not is_enum_variant("")
    assert not is_enum_variant("Éclair")


def test_parse_generic_enum_field_access():
    assert parse_generic_enum_field_access(".LinearRgba.red") == ".0.0"
    assert parse_generic_enum_field_access(".SomeColor.green") == ".0.1"
    assert parse_generic_enum_field_access(".AnyColor.alpha") == ".0.3"
    assert parse_generic_enum_field_access(".SomeLabColor.a") == ".0.1"
    assert parse_generic_enum_field_access(".RegularColor.a") == ".0.3"
    assert parse_generic_enum_field_access(".SomeEnum.custom_field") == ".0.custom_field"
    assert parse_generic_enum_field_access(".lowercase.field") is None
    assert parse_generic_enum_field_access(".SomeEnum") is None
    assert parse_generic_enum_field_access("no_dot_prefix") is None


def test_parse_generic_enum_field_access_keeps_nested_path():
    assert parse_generic_enum_field_access(".SomeEnum.inner.deep") == ".0.inner.deep"


def test_parse_generic_enum_field_access_empty_parts():
    assert parse_generic_enum_field_access("..x") is None
    assert parse_generic_enum_field_access(".Some.") is None


def test_simple_field_paths():
    assert parse_path_to_field_access(".x") is None
    assert parse_path_to_field_access(".y") is None
    assert parse_path_to_field_access(".z") is None
    field_access = parse_path_to_field_access(".Vec3.x")
    assert map_field_to_tuple_index(field_access) == ".0.0"