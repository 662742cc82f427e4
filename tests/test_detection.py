import pytest

from brpkit.detection import (
    AccessError,
    EnumUnitVariantAccessError,
    EnumUnitVariantMutation,
    ExpectedType,
    MathTypeArray,
    MissingField,
    TierInfo,
    TierManager,
    TransformSequence,
    TupleStructAccess,
    TypeMismatch,
    UnknownComponent,
    UnknownComponentType,
    analyze_schema_for_type,
    extract_crate_name,
    extract_path_from_error_context,
    match_error_pattern,
    tier_info_to_debug_strings,
)
from brpkit.errors import FormatDiscoveryError


def test_match_error_pattern_none():
    assert match_error_pattern("all is well") is None


def test_extract_crate_name():
    assert (
        extract_crate_name("bevy_transform::components::transform::Transform")
        == "bevy_transform"
    )
    assert extract_crate_name("Plain") == "Plain"


def test_schema_object_with_full_support():
    schema = {"my::Comp": {"reflectTypes": ["Component", "Serialize", "Deserialize"]}}
    assert (
        analyze_schema_for_type("my::Comp", schema)
        == "Type `my::Comp` has proper serialization support"
    )


def test_schema_missing_both_traits():
    schema = {"my::Comp": {"reflectTypes": ["Component", "Default"]}}
    message = analyze_schema_for_type("my::Comp", schema)
    assert "lacks Serialize and Deserialize trait(s)" in message
    assert "Available traits: Component, Default." in message


def test_schema_array_missing_deserialize():
    schema = [
        {"typePath": "other::Thing", "reflectTypes": []},
        {"typePath": "my::Comp", "reflectTypes": ["Serialize"]},
    ]
    message = analyze_schema_for_type("my::Comp", schema)
    assert "lacks Deserialize trait(s)" in message


def test_schema_missing_serialize_only():
    schema = {"my::Comp": {"reflectTypes": ["Deserialize"]}}
    assert "lacks Serialize trait(s)" in analyze_schema_for_type("my::Comp", schema)


def test_schema_type_not_found():
    message = analyze_schema_for_type("my::Comp", {})
    assert message.startswith("Type `my::Comp` not found in registry schema.")


def test_schema_bad_format_raises():
    with pytest.raises(FormatDiscoveryError):
        analyze_schema_for_type("my::Comp", "not a schema")


def test_extract_path_at_path():
    assert extract_path_from_error_context("failed at path .foo.bar here") == ".foo.bar"


def test_extract_path_quoted():
    assert extract_path_from_error_context("bad path '.a.b' given") == ".a.b"
    assert extract_path_from_error_context('bad path ".c.d" given') == ".c.d"


def test_extract_path_rejects_non_paths():
    assert extract_path_from_error_context("at path foo") is None
    assert extract_path_from_error_context("no location here") is None


def test_tier_manager_records_outcomes():
    manager = TierManager()
    manager.start_tier(1, "Serialization", "checking")
    manager.complete_tier(True, "ok")
    manager.start_tier(2, "Direct", "querying")
    manager.complete_tier(False, "unavailable")
    tiers = manager.to_list()
    assert tiers == [
        TierInfo(1, "Serialization", "ok", True),
        TierInfo(2, "Direct", "unavailable", False),
    ]


def test_complete_tier_without_start_is_noop():
    manager = TierManager()
    manager.complete_tier(True, "ok")
    assert manager.to_list() == []


def test_tier_debug_strings():
    tiers = [TierInfo(1, "Serialization", "ok", True), TierInfo(3, "Pattern", "none")]
    assert tier_info_to_debug_strings(tiers) == [
        "Tiered Format Discovery Results:",
        "  SUCCESS Tier 1: Serialization - ok",
        "  FAILED Tier 3: Pattern - none",
    ]
    assert tier_info_to_debug_strings([]) == []