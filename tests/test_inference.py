"""
Tests for the Type Inference Engine.

These tests verify:
    - First-value classification and its priority order
    - Well-known domain reuse
    - The validation pass over the remaining values
"""

import pytest
from blockgen.inference import (
    AXIS,
    FACING,
    HALF,
    SHAPE,
    WELL_KNOWN_ENUMS,
    InferredType,
    PropertyKind,
    SchemaValidationError,
    infer_and_validate,
    infer_type,
    validate_domain,
)


class TestWellKnownTables:
    """Test the fixed literal tables."""

    def test_seven_domains(self):
        assert [e.name for e in WELL_KNOWN_ENUMS] == [
            "Facing", "Axis", "Half", "Face", "Shape", "Hinge", "Part",
        ]

    def test_shape_has_fourteen_labels(self):
        assert len(SHAPE.values) == 14
        assert SHAPE.values[0] == "straight"
        assert SHAPE.values[-1] == "east_west"


class TestInferType:
    """Test first-value classification."""

    def test_facing(self):
        inferred = infer_type(["north", "south", "east", "west"], "b", "facing")
        assert inferred.kind == PropertyKind.WELL_KNOWN
        assert inferred.well_known is FACING
        assert inferred.type_name == "Facing"

    def test_axis_is_well_known_not_custom(self):
        """{"x","y","z"} is the shared Axis domain, never a fresh enum."""
        inferred = infer_type(["x", "y", "z"], "minecraft:oak_log", "axis")
        assert inferred.kind == PropertyKind.WELL_KNOWN
        assert inferred.well_known is AXIS

    def test_int32(self):
        inferred = infer_type(["0", "1", "2"], "b", "age")
        assert inferred.kind == PropertyKind.INT32
        assert inferred.type_name == "int"
        assert inferred.codec_name == "Int32"

    def test_bool(self):
        inferred = infer_type(["true", "false"], "b", "powered")
        assert inferred.kind == PropertyKind.BOOL
        assert inferred.type_name == "bool"
        assert inferred.codec_name == "Boolean"

    def test_custom_enum(self):
        inferred = infer_type(["harp", "bell"], "minecraft:note_block", "instrument")
        assert inferred.kind == PropertyKind.CUSTOM_ENUM
        assert inferred.type_name == "NoteBlockInstrument"
        assert inferred.codec_name == "NoteBlockInstrument"

    def test_only_first_value_is_inspected(self):
        """Classification follows the first value even if later ones differ."""
        inferred = infer_type(["top", "bottom", "double"], "b", "type")
        assert inferred.kind == PropertyKind.WELL_KNOWN
        assert inferred.well_known is HALF

    def test_well_known_beats_custom_for_same_property_in_two_blocks(self):
        a = infer_type(["x", "y", "z"], "minecraft:oak_log", "axis")
        b = infer_type(["x", "y", "z"], "minecraft:birch_log", "axis")
        assert a == b

    def test_empty_domain_is_an_error(self):
        with pytest.raises(SchemaValidationError):
            infer_type([], "b", "p")


class TestValidateDomain:
    """Test the validation pass."""

    def test_mixed_domain_fails_with_context(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            infer_and_validate(["top", "bottom", "double"], "minecraft:oak_slab", "type")
        error = exc_info.value
        assert error.block_name == "minecraft:oak_slab"
        assert error.property_name == "type"
        assert "double" in str(error)
        assert "minecraft:oak_slab.type" in str(error)

    def test_int_then_word_fails(self):
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["0", "1", "many"], "b", "count")

    def test_non_canonical_int_fails(self):
        """'+5' parses but does not stringify back to itself."""
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["0", "+5"], "b", "p")
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["007"], "b", "p")

    def test_duplicate_value_fails(self):
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["north", "north"], "b", "facing")

    def test_custom_labels_colliding_as_members_fail(self):
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["low-tide", "low_tide"], "b", "tide")

    def test_custom_label_without_identifier_fails(self):
        with pytest.raises(SchemaValidationError):
            infer_and_validate(["calm", "!!"], "b", "mood")

    def test_custom_enum_accepts_any_labels(self):
        inferred = infer_and_validate(["single", "left", "right"], "minecraft:chest", "type")
        assert inferred.kind == PropertyKind.CUSTOM_ENUM

    def test_valid_domains_pass(self):
        validate_domain(InferredType(PropertyKind.BOOL), ["true", "false"], "b", "p")
        validate_domain(InferredType(PropertyKind.INT32), ["-1", "0", "15"], "b", "p")
        validate_domain(
            InferredType(PropertyKind.WELL_KNOWN, well_known=SHAPE),
            list(SHAPE.values),
            "b",
            "shape",
        )
