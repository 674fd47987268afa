"""
Type Inference Engine

Classifies each property's value domain into one of:
    - a well-known closed enumeration shared across blocks
    - a signed 32-bit integer
    - a boolean
    - a custom enumeration scoped to (block, property)

Classification looks at the FIRST value only, in fixed priority order:
well-known domains, then integers, then booleans, then custom.
validate_domain() then checks that every remaining value belongs to the
inferred domain and fails loudly if not.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from blockgen.naming import (
    custom_enum_name,
    enum_member_name,
    parse_canonical_bool,
    parse_canonical_int32,
    to_canonical_string,
)


class SchemaValidationError(Exception):
    """Raised when a schema entry cannot be turned into sound generated code."""

    def __init__(self, message: str, block_name: Optional[str] = None,
                 property_name: Optional[str] = None):
        self.block_name = block_name
        self.property_name = property_name
        location = ""
        if block_name is not None:
            location = block_name
            if property_name is not None:
                location += f".{property_name}"
            location += ": "
        super().__init__(f"{location}{message}")


@dataclass(frozen=True)
class WellKnownEnum:
    """A closed domain shared by every block that uses it."""

    name: str
    values: Tuple[str, ...]


FACING = WellKnownEnum("Facing", ("north", "south", "east", "west", "up", "down"))
AXIS = WellKnownEnum("Axis", ("x", "y", "z"))
HALF = WellKnownEnum("Half", ("upper", "lower", "top", "bottom"))
FACE = WellKnownEnum("Face", ("floor", "wall", "ceiling"))
SHAPE = WellKnownEnum("Shape", (
    "straight",
    "inner_left",
    "inner_right",
    "outer_left",
    "ascending_north",
    "ascending_south",
    "ascending_east",
    "ascending_west",
    "north_east",
    "north_west",
    "south_east",
    "south_west",
    "north_south",
    "east_west",
))
HINGE = WellKnownEnum("Hinge", ("left", "right"))
PART = WellKnownEnum("Part", ("head", "foot"))

# Priority order used by infer_type.
WELL_KNOWN_ENUMS: Tuple[WellKnownEnum, ...] = (
    FACING,
    AXIS,
    HALF,
    FACE,
    SHAPE,
    HINGE,
    PART,
)


class PropertyKind(Enum):
    """Value domain categories."""
    WELL_KNOWN = "well_known"
    INT32 = "int32"
    BOOL = "bool"
    CUSTOM_ENUM = "custom_enum"


@dataclass(frozen=True)
class InferredType:
    """
    Result of classifying one property.

    Properties:
        kind: PropertyKind
        well_known: The shared enumeration (WELL_KNOWN only)
        block_name, property_name: Owning scope (CUSTOM_ENUM only)
    """

    kind: PropertyKind
    well_known: Optional[WellKnownEnum] = None
    block_name: Optional[str] = None
    property_name: Optional[str] = None

    @property
    def type_name(self) -> str:
        """Name of the field type in generated code."""
        if self.kind == PropertyKind.WELL_KNOWN:
            return self.well_known.name
        if self.kind == PropertyKind.INT32:
            return "int"
        if self.kind == PropertyKind.BOOL:
            return "bool"
        return custom_enum_name(self.block_name, self.property_name)

    @property
    def codec_name(self) -> str:
        """Name of the type providing the string round trip in generated code."""
        if self.kind == PropertyKind.INT32:
            return "Int32"
        if self.kind == PropertyKind.BOOL:
            return "Boolean"
        return self.type_name


def infer_type(possible_values: Sequence[str], block_name: str,
               property_name: str) -> InferredType:
    """
    Classify a property's domain from its first value.

    Args:
        possible_values: Ordered, non-empty sequence of value strings
        block_name: Owning block (scopes a custom enumeration)
        property_name: Property name (scopes a custom enumeration)

    Returns:
        InferredType

    Raises:
        SchemaValidationError: If the sequence is empty
    """
    if not possible_values:
        raise SchemaValidationError("property has no values", block_name, property_name)

    first = possible_values[0]

    for well_known in WELL_KNOWN_ENUMS:
        if first in well_known.values:
            return InferredType(PropertyKind.WELL_KNOWN, well_known=well_known)

    if parse_canonical_int32(first) is not None:
        return InferredType(PropertyKind.INT32)

    if parse_canonical_bool(first) is not None:
        return InferredType(PropertyKind.BOOL)

    return InferredType(
        PropertyKind.CUSTOM_ENUM,
        block_name=block_name,
        property_name=property_name,
    )


def _round_trips(inferred: InferredType, value: str) -> bool:
    if inferred.kind == PropertyKind.WELL_KNOWN:
        return value in inferred.well_known.values
    if inferred.kind == PropertyKind.INT32:
        parsed = parse_canonical_int32(value)
        return parsed is not None and to_canonical_string(parsed) == value
    if inferred.kind == PropertyKind.BOOL:
        parsed = parse_canonical_bool(value)
        return parsed is not None and to_canonical_string(parsed) == value
    return True


def validate_domain(inferred: InferredType, possible_values: Sequence[str],
                    block_name: str, property_name: str) -> None:
    """
    Confirm every value belongs to the inferred domain.

    Checks:
        - No duplicate values
        - Every value parses as the inferred type and re-stringifies to
          exactly the original string
        - Custom enumeration labels map to distinct, non-empty members

    Raises:
        SchemaValidationError: On the first offending value
    """
    seen = set()
    for value in possible_values:
        if value in seen:
            raise SchemaValidationError(
                f"duplicate value '{value}'", block_name, property_name
            )
        seen.add(value)

        if not _round_trips(inferred, value):
            raise SchemaValidationError(
                f"value '{value}' does not belong to the {inferred.type_name} "
                f"domain inferred from '{possible_values[0]}'",
                block_name,
                property_name,
            )

    if inferred.kind == PropertyKind.CUSTOM_ENUM:
        members = {}
        for value in possible_values:
            member = enum_member_name(value)
            if not member:
                raise SchemaValidationError(
                    f"value '{value}' has no usable identifier characters",
                    block_name,
                    property_name,
                )
            if member in members:
                raise SchemaValidationError(
                    f"values '{members[member]}' and '{value}' both map to member {member}",
                    block_name,
                    property_name,
                )
            members[member] = value


def infer_and_validate(possible_values: Sequence[str], block_name: str,
                       property_name: str) -> InferredType:
    """infer_type followed by validate_domain."""
    inferred = infer_type(possible_values, block_name, property_name)
    validate_domain(inferred, possible_values, block_name, property_name)
    return inferred
