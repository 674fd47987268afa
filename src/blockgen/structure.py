"""
Structural Model

The generator's intermediate representation between schema analysis and
emission:
    - Enumerations (well-known library and per-property custom ones)
    - Records (typed properties of one block)
    - Block variants (one per schema block, in schema order)

Every name in here is final. Backends render it, they never rename.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class EnumMember:
    """
    One member of a closed enumeration.

    Properties:
        identifier: Member name in generated code (e.g. "INNER_LEFT")
        label: Canonical string form (e.g. "inner_left")
    """

    identifier: str
    label: str


@dataclass
class EnumDefinition:
    """
    A closed enumeration to emit.

    Properties:
        name: Type name (e.g. "Facing", "NoteBlockInstrument")
        members: Members in domain order; position is the member's encoding
        shared: True for the well-known library
    """

    name: str
    members: List[EnumMember] = field(default_factory=list)
    shared: bool = False

    @property
    def labels(self) -> List[str]:
        return [member.label for member in self.members]


@dataclass
class FieldDefinition:
    """
    One typed property of a record.

    Properties:
        name: Field name in generated code (after reserved-name remapping)
        key: Original schema property name, used as the string-map key
        kind: PropertyKind value ("well_known", "int32", "bool", "custom_enum")
        type_name: Field type in generated code ("bool", "int", "Facing", ...)
        codec_name: Type providing parse/stringify ("Boolean", "Int32", "Facing", ...)
        domain_name: Class-level constant holding the declared domain
        values: Declared value strings in declared order (rank = index)
        multiplier: Mixed-radix place value of this field
    """

    name: str
    key: str
    kind: str
    type_name: str
    codec_name: str
    domain_name: str
    values: List[str] = field(default_factory=list)
    multiplier: int = 1

    @property
    def cardinality(self) -> int:
        return len(self.values)


@dataclass
class RecordDefinition:
    """Typed record carrying a block's properties, fields in schema order."""

    name: str
    fields: List[FieldDefinition] = field(default_factory=list)

    @property
    def state_count(self) -> int:
        count = 1
        for record_field in self.fields:
            count *= record_field.cardinality
        return count


@dataclass
class BlockVariant:
    """
    One variant of the Block sum type.

    Properties:
        name: Variant type name (e.g. "OakStairs")
        block_name: Original schema block name (e.g. "minecraft:oak_stairs")
        native_type_id: 0-based position in schema order
        record: Property record, or None for a nullary variant
    """

    name: str
    block_name: str
    native_type_id: int
    record: Optional[RecordDefinition] = None

    @property
    def is_nullary(self) -> bool:
        return self.record is None

    @property
    def state_count(self) -> int:
        return 1 if self.record is None else self.record.state_count


@dataclass
class StructuralModel:
    """
    Everything a backend needs to render one generated module.

    INVARIANTS:
        - variants are in schema order; variant i has native_type_id i
        - well_known_enums holds each shared enumeration exactly once
        - all type names across variants, records and enums are distinct
    """

    schema_name: str
    variants: List[BlockVariant] = field(default_factory=list)
    custom_enums: List[EnumDefinition] = field(default_factory=list)
    well_known_enums: List[EnumDefinition] = field(default_factory=list)

    def get_variant(self, block_name: str) -> Optional[BlockVariant]:
        for variant in self.variants:
            if variant.block_name == block_name:
                return variant
        return None

    def get_enum(self, name: str) -> Optional[EnumDefinition]:
        for definition in self.well_known_enums + self.custom_enums:
            if definition.name == name:
                return definition
        return None
