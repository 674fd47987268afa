"""
Structural Model Builder

Turns a Schema into a StructuralModel:
    - one BlockVariant per block, in schema order
    - one RecordDefinition per block with properties
    - one EnumDefinition per custom-enum property
    - the well-known enumeration library, exactly once

Naming, inference and encoding are delegated; this module decides the
shape and enforces that every generated name is unique.
"""

import logging
from typing import Dict, List, Optional

from blockgen.encoding import multipliers
from blockgen.inference import (
    WELL_KNOWN_ENUMS,
    PropertyKind,
    SchemaValidationError,
    infer_and_validate,
)
from blockgen.model import Block, Schema
from blockgen.naming import (
    block_type_name,
    domain_constant_name,
    enum_member_name,
    field_name,
    is_valid_identifier,
    record_type_name,
)
from blockgen.structure import (
    BlockVariant,
    EnumDefinition,
    EnumMember,
    FieldDefinition,
    RecordDefinition,
    StructuralModel,
)

# Names the emitted module defines or imports itself.
RESERVED_TYPE_NAMES = frozenset({
    "Block",
    "Boolean",
    "CanonicalEnum",
    "ClassVar",
    "Dict",
    "Enum",
    "Int32",
    "Mapping",
    "Optional",
    "Tuple",
    "Type",
})

# Methods every generated record defines.
RECORD_METHOD_NAMES = frozenset({"encode", "from_string_map", "to_string_map"})


def build_well_known_enums() -> List[EnumDefinition]:
    """The shared enumeration library, in inference priority order."""
    return [
        EnumDefinition(
            name=well_known.name,
            members=[EnumMember(enum_member_name(v), v) for v in well_known.values],
            shared=True,
        )
        for well_known in WELL_KNOWN_ENUMS
    ]


class _TypeNames:
    """Tracks every emitted type name so collisions fail with context."""

    def __init__(self):
        self._owners: Dict[str, str] = {
            name: "generated module" for name in RESERVED_TYPE_NAMES
        }
        for well_known in WELL_KNOWN_ENUMS:
            self._owners[well_known.name] = "well-known enumeration"

    def claim(self, name: str, owner: str, block_name: str,
              property_name: Optional[str] = None) -> None:
        if not is_valid_identifier(name):
            raise SchemaValidationError(
                f"type name '{name}' is not a valid identifier",
                block_name,
                property_name,
            )
        if name in self._owners:
            raise SchemaValidationError(
                f"type name '{name}' for {owner} collides with {self._owners[name]}",
                block_name,
                property_name,
            )
        self._owners[name] = owner


def _build_record(block: Block, names: _TypeNames,
                  custom_enums: List[EnumDefinition]) -> RecordDefinition:
    record = RecordDefinition(name=record_type_name(block.name))
    names.claim(record.name, f"record of {block.name}", block.name)

    place_values = multipliers(block.cardinalities())
    seen_fields: Dict[str, str] = {}
    seen_domains: Dict[str, str] = {}

    for (property_name, values), multiplier in zip(block.properties.items(), place_values):
        inferred = infer_and_validate(values, block.name, property_name)

        name = field_name(property_name)
        if not is_valid_identifier(name) or name in RECORD_METHOD_NAMES:
            raise SchemaValidationError(
                f"field name '{name}' is not usable in a record",
                block.name,
                property_name,
            )
        if name in seen_fields:
            raise SchemaValidationError(
                f"field '{name}' collides with property '{seen_fields[name]}'",
                block.name,
                property_name,
            )
        seen_fields[name] = property_name

        domain_name = domain_constant_name(name)
        if domain_name in seen_domains:
            raise SchemaValidationError(
                f"domain constant '{domain_name}' collides with property "
                f"'{seen_domains[domain_name]}'",
                block.name,
                property_name,
            )
        seen_domains[domain_name] = property_name

        if inferred.kind == PropertyKind.CUSTOM_ENUM:
            names.claim(
                inferred.type_name,
                f"enumeration of {block.name}.{property_name}",
                block.name,
                property_name,
            )
            custom_enums.append(EnumDefinition(
                name=inferred.type_name,
                members=[EnumMember(enum_member_name(v), v) for v in values],
            ))

        record.fields.append(FieldDefinition(
            name=name,
            key=property_name,
            kind=inferred.kind.value,
            type_name=inferred.type_name,
            codec_name=inferred.codec_name,
            domain_name=domain_name,
            values=list(values),
            multiplier=multiplier,
        ))

    return record


def build_structural_model(schema: Schema,
                           logger: Optional[logging.Logger] = None) -> StructuralModel:
    """
    Build the structural model for a schema.

    Args:
        schema: Schema to analyze
        logger: Progress logger (defaults to this module's logger)

    Returns:
        StructuralModel with variants in schema order

    Raises:
        SchemaValidationError: On inference ambiguity, invalid or
            colliding names, or duplicate block names
    """
    log = logger or logging.getLogger(__name__)

    model = StructuralModel(
        schema_name=schema.name,
        well_known_enums=build_well_known_enums(),
    )
    names = _TypeNames()
    seen_blocks = set()

    for native_type_id, block in enumerate(schema.blocks):
        if block.name in seen_blocks:
            raise SchemaValidationError("duplicate block name", block.name)
        seen_blocks.add(block.name)

        variant = BlockVariant(
            name=block_type_name(block.name),
            block_name=block.name,
            native_type_id=native_type_id,
        )
        names.claim(variant.name, f"block {block.name}", block.name)

        if block.has_properties:
            variant.record = _build_record(block, names, model.custom_enums)

        log.debug(
            "Block %s -> %s (id %d, %d states)",
            block.name,
            variant.name,
            native_type_id,
            variant.state_count,
        )
        model.variants.append(variant)

    log.info(
        "Built model for %d blocks with %d custom enumerations",
        len(model.variants),
        len(model.custom_enums),
    )
    return model
