"""
Schema Analyzer: early diagnostics and inventory of block schemas.

This module provides lightweight analysis of Schema objects:
    - Block and property inventory
    - State space size (what a flat per-state array must hold)
    - Inferred type distribution and well-known enumeration reuse
    - Validation errors, collected instead of raised
    - Warning flags for schema risk, including custom enumerations whose
      labels look like integers, booleans or well-known values

IMPORTANT: It does NOT modify the schema.
It only produces read-only reports.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from blockgen.builder import build_structural_model
from blockgen.inference import (
    PropertyKind,
    SchemaValidationError,
    infer_and_validate,
    infer_type,
)
from blockgen.model import Schema


@dataclass
class SchemaReport:
    """Comprehensive analysis report for a schema."""

    schema_name: str
    total_blocks: int = 0
    blocks_with_properties: int = 0
    nullary_blocks: int = 0
    total_properties: int = 0

    # State space
    total_states: int = 0
    max_states_per_block: int = 0
    largest_block: Optional[str] = None

    # Types
    kind_counts: Dict[str, int] = field(default_factory=dict)
    well_known_usage: Dict[str, int] = field(default_factory=dict)
    custom_enum_count: int = 0
    single_value_properties: List[str] = field(default_factory=list)
    mixed_custom_properties: List[str] = field(default_factory=list)

    # Problems
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_schema(schema: Schema) -> SchemaReport:
    """
    Perform comprehensive analysis of a Schema.

    Checks for:
    - Property type inference and domain consistency
    - Duplicate block names
    - State space size per block
    - Single-valued (constant) properties

    Returns a SchemaReport with metrics, errors and warnings.
    """
    report = SchemaReport(schema_name=schema.name)
    kind_counts: Dict[str, int] = defaultdict(int)
    well_known_usage: Dict[str, int] = defaultdict(int)
    seen_blocks = set()

    report.total_blocks = len(schema.blocks)

    for block in schema.blocks:
        if block.name in seen_blocks:
            report.errors.append(f"{block.name}: duplicate block name")
        seen_blocks.add(block.name)

        states = block.state_count()
        report.total_states += states
        if states > report.max_states_per_block:
            report.max_states_per_block = states
            report.largest_block = block.name

        if not block.has_properties:
            report.nullary_blocks += 1
            continue

        report.blocks_with_properties += 1
        for property_name, values in block.properties.items():
            report.total_properties += 1
            if len(values) == 1:
                report.single_value_properties.append(f"{block.name}.{property_name}")

            try:
                inferred = infer_and_validate(values, block.name, property_name)
            except SchemaValidationError as e:
                report.errors.append(str(e))
                continue

            kind_counts[inferred.kind.value] += 1
            if inferred.kind == PropertyKind.WELL_KNOWN:
                well_known_usage[inferred.well_known.name] += 1
            elif inferred.kind == PropertyKind.CUSTOM_ENUM:
                report.custom_enum_count += 1
                # A later label that infers on its own to another kind
                # suggests two domains were merged into one property.
                for value in values[1:]:
                    kind = infer_type([value], block.name, property_name).kind
                    if kind != PropertyKind.CUSTOM_ENUM:
                        report.mixed_custom_properties.append(f"{block.name}.{property_name}")
                        break

    # Naming collisions only surface once the whole model is built.
    if not report.errors:
        try:
            build_structural_model(schema)
        except SchemaValidationError as e:
            report.errors.append(str(e))

    report.kind_counts = dict(kind_counts)
    report.well_known_usage = dict(well_known_usage)

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if report.errors:
        report.add_warning(f"{len(report.errors)} schema errors; generation will fail")

    if report.single_value_properties:
        report.add_warning(
            f"Single-valued properties: {', '.join(report.single_value_properties)}"
        )

    if report.mixed_custom_properties:
        report.add_warning(
            "Custom enumerations with labels from another domain: "
            f"{', '.join(report.mixed_custom_properties)}"
        )

    if report.blocks_with_properties and not report.well_known_usage:
        report.add_warning("No property uses a well-known enumeration")

    return report


def format_report(report: SchemaReport) -> str:
    """Human-readable rendering of a SchemaReport."""
    lines = [
        f"Schema: {report.schema_name}",
        f"  Blocks: {report.total_blocks} "
        f"({report.blocks_with_properties} with properties, {report.nullary_blocks} nullary)",
        f"  Properties: {report.total_properties}",
        f"  Total states: {report.total_states}",
    ]
    if report.largest_block is not None:
        lines.append(
            f"  Largest block: {report.largest_block} ({report.max_states_per_block} states)"
        )
    for kind, count in sorted(report.kind_counts.items()):
        lines.append(f"  {kind}: {count}")
    for name, count in sorted(report.well_known_usage.items()):
        lines.append(f"    {name}: {count}")
    if report.errors:
        lines.append(f"Errors ({len(report.errors)}):")
        lines.extend(f"  - {error}" for error in report.errors)
    if report.warnings:
        lines.append(f"Warnings ({len(report.warnings)}):")
        lines.extend(f"  - {warning}" for warning in report.warnings)
    return "\n".join(lines)
