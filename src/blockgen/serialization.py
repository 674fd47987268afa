"""
Serialization helpers for blockgen objects (StructuralModel, Schema).

Provides lossless JSON/YAML round-trip of the structural model via an
intermediate dict representation, and writes schemas back out in the
accepted input format.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from blockgen.model import Schema
from blockgen.structure import (
    BlockVariant,
    EnumDefinition,
    EnumMember,
    FieldDefinition,
    RecordDefinition,
    StructuralModel,
)


def enum_to_dict(e: EnumDefinition) -> Dict[str, Any]:
    return {
        "name": e.name,
        "shared": e.shared,
        "members": [{"identifier": m.identifier, "label": m.label} for m in e.members],
    }


def enum_from_dict(d: Dict[str, Any]) -> EnumDefinition:
    return EnumDefinition(
        name=d["name"],
        shared=d.get("shared", False),
        members=[EnumMember(identifier=m["identifier"], label=m["label"]) for m in d.get("members", [])],
    )


def field_to_dict(f: FieldDefinition) -> Dict[str, Any]:
    return {
        "name": f.name,
        "key": f.key,
        "kind": f.kind,
        "type_name": f.type_name,
        "codec_name": f.codec_name,
        "domain_name": f.domain_name,
        "values": list(f.values),
        "multiplier": f.multiplier,
    }


def field_from_dict(d: Dict[str, Any]) -> FieldDefinition:
    return FieldDefinition(
        name=d["name"],
        key=d["key"],
        kind=d["kind"],
        type_name=d["type_name"],
        codec_name=d["codec_name"],
        domain_name=d["domain_name"],
        values=list(d.get("values", [])),
        multiplier=d.get("multiplier", 1),
    )


def record_to_dict(r: RecordDefinition | None) -> Dict[str, Any] | None:
    if r is None:
        return None
    return {"name": r.name, "fields": [field_to_dict(f) for f in r.fields]}


def record_from_dict(d: Dict[str, Any] | None) -> RecordDefinition | None:
    if d is None:
        return None
    return RecordDefinition(name=d["name"], fields=[field_from_dict(f) for f in d.get("fields", [])])


def variant_to_dict(v: BlockVariant) -> Dict[str, Any]:
    return {
        "name": v.name,
        "block_name": v.block_name,
        "native_type_id": v.native_type_id,
        "record": record_to_dict(v.record),
    }


def variant_from_dict(d: Dict[str, Any]) -> BlockVariant:
    return BlockVariant(
        name=d["name"],
        block_name=d["block_name"],
        native_type_id=d["native_type_id"],
        record=record_from_dict(d.get("record")),
    )


def model_to_dict(m: StructuralModel) -> Dict[str, Any]:
    return {
        "schema_name": m.schema_name,
        "variants": [variant_to_dict(v) for v in m.variants],
        "custom_enums": [enum_to_dict(e) for e in m.custom_enums],
        "well_known_enums": [enum_to_dict(e) for e in m.well_known_enums],
    }


def model_from_dict(d: Dict[str, Any]) -> StructuralModel:
    m = StructuralModel(schema_name=d.get("schema_name", ""))
    m.variants = [variant_from_dict(v) for v in d.get("variants", [])]
    m.custom_enums = [enum_from_dict(e) for e in d.get("custom_enums", [])]
    m.well_known_enums = [enum_from_dict(e) for e in d.get("well_known_enums", [])]
    return m


def model_to_json(m: StructuralModel) -> str:
    return json.dumps(model_to_dict(m), sort_keys=True, indent=2)


def model_from_json(s: str) -> StructuralModel:
    d = json.loads(s)
    return model_from_dict(d)


def model_to_yaml(m: StructuralModel) -> str:
    return yaml.safe_dump(model_to_dict(m))


def model_from_yaml(s: str) -> StructuralModel:
    d = yaml.safe_load(s)
    return model_from_dict(d)


def schema_to_dict(s: Schema) -> Dict[str, Any]:
    """Schema in the block report layout accepted by schema_parser."""
    d: Dict[str, Any] = {}
    for block in s.blocks:
        if block.properties:
            d[block.name] = {"properties": {k: list(v) for k, v in block.properties.items()}}
        else:
            d[block.name] = {}
    return d


def schema_to_json(s: Schema) -> str:
    # Key order is semantic; never sort.
    return json.dumps(schema_to_dict(s), indent=2)
