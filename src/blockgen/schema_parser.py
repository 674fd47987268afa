"""
Schema Parser (Raw Input -> Schema).

Reads a block report document in JSON or YAML.

Document format:
    {
        "minecraft:stone": {},
        "minecraft:oak_stairs": {
            "properties": {
                "facing": ["north", "south", "east", "west"],
                "half": ["top", "bottom"],
                ...
            },
            "states": [...]
        }
    }

Notes:
    - Order of blocks, properties and values is preserved; it is semantic
    - Keys other than "properties" in a block object are ignored
    - A repeated block or property key is an error, never "last one wins"
    - Property values must be strings; quote numbers and booleans in YAML
"""

import json
import os
from collections.abc import Hashable
from typing import Any, Dict, List, Optional, Tuple

import yaml

from blockgen.model import Block, Schema


class SchemaParseError(Exception):
    """Raised when a schema document is unreadable or malformed."""
    pass


def _parse_values(block_name: str, property_name: Any, values: Any) -> List[str]:
    if not isinstance(property_name, str):
        raise SchemaParseError(
            f"Block '{block_name}': property name {property_name!r} is not a string"
        )
    if not isinstance(values, list):
        raise SchemaParseError(
            f"Block '{block_name}', property '{property_name}': values must be a list"
        )
    if not values:
        raise SchemaParseError(
            f"Block '{block_name}', property '{property_name}': values must not be empty"
        )
    for value in values:
        if not isinstance(value, str):
            raise SchemaParseError(
                f"Block '{block_name}', property '{property_name}': "
                f"value {value!r} is not a string"
            )
    return list(values)


def _parse_block(block_name: Any, body: Any) -> Block:
    if not isinstance(block_name, str):
        raise SchemaParseError(f"Block name {block_name!r} is not a string")
    if body is None:
        return Block(name=block_name)
    if not isinstance(body, dict):
        raise SchemaParseError(f"Block '{block_name}': expected an object")

    raw_properties = body.get("properties")
    if raw_properties is None:
        return Block(name=block_name)
    if not isinstance(raw_properties, dict):
        raise SchemaParseError(f"Block '{block_name}': 'properties' must be an object")
    if not raw_properties:
        return Block(name=block_name)

    properties: Dict[str, List[str]] = {}
    for property_name, values in raw_properties.items():
        properties[property_name] = _parse_values(block_name, property_name, values)
    return Block(name=block_name, properties=properties)


def _reject_duplicate_keys(pairs: List[Tuple[Any, Any]]) -> Dict[Any, Any]:
    """object_pairs_hook for json: a repeated key would silently replace the first."""
    d: Dict[Any, Any] = {}
    for key, value in pairs:
        if key in d:
            raise SchemaParseError(f"Duplicate key {key!r} in schema document")
        d[key] = value
    return d


class _UniqueKeySafeLoader(yaml.SafeLoader):
    """SafeLoader that rejects mappings with a repeated key."""

    def construct_mapping(self, node, deep=False):
        self.flatten_mapping(node)
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise SchemaParseError(
                    f"Duplicate key {key!r} in schema document "
                    f"at line {key_node.start_mark.line + 1}"
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def parse_schema_dict(data: Any, schema_name: str = "blocks") -> Schema:
    """
    Build a Schema from an already-decoded document.

    Args:
        data: Top-level mapping of block name to block object
        schema_name: Name for the schema

    Returns:
        Schema with blocks in document order

    Raises:
        SchemaParseError: If the document does not have the expected structure
    """
    if not isinstance(data, dict):
        raise SchemaParseError("Schema document must be a mapping of block names")

    schema = Schema(name=schema_name)
    for block_name, body in data.items():
        schema.blocks.append(_parse_block(block_name, body))
    return schema


def parse_schema_string(content: str, fmt: str = "json",
                        schema_name: str = "blocks") -> Schema:
    """
    Parse schema text.

    Args:
        content: Document text
        fmt: "json" or "yaml"
        schema_name: Name for the schema

    Raises:
        SchemaParseError: If decoding fails or the structure is invalid
    """
    try:
        if fmt == "json":
            data = json.loads(content, object_pairs_hook=_reject_duplicate_keys)
        elif fmt == "yaml":
            data = yaml.load(content, Loader=_UniqueKeySafeLoader)
        else:
            raise SchemaParseError(f"Unsupported schema format: {fmt}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaParseError(f"Failed to decode {fmt} schema: {e}") from e

    return parse_schema_dict(data, schema_name=schema_name)


_FORMATS_BY_EXTENSION = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def parse_schema_file(filepath: str, schema_name: Optional[str] = None) -> Schema:
    """
    Parse a schema file, choosing the format from its extension.

    Args:
        filepath: Path to a .json, .yaml or .yml file
        schema_name: Optional name for schema (defaults to filename)

    Returns:
        Schema object

    Raises:
        FileNotFoundError: If file doesn't exist
        SchemaParseError: If parsing fails
    """
    stem, extension = os.path.splitext(os.path.basename(filepath))
    fmt = _FORMATS_BY_EXTENSION.get(extension.lower())
    if fmt is None:
        raise SchemaParseError(f"Unrecognized schema file extension: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Schema file not found: {filepath}")

    if schema_name is None:
        schema_name = stem

    return parse_schema_string(content, fmt=fmt, schema_name=schema_name)


__all__ = [
    "parse_schema_dict",
    "parse_schema_string",
    "parse_schema_file",
    "SchemaParseError",
]
