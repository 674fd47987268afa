"""
Naming Transform

Pure functions converting between schema identifiers (snake_case block
and property names, raw value labels) and the identifiers used in the
generated Python module.

Identifier roles:
    - Type names (block variants, records, enumerations): PascalCase
    - Field names: snake_case, remapped through RESERVED_FIELD_NAMES
    - Enumeration members: CONSTANT_CASE

Also holds the canonical string forms used at the string-map
serialization boundary.

ARCHITECTURAL RULE:
    A field renamed here is still serialized under its ORIGINAL schema key.
    Renaming is an identifier concern only; keys never change.
"""

import keyword
import re
from typing import List, Optional, Union


# Property names that collide with reserved identifiers in generated code.
RESERVED_FIELD_NAMES = {
    "type": "ty",
    "in": "in_",
}

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
_INT32_RE = re.compile(r"[+-]?[0-9]+")


def split_words(text: str) -> List[str]:
    """Split snake_case, kebab-case, camelCase or PascalCase text into words."""
    return _WORD_RE.findall(text)


def to_pascal_case(text: str) -> str:
    """
    Convert an identifier or label to PascalCase.

    Examples:
        oak_stairs  -> OakStairs
        inner_left  -> InnerLeft
        has_bottle_0 -> HasBottle0
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def to_snake_case(text: str) -> str:
    """
    Convert an identifier to snake_case.

    Inverse of to_pascal_case for ordinary snake_case identifiers:
        to_snake_case(to_pascal_case("oak_stairs")) == "oak_stairs"
    """
    return "_".join(word.lower() for word in split_words(text))


def to_constant_case(text: str) -> str:
    """Convert an identifier or label to CONSTANT_CASE."""
    return "_".join(word.upper() for word in split_words(text))


def strip_namespace(block_name: str) -> str:
    """Drop a namespace prefix such as 'minecraft:' from a block name."""
    return block_name.rpartition(":")[2]


def block_type_name(block_name: str) -> str:
    """Type name of the Block variant for a schema block name."""
    return to_pascal_case(strip_namespace(block_name))


def record_type_name(block_name: str) -> str:
    """Type name of the record carrying a block's properties."""
    return f"{block_type_name(block_name)}Data"


def custom_enum_name(block_name: str, property_name: str) -> str:
    """
    Type name of a custom enumeration scoped to (block, property).

    The block part keeps two blocks sharing a property name apart:
        ("minecraft:note_block", "instrument") -> NoteBlockInstrument
    """
    return block_type_name(block_name) + to_pascal_case(property_name)


def field_name(property_name: str) -> str:
    """
    Field name for a property in generated code.

    Names in RESERVED_FIELD_NAMES are remapped; any other keyword gets a
    trailing underscore.
    """
    if property_name in RESERVED_FIELD_NAMES:
        return RESERVED_FIELD_NAMES[property_name]
    name = to_snake_case(property_name)
    if keyword.iskeyword(name):
        name += "_"
    return name


def domain_constant_name(name: str) -> str:
    """Class-level constant holding a field's declared domain."""
    return f"{to_constant_case(name)}_DOMAIN"


def enum_member_name(label: str) -> str:
    """
    Enumeration member identifier for a value label.

    Returns an empty string when the label holds no identifier
    characters at all; callers treat that as a schema error.
    """
    name = to_constant_case(label)
    if name[:1].isdigit():
        name = "V_" + name
    return name


def is_valid_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


# =============================================================================
# CANONICAL STRING FORMS
# =============================================================================


def parse_canonical_bool(text: str) -> Optional[bool]:
    """Parse exactly 'true' or 'false'."""
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def parse_canonical_int32(text: str) -> Optional[int]:
    """Parse a signed 32-bit decimal integer, or return None."""
    if not _INT32_RE.fullmatch(text):
        return None
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def to_canonical_string(value: Union[bool, int, str]) -> str:
    """
    Stringify a property value for the string-map boundary.

    Booleans become 'true'/'false', integers their decimal form, and
    enumeration labels are returned unchanged.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return value
