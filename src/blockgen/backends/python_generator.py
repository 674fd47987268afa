"""
Python module generator for block structural models.

Renders a StructuralModel as a single importable Python module:
    - Boolean / Int32 canonical string codecs and the CanonicalEnum base
    - The well-known enumeration library (once)
    - Custom enumerations
    - One frozen dataclass record per block with properties
    - The Block base class and one subclass per block, in schema order
    - The BLOCK_TYPES registry

The text is emitted PEP 8 shaped but is normally passed through an
external formatter afterwards (see format_python_file).
"""

import subprocess
from typing import List, Sequence

from blockgen.structure import (
    BlockVariant,
    EnumDefinition,
    FieldDefinition,
    RecordDefinition,
    StructuralModel,
)


DEFAULT_FORMAT_COMMAND = ("black", "-q")


class FormattingError(Exception):
    """Raised when the external formatter cannot be run or reports failure."""
    pass


_PRELUDE = '''\
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Mapping, Optional, Tuple, Type


class Boolean:
    """Canonical string round trip for bool properties."""

    @staticmethod
    def parse_from_canonical_string(text: str) -> Optional[bool]:
        if text == "true":
            return True
        if text == "false":
            return False
        return None

    @staticmethod
    def to_canonical_string(value: bool) -> str:
        return "true" if value else "false"

    @staticmethod
    def encode(value: bool) -> int:
        """0 for False, 1 for True."""
        return 1 if value else 0


class Int32:
    """Canonical string round trip for signed 32-bit integer properties.

    Only the canonical decimal form parses: no '+' sign, no leading zeros.
    """

    MIN = -2147483648
    MAX = 2147483647

    @staticmethod
    def parse_from_canonical_string(text: str) -> Optional[int]:
        digits = text[1:] if text[:1] == "-" else text
        if not digits or not digits.isascii() or not digits.isdigit():
            return None
        value = int(text)
        if value < Int32.MIN or value > Int32.MAX or str(value) != text:
            return None
        return value

    @staticmethod
    def to_canonical_string(value: int) -> str:
        return str(value)

    @staticmethod
    def encode(value: int) -> int:
        """The value itself; only non-negative values have an encoding."""
        if value < 0:
            raise ValueError(f"negative Int32 {value} has no encoding")
        return value


class CanonicalEnum(Enum):
    """Closed domain whose members serialize as their original label."""

    @classmethod
    def parse_from_canonical_string(cls, text: str) -> Optional["CanonicalEnum"]:
        try:
            return cls(text)
        except ValueError:
            return None

    def to_canonical_string(self) -> str:
        return self.value

    def encode(self) -> int:
        """Position of this member in its enumeration."""
        return list(type(self)).index(self)


def _lookup(values, key, codec, domain):
    """Parse values[key] with codec, keeping it only if it lies in domain."""
    text = values.get(key)
    if text is None:
        return None
    parsed = codec.parse_from_canonical_string(text)
    if parsed is None or parsed not in domain:
        return None
    return parsed
'''

_BLOCK_BASE = '''\
class Block:
    """Base of every block variant."""

    NAME: ClassVar[str] = ""
    NATIVE_TYPE_ID: ClassVar[int] = -1
    STATE_COUNT: ClassVar[int] = 1

    def name(self) -> str:
        return self.NAME

    def native_type_id(self) -> int:
        return self.NATIVE_TYPE_ID

    def encode(self) -> int:
        return 0

    def to_string_map(self) -> Dict[str, str]:
        return {}

    @classmethod
    def from_string_map(cls, values: Mapping[str, str]) -> Optional["Block"]:
        return cls()
'''

_REGISTRY_LOOKUP = '''\
def block_from_name_and_string_map(
    name: str, values: Mapping[str, str]
) -> Optional[Block]:
    """Build a block from its schema name and property map, or return None."""
    block_type = BLOCK_TYPES.get(name)
    if block_type is None:
        return None
    return block_type.from_string_map(values)
'''


def _header(model: StructuralModel) -> List[str]:
    return [
        f"# This file was generated by blockgen from schema {model.schema_name!r}.",
        "# Do not edit by hand; regenerate it instead.",
        "",
    ]


def _enum_lines(definition: EnumDefinition) -> List[str]:
    lines = [f"class {definition.name}(CanonicalEnum):"]
    for member in definition.members:
        lines.append(f"    {member.identifier} = {member.label!r}")
    return lines


def _domain_literal(model: StructuralModel, record_field: FieldDefinition) -> str:
    """Declared domain of a field as a Python tuple literal."""
    if record_field.kind == "bool":
        items = ["True" if v == "true" else "False" for v in record_field.values]
    elif record_field.kind == "int32":
        items = [str(int(v)) for v in record_field.values]
    else:
        definition = model.get_enum(record_field.type_name)
        identifiers = {member.label: member.identifier for member in definition.members}
        items = [f"{record_field.type_name}.{identifiers[v]}" for v in record_field.values]

    if len(items) == 1:
        return f"({items[0]},)"
    return "(" + ", ".join(items) + ")"


def _encode_expression(record: RecordDefinition) -> List[str]:
    terms = []
    for record_field in record.fields:
        term = f"self.{record_field.domain_name}.index(self.{record_field.name})"
        if record_field.multiplier != 1:
            term += f" * {record_field.multiplier}"
        terms.append(term)

    if len(terms) == 1:
        return [f"        return {terms[0]}"]

    lines = ["        return ("]
    lines.append(f"            {terms[0]}")
    for term in terms[1:]:
        lines.append(f"            + {term}")
    lines.append("        )")
    return lines


def _record_lines(model: StructuralModel, record: RecordDefinition) -> List[str]:
    lines = [
        "@dataclass(frozen=True)",
        f"class {record.name}:",
    ]
    for record_field in record.fields:
        lines.append(f"    {record_field.name}: {record_field.type_name}")

    lines.append("")
    for record_field in record.fields:
        lines.append(
            f"    {record_field.domain_name}: ClassVar[Tuple[{record_field.type_name}, ...]] = "
            f"{_domain_literal(model, record_field)}"
        )
    lines.append(f"    STATE_COUNT: ClassVar[int] = {record.state_count}")

    # from_string_map
    lines.append("")
    lines.append("    @classmethod")
    lines.append(
        f"    def from_string_map(cls, values: Mapping[str, str]) -> Optional[\"{record.name}\"]:"
    )
    # Positional, so property names never shadow locals.
    lines.append("        parsed = (")
    for record_field in record.fields:
        lines.append(
            f"            _lookup(values, {record_field.key!r}, "
            f"{record_field.codec_name}, cls.{record_field.domain_name}),"
        )
    lines.append("        )")
    lines.append("        if None in parsed:")
    lines.append("            return None")
    lines.append("        return cls(*parsed)")

    # to_string_map
    lines.append("")
    lines.append("    def to_string_map(self) -> Dict[str, str]:")
    lines.append("        return {")
    for record_field in record.fields:
        lines.append(
            f"            {record_field.key!r}: "
            f"{record_field.codec_name}.to_canonical_string(self.{record_field.name}),"
        )
    lines.append("        }")

    # encode
    lines.append("")
    lines.append("    def encode(self) -> int:")
    lines.append(
        '        """Mixed-radix index of this property combination in [0, STATE_COUNT)."""'
    )
    lines.extend(_encode_expression(record))
    return lines


def _variant_lines(variant: BlockVariant) -> List[str]:
    lines = [
        "@dataclass(frozen=True)",
        f"class {variant.name}(Block):",
        f"    NAME: ClassVar[str] = {variant.block_name!r}",
        f"    NATIVE_TYPE_ID: ClassVar[int] = {variant.native_type_id}",
    ]
    if variant.record is None:
        return lines

    record_name = variant.record.name
    lines.extend([
        f"    STATE_COUNT: ClassVar[int] = {variant.record.state_count}",
        "",
        f"    data: {record_name}",
        "",
        "    def encode(self) -> int:",
        "        return self.data.encode()",
        "",
        "    def to_string_map(self) -> Dict[str, str]:",
        "        return self.data.to_string_map()",
        "",
        "    @classmethod",
        f"    def from_string_map(cls, values: Mapping[str, str]) -> Optional[\"{variant.name}\"]:",
        f"        data = {record_name}.from_string_map(values)",
        "        if data is None:",
        "            return None",
        "        return cls(data=data)",
    ])
    return lines


def _registry_lines(model: StructuralModel) -> List[str]:
    lines = ["BLOCK_TYPES: Dict[str, Type[Block]] = {"]
    for variant in model.variants:
        lines.append(f"    {variant.block_name!r}: {variant.name},")
    lines.append("}")
    return lines


def _join_sections(sections: Sequence[List[str]]) -> List[str]:
    """Separate top-level definitions by two blank lines."""
    lines: List[str] = []
    for section in sections:
        if lines:
            lines.extend(["", ""])
        lines.extend(section)
    return lines


def generate_python(model: StructuralModel) -> str:
    """
    Generate the Python module text for a structural model.

    Args:
        model: StructuralModel to render

    Returns:
        Module source text; identical for identical models
    """
    lines = _header(model)
    lines.append(_PRELUDE.rstrip("\n"))

    # =========================================================================
    # ENUMERATIONS
    # =========================================================================

    enum_sections = [_enum_lines(d) for d in model.well_known_enums]
    enum_sections.extend(_enum_lines(d) for d in model.custom_enums)

    # =========================================================================
    # RECORDS AND VARIANTS
    # =========================================================================

    record_sections = [
        _record_lines(model, variant.record)
        for variant in model.variants
        if variant.record is not None
    ]
    variant_sections = [_variant_lines(variant) for variant in model.variants]

    body = _join_sections(
        enum_sections
        + record_sections
        + [_BLOCK_BASE.rstrip("\n").split("\n")]
        + variant_sections
        + [_registry_lines(model), _REGISTRY_LOOKUP.rstrip("\n").split("\n")]
    )

    lines.extend(["", ""])
    lines.extend(body)
    return "\n".join(lines) + "\n"


def save_python_file(model: StructuralModel, filename: str) -> None:
    """
    Generate the module and save it to a file.

    Args:
        model: StructuralModel to render
        filename: Output file path (.py extension recommended)
    """
    source = generate_python(model)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(source)


def format_python_file(filename: str,
                       command: Sequence[str] = DEFAULT_FORMAT_COMMAND) -> None:
    """
    Run an external formatter over a generated file, in place.

    The file path is appended to command as its last argument.

    Raises:
        FormattingError: If the formatter is missing or exits non-zero
    """
    args = list(command) + [filename]
    try:
        subprocess.run(args, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise FormattingError(f"Formatter not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip()
        raise FormattingError(
            f"Formatter '{' '.join(command)}' failed on {filename} "
            f"with exit code {e.returncode}: {detail}"
        ) from e


__all__ = [
    "DEFAULT_FORMAT_COMMAND",
    "FormattingError",
    "generate_python",
    "save_python_file",
    "format_python_file",
]
