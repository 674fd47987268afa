"""
Tests for the Python module generator.

Generated modules are imported and exercised, because a generator that
emits plausible-looking text can still encode states wrongly.

Tests cover:
    - Module structure, header and determinism
    - The mixed-radix encode() of records
    - Canonical string round trips
    - String-map serialization round trips and graceful failure
    - Block variants, native type ids and the registry
    - The external formatter boundary
"""

import itertools
import sys

import pytest
from blockgen.backends.python_generator import (
    FormattingError,
    format_python_file,
    generate_python,
    save_python_file,
)
from blockgen.builder import build_structural_model
from blockgen.examples import build_example_schema
from blockgen.model import Block, Schema


def all_records(module, model):
    """Yield (record class, every instance) for each record in the model."""
    for variant in model.variants:
        if variant.record is None:
            continue
        cls = getattr(module, variant.record.name)
        domains = [getattr(cls, f.domain_name) for f in variant.record.fields]
        yield cls, [cls(*combo) for combo in itertools.product(*domains)]


class TestModuleStructure:
    """Test the shape of the emitted text."""

    def test_header_marks_generated(self, example_model):
        source = generate_python(example_model)
        first_lines = source.splitlines()[:2]
        assert "generated" in first_lines[0]
        assert "Do not edit" in first_lines[1]
        assert "example_blocks" in first_lines[0]

    def test_source_compiles(self, example_model):
        compile(generate_python(example_model), "<generated>", "exec")

    def test_deterministic(self):
        a = generate_python(build_structural_model(build_example_schema()))
        b = generate_python(build_structural_model(build_example_schema()))
        assert a == b

    def test_well_known_enums_emitted_once(self, example_model):
        source = generate_python(example_model)
        for name in ["Facing", "Axis", "Half", "Face", "Shape", "Hinge", "Part"]:
            assert source.count(f"class {name}(CanonicalEnum):") == 1

    def test_nullary_variant_has_no_encoding_formula(self, example_model):
        source = generate_python(example_model)
        stone = source.split("class Stone(Block):")[1].split("@dataclass")[0]
        assert "def encode" not in stone

    def test_empty_schema(self, load_generated):
        module = load_generated(generate_python(build_structural_model(Schema(name="empty"))))
        assert module.BLOCK_TYPES == {}


class TestEncode:
    """Test encode() on generated types."""

    def test_stairs_example(self, example_module):
        m = example_module
        data = m.OakStairsData(m.Facing.SOUTH, m.Half.BOTTOM, m.Shape.STRAIGHT)
        assert data.encode() == 42
        assert m.OakStairs(data=data).encode() == 42
        assert m.OakStairsData.STATE_COUNT == 112

    def test_every_record_is_bijective(self, example_module, example_model):
        for cls, instances in all_records(example_module, example_model):
            values = sorted(instance.encode() for instance in instances)
            assert values == list(range(cls.STATE_COUNT)), cls.__name__

    def test_rank_is_declared_position(self, load_generated):
        """A subset of a well-known domain is ranked in declared order."""
        schema = Schema(name="s", blocks=[
            Block(name="minecraft:hopper", properties={
                "enabled": ["true", "false"],
                "facing": ["down", "north", "south", "west", "east"],
            }),
        ])
        model = build_structural_model(schema)
        m = load_generated(generate_python(model))
        assert m.HopperData(True, m.Facing.DOWN).encode() == 0
        assert m.HopperData(True, m.Facing.EAST).encode() == 4
        assert m.HopperData(False, m.Facing.DOWN).encode() == 5
        for cls, instances in all_records(m, model):
            assert sorted(i.encode() for i in instances) == list(range(10))

    def test_single_value_domain(self, load_generated):
        schema = Schema(name="s", blocks=[
            Block(name="test:fixed", properties={"mode": ["only"], "lit": ["true", "false"]}),
        ])
        m = load_generated(generate_python(build_structural_model(schema)))
        assert m.FixedData.MODE_DOMAIN == (m.FixedMode.ONLY,)
        assert m.FixedData(m.FixedMode.ONLY, False).encode() == 1

    def test_enum_encode_is_position(self, example_module):
        m = example_module
        assert m.Facing.NORTH.encode() == 0
        assert m.Facing.DOWN.encode() == 5
        assert m.NoteBlockInstrument.BELL.encode() == 6


class TestCanonicalStrings:
    """Test parse/stringify capabilities of the emitted module."""

    def test_every_schema_value_round_trips(self, example_module, example_model):
        for variant in example_model.variants:
            if variant.record is None:
                continue
            for record_field in variant.record.fields:
                codec = getattr(example_module, record_field.codec_name)
                for text in record_field.values:
                    parsed = codec.parse_from_canonical_string(text)
                    assert parsed is not None
                    assert codec.to_canonical_string(parsed) == text

    def test_boolean(self, example_module):
        Boolean = example_module.Boolean
        assert Boolean.parse_from_canonical_string("true") is True
        assert Boolean.parse_from_canonical_string("True") is None
        assert Boolean.to_canonical_string(False) == "false"

    def test_boolean_encode(self, example_module):
        Boolean = example_module.Boolean
        assert Boolean.encode(False) == 0
        assert Boolean.encode(True) == 1

    def test_int32(self, example_module):
        Int32 = example_module.Int32
        assert Int32.parse_from_canonical_string("-7") == -7
        assert Int32.parse_from_canonical_string("0") == 0
        assert Int32.parse_from_canonical_string("+5") is None
        assert Int32.parse_from_canonical_string("007") is None
        assert Int32.parse_from_canonical_string("-0") is None
        assert Int32.parse_from_canonical_string("1_000") is None
        assert Int32.parse_from_canonical_string("2147483648") is None
        assert Int32.parse_from_canonical_string("٣") is None
        assert Int32.parse_from_canonical_string("") is None
        assert Int32.parse_from_canonical_string("-") is None

    def test_int32_encode(self, example_module):
        Int32 = example_module.Int32
        assert Int32.encode(0) == 0
        assert Int32.encode(24) == 24
        with pytest.raises(ValueError):
            Int32.encode(-1)

    def test_non_canonical_int_rejected_at_string_map(self, example_module):
        """'07' would parse to an in-domain 7 if leading zeros were allowed."""
        WheatData = example_module.WheatData
        assert WheatData.from_string_map({"age": "07"}) is None
        assert WheatData.from_string_map({"age": "+7"}) is None
        assert WheatData.from_string_map({"age": "7"}) == WheatData(7)

    def test_enum(self, example_module):
        Shape = example_module.Shape
        assert Shape.parse_from_canonical_string("inner_left") is Shape.INNER_LEFT
        assert Shape.parse_from_canonical_string("INNER_LEFT") is None
        assert Shape.INNER_LEFT.to_canonical_string() == "inner_left"

    def test_label_with_quote(self, load_generated):
        schema = Schema(name="s", blocks=[
            Block(name="test:sign", properties={"text": ["it's", 'say "hi"']}),
        ])
        m = load_generated(generate_python(build_structural_model(schema)))
        assert m.SignText.IT_S.to_canonical_string() == "it's"
        assert m.SignText.SAY_HI.to_canonical_string() == 'say "hi"'


class TestStringMaps:
    """Test from_string_map / to_string_map."""

    def test_round_trip_all_instances(self, example_module, example_model):
        for cls, instances in all_records(example_module, example_model):
            for instance in instances:
                assert cls.from_string_map(instance.to_string_map()) == instance

    def test_stairs_map(self, example_module):
        m = example_module
        data = m.OakStairsData.from_string_map(
            {"facing": "south", "half": "bottom", "shape": "straight"}
        )
        assert data == m.OakStairsData(m.Facing.SOUTH, m.Half.BOTTOM, m.Shape.STRAIGHT)
        assert data.to_string_map() == {"facing": "south", "half": "bottom", "shape": "straight"}

    def test_renamed_field_uses_original_key(self, example_module):
        m = example_module
        data = m.ChestData.from_string_map({"facing": "west", "type": "left", "waterlogged": "false"})
        assert data.ty is m.ChestType.LEFT
        assert data.to_string_map()["type"] == "left"
        assert "ty" not in data.to_string_map()

    def test_in_property(self, load_generated):
        schema = Schema(name="s", blocks=[
            Block(name="test:pipe", properties={"in": ["north", "south"], "out": ["east", "west"]}),
        ])
        m = load_generated(generate_python(build_structural_model(schema)))
        data = m.PipeData.from_string_map({"in": "south", "out": "east"})
        assert data.in_ is m.Facing.SOUTH
        assert data.to_string_map() == {"in": "south", "out": "east"}

    def test_missing_key_returns_none(self, example_module):
        assert example_module.OakStairsData.from_string_map({"facing": "south", "half": "top"}) is None

    def test_unparsable_value_returns_none(self, example_module):
        m = example_module
        assert m.WheatData.from_string_map({"age": "old"}) is None
        assert m.LeverData.from_string_map({"face": "wall", "facing": "east", "powered": "yes"}) is None

    def test_value_outside_declared_domain_returns_none(self, example_module):
        m = example_module
        assert m.OakStairsData.from_string_map(
            {"facing": "up", "half": "top", "shape": "straight"}
        ) is None
        assert m.WheatData.from_string_map({"age": "8"}) is None

    def test_false_and_zero_are_valid(self, example_module):
        m = example_module
        data = m.DaylightDetectorData.from_string_map({"inverted": "false", "power": "0"})
        assert data == m.DaylightDetectorData(False, 0)

    def test_extra_keys_ignored(self, example_module):
        m = example_module
        assert m.WheatData.from_string_map({"age": "3", "colour": "gold"}) == m.WheatData(3)


class TestBlockVariants:
    """Test the Block sum type."""

    def test_native_type_ids(self, example_module, example_model):
        m = example_module
        assert m.Air().native_type_id() == 0
        assert m.Stone().native_type_id() == 1
        for variant in example_model.variants:
            assert getattr(m, variant.name).NATIVE_TYPE_ID == variant.native_type_id

    def test_names(self, example_module):
        assert example_module.Stone().name() == "minecraft:stone"

    def test_nullary_variant(self, example_module):
        m = example_module
        assert m.Stone() == m.Stone()
        assert m.Stone().encode() == 0
        assert m.Stone().to_string_map() == {}
        assert m.Stone.from_string_map({}) == m.Stone()
        assert m.Stone.STATE_COUNT == 1

    def test_variants_are_blocks(self, example_module):
        m = example_module
        assert isinstance(m.Stone(), m.Block)
        assert isinstance(m.Wheat(data=m.WheatData(2)), m.Block)

    def test_variants_are_hashable(self, example_module):
        m = example_module
        blocks = {m.Stone(), m.Stone(), m.Wheat(data=m.WheatData(2))}
        assert len(blocks) == 2

    def test_registry_in_schema_order(self, example_module, example_model):
        assert list(example_module.BLOCK_TYPES) == [v.block_name for v in example_model.variants]

    def test_from_name_and_string_map(self, example_module):
        m = example_module
        block = m.block_from_name_and_string_map(
            "minecraft:oak_stairs", {"facing": "south", "half": "bottom", "shape": "straight"}
        )
        assert isinstance(block, m.OakStairs)
        assert block.encode() == 42
        assert m.block_from_name_and_string_map("minecraft:stone", {}) == m.Stone()
        assert m.block_from_name_and_string_map("minecraft:unknown", {}) is None
        assert m.block_from_name_and_string_map("minecraft:wheat", {}) is None

    def test_block_string_map_round_trip(self, example_module):
        m = example_module
        block = m.Lever(data=m.LeverData(m.Face.WALL, m.Facing.EAST, True))
        assert m.block_from_name_and_string_map(block.name(), block.to_string_map()) == block


class TestFiles:
    """Test saving and the formatter boundary."""

    def test_save_python_file(self, tmp_path, example_model):
        path = tmp_path / "blocks.py"
        save_python_file(example_model, str(path))
        assert path.read_text(encoding="utf-8") == generate_python(example_model)

    def test_formatter_receives_path(self, tmp_path):
        path = tmp_path / "blocks.py"
        path.write_text("x = 1\n", encoding="utf-8")
        command = [sys.executable, "-c", "import sys; open(sys.argv[1], 'a').write('y = 2\\n')"]
        format_python_file(str(path), command=command)
        assert path.read_text(encoding="utf-8") == "x = 1\ny = 2\n"

    def test_formatter_failure(self, tmp_path):
        path = tmp_path / "blocks.py"
        path.write_text("x = 1\n", encoding="utf-8")
        command = [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        with pytest.raises(FormattingError) as exc_info:
            format_python_file(str(path), command=command)
        assert "boom" in str(exc_info.value)

    def test_formatter_missing(self, tmp_path):
        path = tmp_path / "blocks.py"
        path.write_text("x = 1\n", encoding="utf-8")
        with pytest.raises(FormattingError):
            format_python_file(str(path), command=["definitely-not-a-formatter-blockgen"])
