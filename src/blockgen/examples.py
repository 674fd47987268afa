"""
Example schema builder used by the demo and the test-suite.

Mirrors a slice of the game's block report: nullary blocks, blocks using
well-known enumerations, integer and boolean properties, custom
enumerations (including two blocks sharing the property name "mode")
and a property literally named "type".
"""
from blockgen.inference import SHAPE
from blockgen.model import Block, Schema


HORIZONTAL_FACING = ["north", "south", "east", "west"]
BOOLEAN = ["true", "false"]


def _range(start: int, stop: int):
    return [str(i) for i in range(start, stop)]


def build_example_schema() -> Schema:
    schema = Schema(name="example_blocks")

    schema.blocks = [
        Block(name="minecraft:air"),
        Block(name="minecraft:stone"),
        Block(
            name="minecraft:oak_stairs",
            properties={
                "facing": list(HORIZONTAL_FACING),
                "half": ["top", "bottom"],
                "shape": list(SHAPE.values),
            },
        ),
        Block(
            name="minecraft:oak_door",
            properties={
                "facing": list(HORIZONTAL_FACING),
                "half": ["upper", "lower"],
                "hinge": ["left", "right"],
                "open": list(BOOLEAN),
                "powered": list(BOOLEAN),
            },
        ),
        Block(
            name="minecraft:red_bed",
            properties={
                "facing": list(HORIZONTAL_FACING),
                "occupied": list(BOOLEAN),
                "part": ["head", "foot"],
            },
        ),
        Block(name="minecraft:oak_log", properties={"axis": ["x", "y", "z"]}),
        Block(name="minecraft:birch_log", properties={"axis": ["x", "y", "z"]}),
        Block(name="minecraft:wheat", properties={"age": _range(0, 8)}),
        Block(
            name="minecraft:lever",
            properties={
                "face": ["floor", "wall", "ceiling"],
                "facing": list(HORIZONTAL_FACING),
                "powered": list(BOOLEAN),
            },
        ),
        Block(
            name="minecraft:note_block",
            properties={
                "instrument": ["harp", "basedrum", "snare", "hat", "bass", "flute", "bell"],
                "note": _range(0, 25),
                "powered": list(BOOLEAN),
            },
        ),
        Block(
            name="minecraft:comparator",
            properties={
                "facing": list(HORIZONTAL_FACING),
                "mode": ["compare", "subtract"],
                "powered": list(BOOLEAN),
            },
        ),
        Block(
            name="minecraft:structure_block",
            properties={"mode": ["save", "load", "corner", "data"]},
        ),
        Block(
            name="minecraft:chest",
            properties={
                "facing": list(HORIZONTAL_FACING),
                "type": ["single", "left", "right"],
                "waterlogged": list(BOOLEAN),
            },
        ),
        Block(
            name="minecraft:daylight_detector",
            properties={
                "inverted": list(BOOLEAN),
                "power": _range(0, 16),
            },
        ),
    ]

    return schema
