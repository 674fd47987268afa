"""
Core Schema Objects

Defines the declarative input of the generator:
    - Blocks (named entities with optional properties)
    - Schemas (ordered root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about the generated language
        - Preserve declaration order everywhere
        - Represent structure, not behavior

Order is semantic here. The position of a block fixes its native type
id, the position of a property fixes its weight in the mixed-radix
encoding and the position of a value fixes its rank. Reordering any of
them is a breaking change for consumers of generated code.
"""

from dataclasses import dataclass, field
from math import prod
from typing import Dict, List, Optional


@dataclass
class Block:
    """
    A named block with zero or more ordered properties.

    Properties:
        name:
            Schema block name, usually namespaced
            Examples: "minecraft:stone", "minecraft:oak_stairs"

        properties:
            Ordered mapping of property name to its ordered, non-empty
            list of permitted value strings.
            None means the block has a single, nullary representation.

    Example:
        Block(
            name="minecraft:oak_door",
            properties={
                "half": ["upper", "lower"],
                "hinge": ["left", "right"],
                "open": ["true", "false"],
            },
        )
    """

    name: str
    properties: Optional[Dict[str, List[str]]] = None

    @property
    def has_properties(self) -> bool:
        return bool(self.properties)

    def cardinalities(self) -> List[int]:
        """Domain sizes of the properties, in declaration order."""
        if not self.properties:
            return []
        return [len(values) for values in self.properties.values()]

    def state_count(self) -> int:
        """
        Number of distinct property combinations.

        A nullary block has exactly one state.
        """
        return prod(self.cardinalities())


@dataclass
class Schema:
    """
    Root container for the set of blocks to generate.

    Everything in the generated module MUST be derivable from this
    object alone.

    Properties:
        name:
            Schema identifier (defaults to the source file stem)

        blocks:
            All blocks in declaration order

    INVARIANTS:
        - Block names are unique
        - Iteration order is the declared order; it fixes native type ids
    """

    name: str
    blocks: List[Block] = field(default_factory=list)

    def get_block(self, block_name: str) -> Optional[Block]:
        """
        Retrieve a block by name.

        Args:
            block_name: Schema block name

        Returns:
            Block object or None if not found
        """
        for block in self.blocks:
            if block.name == block_name:
                return block
        return None

    def native_type_id(self, block_name: str) -> Optional[int]:
        """0-based position of a block in declaration order."""
        for index, block in enumerate(self.blocks):
            if block.name == block_name:
                return index
        return None
