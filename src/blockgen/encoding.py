"""
Mixed-Radix Value Encoder

Maps a block's concrete property combination to a dense integer.

For properties p_0 ... p_{n-1} with domain cardinalities c_i and value
ranks r_i:

    value = sum(r_i * prod(c_{i+1} ... c_{n-1}))

The last property is the fastest-varying digit (multiplier 1). The
result is a bijection between the Cartesian product of the domains and
range(prod(c_i)), so it can index a flat array directly.
"""

from math import prod
from typing import List, Sequence


def multipliers(cardinalities: Sequence[int]) -> List[int]:
    """
    Place value of each property.

    Example:
        multipliers([4, 2, 14]) == [28, 14, 1]
    """
    result = []
    for index in range(len(cardinalities)):
        result.append(prod(cardinalities[index + 1:]))
    return result


def state_count(cardinalities: Sequence[int]) -> int:
    return prod(cardinalities)


def encode(cardinalities: Sequence[int], ranks: Sequence[int]) -> int:
    """
    Encode value ranks into a single integer.

    Args:
        cardinalities: Domain size of each property, in schema order
        ranks: 0-based rank of the chosen value within each domain

    Returns:
        Integer in range(state_count(cardinalities))

    Raises:
        ValueError: If lengths differ or a rank is outside its domain
    """
    if len(cardinalities) != len(ranks):
        raise ValueError(
            f"Expected {len(cardinalities)} ranks, got {len(ranks)}"
        )

    value = 0
    for position, (cardinality, rank, multiplier) in enumerate(
        zip(cardinalities, ranks, multipliers(cardinalities))
    ):
        if rank < 0 or rank >= cardinality:
            raise ValueError(
                f"Rank {rank} out of range for property {position} "
                f"with {cardinality} values"
            )
        value += rank * multiplier
    return value


def decode(cardinalities: Sequence[int], value: int) -> List[int]:
    """
    Inverse of encode: recover the value ranks from an encoded integer.

    Raises:
        ValueError: If value is outside range(state_count(cardinalities))
    """
    total = state_count(cardinalities)
    if value < 0 or value >= total:
        raise ValueError(f"Value {value} out of range [0, {total})")

    ranks = []
    for multiplier in multipliers(cardinalities):
        rank, value = divmod(value, multiplier)
        ranks.append(rank)
    return ranks
