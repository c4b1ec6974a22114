"""Execution order generation."""

import random

from beartype import beartype


@beartype
def generate_order(num_units: int, num_blocks: int, rng: random.Random) -> list[int]:
    """Build the flat call order for a run.

    The result has ``num_blocks`` contiguous blocks of ``num_units`` entries.
    Each block starts as ``0..num_units-1`` and is shuffled in place with
    ``rng``, so every unit runs exactly once per block and no unit always
    follows another. ``rng`` is advanced across blocks and never re-seeded.
    """
    assert num_units >= 0, f"num_units must be non-negative: {num_units}"
    assert num_blocks >= 0, f"num_blocks must be non-negative: {num_blocks}"

    order: list[int] = []
    for _ in range(num_blocks):
        block = list(range(num_units))
        rng.shuffle(block)
        order.extend(block)
    return order
