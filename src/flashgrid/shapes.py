"""Fixed catalog of block shapes offered in block mode."""
import random

BLOCK_SHAPES = (
    ((1, 1, 1, 1),),                      # line of 4
    ((1, 1, 1), (1, 1, 1), (1, 1, 1)),    # 3x3 solid
    ((1, 1), (1, 1)),                     # square
    ((0, 1, 0), (1, 1, 1)),               # T
    ((1, 0), (1, 0), (1, 1)),             # L
    ((1, 1), (0, 1)),                     # corner
    ((0, 1), (0, 1), (1, 1)),             # J
    ((0, 1, 1), (1, 1, 0)),               # S
    ((1, 1, 0), (0, 1, 1)),               # Z
)

BLOCKS_PER_CORRECT_ANSWER = 3


def shape_size(shape) -> tuple[int, int]:
    """Height and width of a shape's bounding box."""
    return len(shape), len(shape[0])


def filled_cells(shape) -> list[tuple[int, int]]:
    return [
        (r, c)
        for r, row in enumerate(shape)
        for c, cell in enumerate(row)
        if cell == 1
    ]


def random_blocks(count: int = BLOCKS_PER_CORRECT_ANSWER, rng: random.Random = None) -> list:
    """Draw `count` shapes uniformly at random, with replacement."""
    rng = rng or random
    return [rng.choice(BLOCK_SHAPES) for _ in range(count)]
