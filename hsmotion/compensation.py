"""Block motion compensation: rebuild a frame from its predecessor and a motion field."""

from __future__ import annotations

from itertools import product

from hsmotion.frames import Frame
from hsmotion.hierarchy import MotionField, blocks_per_side


def motion_compensation(previous: Frame, field: MotionField, block_size: int) -> Frame:
    """Predict a frame by moving each block of ``previous`` along its vector.

    Each pixel of a block is copied from ``previous`` displaced by the
    block's vector. If the displaced row falls above the frame, the pixel
    comes from the block's top row. If the displaced column falls left of
    the frame, it comes from the block's left column. If the row falls below
    the frame, it comes from the block's bottom row. If the column falls
    right of the frame, it comes from the block's right column. The checks
    run in that order.

    Pixels of partial blocks that lie outside the frame are not written.
    A fallback row or column that lies outside the frame is clamped to the
    frame's last row or column.
    """
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    rows, cols = previous.rows, previous.cols
    expected = (blocks_per_side(rows, block_size), blocks_per_side(cols, block_size))
    if (field.block_rows, field.block_cols) != expected:
        raise ValueError(
            f"motion field of {field.block_rows}x{field.block_cols} blocks does not "
            f"match a {rows}x{cols} frame with {block_size}-pixel blocks"
        )

    source = previous.pixels
    output = Frame.blank(rows, cols)
    target = output.pixels

    for block_row, block_col in product(range(field.block_rows), range(field.block_cols)):
        drow, dcol = field.vector(block_row, block_col)
        top, left = block_size * block_row, block_size * block_col
        bottom = min(top + block_size - 1, rows - 1)
        right = min(left + block_size - 1, cols - 1)
        for row in range(top, min(top + block_size, rows)):
            ref_row = row + drow
            for col in range(left, min(left + block_size, cols)):
                ref_col = col + dcol
                if ref_row < 0:
                    src_row, src_col = top, col
                elif ref_col < 0:
                    src_row, src_col = row, left
                elif ref_row > rows - 1:
                    src_row, src_col = bottom, col
                elif ref_col > cols - 1:
                    src_row, src_col = row, right
                else:
                    src_row, src_col = ref_row, ref_col
                target[row * cols + col] = source[src_row * cols + src_col]

    return output