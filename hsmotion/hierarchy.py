"""Three-level hierarchical block-matching motion estimation."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product

from hsmotion.frames import Frame

# Offsets tried around the estimate from the coarser level, row offset outermost.
_REFINE_OFFSETS = tuple(product((-1, 0, 1), repeat=2))


@dataclass
class MotionField:
    """One motion vector per block of a frame, stored row-major by block.

    ``dx`` holds the row displacement and ``dy`` the column displacement of
    each block, both in full-resolution pixels.
    """

    block_rows: int
    block_cols: int
    dx: list[int] = field(default_factory=list)
    dy: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.block_rows < 0 or self.block_cols < 0:
            raise ValueError(
                "block grid dimensions must not be negative, "
                f"got {self.block_rows}x{self.block_cols}"
            )
        count = self.block_rows * self.block_cols
        if not self.dx and not self.dy:
            self.dx = [0] * count
            self.dy = [0] * count
        self.dx = list(self.dx)
        self.dy = list(self.dy)
        if len(self.dx) != count or len(self.dy) != count:
            raise ValueError(
                f"a {self.block_rows}x{self.block_cols} block grid needs {count} "
                f"vectors, got {len(self.dx)} and {len(self.dy)}"
            )

    def _index(self, block_row: int, block_col: int) -> int:
        if not (0 <= block_row < self.block_rows and 0 <= block_col < self.block_cols):
            raise IndexError(
                f"block ({block_row}, {block_col}) lies outside a "
                f"{self.block_rows}x{self.block_cols} block grid"
            )
        return block_row * self.block_cols + block_col

    def vector(self, block_row: int, block_col: int) -> tuple[int, int]:
        """Return the ``(row, column)`` displacement of one block."""
        index = self._index(block_row, block_col)
        return self.dx[index], self.dy[index]

    def _assign(self, block_row: int, block_col: int, drow: int, dcol: int) -> None:
        index = self._index(block_row, block_col)
        self.dx[index] = drow
        self.dy[index] = dcol


def blocks_per_side(length: int, block_size: int) -> int:
    """Number of blocks needed to cover ``length`` pixels, a partial block included."""
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return -(-length // block_size)


def subsample(frame: Frame, factor: int) -> Frame:
    """Shrink ``frame`` by ``factor`` along each side.

    Each output pixel is the sum of a ``factor`` by ``factor`` window divided
    by four and kept as an 8-bit value, so a factor of two gives the window
    average while larger factors wrap around.
    """
    if factor <= 0:
        raise ValueError(f"subsampling factor must be positive, got {factor}")
    rows, cols = frame.rows // factor, frame.cols // factor
    source = frame.pixels
    stride = frame.cols
    pixels = bytearray(
        (
            sum(
                source[(factor * row + k) * stride + factor * col + l]
                for k in range(factor)
                for l in range(factor)
            )
            // 4
        )
        & 0xFF
        for row in range(rows)
        for col in range(cols)
    )
    return Frame(rows, cols, pixels)


def hierarchical_search(
    current: Frame, previous: Frame, block_size: int, search_range: int
) -> MotionField:
    """Estimate the motion of every block of ``current`` relative to ``previous``.

    The search runs a full search of radius ``search_range // 4`` on frames
    subsampled by four, then refines the result by one pixel in each
    direction on frames subsampled by two and finally at full resolution.
    Distortion is the sum of absolute differences; reference pixels outside
    the frame count as zero, and the first offset in scan order that lowers
    the distortion below its starting bound wins. A block pixel that lies
    outside the frame repeats the last pixel read inside it, and a level that
    finds no improvement keeps the previous block's estimate.
    """
    if (current.rows, current.cols) != (previous.rows, previous.cols):
        raise ValueError(
            f"frames differ in size: {current.rows}x{current.cols} "
            f"and {previous.rows}x{previous.cols}"
        )
    if search_range < 0:
        raise ValueError(f"search range must not be negative, got {search_range}")

    block_rows = blocks_per_side(current.rows, block_size)
    block_cols = blocks_per_side(current.cols, block_size)
    motion = MotionField(block_rows, block_cols)

    current2, previous2 = subsample(current, 2), subsample(previous, 2)
    current4, previous4 = subsample(current, 4), subsample(previous, 4)

    full, half, quarter = block_size, block_size // 2, block_size // 4
    radius = search_range // 4
    coarse_offsets = tuple(product(range(-radius, radius + 1), repeat=2))

    last_pixel = 0

    def distortion(
        cur: Frame, ref: Frame, top: int, left: int, size: int, drow: int, dcol: int
    ) -> int:
        nonlocal last_pixel
        total = 0
        for row in range(top, top + size):
            for col in range(left, left + size):
                if row < cur.rows and col < cur.cols:
                    last_pixel = cur.pixels[row * cur.cols + col]
                ref_row, ref_col = row + drow, col + dcol
                if 0 <= ref_row < ref.rows and 0 <= ref_col < ref.cols:
                    reference = ref.pixels[ref_row * ref.cols + ref_col]
                else:
                    reference = 0
                total += abs(last_pixel - reference)
        return total

    row4 = col4 = row2 = col2 = 0
    for block_row, block_col in product(range(block_rows), range(block_cols)):
        best = 255 * quarter * quarter
        for drow, dcol in coarse_offsets:
            cost = distortion(
                current4, previous4,
                quarter * block_row, quarter * block_col, quarter, drow, dcol,
            )
            if cost < best:
                best, row4, col4 = cost, drow, dcol

        best = 255 * half * half
        centre_row, centre_col = 2 * row4, 2 * col4
        for drow, dcol in _REFINE_OFFSETS:
            cost = distortion(
                current2, previous2,
                half * block_row, half * block_col, half,
                centre_row + drow, centre_col + dcol,
            )
            if cost < best:
                best, row2, col2 = cost, centre_row + drow, centre_col + dcol

        best = 255 * full * full
        centre_row, centre_col = 2 * row2, 2 * col2
        for drow, dcol in _REFINE_OFFSETS:
            cost = distortion(
                current, previous,
                full * block_row, full * block_col, full,
                centre_row + drow, centre_col + dcol,
            )
            if cost < best:
                best = cost
                motion._assign(
                    block_row, block_col, centre_row + drow, centre_col + dcol
                )

    return motion