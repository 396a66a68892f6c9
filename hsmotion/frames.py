"""Luma frames and raw YUV 4:2:0 sequence files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

# Value returned for a byte that lies past the end of the sequence file.
_EOF = -1


class SequenceError(Exception):
    """A video sequence could not be opened, read or written."""


def _studio_to_full(value: int) -> int:
    """Scale a studio-range luma byte to full range, stored as an 8-bit value."""
    scaled = int(1.164 * (value - 16))
    if scaled > 255:
        scaled = 255
    return scaled & 0xFF


_LUMA_TABLE = bytes(_studio_to_full(value) for value in range(256))
_EOF_PIXEL = _studio_to_full(_EOF)


@dataclass
class Frame:
    """A ``rows`` by ``cols`` grid of 8-bit luma samples, stored row-major."""

    rows: int
    cols: int
    pixels: bytearray = field(repr=False)

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(
                f"frame dimensions must not be negative, got {self.rows}x{self.cols}"
            )
        self.pixels = bytearray(self.pixels)
        if len(self.pixels) != self.rows * self.cols:
            raise ValueError(
                f"frame of {self.rows}x{self.cols} needs {self.rows * self.cols} "
                f"pixels, got {len(self.pixels)}"
            )

    @classmethod
    def blank(cls, rows: int, cols: int) -> "Frame":
        """Return a frame of the given size with every pixel zero."""
        if rows < 0 or cols < 0:
            raise ValueError(f"frame dimensions must not be negative, got {rows}x{cols}")
        return cls(rows, cols, bytearray(rows * cols))

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"pixel ({row}, {col}) lies outside a {self.rows}x{self.cols} frame"
            )
        return row * self.cols + col

    def get(self, row: int, col: int) -> int:
        """Return the pixel at ``row``, ``col``."""
        return self.pixels[self._index(row, col)]

    def set(self, row: int, col: int, value: int) -> None:
        """Store ``value`` (0 to 255) at ``row``, ``col``."""
        if not 0 <= value <= 255:
            raise ValueError(f"pixel value must be in 0..255, got {value}")
        self.pixels[self._index(row, col)] = value

    def to_bytes(self) -> bytes:
        """Return the pixels as raw row-major bytes."""
        return bytes(self.pixels)


def frame_size(rows: int, cols: int) -> int:
    """Bytes one 4:2:0 frame occupies: the luma plane plus two quarter-size planes."""
    return (rows * cols * 3) // 2


def open_sequence(path: str | Path) -> BinaryIO:
    """Open a video sequence file for binary reading."""
    try:
        return open(path, "rb")
    except FileNotFoundError as exc:
        raise SequenceError(f"video sequence {path} doesn't exist") from exc
    except OSError as exc:
        raise SequenceError(f"video sequence {path} cannot be opened: {exc}") from exc


def read_frame(stream: BinaryIO, frame_number: int, rows: int, cols: int) -> Frame:
    """Read the luma plane of frame ``frame_number`` from an open sequence.

    Samples are rescaled from studio to full range and kept as 8-bit values.
    A negative frame number cannot be sought to, so reading then continues
    from the stream's current position. Bytes past the end of the file are
    taken as end-of-file markers and converted like any other sample.
    """
    if rows < 0 or cols < 0:
        raise ValueError(f"frame dimensions must not be negative, got {rows}x{cols}")
    offset = frame_size(rows, cols) * frame_number
    if offset >= 0:
        stream.seek(offset)
    count = rows * cols
    data = stream.read(count)
    pixels = bytearray(data.translate(_LUMA_TABLE))
    pixels.extend([_EOF_PIXEL] * (count - len(data)))
    return Frame(rows, cols, pixels)


def output_filename(rows: int, cols: int) -> str:
    """Name of the raw file a frame of the given size is saved to."""
    return f"frameTEST_{rows}x{cols}.raw"


def write_frame(frame: Frame, directory: str | Path | None = None) -> Path:
    """Save ``frame`` as raw bytes in ``directory`` and return the file's path."""
    path = Path(directory if directory is not None else ".") / output_filename(
        frame.rows, frame.cols
    )
    try:
        path.write_bytes(frame.to_bytes())
    except OSError as exc:
        raise SequenceError("Cannot write video sequence") from exc
    return path