"""Command line driver: estimate motion over a run of frames and report the PSNR."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from hsmotion.compensation import motion_compensation
from hsmotion.frames import Frame, SequenceError, open_sequence, read_frame, write_frame
from hsmotion.hierarchy import MotionField, blocks_per_side, hierarchical_search
from hsmotion.quality import psnr

USAGE = (
    "7 variables are required: N M B p startingframe number_frames_to_process sequence\n"
    "Example: ./main 720 576 16 7 0 1 barb.yuv\n"
)

_USAGE_EXIT = 3
_SEQUENCE_EXIT = 1

_NAMES = ("N", "M", "B", "p", "startingframe", "number_frames_to_process")


@dataclass(frozen=True)
class Settings:
    """Everything one run of the motion estimator needs."""

    rows: int
    cols: int
    block_size: int
    search_range: int
    start_frame: int
    frame_count: int
    sequence: str
    output_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(
                f"frame dimensions must not be negative, got {self.rows}x{self.cols}"
            )
        if self.block_size <= 0:
            raise ValueError(f"block size must be positive, got {self.block_size}")
        if self.search_range < 0:
            raise ValueError(
                f"search range must not be negative, got {self.search_range}"
            )
        if self.frame_count < 0:
            raise ValueError(
                f"number of frames must not be negative, got {self.frame_count}"
            )

    @property
    def block_rows(self) -> int:
        """Blocks down the frame, a partial block included."""
        return blocks_per_side(self.rows, self.block_size)

    @property
    def block_cols(self) -> int:
        """Blocks across the frame, a partial block included."""
        return blocks_per_side(self.cols, self.block_size)


def parse_arguments(argv: list[str]) -> Settings:
    """Build settings from ``N M B p startingframe number_frames sequence``.

    Arguments after the seventh are ignored.
    """
    if len(argv) < 7:
        raise ValueError(USAGE.rstrip("\n"))
    numbers = []
    for name, text in zip(_NAMES, argv[:6]):
        try:
            numbers.append(int(text))
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {text!r}") from exc
    rows, cols, block, search, start, count = numbers
    return Settings(rows, cols, block, search, start, count, argv[6])


def run(settings: Settings, out: TextIO) -> float:
    """Process the frames named by ``settings``, report to ``out`` and return the PSNR.

    The frame compensated from the last motion field is saved as a raw file.
    """
    if settings.rows % settings.block_size:
        out.write("Warning: N Not fully divided. Fixing it\n")
    if settings.cols % settings.block_size:
        out.write("Warning: M Not fully divided. Fixing it\n")
    out.write(
        f"Arguments: N={settings.rows}, M={settings.cols}, B={settings.block_size}, "
        f"p={settings.search_range}, sframe={settings.start_frame}, "
        f"nframes={settings.frame_count}, sequence={settings.sequence}, "
        f"N_B={settings.block_rows}, M_B={settings.block_cols}\n"
    )

    started = time.monotonic_ns()

    current = Frame.blank(settings.rows, settings.cols)
    previous = Frame.blank(settings.rows, settings.cols)
    field = MotionField(settings.block_rows, settings.block_cols)

    with open_sequence(settings.sequence) as stream:
        first = settings.start_frame
        for number in range(first, first + settings.frame_count):
            current = read_frame(stream, number, settings.rows, settings.cols)
            previous = read_frame(stream, number - 1, settings.rows, settings.cols)
            field = hierarchical_search(
                current, previous, settings.block_size, settings.search_range
            )
            out.write(".")
            out.flush()

    elapsed = time.monotonic_ns() - started
    seconds, nanoseconds = divmod(elapsed, 1_000_000_000)
    out.write(f"\nTime: {seconds}.{nanoseconds:09d} secs \n")

    output = motion_compensation(previous, field, settings.block_size)
    snr = psnr(current, output)
    path = write_frame(output, settings.output_dir)
    out.write(f"Frame {path.name} was extracted and saved\n")
    out.write(f"SNR = {snr:.6f}\n")
    return snr


def main(argv: list[str] | None = None) -> int:
    """Run the estimator from the command line and return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 7:
        sys.stdout.write(USAGE)
        return _USAGE_EXIT
    try:
        settings = parse_arguments(args)
    except ValueError as exc:
        sys.stdout.write(f"{exc}\n{USAGE}")
        return _USAGE_EXIT
    try:
        run(settings, sys.stdout)
    except SequenceError as exc:
        sys.stdout.write(f"{exc}\n")
        return _SEQUENCE_EXIT
    return 0