"""Command line tool: extract the luma plane of one frame from a sequence."""

from __future__ import annotations

import sys
from pathlib import Path

from hsmotion.frames import SequenceError, open_sequence, read_frame, write_frame

USAGE = (
    "Extracting a frame from 4:4:0.\n"
    "4 variables are required: N M frameNR sequence\n"
    "Example: ./main 720 576 10 barb.yuv\n"
)

_USAGE_EXIT = 3
_SEQUENCE_EXIT = 1
_DONE_EXIT = 1

_NAMES = ("N", "M", "frameNR")


def extract_frame(
    path: str | Path,
    rows: int,
    cols: int,
    frame_number: int,
    directory: str | Path | None = None,
) -> Path:
    """Save frame ``frame_number`` of the sequence at ``path`` as a raw file.

    Returns the path of the written file.
    """
    with open_sequence(path) as stream:
        frame = read_frame(stream, frame_number, rows, cols)
    return write_frame(frame, directory)


def _parse(args: list[str]) -> tuple[int, int, int, str]:
    numbers = []
    for name, text in zip(_NAMES, args[:3]):
        try:
            numbers.append(int(text))
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {text!r}") from exc
    rows, cols, frame_number = numbers
    return rows, cols, frame_number, args[3]


def main(argv: list[str] | None = None) -> int:
    """Run the extractor from the command line and return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 4:
        sys.stdout.write(USAGE)
        return _USAGE_EXIT
    try:
        rows, cols, frame_number, sequence = _parse(args)
    except ValueError as exc:
        sys.stdout.write(f"{exc}\n{USAGE}")
        return _USAGE_EXIT

    sys.stdout.write(
        f"Arguments: N={rows}, M={cols}, sframe={frame_number}, sequence={sequence}\n"
    )
    try:
        written = extract_frame(sequence, rows, cols, frame_number)
    except SequenceError as exc:
        sys.stdout.write(f"{exc}\n***Exiting Program***\n")
        return _SEQUENCE_EXIT
    except ValueError as exc:
        sys.stdout.write(f"{exc}\n{USAGE}")
        return _USAGE_EXIT
    sys.stdout.write(f"Frame {written.name} was extracted and saved\n")
    sys.stdout.write("***Exiting Program***\n")
    return _DONE_EXIT