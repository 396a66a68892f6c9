# hsmotion

hsmotion does hierarchical search (HS) block-matching motion estimation on raw
YUV 4:2:0 video sequences. It reads only the luma (Y) plane of each frame. It
rescales each luma sample from studio range to full range and keeps it as an
8-bit value.

For each pair of frames, the search proceeds in three steps:

1. It runs a full search on copies of both frames subsampled by four.
2. It refines that result by one pixel in each direction on copies subsampled
   by two.
3. It refines the result again at full resolution.

The motion vectors from the search are used to rebuild the current frame from
the previous one. The program then reports the peak signal-to-noise ratio
(PSNR) of that reconstruction.

## Installation

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Command line

### Motion estimation

Run motion estimation over a sequence:

    hsmotion N M B p startingframe number_frames_to_process sequence

The arguments are:

- `N` and `M`: the frame dimensions, in rows and columns.
- `B`: the block size.
- `p`: the search range. The coarse search uses a radius of `p // 4`.
- `startingframe`: the first frame to process.
- `number_frames_to_process`: how many frames to process.
- `sequence`: the path of the raw `.yuv` file.

Any arguments after the seventh are ignored. For example:

    hsmotion 720 576 16 7 0 1 barb.yuv

The program prints a warning when `N` or `M` is not a multiple of `B`. In that
case a partial block covers the remainder. While it runs, it prints one dot
for each frame it processes.

At the end it prints:

- the elapsed time;
- the PSNR of the frame compensated from the last motion field.

It saves that compensated frame to `frameTEST_<N>x<M>.raw` in the current
directory.

The exit status is:

- 0 on success;
- 3 for missing or non-integer arguments;
- 1 when the sequence cannot be opened or the output cannot be written.

### Frame extraction

Extract the luma plane of one frame from a sequence:

    hsmotion-extract N M frameNR sequence

For example:

    hsmotion-extract 720 576 10 barb.yuv

The frame is saved to `frameTEST_<N>x<M>.raw` in the current directory. This
command exits with status 1 both after a successful extraction and when the
sequence cannot be opened. It exits with status 3 for bad arguments.

## Library use

```python
from hsmotion.frames import open_sequence, read_frame
from hsmotion.hierarchy import hierarchical_search
from hsmotion.compensation import motion_compensation
from hsmotion.quality import psnr

with open_sequence("barb.yuv") as stream:
    current = read_frame(stream, 1, 720, 576)
    previous = read_frame(stream, 0, 720, 576)

field = hierarchical_search(current, previous, 16, 7)
rebuilt = motion_compensation(previous, field, 16)
print(psnr(current, rebuilt))
```

### Modules

- `hsmotion.frames` handles frames and sequence files:
  - `Frame` is a row-major grid of 8-bit pixels, with `blank`, `get`, `set`
    and `to_bytes`.
  - `frame_size` gives the number of bytes one 4:2:0 frame occupies.
  - `open_sequence` and `read_frame` read frames from a sequence.
  - `output_filename` and `write_frame` save a frame as raw bytes.
  - `SequenceError` is raised when a file cannot be opened or written.
- `hsmotion.hierarchy` holds the search:
  - `hierarchical_search` returns a `MotionField`. Use
    `MotionField.vector(block_row, block_col)` to get one block's
    `(row, column)` displacement.
  - `subsample` shrinks a frame by a factor.
  - `blocks_per_side` counts the blocks that cover a length, a partial block
    included.
- `hsmotion.compensation.motion_compensation` predicts a frame from the
  previous frame and a motion field.
- `hsmotion.quality.psnr` returns the PSNR in decibels. Identical non-empty
  frames give infinity.
- `hsmotion.cli` holds the command's building blocks:
  - `Settings` holds the run parameters.
  - `parse_arguments` builds `Settings` from the arguments.
  - `run` processes a sequence and writes its report to a text stream.
- `hsmotion.tools` has small helpers:
  - `compute_work_effort(maxjobs, nprocs)` splits jobs into contiguous
    `(start, end)` ranges, one per process.
  - `format_array` and `format_array_grid` format flat arrays for inspection.

## What it does not do

Everything runs in one process, one frame after another. Nothing spreads the
search across processes or threads. `compute_work_effort` only computes how
work could be divided; nothing in the package acts on its result. The package
writes only the luma plane; it never produces chroma or a playable video file.