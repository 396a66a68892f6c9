"""Small helpers: splitting work between processes and dumping flat arrays."""

from __future__ import annotations

from collections.abc import Sequence


def compute_work_effort(maxjobs: int, nprocs: int) -> list[tuple[int, int]]:
    """Split ``maxjobs`` jobs into ``nprocs`` contiguous half-open ranges.

    Every process gets ``maxjobs // nprocs`` jobs. The first
    ``maxjobs % nprocs`` processes each take one extra job. The result holds
    one ``(start, end)`` pair per process, in process order.
    """
    if nprocs <= 0:
        raise ValueError(f"number of processes must be positive, got {nprocs}")
    if maxjobs < 0:
        raise ValueError(f"number of jobs must not be negative, got {maxjobs}")

    chunk, rest = divmod(maxjobs, nprocs)
    ranges: list[tuple[int, int]] = []
    start = 0
    for rank in range(nprocs):
        end = start + chunk + (1 if rank < rest else 0)
        ranges.append((start, end))
        start = end
    return ranges


def _cells(values: Sequence[int], xdim: int, ydim: int):
    """Yield ``(x, y, index, value)`` for a row-major ``xdim`` by ``ydim`` array."""
    if xdim < 0 or ydim < 0:
        raise ValueError(f"dimensions must not be negative, got {xdim}x{ydim}")
    needed = xdim * ydim
    if len(values) < needed:
        raise ValueError(
            f"array holds {len(values)} values but {xdim}x{ydim} needs {needed}"
        )
    for y in range(ydim):
        for x in range(xdim):
            index = y * xdim + x
            yield x, y, index, int(values[index])


def format_array(values: Sequence[int], xdim: int, ydim: int) -> str:
    """Describe every element of a flat array, one line per element."""
    return "".join(
        f"array (x,y)=({x},{y})[{index}]={value}\n"
        for x, y, index, value in _cells(values, xdim, ydim)
    )


def format_array_grid(values: Sequence[int], xdim: int, ydim: int) -> str:
    """Describe a flat array as a grid, one text line per array row."""
    rows: list[list[str]] = [[] for _ in range(ydim)]
    for x, y, index, value in _cells(values, xdim, ydim):
        rows[y].append(f" \t({x},{y})[{index}]={value} ")
    return "".join("".join(row) + "\n" for row in rows)