"""Peak signal-to-noise ratio between two frames."""

from __future__ import annotations

import math
import struct

from hsmotion.frames import Frame


def _single(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def psnr(current: Frame, output: Frame) -> float:
    """Return the PSNR in decibels of ``output`` measured against ``current``.

    The peak signal is computed in single precision. Identical non-empty
    frames give infinity; empty frames give NaN.
    """
    if (current.rows, current.cols) != (output.rows, output.cols):
        raise ValueError(
            f"frames differ in size: {current.rows}x{current.cols} "
            f"and {output.rows}x{output.cols}"
        )
    msd = float(sum((a - b) ** 2 for a, b in zip(current.pixels, output.pixels)))

    peak = _single(float(current.rows))
    for factor in (current.cols, 255, 255):
        peak = _single(peak * factor)

    if msd == 0.0:
        return math.inf if peak > 0 else math.nan
    return 10 * math.log10(peak / msd)