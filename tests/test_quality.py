import math

import pytest

from hsmotion.frames import Frame
from hsmotion.quality import psnr


def _filled(rows, cols, value):
    return Frame(rows, cols, bytearray([value] * (rows * cols)))


def test_identical_frames_give_infinity():
    frame = Frame(2, 2, bytearray([1, 2, 3, 4]))
    assert psnr(frame, Frame(2, 2, bytearray([1, 2, 3, 4]))) == math.inf


def test_full_scale_error_gives_zero():
    assert psnr(_filled(4, 4, 0), _filled(4, 4, 255)) == pytest.approx(0.0)


def test_unit_error_everywhere():
    assert psnr(_filled(4, 4, 10), _filled(4, 4, 11)) == pytest.approx(48.1308, abs=1e-4)


def test_symmetric():
    a = Frame(2, 3, bytearray([0, 10, 20, 30, 40, 50]))
    b = Frame(2, 3, bytearray([5, 10, 25, 30, 45, 60]))
    assert psnr(a, b) == pytest.approx(psnr(b, a))


def test_larger_error_gives_lower_psnr():
    reference = _filled(4, 4, 100)
    assert psnr(reference, _filled(4, 4, 120)) < psnr(reference, _filled(4, 4, 105))


def test_size_mismatch_is_rejected():
    with pytest.raises(ValueError):
        psnr(_filled(2, 2, 0), _filled(2, 3, 0))


def test_empty_frames_give_nan():
    result = psnr(Frame.blank(0, 0), Frame.blank(0, 0))
    assert repr(result) == "nan"
    assert math.isnan(result)