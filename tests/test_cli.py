import io
import math

import pytest

from hsmotion.cli import Settings, main, parse_arguments, run
from hsmotion.frames import frame_size, output_filename


def _write_sequence(path, rows, cols, frames, value=100):
    path.write_bytes(bytes([value]) * (frame_size(rows, cols) * frames))
    return path


def test_parse_arguments_reads_all_fields():
    settings = parse_arguments(["720", "576", "16", "7", "0", "1", "barb.yuv"])
    assert settings == Settings(720, 576, 16, 7, 0, 1, "barb.yuv")
    assert settings.block_rows == 45
    assert settings.block_cols == 36


def test_parse_arguments_ignores_extra():
    settings = parse_arguments(["8", "8", "4", "4", "1", "2", "seq.yuv", "extra"])
    assert settings.sequence == "seq.yuv"
    assert settings.frame_count == 2


def test_parse_arguments_too_few():
    with pytest.raises(ValueError, match="7 variables are required"):
        parse_arguments(["720", "576", "16"])


def test_parse_arguments_not_a_number():
    with pytest.raises(ValueError, match="B must be an integer"):
        parse_arguments(["8", "8", "x", "4", "0", "1", "seq.yuv"])


def test_settings_rejects_zero_block():
    with pytest.raises(ValueError):
        Settings(8, 8, 0, 4, 0, 1, "seq.yuv")


def test_partial_blocks_counted():
    settings = Settings(10, 8, 4, 4, 0, 1, "seq.yuv")
    assert settings.block_rows == 3
    assert settings.block_cols == 2


def test_run_constant_sequence(tmp_path):
    seq = _write_sequence(tmp_path / "seq.yuv", 8, 8, 3)
    settings = Settings(8, 8, 4, 4, 1, 2, str(seq), tmp_path)
    out = io.StringIO()
    snr = run(settings, out)
    assert snr == math.inf
    text = out.getvalue()
    assert "SNR = inf" in text
    assert text.count(".") >= 2
    assert f"Arguments: N=8, M=8, B=4, p=4, sframe=1, nframes=2, sequence={seq}, N_B=2, M_B=2\n" in text
    saved = (tmp_path / output_filename(8, 8)).read_bytes()
    assert len(saved) == 64
    assert len(set(saved)) == 1


def test_run_prints_one_dot_per_frame(tmp_path):
    seq = _write_sequence(tmp_path / "seq.yuv", 8, 8, 5)
    settings = Settings(8, 8, 4, 4, 1, 3, str(seq), tmp_path)
    out = io.StringIO()
    run(settings, out)
    text = out.getvalue()
    dots_line = text.split("\n")[1]
    assert dots_line == "..."


def test_run_warns_on_partial_blocks(tmp_path):
    seq = _write_sequence(tmp_path / "seq.yuv", 10, 8, 2)
    settings = Settings(10, 8, 4, 4, 1, 1, str(seq), tmp_path)
    out = io.StringIO()
    run(settings, out)
    text = out.getvalue()
    assert "Warning: N Not fully divided. Fixing it\n" in text
    assert "Warning: M Not fully divided" not in text
    assert len((tmp_path / output_filename(10, 8)).read_bytes()) == 80


def test_run_time_line_format(tmp_path):
    seq = _write_sequence(tmp_path / "seq.yuv", 8, 8, 2)
    out = io.StringIO()
    run(Settings(8, 8, 4, 4, 1, 1, str(seq), tmp_path), out)
    time_line = next(line for line in out.getvalue().splitlines() if line.startswith("Time: "))
    assert time_line.endswith(" secs ")
    seconds, fraction = time_line[len("Time: "):-len(" secs ")].split(".")
    assert seconds.isdigit()
    assert len(fraction) == 9 and fraction.isdigit()


def test_main_usage(capsys):
    assert main([]) == 3
    assert "7 variables are required" in capsys.readouterr().out


def test_main_missing_sequence(tmp_path, capsys):
    missing = tmp_path / "nothing.yuv"
    assert main(["8", "8", "4", "4", "0", "1", str(missing)]) == 1
    assert "doesn't exist" in capsys.readouterr().out


def test_main_success(tmp_path, monkeypatch, capsys):
    seq = _write_sequence(tmp_path / "seq.yuv", 8, 8, 3)
    monkeypatch.chdir(tmp_path)
    assert main(["8", "8", "4", "4", "1", "1", str(seq)]) == 0
    assert "SNR = inf" in capsys.readouterr().out
    assert (tmp_path / output_filename(8, 8)).exists()