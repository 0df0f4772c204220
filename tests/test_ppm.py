"""PPM text layout and file writing.

Run:
    pytest tests/test_ppm.py -v
"""

import numpy as np
import pytest

from ppmlab import ppm
from ppmlab.errors import SerializationError


def _red(width, height):
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :, 0] = 255
    return pixels


def test_format_exact_layout():
    assert ppm.format_ppm(_red(2, 1), "out.ppm") == "P3\n#out.ppm\n2 1\n255\n255 0 0 255 0 0 \n"


def test_format_top_row_first():
    pixels = np.zeros((2, 1, 3), dtype=np.uint8)
    pixels[0, 0] = (1, 2, 3)
    pixels[1, 0] = (4, 5, 6)
    assert ppm.format_ppm(pixels, "x").splitlines()[4:] == ["1 2 3 ", "4 5 6 "]


@pytest.mark.parametrize("pixels", [
    np.zeros((2, 2), dtype=np.uint8),
    np.zeros((2, 2, 4), dtype=np.uint8),
    np.zeros((2, 2, 3), dtype=float),
    np.full((1, 1, 3), 300, dtype=np.int32),
    np.full((1, 1, 3), -1, dtype=np.int32),
])
def test_format_rejects_bad_pixels(pixels):
    with pytest.raises(SerializationError):
        ppm.format_ppm(pixels, "x")


@pytest.mark.parametrize("name", ["image.png", "image", "image.ppm.txt"])
def test_suffix_checked(name):
    with pytest.raises(SerializationError):
        ppm.check_suffix(name)


def test_suffix_is_case_insensitive():
    assert ppm.check_suffix("IMAGE.PPM").name == "IMAGE.PPM"


def test_write(tmp_path):
    out = ppm.write_ppm(tmp_path / "out.ppm", _red(2, 1))
    assert out == tmp_path / "out.ppm"
    assert out.read_text() == "P3\n#out.ppm\n2 1\n255\n255 0 0 255 0 0 \n"


def test_write_bad_suffix_creates_nothing(tmp_path):
    with pytest.raises(SerializationError):
        ppm.write_ppm(tmp_path / "out.txt", _red(1, 1))
    assert not list(tmp_path.iterdir())


def test_write_missing_directory(tmp_path):
    with pytest.raises(SerializationError):
        ppm.write_ppm(tmp_path / "missing" / "out.ppm", _red(1, 1))


def test_locked_file_is_retried(tmp_path, monkeypatch):
    real_open = open
    calls = []

    def flaky_open(*args, **kwargs):
        calls.append(args[0])
        if len(calls) < 3:
            raise PermissionError("locked")
        return real_open(*args, **kwargs)

    monkeypatch.setattr(ppm, "open", flaky_open, raising=False)
    monkeypatch.setattr(ppm.time, "sleep", lambda s: None)
    out = ppm.write_ppm(tmp_path / "out.ppm", _red(1, 1))
    assert len(calls) == 3
    assert out.read_text().startswith("P3\n")


def test_locked_file_gives_up(tmp_path, monkeypatch):
    calls = []

    def locked_open(*args, **kwargs):
        calls.append(args[0])
        raise PermissionError("locked")

    monkeypatch.setattr(ppm, "open", locked_open, raising=False)
    monkeypatch.setattr(ppm.time, "sleep", lambda s: None)
    with pytest.raises(SerializationError):
        ppm.write_ppm(tmp_path / "out.ppm", _red(1, 1), retries=2)
    assert len(calls) == 3
