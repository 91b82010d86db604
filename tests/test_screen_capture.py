from __future__ import annotations

import base64
import io

import numpy as np
import pytest
from PIL import Image

from check_results import CheckResult, ResultType
from conftest import new_builder, solid_capture
from models import Rect
from screen_capture import ScreenCapture, ScreenCaptureError, mark_results_on_capture
from touch_target_size_check import TouchTargetSizeCheck


def _png_bytes(pixels: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def test_crop_and_bounds() -> None:
    capture = solid_capture(width=100, height=50)
    capture.pixels[10:20, 30:40] = (1, 2, 3)

    assert capture.bounds == Rect(0, 0, 100, 50)
    crop = capture.crop(30, 10, 10, 10)
    assert (crop.width, crop.height) == (10, 10)
    assert tuple(crop.pixels[0, 0]) == (1, 2, 3)
    assert int(crop.packed_pixels()[0]) == 0xFF010203

    with pytest.raises(ScreenCaptureError):
        capture.crop(95, 0, 10, 10)


def test_from_array_channel_orders() -> None:
    bgr = np.zeros((2, 2, 3), dtype=np.uint8)
    bgr[:, :] = (255, 0, 0)
    assert tuple(ScreenCapture.from_array(bgr, channel_order="BGR").pixels[0, 0]) == (0, 0, 255)

    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[:, :] = (10, 20, 30, 255)
    assert tuple(ScreenCapture.from_array(rgba).pixels[1, 1]) == (10, 20, 30)

    gray = np.full((2, 2), 7, dtype=np.uint8)
    assert tuple(ScreenCapture.from_array(gray).pixels[0, 1]) == (7, 7, 7)


def test_decode_png_and_base64() -> None:
    pixels = np.zeros((3, 4, 3), dtype=np.uint8)
    pixels[:, :] = (200, 100, 50)
    data = _png_bytes(pixels)

    capture = ScreenCapture.from_bytes(data)
    assert (capture.width, capture.height) == (4, 3)
    assert tuple(capture.pixels[2, 3]) == (200, 100, 50)

    encoded = base64.b64encode(data).decode("ascii")
    assert np.array_equal(ScreenCapture.from_base64(encoded).pixels, capture.pixels)


def test_undecodable_bytes_raise() -> None:
    with pytest.raises(ScreenCaptureError):
        ScreenCapture.from_bytes(b"not an image")


def test_load_from_file(tmp_path) -> None:
    path = tmp_path / "capture.png"
    path.write_bytes(_png_bytes(np.full((5, 5, 3), 42, dtype=np.uint8)))

    assert ScreenCapture.load(str(path)).width == 5
    with pytest.raises(ScreenCaptureError, match="File not found"):
        ScreenCapture.load(str(tmp_path / "missing.png"))


def test_mark_results_on_capture(tmp_path) -> None:
    builder, window, root = new_builder()
    button = builder.add_view(window, root, bounds_in_screen=Rect(10, 10, 50, 50))
    builder.build()
    capture = solid_capture(width=100, height=100)
    result = CheckResult(TouchTargetSizeCheck, ResultType.ERROR, button,
                         TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT)
    output = tmp_path / "marked" / "capture.png"

    marked = mark_results_on_capture(capture, [result], str(output), thickness=1)
    assert output.exists()
    # BGR red on the rectangle's corner, untouched white elsewhere
    assert tuple(marked[10, 10]) == (0, 0, 255)
    assert tuple(marked[80, 80]) == (255, 255, 255)
    assert tuple(capture.pixels[10, 10]) == (255, 255, 255)
