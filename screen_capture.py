import base64
import io
import logging
import os
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np
import requests
from PIL import Image

from models import Rect

logger = logging.getLogger(__name__)


class ScreenCaptureError(ValueError):
    """Raised when a screen capture cannot be read or decoded"""


class ScreenCapture:
    """A rendered screen image in screen coordinates, held as an RGB uint8 array"""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ScreenCaptureError(f"Expected an HxWx3 RGB array, got shape {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def crop(self, left: int, top: int, width: int, height: int) -> "ScreenCapture":
        if left < 0 or top < 0 or left + width > self.width or top + height > self.height:
            raise ScreenCaptureError(
                f"Crop [{left},{top}][{left + width},{top + height}] is outside "
                f"{self.bounds.to_short_string()}"
            )
        return ScreenCapture(self.pixels[top:top + height, left:left + width].copy())

    def packed_pixels(self) -> np.ndarray:
        """Every pixel as an opaque 0xAARRGGBB value, row by row"""
        rgb = self.pixels.reshape(-1, 3).astype(np.uint32)
        return (np.uint32(0xFF000000) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2])

    def to_bgr(self) -> np.ndarray:
        return cv2.cvtColor(self.pixels, cv2.COLOR_RGB2BGR)

    @classmethod
    def from_array(cls, array: np.ndarray, channel_order: str = "RGB") -> "ScreenCapture":
        """
        Wrap a decoded image array.

        Args:
            array: HxW grayscale, HxWx3 or HxWx4 uint8 image
            channel_order: "RGB" or "BGR" (OpenCV) ordering of the color channels

        Returns:
            ScreenCapture
        """
        array = np.asarray(array, dtype=np.uint8)
        bgr = channel_order.upper() == "BGR"
        if array.ndim == 2:
            array = cv2.cvtColor(array, cv2.COLOR_GRAY2RGB)
        elif array.ndim == 3 and array.shape[2] == 4:
            array = cv2.cvtColor(array, cv2.COLOR_BGRA2RGB if bgr else cv2.COLOR_RGBA2RGB)
        elif array.ndim == 3 and array.shape[2] == 3 and bgr:
            array = cv2.cvtColor(array, cv2.COLOR_BGR2RGB)
        return cls(array)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ScreenCapture":
        """Decode PNG/JPEG (or anything Pillow reads) into a capture"""
        try:
            img = Image.open(io.BytesIO(data))
            if img.mode not in ("RGB", "RGBA", "L"):
                img = img.convert("RGB")
            return cls.from_array(np.array(img))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to decode screenshot: {str(e)}")
            raise ScreenCaptureError(f"Failed to decode screenshot: {e}") from e

    @classmethod
    def from_base64(cls, encoded: str) -> "ScreenCapture":
        try:
            data = base64.b64decode(encoded)
        except ValueError as e:
            logger.error(f"Failed to decode screenshot: {str(e)}")
            raise ScreenCaptureError(f"Screenshot is not valid base64: {e}") from e
        return cls.from_bytes(data)

    @classmethod
    def load(cls, file_path_or_url: str, timeout: float = 30.0) -> "ScreenCapture":
        """Read a capture from a local file or an http(s) URL"""
        if file_path_or_url.startswith(('http://', 'https://')):
            try:
                response = requests.get(file_path_or_url, timeout=timeout)
                response.raise_for_status()
                content = response.content
            except requests.exceptions.RequestException as e:
                logger.error(f"Error fetching screenshot from URL: {e}")
                raise ScreenCaptureError(f"Error fetching screenshot from URL: {e}") from e
        else:
            if not os.path.exists(file_path_or_url):
                raise ScreenCaptureError(f"File not found: {file_path_or_url}")
            try:
                with open(file_path_or_url, 'rb') as file:
                    content = file.read()
            except IOError as e:
                logger.error(f"Error reading screenshot: {e}")
                raise ScreenCaptureError(f"Error reading file: {e}") from e
        return cls.from_bytes(content)


# BGR, keyed by result type name
SEVERITY_COLORS: Dict[str, Tuple[int, int, int]] = {
    "ERROR": (0, 0, 255),      # Red
    "WARNING": (0, 165, 255),  # Orange
    "INFO": (255, 0, 0),       # Blue
}
DEFAULT_MARK_COLOR = (0, 255, 0)  # Green


def mark_results_on_capture(capture: ScreenCapture, results: List, output_path: Optional[str] = None,
                            thickness: int = 4) -> np.ndarray:
    """
    Draw the bounds of each result's element on a copy of the capture.

    Args:
        capture: The capture the results were computed against
        results: CheckResult objects; results without an element are skipped
        output_path: If given, the marked image is written there as well
        thickness: Rectangle line width in pixels

    Returns:
        np.ndarray - the marked image in BGR order
    """
    marked_image = capture.to_bgr()
    for result in results:
        if result.element is None:
            continue
        bounds = result.element.bounds_in_screen
        color = SEVERITY_COLORS.get(result.type.name, DEFAULT_MARK_COLOR)
        cv2.rectangle(marked_image, (bounds.left, bounds.top), (bounds.right, bounds.bottom),
                      color, thickness)

    if output_path:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not cv2.imwrite(output_path, marked_image):
            raise ScreenCaptureError(f"Could not write marked image to {output_path}")
    return marked_image
