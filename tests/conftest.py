from __future__ import annotations

import numpy as np
import pytest

from models import DeviceState, DisplayInfo, DisplayMetrics, Rect, WindowType
from screen_capture import ScreenCapture
from view_hierarchy import HierarchyBuilder

SCREEN_WIDTH = 1080
SCREEN_HEIGHT = 1920


def make_metrics(density: float = 1.0, scaled_density: float | None = None) -> DisplayMetrics:
    return DisplayMetrics(
        density=density,
        scaled_density=density if scaled_density is None else scaled_density,
        xdpi=160.0 * density,
        ydpi=160.0 * density,
        density_dpi=int(160 * density),
        width_pixels=SCREEN_WIDTH,
        height_pixels=SCREEN_HEIGHT,
    )


def make_device_state(density: float = 1.0, with_real_metrics: bool = True,
                      locale: str = "en_US") -> DeviceState:
    metrics = make_metrics(density)
    return DeviceState(
        sdk_version=33,
        default_display_info=DisplayInfo(metrics, metrics if with_real_metrics else None),
        locale=locale,
    )


def new_builder(density: float = 1.0, with_real_metrics: bool = True):
    """A builder with one active application window and a full-screen root view"""
    builder = HierarchyBuilder(make_device_state(density, with_real_metrics))
    window = builder.add_window(active=True, type=WindowType.APPLICATION, layer=0,
                                bounds_in_screen=Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT))
    root = builder.add_view(window, class_name="android.widget.FrameLayout",
                            visible_to_user=True, bounds_in_screen=Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT))
    return builder, window, root


def solid_capture(color=(255, 255, 255), width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> ScreenCapture:
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return ScreenCapture(pixels)


@pytest.fixture
def device_state() -> DeviceState:
    return make_device_state()


@pytest.fixture
def builder_parts():
    return new_builder()
