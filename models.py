import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (12.5 -> 13)"""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Point:
    """A pair of integer coordinates, also used for (width, height) sizes"""
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen pixels: left, top, right, bottom"""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.left >= self.right or self.top >= self.bottom

    def contains(self, other: "Rect") -> bool:
        """True if other lies fully inside this (non-empty) rectangle"""
        return (not self.is_empty()
                and self.left <= other.left and self.top <= other.top
                and self.right >= other.right and self.bottom >= other.bottom)

    def intersects(self, other: "Rect") -> bool:
        """True if the two rectangles overlap; touching edges do not count"""
        return (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom)

    def to_short_string(self) -> str:
        return f"[{self.left},{self.top}][{self.right},{self.bottom}]"

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


Rect.EMPTY = Rect(0, 0, 0, 0)


@dataclass(frozen=True)
class DisplayMetrics:
    """Density and size of a display, as reported by the device"""
    density: float
    scaled_density: float
    xdpi: float
    ydpi: float
    density_dpi: int
    width_pixels: int
    height_pixels: int


@dataclass(frozen=True)
class DisplayInfo:
    metrics_without_decoration: DisplayMetrics
    # Only known on devices that expose the full physical display size
    real_metrics: Optional[DisplayMetrics] = None


@dataclass(frozen=True)
class DeviceState:
    """Device-level state captured alongside a hierarchy"""
    sdk_version: int
    default_display_info: DisplayInfo
    locale: str = "en_US"
    font_scale: float = 1.0


class WindowType(IntEnum):
    APPLICATION = 1
    INPUT_METHOD = 2
    SYSTEM = 3
    ACCESSIBILITY_OVERLAY = 4
    SPLIT_SCREEN_DIVIDER = 5


class SpanType(Enum):
    CLICKABLE = "clickable"
    URL = "url"
    STYLE = "style"
    UNDERLINE = "underline"


@dataclass(frozen=True)
class Span:
    """A styling or link span over [start, end) of a SpannableString"""
    span_class_name: str
    start: int
    end: int
    flags: int = 0
    span_type: SpanType = SpanType.STYLE
    url: Optional[str] = None


@dataclass(frozen=True)
class SpannableString:
    """Text plus the rich-text spans attached to it"""
    text: str
    spans: Tuple[Span, ...] = ()

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __bool__(self) -> bool:
        return bool(self.text)

    def strip(self) -> str:
        return self.text.strip()

    @classmethod
    def of(cls, value) -> Optional["SpannableString"]:
        """Accept a str, a SpannableString or None"""
        if value is None or isinstance(value, SpannableString):
            return value
        return cls(str(value))


@dataclass(frozen=True)
class AccessibilityAction:
    action_id: int
    label: Optional[str] = None


@dataclass(frozen=True)
class LayoutParams:
    """Declared layout width and height of a view, in pixels or one of the sentinels"""
    MATCH_PARENT = -1
    WRAP_CONTENT = -2

    width: int
    height: int


def union_of_rects(rects: List[Rect]) -> Rect:
    """Smallest rectangle covering every rect in the list, or Rect.EMPTY"""
    if not rects:
        return Rect.EMPTY
    return Rect(
        min(r.left for r in rects),
        min(r.top for r in rects),
        max(r.right for r in rects),
        max(r.bottom for r in rects),
    )
