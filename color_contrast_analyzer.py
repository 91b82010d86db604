import math
from typing import Dict, List, Tuple

import numpy as np

from models import round_half_up
from screen_capture import ScreenCapture

# WCAG 2.1 minimum contrast requirements
CONTRAST_RATIO_WCAG_NORMAL_TEXT = 4.5
CONTRAST_RATIO_WCAG_LARGE_TEXT = 3.0
# Large text is 18sp+ or 14sp+ bold
WCAG_LARGE_TEXT_MIN_SIZE = 18
WCAG_LARGE_BOLD_TEXT_MIN_SIZE = 14

BLACK = 0xFF000000
WHITE = 0xFFFFFFFF
# Secure windows are rendered as solid black in screen captures
COLOR_SECURE_WINDOW_CENSOR = BLACK


def alpha(color: int) -> int:
    return (color >> 24) & 0xFF


def red(color: int) -> int:
    return (color >> 16) & 0xFF


def green(color: int) -> int:
    return (color >> 8) & 0xFF


def blue(color: int) -> int:
    return color & 0xFF


def argb(a: int, r: int, g: int, b: int) -> int:
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def rgb_tuple(color: int) -> Tuple[int, int, int]:
    return (red(color), green(color), blue(color))


def color_to_hex_string(color: int) -> str:
    return "#%06X" % (color & 0xFFFFFF)


def _linear_color(component: int) -> float:
    srgb = component / 255.0
    if srgb <= 0.03928:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4


def calculate_luminance(color: int) -> float:
    """
    Relative luminance according to WCAG 2.1
    https://www.w3.org/WAI/GL/wiki/Relative_luminance
    """
    r, g, b = map(_linear_color, rgb_tuple(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio_from_luminance(luminance1: float, luminance2: float) -> float:
    if luminance1 < 0.0 or luminance2 < 0.0:
        raise ValueError("Luminance values may not be negative.")
    return (max(luminance1, luminance2) + 0.05) / (min(luminance1, luminance2) + 0.05)


def calculate_contrast_ratio(color1: int, color2: int) -> float:
    """Contrast ratio of two colors according to the WCAG 2.1 formula; alpha is ignored"""
    return contrast_ratio_from_luminance(calculate_luminance(color1), calculate_luminance(color2))


def rgb2lab(color: int) -> Tuple[float, float, float]:
    """CIE L*a*b* of an sRGB color, D65 white point"""
    r, g, b = map(_linear_color, rgb_tuple(color))
    x = (r * 0.4124 + g * 0.3576 + b * 0.1805) / 0.95047
    y = (r * 0.2126 + g * 0.7152 + b * 0.0722) / 1.00000
    z = (r * 0.0193 + g * 0.1192 + b * 0.9505) / 1.08883

    def f(t: float) -> float:
        return math.pow(t, 1.0 / 3.0) if t > 0.008856 else (7.787 * t) + 16.0 / 116

    x, y, z = f(x), f(y), f(z)
    return ((116 * y) - 16, 500 * (x - y), 200 * (y - z))


def color_difference(color1: int, color2: int) -> float:
    """Perceptual distance between two colors (CIE94 with graphic-arts weights)"""
    l1, a1, b1 = rgb2lab(color1)
    l2, a2, b2 = rgb2lab(color2)
    delta_l = l1 - l2
    delta_a = a1 - a2
    delta_b = b1 - b2
    c1 = math.hypot(a1, b1)
    c2 = math.hypot(a2, b2)
    delta_c = c1 - c2
    delta_h_squared = delta_a * delta_a + delta_b * delta_b - delta_c * delta_c
    delta_h = math.sqrt(delta_h_squared) if delta_h_squared > 0 else 0.0
    sc = 1.0 + 0.045 * c1
    sh = 1.0 + 0.015 * c1
    return math.sqrt(delta_l ** 2 + (delta_c / sc) ** 2 + (delta_h / sh) ** 2)


class ContrastSwatch:
    """
    Separates the pixels of an image into one background color and one or more
    foreground colors, and the contrast ratio of each foreground against it.

    The single-foreground method takes the most frequent color on each side of
    the average luminance. The multiple-foreground method drops rare colors,
    merges near-identical ones, and keeps up to MAX_FOREGROUND_COLOR candidates.
    """
    MAX_FOREGROUND_COLOR = 5
    COLOR_DIFFERENCE_LIMIT = 2.0
    COLOR_SIGNIFICANCE_PERCENTAGE = 0.03
    COLOR_CUTOFF_PERCENTAGE = 0.01

    def __init__(self, image: ScreenCapture, multiple_foreground_colors: bool = False):
        pixels = image.packed_pixels()
        colors, counts = np.unique(pixels, return_counts=True)
        # Ascending by color value, like a sorted pixel run-length count
        histogram = dict(zip((int(c) for c in colors), (int(n) for n in counts)))
        self.background_color, self.foreground_colors = self._separate_colors(
            histogram, int(pixels.size), multiple_foreground_colors)

    @property
    def background_luminance(self) -> float:
        return calculate_luminance(self.background_color)

    @property
    def foreground_luminances(self) -> List[float]:
        return [calculate_luminance(color) for color in self.foreground_colors]

    @property
    def contrast_ratios(self) -> List[float]:
        """One ratio per foreground color, rounded to two decimals"""
        background_luminance = self.background_luminance
        return [
            round_half_up(contrast_ratio_from_luminance(background_luminance, luminance) * 100.0) / 100.0
            for luminance in self.foreground_luminances
        ]

    def __str__(self) -> str:
        return (f"{{contrast:1:{self.contrast_ratios[0]}, "
                f"background:{color_to_hex_string(self.background_color)}, "
                f"foreground:{color_to_hex_string(self.foreground_colors[0])}}}")

    def _separate_colors(self, histogram: Dict[int, int], image_size: int,
                         multiple_foreground_colors: bool) -> Tuple[int, List[int]]:
        if not histogram:
            return BLACK, [BLACK]
        if len(histogram) == 1:
            single_color = next(iter(histogram))
            return single_color, [single_color]

        average_luminance = sum(calculate_luminance(c) for c in histogram) / len(histogram)
        if multiple_foreground_colors:
            return self._separate_using_multiple_foreground_method(
                histogram, average_luminance, image_size)
        return self._separate_using_single_foreground_method(histogram, average_luminance)

    def _separate_using_single_foreground_method(
            self, histogram: Dict[int, int], average_luminance: float) -> Tuple[int, List[int]]:
        low_luminance_color = None
        high_luminance_color = None
        max_low_frequency = 0
        max_high_frequency = 0
        for color, frequency in histogram.items():
            luminance = calculate_luminance(color)
            if luminance < average_luminance and frequency > max_low_frequency:
                max_low_frequency = frequency
                low_luminance_color = color
            elif luminance >= average_luminance and frequency > max_high_frequency:
                max_high_frequency = frequency
                high_luminance_color = color

        # Distinct colors of equal luminance leave one side empty
        if low_luminance_color is None or high_luminance_color is None:
            only_color = high_luminance_color if low_luminance_color is None else low_luminance_color
            return only_color, [only_color]

        if max_high_frequency > max_low_frequency:
            return high_luminance_color, [low_luminance_color]
        return low_luminance_color, [high_luminance_color]

    def _separate_using_multiple_foreground_method(
            self, histogram: Dict[int, int], average_luminance: float,
            image_size: int) -> Tuple[int, List[int]]:
        dominant = self._reduce_colors(histogram, image_size, self.COLOR_CUTOFF_PERCENTAGE)
        if not dominant:
            # Every color is rare (noisy image); fall back to the most frequent one
            most_frequent = max(histogram.items(), key=lambda entry: entry[1])[0]
            return most_frequent, [most_frequent]
        if len(dominant) < 2:
            single_color = next(iter(dominant))
            return single_color, [single_color]

        by_frequency = sorted(dominant.items(), key=lambda entry: (-entry[1], entry[0]))
        background_color = by_frequency[0][0]
        foreground_colors = self._extract_dominant_foreground_colors(
            background_color, by_frequency[1:], average_luminance, image_size)
        if not foreground_colors:
            return background_color, [background_color]
        return background_color, foreground_colors

    def _reduce_colors(self, histogram: Dict[int, int], image_size: int,
                       cutoff: float) -> Dict[int, int]:
        """Drop colors under the cutoff share and fold near-identical colors together"""
        dominant_colors = [(c, n) for c, n in histogram.items() if n >= image_size * cutoff]
        dominant_colors.sort(key=lambda entry: -entry[1])

        reduced: Dict[int, int] = {}
        for color, count in dominant_colors:
            for dominant_color in reduced:
                if color_difference(dominant_color, color) < self.COLOR_DIFFERENCE_LIMIT:
                    count += reduced[dominant_color]
                    color = dominant_color
                    break
            reduced[color] = count
        return reduced

    def _extract_dominant_foreground_colors(self, background_color: int,
                                            candidates: List[Tuple[int, int]],
                                            average_luminance: float,
                                            image_size: int) -> List[int]:
        background_below_average = calculate_luminance(background_color) < average_luminance
        foreground_colors: List[int] = []
        priority_index = 0
        for color, count in candidates:
            if len(foreground_colors) >= self.MAX_FOREGROUND_COLOR:
                break
            below_average = calculate_luminance(color) <= average_luminance
            if background_below_average != below_average:
                # Opposite-luminance colors are the likeliest text, so they go first
                foreground_colors.insert(priority_index, color)
                priority_index += 1
            elif count > image_size * self.COLOR_SIGNIFICANCE_PERCENTAGE:
                foreground_colors.append(color)
        return foreground_colors
