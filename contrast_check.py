from typing import List, Optional

from accessibility_check import AccessibilityHierarchyCheck, Category, Parameters
from check_results import CheckResult, ResultType
from color_contrast_analyzer import COLOR_SECURE_WINDOW_CENSOR, ContrastSwatch
from element_utils import is_potentially_obscured
from models import Rect
from result_metadata import ResultMetadata
from screen_capture import ScreenCapture
from strings import get_string
from view_hierarchy import UIElement

# Absorbs floating point noise right at a threshold
CONTRAST_TOLERANCE = 0.01


def is_contrast_insufficient(required_ratio: float, ratio: float) -> bool:
    """
    True when ratio falls short of required_ratio by at least the tolerance.
    The difference is rounded first so that 4.5 vs 4.49 counts as short.
    """
    return round(required_ratio - ratio, 9) >= CONTRAST_TOLERANCE


class ContrastCheck(AccessibilityHierarchyCheck):
    """Screen capture handling shared by the text and image contrast checks"""
    KEY_BACKGROUND_COLOR = "KEY_BACKGROUND_COLOR"
    KEY_CONTRAST_RATIO = "KEY_CONTRAST_RATIO"
    KEY_FOREGROUND_COLOR = "KEY_FOREGROUND_COLOR"
    KEY_SCREENSHOT_BOUNDS_STRING = "KEY_SCREENSHOT_BOUNDS_STRING"
    KEY_VIEW_BOUNDS_STRING = "KEY_VIEW_BOUNDS_STRING"
    KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO = "KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO"
    KEY_IS_POTENTIALLY_OBSCURED = "KEY_IS_POTENTIALLY_OBSCURED"
    KEY_IS_AGAINST_SCROLLABLE_EDGE = "KEY_IS_AGAINST_SCROLLABLE_EDGE"
    KEY_ADDITIONAL_FOREGROUND_COLORS = "KEY_ADDITIONAL_FOREGROUND_COLORS"
    KEY_ADDITIONAL_CONTRAST_RATIOS = "KEY_ADDITIONAL_CONTRAST_RATIOS"

    CONTRAST_TOLERANCE = CONTRAST_TOLERANCE

    help_topic = "7158390"
    category = Category.LOW_CONTRAST

    def get_contrast_swatch(self, image: ScreenCapture,
                            enable_enhanced_contrast_evaluation: Optional[bool]) -> ContrastSwatch:
        return ContrastSwatch(image, enable_enhanced_contrast_evaluation is True)

    def _view_not_within_capture_result(self, view: UIElement, view_bounds: Rect,
                                        capture_bounds: Rect, result_id: int) -> CheckResult:
        metadata = ResultMetadata()
        metadata.put_string(self.KEY_VIEW_BOUNDS_STRING, view_bounds.to_short_string())
        metadata.put_string(self.KEY_SCREENSHOT_BOUNDS_STRING, capture_bounds.to_short_string())
        return self._result(ResultType.NOT_RUN, view, result_id, metadata)

    def _evaluate_swatch(self, view: UIElement, view_image: ScreenCapture,
                         parameters: Parameters, data_hidden_id: int, uniform_color_id: int):
        """
        Extract colors from a view's crop.

        Returns:
            Tuple of (swatch, metadata, early result). The early result is set when
            the crop is a single color, in which case there is nothing to compare.
        """
        swatch = self.get_contrast_swatch(view_image, parameters.enable_enhanced_contrast_evaluation)
        metadata = ResultMetadata()
        if view.is_against_scrollable_edge():
            metadata.put_boolean(self.KEY_IS_AGAINST_SCROLLABLE_EDGE, True)

        foreground = swatch.foreground_colors[0]
        if swatch.background_color == foreground:
            # Secure windows are blacked out in captures
            result_id = data_hidden_id if foreground == COLOR_SECURE_WINDOW_CENSOR else uniform_color_id
            return swatch, metadata, self._result(ResultType.NOT_RUN, view, result_id, metadata)
        return swatch, metadata, None

    @staticmethod
    def _low_contrast_pairs(swatch: ContrastSwatch, required_ratio: float):
        low_foreground_colors: List[int] = []
        low_contrast_ratios: List[float] = []
        for color, ratio in zip(swatch.foreground_colors, swatch.contrast_ratios):
            if is_contrast_insufficient(required_ratio, ratio):
                low_foreground_colors.append(color)
                low_contrast_ratios.append(ratio)
        return low_foreground_colors, low_contrast_ratios

    def _store_colors_and_contrast_ratios(self, metadata: ResultMetadata, view: UIElement,
                                          background: int, foreground_colors: List[int],
                                          contrast_ratios: List[float]) -> None:
        """The first pair goes under dedicated keys, any others under the additional lists"""
        if is_potentially_obscured(view):
            metadata.put_boolean(self.KEY_IS_POTENTIALLY_OBSCURED, True)
        metadata.put_int(self.KEY_BACKGROUND_COLOR, background)
        metadata.put_int(self.KEY_FOREGROUND_COLOR, foreground_colors[0])
        if len(foreground_colors) > 1:
            metadata.put_string_list(self.KEY_ADDITIONAL_FOREGROUND_COLORS,
                                     [str(color) for color in foreground_colors[1:]])
        metadata.put_double(self.KEY_CONTRAST_RATIO, contrast_ratios[0])
        if len(contrast_ratios) > 1:
            metadata.put_string_list(self.KEY_ADDITIONAL_CONTRAST_RATIOS,
                                     [str(ratio) for ratio in contrast_ratios[1:]])

    def _result_possibly_with_image(self, result_type: ResultType, view: UIElement, result_id: int,
                                    metadata: ResultMetadata, parameters: Optional[Parameters],
                                    view_image: Optional[ScreenCapture]) -> CheckResult:
        result = self._result(result_type, view, result_id, metadata)
        if view_image is not None and parameters is not None and parameters.save_view_images is True:
            result.view_image = view_image.pixels
        return result

    def _metadata_addenda(self, locale: str, metadata: ResultMetadata) -> str:
        addenda = ""
        if metadata.get_boolean(self.KEY_IS_POTENTIALLY_OBSCURED, False):
            addenda += " " + get_string(locale, "result_message_addendum_view_potentially_obscured")
        if metadata.get_boolean(self.KEY_IS_AGAINST_SCROLLABLE_EDGE, False):
            addenda += " " + get_string(locale, "result_message_addendum_against_scrollable_edge")
        return addenda

    def _view_not_within_capture_message(self, locale: str, metadata: ResultMetadata) -> str:
        return get_string(locale, "result_message_view_not_within_screencapture") % (
            metadata.get_string(self.KEY_VIEW_BOUNDS_STRING),
            metadata.get_string(self.KEY_SCREENSHOT_BOUNDS_STRING))
