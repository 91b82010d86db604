from typing import List, Optional

from accessibility_check import Parameters
from check_results import CheckResult, ResultType
from color_contrast_analyzer import (
    CONTRAST_RATIO_WCAG_LARGE_TEXT,
    CONTRAST_RATIO_WCAG_NORMAL_TEXT,
    WCAG_LARGE_BOLD_TEXT_MIN_SIZE,
    WCAG_LARGE_TEXT_MIN_SIZE,
    alpha,
    calculate_contrast_ratio,
)
from contrast_check import ContrastCheck, is_contrast_insufficient
from element_utils import SWITCH_CLASS_NAME, TEXT_VIEW_CLASS_NAME
from models import Rect, union_of_rects
from result_metadata import ResultMetadata
from strings import get_string
from view_hierarchy import AccessibilityHierarchy, UIElement

TYPEFACE_NORMAL = 0
TYPEFACE_BOLD = 1


class TextContrastCheck(ContrastCheck):
    """
    Checks the contrast of text against its background.

    Declared text and background colors are compared directly when both are
    known and opaque. Otherwise the view's region of the screen capture is
    reduced to a background and foreground colors, and those are compared.
    """
    RESULT_ID_NOT_VISIBLE = 1
    RESULT_ID_NOT_TEXT_VIEW = 2
    RESULT_ID_TEXTVIEW_EMPTY = 3
    RESULT_ID_COULD_NOT_GET_TEXT_COLOR = 4
    RESULT_ID_COULD_NOT_GET_BACKGROUND_COLOR = 5
    RESULT_ID_TEXT_MUST_BE_OPAQUE = 6
    RESULT_ID_BACKGROUND_MUST_BE_OPAQUE = 7
    RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT = 8
    RESULT_ID_HEURISTIC_COULD_NOT_GET_SCREENCAPTURE = 9
    RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE = 10
    RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT = 11
    RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE = 12
    RESULT_ID_NOT_ENABLED = 13
    RESULT_ID_SCREENCAPTURE_DATA_HIDDEN = 14
    RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT = 15
    RESULT_ID_SCREENCAPTURE_UNIFORM_COLOR = 16
    RESULT_ID_CUSTOMIZED_TEXTVIEW_CONTRAST_NOT_SUFFICIENT = 22

    KEY_BACKGROUND_OPACITY = "KEY_BACKGROUND_OPACITY"
    KEY_REQUIRED_CONTRAST_RATIO = "KEY_REQUIRED_CONTRAST_RATIO"
    KEY_TEXT_COLOR = "KEY_TEXT_COLOR"
    KEY_TEXT_OPACITY = "KEY_TEXT_OPACITY"
    KEY_TOLERANT_CONTRAST_RATIO = "KEY_TOLERANT_CONTRAST_RATIO"
    KEY_IS_LARGE_TEXT = "KEY_IS_LARGE_TEXT"

    _GENERATED_MESSAGE_KEYS = {
        RESULT_ID_NOT_VISIBLE: "result_message_not_visible",
        RESULT_ID_NOT_TEXT_VIEW: "result_message_not_text_view",
        RESULT_ID_NOT_ENABLED: "result_message_not_enabled",
        RESULT_ID_TEXTVIEW_EMPTY: "result_message_textview_empty",
        RESULT_ID_COULD_NOT_GET_TEXT_COLOR: "result_message_could_not_get_text_color",
        RESULT_ID_COULD_NOT_GET_BACKGROUND_COLOR: "result_message_could_not_get_background_color",
        RESULT_ID_HEURISTIC_COULD_NOT_GET_SCREENCAPTURE: "result_message_no_screencapture",
        RESULT_ID_SCREENCAPTURE_DATA_HIDDEN: "result_message_screencapture_data_hidden",
        RESULT_ID_SCREENCAPTURE_UNIFORM_COLOR: "result_message_screencapture_uniform_color",
    }

    def run_check_on_hierarchy(self, hierarchy: AccessibilityHierarchy,
                               from_root: Optional[UIElement] = None,
                               parameters: Optional[Parameters] = None) -> List[CheckResult]:
        results: List[CheckResult] = []
        for view in self.get_elements_to_evaluate(from_root, hierarchy):
            if view.visible_to_user is not True:
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_VISIBLE))
                continue

            # A switch's text is only measurable when its glyph locations are known
            if not view.check_instance_of(TEXT_VIEW_CLASS_NAME) or (
                    view.check_instance_of(SWITCH_CLASS_NAME) and not view.text_character_locations):
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_TEXT_VIEW))
                continue

            if not view.text and not view.hint_text:
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_TEXTVIEW_EMPTY))
                continue

            if not view.enabled:
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_ENABLED))
                continue

            lightweight_result = self._attempt_lightweight_eval(view, parameters)
            if lightweight_result is not None:
                results.append(lightweight_result)
                if lightweight_result.type == ResultType.NOT_RUN:
                    heavyweight_result = self._attempt_heavyweight_eval(view, parameters)
                    if heavyweight_result is not None:
                        results.append(heavyweight_result)

        self.logger.debug(f"Text contrast check produced {len(results)} results")
        return results

    def _attempt_lightweight_eval(self, view: UIElement,
                                  parameters: Optional[Parameters]) -> Optional[CheckResult]:
        """Compare the declared text and background colors, if both are usable"""
        text_color = get_foreground_color(view)
        background_color = view.background_drawable_color
        if text_color is None:
            return self._result(ResultType.NOT_RUN, view, self.RESULT_ID_COULD_NOT_GET_TEXT_COLOR)
        if background_color is None:
            return self._result(ResultType.NOT_RUN, view, self.RESULT_ID_COULD_NOT_GET_BACKGROUND_COLOR)

        text_alpha = alpha(text_color)
        if text_alpha < 255:
            metadata = ResultMetadata()
            metadata.put_float(self.KEY_TEXT_OPACITY, text_alpha / 255 * 100)
            return self._result(ResultType.NOT_RUN, view, self.RESULT_ID_TEXT_MUST_BE_OPAQUE, metadata)

        background_alpha = alpha(background_color)
        if background_alpha < 255:
            metadata = ResultMetadata()
            metadata.put_float(self.KEY_BACKGROUND_OPACITY, background_alpha / 255 * 100)
            return self._result(ResultType.NOT_RUN, view, self.RESULT_ID_BACKGROUND_MUST_BE_OPAQUE,
                                metadata)

        contrast_ratio = calculate_contrast_ratio(text_color, background_color)
        required_contrast = (CONTRAST_RATIO_WCAG_LARGE_TEXT if is_large_text(view) is True
                             else CONTRAST_RATIO_WCAG_NORMAL_TEXT)
        custom_ratio = parameters.custom_text_contrast_ratio if parameters is not None else None
        if custom_ratio is not None:
            required_contrast = custom_ratio

        if is_contrast_insufficient(required_contrast, contrast_ratio):
            metadata = ResultMetadata()
            metadata.put_double(self.KEY_REQUIRED_CONTRAST_RATIO if custom_ratio is None
                                else self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO, required_contrast)
            metadata.put_double(self.KEY_CONTRAST_RATIO, contrast_ratio)
            metadata.put_int(self.KEY_TEXT_COLOR, text_color)
            metadata.put_int(self.KEY_BACKGROUND_COLOR, background_color)
            result_id = (self.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT if custom_ratio is None
                         else self.RESULT_ID_CUSTOMIZED_TEXTVIEW_CONTRAST_NOT_SUFFICIENT)
            return self._result(ResultType.ERROR, view, result_id, metadata)
        return None

    def _attempt_heavyweight_eval(self, view: UIElement,
                                  parameters: Optional[Parameters]) -> Optional[CheckResult]:
        """Estimate colors from the screen capture"""
        screen_capture = parameters.screen_capture if parameters is not None else None
        if screen_capture is None:
            return self._result(ResultType.NOT_RUN, view,
                                self.RESULT_ID_HEURISTIC_COULD_NOT_GET_SCREENCAPTURE)

        capture_bounds = screen_capture.bounds
        view_bounds = view.bounds_in_screen
        # Glyph bounds are tighter than the view's when they are known
        text_bounds = get_text_character_bounds(view)
        if not text_bounds.is_empty() and capture_bounds.contains(text_bounds):
            view_bounds = text_bounds

        if view_bounds.is_empty() or not capture_bounds.contains(view_bounds):
            return self._view_not_within_capture_result(
                view, view_bounds, capture_bounds, self.RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE)

        view_image = screen_capture.crop(view_bounds.left, view_bounds.top,
                                         view_bounds.width, view_bounds.height)
        swatch, metadata, early_result = self._evaluate_swatch(
            view, view_image, parameters, self.RESULT_ID_SCREENCAPTURE_DATA_HIDDEN,
            self.RESULT_ID_SCREENCAPTURE_UNIFORM_COLOR)
        if early_result is not None:
            return early_result
        background = swatch.background_color

        custom_ratio = parameters.custom_text_contrast_ratio
        if custom_ratio is not None:
            low_colors, low_ratios = self._low_contrast_pairs(swatch, custom_ratio)
            if low_ratios:
                metadata.put_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO, custom_ratio)
                self._store_colors_and_contrast_ratios(metadata, view, background, low_colors, low_ratios)
                return self._result_possibly_with_image(
                    ResultType.WARNING, view,
                    self.RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
                    metadata, parameters, view_image)
            return None

        large_text = is_large_text(view)
        required_ratio = CONTRAST_RATIO_WCAG_LARGE_TEXT
        if large_text is not None:
            metadata.put_boolean(self.KEY_IS_LARGE_TEXT, large_text)
            required_ratio = CONTRAST_RATIO_WCAG_LARGE_TEXT if large_text else CONTRAST_RATIO_WCAG_NORMAL_TEXT

        low_colors, low_ratios = self._low_contrast_pairs(swatch, required_ratio)
        if low_ratios:
            metadata.put_double(self.KEY_REQUIRED_CONTRAST_RATIO, required_ratio)
            self._store_colors_and_contrast_ratios(metadata, view, background, low_colors, low_ratios)
            return self._result_possibly_with_image(
                ResultType.WARNING, view, self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
                metadata, parameters, view_image)

        if large_text is None:
            # Unknown text size: passes the large text threshold but maybe not the normal one
            low_colors, low_ratios = self._low_contrast_pairs(swatch, CONTRAST_RATIO_WCAG_NORMAL_TEXT)
            if low_ratios:
                metadata.put_double(self.KEY_REQUIRED_CONTRAST_RATIO, CONTRAST_RATIO_WCAG_NORMAL_TEXT)
                metadata.put_double(self.KEY_TOLERANT_CONTRAST_RATIO, CONTRAST_RATIO_WCAG_LARGE_TEXT)
                self._store_colors_and_contrast_ratios(metadata, view, background, low_colors, low_ratios)
                return self._result_possibly_with_image(
                    ResultType.WARNING, view, self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE,
                    metadata, parameters, view_image)
        return None

    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        if result_id in self._GENERATED_MESSAGE_KEYS:
            return get_string(locale, self._GENERATED_MESSAGE_KEYS[result_id])
        if metadata is None:
            raise ValueError(f"Result id {result_id} requires metadata")

        if result_id == self.RESULT_ID_TEXT_MUST_BE_OPAQUE:
            return (get_string(locale, "result_message_text_must_be_opaque") + " "
                    + get_string(locale, "result_message_addendum_opacity_description")
                    % metadata.get_float(self.KEY_TEXT_OPACITY))
        if result_id == self.RESULT_ID_BACKGROUND_MUST_BE_OPAQUE:
            return (get_string(locale, "result_message_background_must_be_opaque") + " "
                    + get_string(locale, "result_message_addendum_opacity_description")
                    % metadata.get_float(self.KEY_BACKGROUND_OPACITY))
        if result_id == self.RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE:
            return self._view_not_within_capture_message(locale, metadata)

        if result_id == self.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT:
            message = get_string(locale, "result_message_textview_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                metadata.get_int(self.KEY_TEXT_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                metadata.get_double(self.KEY_REQUIRED_CONTRAST_RATIO))
        elif result_id == self.RESULT_ID_CUSTOMIZED_TEXTVIEW_CONTRAST_NOT_SUFFICIENT:
            message = get_string(locale, "result_message_customized_textview_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                metadata.get_int(self.KEY_TEXT_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                metadata.get_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO))
        elif result_id == self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT:
            if self.KEY_IS_LARGE_TEXT in metadata:
                message = get_string(
                    locale, "result_message_textview_heuristic_contrast_not_sufficient_when_text_size_available") % (
                    metadata.get_double(self.KEY_CONTRAST_RATIO),
                    metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                    metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                    metadata.get_double(self.KEY_REQUIRED_CONTRAST_RATIO))
            else:
                message = get_string(locale, "result_message_textview_heuristic_contrast_not_sufficient") % (
                    metadata.get_double(self.KEY_CONTRAST_RATIO),
                    metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                    metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                    CONTRAST_RATIO_WCAG_NORMAL_TEXT,
                    CONTRAST_RATIO_WCAG_LARGE_TEXT)
        elif result_id == self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE:
            message = get_string(locale, "result_message_textview_heuristic_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                metadata.get_double(self.KEY_REQUIRED_CONTRAST_RATIO),
                metadata.get_double(self.KEY_TOLERANT_CONTRAST_RATIO))
        elif result_id == self.RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT:
            message = get_string(locale, "result_message_textview_heuristic_customized_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF,
                metadata.get_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO))
        else:
            raise self._unsupported_result_id(result_id)
        return message + self._metadata_addenda(locale, metadata)

    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        if result_id in self._GENERATED_MESSAGE_KEYS:
            return get_string(locale, self._GENERATED_MESSAGE_KEYS[result_id])
        if result_id == self.RESULT_ID_TEXT_MUST_BE_OPAQUE:
            return get_string(locale, "result_message_text_must_be_opaque")
        if result_id == self.RESULT_ID_BACKGROUND_MUST_BE_OPAQUE:
            return get_string(locale, "result_message_background_must_be_opaque")
        if result_id == self.RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE:
            return get_string(locale, "result_message_no_screencapture")
        if result_id in (self.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT,
                         self.RESULT_ID_CUSTOMIZED_TEXTVIEW_CONTRAST_NOT_SUFFICIENT,
                         self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
                         self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE,
                         self.RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT):
            return get_string(locale, "result_message_brief_text_contrast_not_sufficient")
        raise self._unsupported_result_id(result_id)

    def get_title_message(self, locale: str) -> str:
        return get_string(locale, "check_title_text_contrast")

    def get_secondary_priority(self, result: CheckResult) -> Optional[float]:
        """How far the measured ratio falls below the required one"""
        metadata = result.metadata
        if result.result_id in (self.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT,
                                self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
                                self.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE):
            return (metadata.get_double(self.KEY_REQUIRED_CONTRAST_RATIO, 0.0)
                    - metadata.get_double(self.KEY_CONTRAST_RATIO, 0.0))
        if result.result_id == self.RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT:
            return (metadata.get_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO, 0.0)
                    - metadata.get_double(self.KEY_CONTRAST_RATIO, 0.0))
        return None


def get_foreground_color(view: UIElement) -> Optional[int]:
    """The hint color is what is drawn while the text is empty"""
    return view.hint_text_color if not view.text else view.text_color


def get_text_character_bounds(view: UIElement) -> Rect:
    if not view.text_character_locations:
        return Rect.EMPTY
    return union_of_rects(view.text_character_locations)


def is_large_text(view: UIElement) -> Optional[bool]:
    """
    WCAG large text: at least 18sp, or at least 14sp when bold. None when the
    text size is unknown.
    """
    if view.text_size is None:
        return None
    scaled_density = view.window.hierarchy.device_state.default_display_info \
        .metrics_without_decoration.scaled_density
    sp_size = view.text_size / scaled_density
    style = view.typeface_style if view.typeface_style is not None else TYPEFACE_NORMAL
    return sp_size >= WCAG_LARGE_TEXT_MIN_SIZE or (
        sp_size >= WCAG_LARGE_BOLD_TEXT_MIN_SIZE and (style & TYPEFACE_BOLD) != 0)
