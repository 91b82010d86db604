from typing import List, Optional

from accessibility_check import Parameters
from check_results import CheckResult, ResultType
from color_contrast_analyzer import CONTRAST_RATIO_WCAG_LARGE_TEXT
from contrast_check import ContrastCheck
from element_utils import IMAGE_VIEW_CLASS_NAME
from result_metadata import ResultMetadata
from strings import get_string
from view_hierarchy import AccessibilityHierarchy, UIElement


class ImageContrastCheck(ContrastCheck):
    """Estimates the contrast of image views from the screen capture; images need 3:1"""
    RESULT_ID_NOT_VISIBLE = 1
    RESULT_ID_NOT_IMAGEVIEW = 2
    RESULT_ID_NO_SCREENCAPTURE = 3
    RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE = 4
    RESULT_ID_IMAGE_CONTRAST_NOT_SUFFICIENT = 5
    RESULT_ID_NOT_ENABLED = 6
    RESULT_ID_SCREENCAPTURE_DATA_HIDDEN = 7
    RESULT_ID_CUSTOMIZED_IMAGE_CONTRAST_NOT_SUFFICIENT = 8
    RESULT_ID_SCREENCAPTURE_UNIFORM_COLOR = 9

    _GENERATED_MESSAGE_KEYS = {
        RESULT_ID_NOT_VISIBLE: "result_message_not_visible",
        RESULT_ID_NOT_IMAGEVIEW: "result_message_not_imageview",
        RESULT_ID_NO_SCREENCAPTURE: "result_message_no_screencapture",
        RESULT_ID_NOT_ENABLED: "result_message_not_enabled",
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
            if not view.check_instance_of(IMAGE_VIEW_CLASS_NAME):
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_IMAGEVIEW))
                continue
            if not view.enabled:
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_ENABLED))
                continue

            result = self._attempt_heavyweight_eval(view, parameters)
            if result is not None:
                results.append(result)

        self.logger.debug(f"Image contrast check produced {len(results)} results")
        return results

    def _attempt_heavyweight_eval(self, view: UIElement,
                                  parameters: Optional[Parameters]) -> Optional[CheckResult]:
        screen_capture = parameters.screen_capture if parameters is not None else None
        if screen_capture is None:
            return self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NO_SCREENCAPTURE)

        capture_bounds = screen_capture.bounds
        view_bounds = view.bounds_in_screen
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

        custom_ratio = parameters.custom_image_contrast_ratio
        if custom_ratio is not None:
            low_colors, low_ratios = self._low_contrast_pairs(swatch, custom_ratio)
            if not low_ratios:
                return None
            metadata.put_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO, custom_ratio)
            result_id = self.RESULT_ID_CUSTOMIZED_IMAGE_CONTRAST_NOT_SUFFICIENT
        else:
            low_colors, low_ratios = self._low_contrast_pairs(swatch, CONTRAST_RATIO_WCAG_LARGE_TEXT)
            if not low_ratios:
                return None
            result_id = self.RESULT_ID_IMAGE_CONTRAST_NOT_SUFFICIENT

        self._store_colors_and_contrast_ratios(
            metadata, view, swatch.background_color, low_colors, low_ratios)
        return self._result_possibly_with_image(
            ResultType.WARNING, view, result_id, metadata, parameters, view_image)

    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        if result_id in self._GENERATED_MESSAGE_KEYS:
            return get_string(locale, self._GENERATED_MESSAGE_KEYS[result_id])
        if metadata is None:
            raise ValueError(f"Result id {result_id} requires metadata")

        if result_id == self.RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE:
            return self._view_not_within_capture_message(locale, metadata)
        if result_id == self.RESULT_ID_IMAGE_CONTRAST_NOT_SUFFICIENT:
            message = get_string(locale, "result_message_image_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                CONTRAST_RATIO_WCAG_LARGE_TEXT,
                metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF)
        elif result_id == self.RESULT_ID_CUSTOMIZED_IMAGE_CONTRAST_NOT_SUFFICIENT:
            message = get_string(locale, "result_message_image_customized_contrast_not_sufficient") % (
                metadata.get_double(self.KEY_CONTRAST_RATIO),
                metadata.get_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO),
                metadata.get_int(self.KEY_FOREGROUND_COLOR) & 0xFFFFFF,
                metadata.get_int(self.KEY_BACKGROUND_COLOR) & 0xFFFFFF)
        else:
            raise self._unsupported_result_id(result_id)
        return message + self._metadata_addenda(locale, metadata)

    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        if result_id in self._GENERATED_MESSAGE_KEYS:
            return get_string(locale, self._GENERATED_MESSAGE_KEYS[result_id])
        if result_id == self.RESULT_ID_VIEW_NOT_WITHIN_SCREENCAPTURE:
            return get_string(locale, "result_message_no_screencapture")
        if result_id in (self.RESULT_ID_IMAGE_CONTRAST_NOT_SUFFICIENT,
                         self.RESULT_ID_CUSTOMIZED_IMAGE_CONTRAST_NOT_SUFFICIENT):
            return get_string(locale, "result_message_brief_image_contrast_not_sufficient")
        raise self._unsupported_result_id(result_id)

    def get_title_message(self, locale: str) -> str:
        return get_string(locale, "check_title_image_contrast")

    def get_secondary_priority(self, result: CheckResult) -> Optional[float]:
        metadata = result.metadata
        if result.result_id == self.RESULT_ID_IMAGE_CONTRAST_NOT_SUFFICIENT:
            return CONTRAST_RATIO_WCAG_LARGE_TEXT - metadata.get_double(self.KEY_CONTRAST_RATIO, 0.0)
        if result.result_id == self.RESULT_ID_CUSTOMIZED_IMAGE_CONTRAST_NOT_SUFFICIENT:
            return (metadata.get_double(self.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO, 0.0)
                    - metadata.get_double(self.KEY_CONTRAST_RATIO, 0.0))
        return None
