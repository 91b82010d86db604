import math
from typing import List, Optional

from accessibility_check import AccessibilityHierarchyCheck, Category, Parameters
from check_results import CheckResult, ResultType
from element_utils import ABS_LIST_VIEW_CLASS_NAME, WEB_VIEW_CLASS_NAME
from models import Point, Rect, WindowType, round_half_up
from result_metadata import ResultMetadata
from strings import get_string
from view_hierarchy import AccessibilityHierarchy, UIElement


class TouchTargetSizeCheck(AccessibilityHierarchyCheck):
    """
    Flags clickable views whose on-screen size is below the minimum touch target,
    48dp by default. Touch delegates, clickable ancestors, clipping, web content and
    scrollable edges lower the severity instead of hiding the finding.
    """
    RESULT_ID_NOT_CLICKABLE = 1
    RESULT_ID_NOT_VISIBLE = 2
    RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT = 3
    RESULT_ID_SMALL_TOUCH_TARGET_HEIGHT = 4
    RESULT_ID_SMALL_TOUCH_TARGET_WIDTH = 5
    RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT = 6
    RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_HEIGHT = 7
    RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH = 8

    KEY_HAS_TOUCH_DELEGATE = "KEY_HAS_TOUCH_DELEGATE"
    KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT = "KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT"
    KEY_HAS_CLICKABLE_ANCESTOR = "KEY_HAS_CLICKABLE_ANCESTOR"
    KEY_IS_AGAINST_SCROLLABLE_EDGE = "KEY_IS_AGAINST_SCROLLABLE_EDGE"
    KEY_IS_CLIPPED_BY_ANCESTOR = "KEY_IS_CLIPPED_BY_ANCESTOR"
    KEY_IS_WEB_CONTENT = "KEY_IS_WEB_CONTENT"
    KEY_HEIGHT = "KEY_HEIGHT"
    KEY_WIDTH = "KEY_WIDTH"
    KEY_NONCLIPPED_HEIGHT = "KEY_NONCLIPPED_HEIGHT"
    KEY_NONCLIPPED_WIDTH = "KEY_NONCLIPPED_WIDTH"
    KEY_REQUIRED_HEIGHT = "KEY_REQUIRED_HEIGHT"
    KEY_REQUIRED_WIDTH = "KEY_REQUIRED_WIDTH"
    KEY_CUSTOMIZED_REQUIRED_WIDTH = "KEY_CUSTOMIZED_REQUIRED_WIDTH"
    KEY_CUSTOMIZED_REQUIRED_HEIGHT = "KEY_CUSTOMIZED_REQUIRED_HEIGHT"
    KEY_HIT_RECT_WIDTH = "KEY_HIT_RECT_WIDTH"
    KEY_HIT_RECT_HEIGHT = "KEY_HIT_RECT_HEIGHT"

    # dp
    TOUCH_TARGET_MIN_HEIGHT = 48
    TOUCH_TARGET_MIN_WIDTH = 48
    TOUCH_TARGET_MIN_HEIGHT_ON_EDGE = 32
    TOUCH_TARGET_MIN_WIDTH_ON_EDGE = 32
    TOUCH_TARGET_MIN_HEIGHT_IME_CONTAINER = 32
    TOUCH_TARGET_MIN_WIDTH_IME_CONTAINER = 32

    help_topic = "7101858"
    category = Category.TOUCH_TARGET_SIZE

    def run_check_on_hierarchy(self, hierarchy: AccessibilityHierarchy,
                               from_root: Optional[UIElement] = None,
                               parameters: Optional[Parameters] = None) -> List[CheckResult]:
        results: List[CheckResult] = []
        density = hierarchy.device_state.default_display_info.metrics_without_decoration.density
        custom_size = parameters.custom_touch_target_size if parameters is not None else None

        for view in self.get_elements_to_evaluate(from_root, hierarchy):
            if not (view.clickable is True or view.long_clickable is True):
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_CLICKABLE))
                continue
            if view.visible_to_user is not True:
                results.append(self._result(ResultType.NOT_RUN, view, self.RESULT_ID_NOT_VISIBLE))
                continue

            bounds = view.bounds_in_screen
            required_size = self.get_minimum_allowable_size(view, parameters)
            if self._meets_required_size(bounds, required_size, density):
                continue

            # Another view may be handling touches on this one's behalf
            has_delegate = False
            largest_hit_rect = None
            if view.touch_delegate_bounds:
                has_delegate = True
                if any(self._meets_required_size(hit_rect, required_size, density)
                       for hit_rect in view.touch_delegate_bounds):
                    continue
                largest_hit_rect = max(view.touch_delegate_bounds, key=lambda rect: rect.area)
            else:
                # Presence of a delegate without its hit area
                has_delegate = any(ancestor.has_touch_delegate is True for ancestor in view.ancestors())

            has_clickable_ancestor = self._has_qualifying_clickable_ancestor(view, parameters, density)
            is_clipped = self._has_qualifying_clipping_ancestor(view, required_size, density)
            is_web_content = any(ancestor.check_instance_of(WEB_VIEW_CLASS_NAME)
                                 for ancestor in view.ancestors())

            if (has_delegate and largest_hit_rect is None) or has_clickable_ancestor \
                    or is_clipped or is_web_content:
                result_type = ResultType.WARNING
            else:
                result_type = ResultType.ERROR

            # Real size past the scrollable edge is unknown
            is_at_scrollable_edge = view.is_against_scrollable_edge()
            if is_at_scrollable_edge:
                result_type = ResultType.NOT_RUN

            actual_height = round_half_up(bounds.height / density)
            actual_width = round_half_up(bounds.width / density)
            metadata = ResultMetadata()
            metadata.put_int(self.KEY_HEIGHT, actual_height)
            metadata.put_int(self.KEY_WIDTH, actual_width)
            if has_delegate:
                if largest_hit_rect is not None:
                    metadata.put_boolean(self.KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT, True)
                    metadata.put_int(self.KEY_HIT_RECT_WIDTH, round_half_up(largest_hit_rect.width / density))
                    metadata.put_int(self.KEY_HIT_RECT_HEIGHT, round_half_up(largest_hit_rect.height / density))
                else:
                    metadata.put_boolean(self.KEY_HAS_TOUCH_DELEGATE, True)
            if has_clickable_ancestor:
                metadata.put_boolean(self.KEY_HAS_CLICKABLE_ANCESTOR, True)
            if is_at_scrollable_edge:
                metadata.put_boolean(self.KEY_IS_AGAINST_SCROLLABLE_EDGE, True)
            if is_clipped:
                metadata.put_boolean(self.KEY_IS_CLIPPED_BY_ANCESTOR, True)
                metadata.put_int(self.KEY_NONCLIPPED_HEIGHT, view.nonclipped_height)
                metadata.put_int(self.KEY_NONCLIPPED_WIDTH, view.nonclipped_width)
            if is_web_content:
                metadata.put_boolean(self.KEY_IS_WEB_CONTENT, True)

            if custom_size is not None:
                metadata.put_int(self.KEY_CUSTOMIZED_REQUIRED_WIDTH, required_size.x)
                metadata.put_int(self.KEY_CUSTOMIZED_REQUIRED_HEIGHT, required_size.y)
            else:
                metadata.put_int(self.KEY_REQUIRED_HEIGHT, required_size.y)
                metadata.put_int(self.KEY_REQUIRED_WIDTH, required_size.x)

            if actual_height < required_size.y and actual_width < required_size.x:
                result_id = (self.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT if custom_size is None
                             else self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT)
            elif actual_height < required_size.y:
                result_id = (self.RESULT_ID_SMALL_TOUCH_TARGET_HEIGHT if custom_size is None
                             else self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_HEIGHT)
            else:
                result_id = (self.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH if custom_size is None
                             else self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH)
            results.append(self._result(result_type, view, result_id, metadata))

        self.logger.debug(f"Touch target size check produced {len(results)} results")
        return results

    def get_minimum_allowable_size(self, view: UIElement,
                                   parameters: Optional[Parameters] = None) -> Point:
        """
        Required (width, height) in dp for a view.

        Views in an input method window may be smaller, as may views against the
        screen edge on the axis that touches it. Without the real display size,
        the most lenient threshold applies on both axes.

        Args:
            view: The view being measured
            parameters: May carry a custom touch target size that rescales every threshold

        Returns:
            Point - required width as x, required height as y
        """
        custom_size = parameters.custom_touch_target_size if parameters is not None else None
        if custom_size is not None:
            min_width = min_height = custom_size
            ime_width = round_half_up(self.TOUCH_TARGET_MIN_WIDTH_IME_CONTAINER * custom_size
                                      / self.TOUCH_TARGET_MIN_WIDTH)
            ime_height = round_half_up(self.TOUCH_TARGET_MIN_HEIGHT_IME_CONTAINER * custom_size
                                       / self.TOUCH_TARGET_MIN_HEIGHT)
            edge_width = round_half_up(self.TOUCH_TARGET_MIN_WIDTH_ON_EDGE * custom_size
                                       / self.TOUCH_TARGET_MIN_WIDTH)
            edge_height = round_half_up(self.TOUCH_TARGET_MIN_HEIGHT_ON_EDGE * custom_size
                                        / self.TOUCH_TARGET_MIN_HEIGHT)
        else:
            min_width, min_height = self.TOUCH_TARGET_MIN_WIDTH, self.TOUCH_TARGET_MIN_HEIGHT
            ime_width = self.TOUCH_TARGET_MIN_WIDTH_IME_CONTAINER
            ime_height = self.TOUCH_TARGET_MIN_HEIGHT_IME_CONTAINER
            edge_width = self.TOUCH_TARGET_MIN_WIDTH_ON_EDGE
            edge_height = self.TOUCH_TARGET_MIN_HEIGHT_ON_EDGE

        if view.window.type == WindowType.INPUT_METHOD:
            return Point(ime_width, ime_height)

        real_metrics = view.window.hierarchy.device_state.default_display_info.real_metrics
        if real_metrics is None:
            return Point(min(edge_width, min_width), min(edge_height, min_height))

        bounds = view.bounds_in_screen
        against_side = bounds.left == 0 or bounds.right == real_metrics.width_pixels
        against_top_or_bottom = bounds.top == 0 or bounds.bottom == real_metrics.height_pixels
        return Point(edge_width if against_side else min_width,
                     edge_height if against_top_or_bottom else min_height)

    @staticmethod
    def _meets_required_size(bounds: Rect, required_size: Point, density: float) -> bool:
        return (round_half_up(bounds.width / density) >= required_size.x
                and round_half_up(bounds.height / density) >= required_size.y)

    def _has_qualifying_clickable_ancestor(self, view: UIElement, parameters: Optional[Parameters],
                                           density: float) -> bool:
        """An ancestor with the same click affordance that is large enough, and not a list"""
        is_clickable = view.clickable is True
        is_long_clickable = view.long_clickable is True
        for ancestor in view.ancestors():
            if (ancestor.clickable is True and is_clickable) or \
                    (ancestor.long_clickable is True and is_long_clickable):
                if ancestor.check_instance_of(ABS_LIST_VIEW_CLASS_NAME):
                    continue
                required_size = self.get_minimum_allowable_size(ancestor, parameters)
                if self._meets_required_size(ancestor.bounds_in_screen, required_size, density):
                    return True
        return False

    @staticmethod
    def _has_qualifying_clipping_ancestor(view: UIElement, required_size: Point,
                                          density: float) -> bool:
        """The visible size is too small on an axis where the unclipped size is not"""
        if view.nonclipped_height is None or view.nonclipped_width is None:
            return False
        bounds = view.bounds_in_screen
        clipped_too_small_y = int(bounds.height / density) < required_size.y
        clipped_too_small_x = int(bounds.width / density) < required_size.x
        nonclipped_too_small_y = int(view.nonclipped_height / density) < required_size.y
        nonclipped_too_small_x = int(view.nonclipped_width / density) < required_size.x
        return (clipped_too_small_y and not nonclipped_too_small_y) or \
            (clipped_too_small_x and not nonclipped_too_small_x)

    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        generated = self._generate_message_for_result_id(locale, result_id)
        if generated is not None:
            return generated
        if metadata is None:
            raise ValueError(f"Result id {result_id} requires metadata")

        required_height = metadata.get_int(self.KEY_REQUIRED_HEIGHT, self.TOUCH_TARGET_MIN_HEIGHT)
        required_width = metadata.get_int(self.KEY_REQUIRED_WIDTH, self.TOUCH_TARGET_MIN_WIDTH)
        if result_id == self.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT:
            message = get_string(locale, "result_message_small_touch_target_width_and_height") % (
                metadata.get_int(self.KEY_WIDTH), metadata.get_int(self.KEY_HEIGHT),
                required_width, required_height)
        elif result_id == self.RESULT_ID_SMALL_TOUCH_TARGET_HEIGHT:
            message = get_string(locale, "result_message_small_touch_target_height") % (
                metadata.get_int(self.KEY_HEIGHT), required_height)
        elif result_id == self.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH:
            message = get_string(locale, "result_message_small_touch_target_width") % (
                metadata.get_int(self.KEY_WIDTH), required_width)
        elif result_id == self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT:
            message = get_string(locale, "result_message_customized_small_touch_target_width_and_height") % (
                metadata.get_int(self.KEY_WIDTH), metadata.get_int(self.KEY_HEIGHT),
                metadata.get_int(self.KEY_CUSTOMIZED_REQUIRED_WIDTH),
                metadata.get_int(self.KEY_CUSTOMIZED_REQUIRED_HEIGHT))
        elif result_id == self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_HEIGHT:
            message = get_string(locale, "result_message_customized_small_touch_target_height") % (
                metadata.get_int(self.KEY_HEIGHT), metadata.get_int(self.KEY_CUSTOMIZED_REQUIRED_HEIGHT))
        elif result_id == self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH:
            message = get_string(locale, "result_message_customized_small_touch_target_width") % (
                metadata.get_int(self.KEY_WIDTH), metadata.get_int(self.KEY_CUSTOMIZED_REQUIRED_WIDTH))
        else:
            raise self._unsupported_result_id(result_id)
        return message + self._metadata_addenda(locale, metadata)

    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        generated = self._generate_message_for_result_id(locale, result_id)
        if generated is not None:
            return generated
        if self.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT <= result_id <= \
                self.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH:
            return get_string(locale, "result_message_brief_small_touch_target")
        raise self._unsupported_result_id(result_id)

    def get_title_message(self, locale: str) -> str:
        return get_string(locale, "check_title_touch_target_size")

    def get_secondary_priority(self, result: CheckResult) -> Optional[float]:
        """
        Smaller targets rank higher. Among results with the same smaller dimension,
        the one that is also small on the other axis ranks higher.
        """
        metadata = result.metadata
        if metadata is None:
            return None
        width = metadata.get_int(self.KEY_WIDTH, _INT_MAX)
        height = metadata.get_int(self.KEY_HEIGHT, _INT_MAX)
        primary = min(width, height)
        if primary == _INT_MAX:
            return None
        secondary = 1.0 / math.exp(max(width, height) / 30.0)
        return -(primary - secondary)

    def _generate_message_for_result_id(self, locale: str, result_id: int) -> Optional[str]:
        if result_id == self.RESULT_ID_NOT_CLICKABLE:
            return get_string(locale, "result_message_not_clickable")
        if result_id == self.RESULT_ID_NOT_VISIBLE:
            return get_string(locale, "result_message_not_visible")
        return None

    def _metadata_addenda(self, locale: str, metadata: ResultMetadata) -> str:
        addenda = []
        if metadata.get_boolean(self.KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT, False):
            addenda.append(get_string(locale, "result_message_addendum_touch_delegate_with_hit_rect") % (
                metadata.get_int(self.KEY_HIT_RECT_WIDTH), metadata.get_int(self.KEY_HIT_RECT_HEIGHT)))
        elif metadata.get_boolean(self.KEY_HAS_TOUCH_DELEGATE, False):
            addenda.append(get_string(locale, "result_message_addendum_touch_delegate"))

        # Web content supersedes the more generic clickable ancestor note
        if metadata.get_boolean(self.KEY_IS_WEB_CONTENT, False):
            addenda.append(get_string(locale, "result_message_addendum_web_touch_target_size"))
        elif metadata.get_boolean(self.KEY_HAS_CLICKABLE_ANCESTOR, False):
            addenda.append(get_string(locale, "result_message_addendum_clickable_ancestor"))

        if metadata.get_boolean(self.KEY_IS_CLIPPED_BY_ANCESTOR, False):
            addenda.append(get_string(locale, "result_message_addendum_clipped_by_ancestor") % (
                metadata.get_int(self.KEY_NONCLIPPED_WIDTH), metadata.get_int(self.KEY_NONCLIPPED_HEIGHT)))
        if metadata.get_boolean(self.KEY_IS_AGAINST_SCROLLABLE_EDGE, False):
            addenda.append(get_string(locale, "result_message_addendum_against_scrollable_edge"))
        return "".join(" " + addendum for addendum in addenda)


_INT_MAX = 2 ** 31 - 1
