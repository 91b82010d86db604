from __future__ import annotations

import pytest

from accessibility_check import Parameters
from check_results import ResultType, sort_results
from conftest import new_builder
from models import Rect, WindowType
from touch_target_size_check import TouchTargetSizeCheck
from view_hierarchy import HierarchyBuilder


def _findings(results):
    return [r for r in results if r.type != ResultType.NOT_RUN]


def test_small_target_is_an_error() -> None:
    builder, window, root = new_builder()
    button = builder.add_view(window, root, class_name="android.widget.Button", clickable=True,
                              visible_to_user=True, bounds_in_screen=Rect(100, 100, 140, 140))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert len(results) == 1
    result = results[0]
    assert result.type == ResultType.ERROR
    assert result.element is button
    assert result.result_id == TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_WIDTH) == 40
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_HEIGHT) == 40
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_REQUIRED_WIDTH) == 48
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_REQUIRED_HEIGHT) == 48
    assert result.get_message().startswith("This item's size is 40dp x 40dp.")


def test_sizes_are_measured_in_dp() -> None:
    builder, window, root = new_builder(density=2.0)
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(200, 200, 300, 300))
    hierarchy = builder.build()

    # 100px at density 2 is 50dp
    assert _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)) == []


def test_only_height_too_small() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 300, 130))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert [r.result_id for r in results] == [TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_HEIGHT]


def test_touch_delegate_large_enough_hides_result() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 150, 120),
                     touch_delegate_bounds=[Rect(90, 90, 160, 160)])
    hierarchy = builder.build()

    assert _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)) == []


def test_delegate_on_ancestor_downgrades_to_warning() -> None:
    builder, window, root = new_builder()
    container = builder.add_view(window, root, has_touch_delegate=True, visible_to_user=True,
                                 bounds_in_screen=Rect(50, 50, 500, 500))
    builder.add_view(window, container, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 120, 120))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert len(results) == 1
    assert results[0].type == ResultType.WARNING
    assert results[0].metadata.get_boolean(TouchTargetSizeCheck.KEY_HAS_TOUCH_DELEGATE)


def test_large_clickable_ancestor_downgrades_to_warning() -> None:
    builder, window, root = new_builder()
    row = builder.add_view(window, root, clickable=True, visible_to_user=True,
                           bounds_in_screen=Rect(0, 100, 1080, 300))
    icon = builder.add_view(window, row, clickable=True, visible_to_user=True,
                            bounds_in_screen=Rect(100, 150, 130, 180))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert [r.element for r in results] == [icon]
    assert results[0].type == ResultType.WARNING
    assert results[0].metadata.get_boolean(TouchTargetSizeCheck.KEY_HAS_CLICKABLE_ANCESTOR)


def test_unclickable_and_invisible_views_are_not_run() -> None:
    builder, window, root = new_builder()
    hidden = builder.add_view(window, root, clickable=True, visible_to_user=False,
                              bounds_in_screen=Rect(100, 100, 110, 110))
    hierarchy = builder.build()

    results = TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)
    assert [(r.element, r.result_id) for r in results] == [
        (root, TouchTargetSizeCheck.RESULT_ID_NOT_CLICKABLE),
        (hidden, TouchTargetSizeCheck.RESULT_ID_NOT_VISIBLE),
    ]
    assert all(r.type == ResultType.NOT_RUN for r in results)


def test_edge_and_ime_thresholds(device_state) -> None:
    builder, window, root = new_builder()
    edge_view = builder.add_view(window, root, clickable=True, visible_to_user=True,
                                 bounds_in_screen=Rect(0, 100, 40, 140))
    builder.build()
    check = TouchTargetSizeCheck()
    minimum = check.get_minimum_allowable_size(edge_view)
    assert (minimum.x, minimum.y) == (32, 48)

    ime_builder = HierarchyBuilder(device_state)
    ime_builder.add_window(active=True, type=WindowType.APPLICATION)
    keyboard = ime_builder.add_window(active=False, type=WindowType.INPUT_METHOD)
    key = ime_builder.add_view(keyboard, clickable=True, visible_to_user=True,
                               bounds_in_screen=Rect(100, 1500, 140, 1540))
    ime_builder.build()
    minimum = check.get_minimum_allowable_size(key)
    assert (minimum.x, minimum.y) == (32, 32)


def test_without_real_metrics_edge_threshold_applies_everywhere() -> None:
    builder, window, root = new_builder(with_real_metrics=False)
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 140, 140))
    hierarchy = builder.build()

    assert _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)) == []


def test_custom_touch_target_size() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 150, 150))
    hierarchy = builder.build()
    parameters = Parameters(custom_touch_target_size=60)

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy, parameters=parameters))
    assert len(results) == 1
    result = results[0]
    assert result.result_id == TouchTargetSizeCheck.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_CUSTOMIZED_REQUIRED_WIDTH) == 60
    assert TouchTargetSizeCheck.KEY_REQUIRED_WIDTH not in result.metadata


def test_scrollable_edge_makes_result_not_run() -> None:
    builder, window, root = new_builder()
    scroller = builder.add_view(window, root, class_name="android.widget.ScrollView",
                                scrollable=True, can_scroll_forward=True, visible_to_user=True,
                                bounds_in_screen=Rect(0, 100, 1080, 1000))
    builder.add_view(window, scroller, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 980, 140, 1000))
    hierarchy = builder.build()

    results = TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)
    flagged = [r for r in results if r.metadata is not None]
    assert len(flagged) == 1
    assert flagged[0].type == ResultType.NOT_RUN
    assert flagged[0].metadata.get_boolean(TouchTargetSizeCheck.KEY_IS_AGAINST_SCROLLABLE_EDGE)


def test_side_of_vertical_scroller_is_not_a_scroll_edge() -> None:
    builder, window, root = new_builder()
    forward = builder.add_view(window, root, class_name="android.widget.ScrollView",
                               scrollable=True, can_scroll_forward=True, visible_to_user=True,
                               bounds_in_screen=Rect(100, 100, 900, 1500))
    right_button = builder.add_view(window, forward, clickable=True, visible_to_user=True,
                                    bounds_in_screen=Rect(860, 700, 900, 740))
    backward = builder.add_view(window, root, class_name="android.widget.ScrollView",
                                scrollable=True, can_scroll_backward=True, visible_to_user=True,
                                bounds_in_screen=Rect(100, 100, 900, 1500))
    left_button = builder.add_view(window, backward, clickable=True, visible_to_user=True,
                                   bounds_in_screen=Rect(100, 700, 140, 740))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert [r.element for r in results] == [right_button, left_button]
    for result in results:
        assert result.type == ResultType.ERROR
        assert TouchTargetSizeCheck.KEY_IS_AGAINST_SCROLLABLE_EDGE not in result.metadata


def test_horizontal_scroller_edge_is_left_and_right() -> None:
    builder, window, root = new_builder()
    scroller = builder.add_view(window, root, class_name="android.widget.HorizontalScrollView",
                                scrollable=True, can_scroll_forward=True, visible_to_user=True,
                                bounds_in_screen=Rect(100, 100, 900, 500))
    builder.add_view(window, scroller, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(860, 300, 900, 340))
    bottom_button = builder.add_view(window, scroller, clickable=True, visible_to_user=True,
                                     bounds_in_screen=Rect(400, 460, 440, 500))
    hierarchy = builder.build()

    results = [r for r in TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy)
               if r.metadata is not None]
    assert [r.type for r in results] == [ResultType.NOT_RUN, ResultType.ERROR]
    assert results[0].metadata.get_boolean(TouchTargetSizeCheck.KEY_IS_AGAINST_SCROLLABLE_EDGE)
    assert results[1].element is bottom_button


def test_clipped_view_reports_its_full_size() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 140, 140),
                     nonclipped_width=60, nonclipped_height=60)
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert len(results) == 1
    result = results[0]
    assert result.type == ResultType.WARNING
    assert result.metadata.get_boolean(TouchTargetSizeCheck.KEY_IS_CLIPPED_BY_ANCESTOR)
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_NONCLIPPED_WIDTH) == 60
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_NONCLIPPED_HEIGHT) == 60


def test_web_content_is_a_warning() -> None:
    builder, window, root = new_builder()
    web_view = builder.add_view(window, root, class_name="android.webkit.WebView", visible_to_user=True,
                                bounds_in_screen=Rect(50, 50, 1000, 1000))
    link = builder.add_view(window, web_view, clickable=True, visible_to_user=True,
                            bounds_in_screen=Rect(100, 100, 140, 120))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert [r.element for r in results] == [link]
    assert results[0].type == ResultType.WARNING
    assert results[0].metadata.get_boolean(TouchTargetSizeCheck.KEY_IS_WEB_CONTENT)


def test_small_touch_delegates_report_the_largest_hit_rect() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 140, 140),
                     touch_delegate_bounds=[Rect(100, 100, 130, 130), Rect(95, 95, 139, 137)])
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert len(results) == 1
    result = results[0]
    assert result.type == ResultType.ERROR
    assert result.metadata.get_boolean(TouchTargetSizeCheck.KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT)
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_HIT_RECT_WIDTH) == 44
    assert result.metadata.get_int(TouchTargetSizeCheck.KEY_HIT_RECT_HEIGHT) == 42


def test_clickable_list_is_not_a_qualifying_ancestor() -> None:
    builder, window, root = new_builder()
    list_view = builder.add_view(window, root, class_name="android.widget.ListView", clickable=True,
                                 visible_to_user=True, bounds_in_screen=Rect(50, 100, 1000, 1000))
    item = builder.add_view(window, list_view, clickable=True, visible_to_user=True,
                            bounds_in_screen=Rect(100, 150, 140, 190))
    hierarchy = builder.build()

    results = _findings(TouchTargetSizeCheck().run_check_on_hierarchy(hierarchy))
    assert [r.element for r in results] == [item]
    assert results[0].type == ResultType.ERROR
    assert TouchTargetSizeCheck.KEY_HAS_CLICKABLE_ANCESTOR not in results[0].metadata


def test_small_on_both_axes_ranks_first() -> None:
    builder, window, root = new_builder()
    tall = builder.add_view(window, root, clickable=True, visible_to_user=True,
                            bounds_in_screen=Rect(300, 100, 340, 200))
    square = builder.add_view(window, root, clickable=True, visible_to_user=True,
                              bounds_in_screen=Rect(100, 100, 140, 140))
    hierarchy = builder.build()
    check = TouchTargetSizeCheck()

    results = _findings(check.run_check_on_hierarchy(hierarchy))
    by_element = {r.element.id: r for r in results}
    assert check.get_secondary_priority(by_element[square.id]) > check.get_secondary_priority(by_element[tall.id])
    assert [r.element for r in sort_results(results)] == [square, tall]


def test_running_twice_gives_equal_results() -> None:
    builder, window, root = new_builder()
    builder.add_view(window, root, clickable=True, visible_to_user=True,
                     bounds_in_screen=Rect(100, 100, 120, 160))
    hierarchy = builder.build()
    check = TouchTargetSizeCheck()

    assert check.run_check_on_hierarchy(hierarchy) == check.run_check_on_hierarchy(hierarchy)


def test_invalid_custom_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        Parameters(custom_touch_target_size=0)


def test_unknown_result_id_message() -> None:
    with pytest.raises(ValueError, match="Unsupported result id"):
        TouchTargetSizeCheck().get_short_message_for_result_data("en_US", 99, None)
