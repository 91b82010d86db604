from __future__ import annotations

from check_results import ResultType
from conftest import new_builder
from duplicate_speakable_text_check import DuplicateSpeakableTextCheck
from element_utils import get_speakable_text, is_potentially_obscured, should_focus_view
from models import Rect
from speakable_text_present_check import SpeakableTextPresentCheck


def _results_for(results, element):
    return [r for r in results if r.element is element]


def test_speakable_text_joins_unfocusable_children() -> None:
    builder, window, root = new_builder()
    row = builder.add_view(window, root, class_name="android.widget.LinearLayout", visible_to_user=True)
    builder.add_view(window, row, class_name="android.widget.TextView", text="Alice", visible_to_user=True)
    builder.add_view(window, row, class_name="android.widget.TextView", text="Online", visible_to_user=True)
    builder.build()

    assert str(get_speakable_text(row)) == "Alice, Online"


def test_content_description_overrides_children() -> None:
    builder, window, root = new_builder()
    card = builder.add_view(window, root, content_description="Profile card", visible_to_user=True)
    builder.add_view(window, card, class_name="android.widget.TextView", text="Alice", visible_to_user=True)
    builder.build()

    assert str(get_speakable_text(card)) == "Profile card"


def test_checked_state_and_switch() -> None:
    builder, window, root = new_builder()
    checkbox = builder.add_view(window, root, class_name="android.widget.CheckBox", text="Wi-Fi",
                                checkable=True, checked=True, visible_to_user=True)
    switch = builder.add_view(window, root, class_name="android.widget.Switch",
                              checkable=True, checked=False, visible_to_user=True)
    builder.build()

    assert str(get_speakable_text(checkbox)) == "checked, Wi-Fi"
    assert str(get_speakable_text(switch)) == "off"


def test_label_is_appended() -> None:
    builder, window, root = new_builder()
    field = builder.add_view(window, root, class_name="android.widget.EditText", hint_text="Enter name",
                             visible_to_user=True)
    builder.add_view(window, root, class_name="android.widget.TextView", text="Name",
                     visible_to_user=True, label_for=field)
    builder.build()

    assert str(get_speakable_text(field)) == "Enter name, Name"


def test_should_focus_view() -> None:
    builder, window, root = new_builder()
    button = builder.add_view(window, root, class_name="android.widget.Button", clickable=True,
                              visible_to_user=True)
    hidden = builder.add_view(window, root, class_name="android.widget.Button", clickable=True,
                              visible_to_user=False)
    inner_text = builder.add_view(window, button, class_name="android.widget.TextView", text="OK",
                                  visible_to_user=True)
    builder.build()

    assert should_focus_view(button)
    assert not should_focus_view(hidden)
    # Spoken as part of the focusable button
    assert not should_focus_view(inner_text)
    assert not should_focus_view(root)


def test_overlapping_later_sibling_obscures() -> None:
    builder, window, root = new_builder()
    label = builder.add_view(window, root, drawing_order=1, bounds_in_screen=Rect(0, 0, 100, 100))
    builder.add_view(window, root, drawing_order=2, bounds_in_screen=Rect(50, 50, 150, 150))
    apart = builder.add_view(window, root, drawing_order=0, bounds_in_screen=Rect(500, 500, 600, 600))
    builder.build()

    assert is_potentially_obscured(label)
    assert not is_potentially_obscured(apart)


def test_speakable_text_present() -> None:
    builder, window, root = new_builder()
    unlabeled = builder.add_view(window, root, class_name="android.widget.ImageButton", clickable=True,
                                 visible_to_user=True)
    labeled = builder.add_view(window, root, class_name="android.widget.ImageButton", clickable=True,
                               content_description="Share", visible_to_user=True)
    invisible = builder.add_view(window, root, clickable=True, visible_to_user=False)
    unimportant = builder.add_view(window, root, clickable=True, visible_to_user=True,
                                   important_for_accessibility=False)
    web = builder.add_view(window, root, class_name="android.webkit.WebView", visible_to_user=True)
    hierarchy = builder.build()

    results = SpeakableTextPresentCheck().run_check_on_hierarchy(hierarchy)
    assert [(r.type, r.result_id) for r in _results_for(results, unlabeled)] == [
        (ResultType.ERROR, SpeakableTextPresentCheck.RESULT_ID_MISSING_SPEAKABLE_TEXT)]
    assert _results_for(results, labeled) == []
    assert [r.result_id for r in _results_for(results, invisible)] == [
        SpeakableTextPresentCheck.RESULT_ID_NOT_VISIBLE]
    assert [r.result_id for r in _results_for(results, unimportant)] == [
        SpeakableTextPresentCheck.RESULT_ID_NOT_IMPORTANT_FOR_ACCESSIBILITY]
    assert [r.result_id for r in _results_for(results, web)] == [
        SpeakableTextPresentCheck.RESULT_ID_WEB_CONTENT]
    assert [r.result_id for r in _results_for(results, root)] == [
        SpeakableTextPresentCheck.RESULT_ID_SHOULD_NOT_FOCUS]


def test_duplicate_clickable_text_is_a_warning() -> None:
    builder, window, root = new_builder()
    first = builder.add_view(window, root, class_name="android.widget.Button", text="Submit",
                             clickable=True, visible_to_user=True)
    builder.add_view(window, root, class_name="android.widget.Button", text="Submit",
                     clickable=True, visible_to_user=True)
    builder.add_view(window, root, class_name="android.widget.Button", text="Cancel",
                     clickable=True, visible_to_user=True)
    hierarchy = builder.build()

    results = DuplicateSpeakableTextCheck().run_check_on_hierarchy(hierarchy)
    assert len(results) == 1
    result = results[0]
    assert result.type == ResultType.WARNING
    assert result.element is first
    assert result.result_id == DuplicateSpeakableTextCheck.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT
    assert result.metadata.get_string(DuplicateSpeakableTextCheck.KEY_SPEAKABLE_TEXT) == "Submit"
    assert result.metadata.get_int(DuplicateSpeakableTextCheck.KEY_CONFLICTING_VIEW_COUNT) == 1
    assert result.get_message() == (
        "This clickable item's speakable text: \"Submit\" is identical to that of 1 other item(s).")


def test_duplicate_plain_text_is_info() -> None:
    builder, window, root = new_builder()
    first = builder.add_view(window, root, class_name="android.widget.TextView", text="Total",
                             visible_to_user=True)
    builder.add_view(window, root, class_name="android.widget.TextView", text="Total",
                     visible_to_user=True)
    hierarchy = builder.build()

    results = DuplicateSpeakableTextCheck().run_check_on_hierarchy(hierarchy)
    assert [(r.type, r.element) for r in results] == [(ResultType.INFO, first)]
    assert results[0].get_secondary_priority() == 1.0


def test_duplicates_reported_only_within_root() -> None:
    builder, window, root = new_builder()
    left = builder.add_view(window, root, visible_to_user=True)
    right = builder.add_view(window, root, visible_to_user=True)
    builder.add_view(window, left, class_name="android.widget.Button", text="Go",
                     clickable=True, visible_to_user=True)
    in_right = builder.add_view(window, right, class_name="android.widget.Button", text="Go",
                                clickable=True, visible_to_user=True)
    hierarchy = builder.build()

    results = DuplicateSpeakableTextCheck().run_check_on_hierarchy(hierarchy, from_root=right)
    assert [r.element for r in results] == [in_right]
    assert results[0].metadata.get_int(DuplicateSpeakableTextCheck.KEY_CONFLICTING_VIEW_COUNT) == 0
