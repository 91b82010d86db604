from __future__ import annotations

import pytest

from check_results import (
    CheckResult,
    ResultType,
    filter_results_by_type,
    filter_results_for_check,
    filter_results_for_element,
    sort_results,
    suppress_results,
)
from conftest import new_builder
from duplicate_speakable_text_check import DuplicateSpeakableTextCheck
from result_metadata import MetadataType, MetadataTypeError, MissingMetadataError, ResultMetadata
from speakable_text_present_check import SpeakableTextPresentCheck
from touch_target_size_check import TouchTargetSizeCheck


def _touch_result(result_type: ResultType, width: int, height: int, element=None) -> CheckResult:
    metadata = ResultMetadata()
    metadata.put_int(TouchTargetSizeCheck.KEY_WIDTH, width)
    metadata.put_int(TouchTargetSizeCheck.KEY_HEIGHT, height)
    return CheckResult(TouchTargetSizeCheck, result_type, element,
                       TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT, metadata)


def test_severity_order() -> None:
    assert ResultType.ERROR < ResultType.WARNING < ResultType.INFO
    assert ResultType.INFO < ResultType.RESOLVED < ResultType.NOT_RUN < ResultType.SUPPRESSED
    assert sorted([ResultType.NOT_RUN, ResultType.ERROR, ResultType.INFO]) == [
        ResultType.ERROR, ResultType.INFO, ResultType.NOT_RUN]


def test_wire_numbers_are_stable() -> None:
    assert [t.wire_number for t in ResultType] == [1, 2, 3, 4, 5, 6]
    assert ResultType.from_wire_number(5) is ResultType.NOT_RUN
    with pytest.raises(ValueError):
        ResultType.from_wire_number(0)


def test_sort_results_by_severity_then_priority() -> None:
    not_run = CheckResult(SpeakableTextPresentCheck, ResultType.NOT_RUN, None,
                          SpeakableTextPresentCheck.RESULT_ID_NOT_VISIBLE)
    warning = _touch_result(ResultType.WARNING, 40, 40)
    large_error = _touch_result(ResultType.ERROR, 40, 40)
    small_error = _touch_result(ResultType.ERROR, 10, 10)

    ordered = sort_results([not_run, warning, large_error, small_error])
    assert ordered == [small_error, large_error, warning, not_run]


def test_sort_results_is_stable_without_priority() -> None:
    first = CheckResult(SpeakableTextPresentCheck, ResultType.NOT_RUN, None,
                        SpeakableTextPresentCheck.RESULT_ID_NOT_VISIBLE)
    second = CheckResult(SpeakableTextPresentCheck, ResultType.NOT_RUN, None,
                         SpeakableTextPresentCheck.RESULT_ID_SHOULD_NOT_FOCUS)
    third = CheckResult(SpeakableTextPresentCheck, ResultType.NOT_RUN, None,
                        SpeakableTextPresentCheck.RESULT_ID_WEB_CONTENT)
    assert sort_results([first, second, third]) == [first, second, third]


def test_filters_and_suppression() -> None:
    builder, window, root = new_builder()
    button = builder.add_view(window, root, class_name="android.widget.Button")
    builder.build()
    on_button = _touch_result(ResultType.ERROR, 20, 20, button)
    other = CheckResult(DuplicateSpeakableTextCheck, ResultType.INFO, root,
                        DuplicateSpeakableTextCheck.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT)
    results = [on_button, other]

    assert filter_results_by_type(results, ResultType.ERROR) == [on_button]
    assert filter_results_for_element(results, root) == [other]
    assert filter_results_for_check(results, TouchTargetSizeCheck) == [on_button]

    suppressed = suppress_results(results, lambda r: r.element is button)
    assert suppressed[0].type == ResultType.SUPPRESSED
    assert suppressed[1] is other
    assert on_button.type == ResultType.ERROR


def test_metadata_missing_key() -> None:
    metadata = ResultMetadata()
    with pytest.raises(MissingMetadataError) as excinfo:
        metadata.get_int("k")
    assert str(excinfo.value) == "No ResultMetadata element found for key 'k'."
    assert isinstance(excinfo.value, KeyError)
    assert metadata.get_int("k", 7) == 7


def test_metadata_wrong_kind() -> None:
    metadata = ResultMetadata()
    metadata.put_string("k", "text")
    with pytest.raises(MetadataTypeError) as excinfo:
        metadata.get_int("k")
    assert str(excinfo.value) == (
        "Invalid type 'INT' requested from ResultMetadata for key 'k'.  Found type 'STRING' instead.")
    assert isinstance(excinfo.value, TypeError)


def test_metadata_kinds_and_copy() -> None:
    metadata = ResultMetadata()
    metadata.put_boolean("flag", True)
    metadata.put_int("color", 0xFF112233)
    metadata.put_double("ratio", 4.2)
    metadata.put_string_list("names", ["a", "b"])

    assert metadata.get_type("color") == MetadataType.INT
    assert metadata.get_int("color") == 0xFF112233
    assert "flag" in metadata

    clone = metadata.copy()
    assert clone == metadata
    clone.get_string_list("names").append("c")
    assert metadata.get_string_list("names") == ["a", "b"]

    with pytest.raises(MetadataTypeError):
        metadata.put_int("bad", True)


def test_list_values_are_returned_as_copies() -> None:
    metadata = ResultMetadata()
    metadata.put_string_list("names", ["a"])
    metadata.put_integer_list("colors", [0xFF000000])

    metadata.get_string_list("names").append("b")
    metadata.get_integer_list("colors").append(0xFFFFFFFF)

    assert metadata.get_string_list("names") == ["a"]
    assert metadata.get_integer_list("colors") == [0xFF000000]
