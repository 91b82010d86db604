from __future__ import annotations

import json
import logging

import pytest

from accessibility_check import Parameters
from check_results import ResultType
from color_contrast_analyzer import WHITE
from conftest import new_builder, solid_capture
from models import LayoutParams, Rect
from static_a11y_framework import (
    AccessibilityCheckPreset,
    StaticAccessibilityAnalyzer,
    get_checks_for_preset,
)
from touch_target_size_check import TouchTargetSizeCheck


def _sample_hierarchy():
    builder, window, root = new_builder()
    builder.add_view(window, root, class_name="android.widget.ImageButton", clickable=True,
                     visible_to_user=True, bounds_in_screen=Rect(100, 100, 140, 140),
                     layout_params=LayoutParams(LayoutParams.WRAP_CONTENT, LayoutParams.WRAP_CONTENT))
    builder.add_view(window, root, class_name="android.widget.TextView", text="Caption",
                     visible_to_user=True, bounds_in_screen=Rect(100, 300, 400, 350),
                     text_color=0xFF999999, background_drawable_color=WHITE)
    return builder.build()


def test_presets() -> None:
    assert get_checks_for_preset(AccessibilityCheckPreset.NO_CHECKS) == []
    names = [type(check).__name__ for check in get_checks_for_preset(AccessibilityCheckPreset.LATEST)]
    assert names == ["TouchTargetSizeCheck", "TextContrastCheck", "ImageContrastCheck",
                     "SpeakableTextPresentCheck", "DuplicateSpeakableTextCheck"]


def test_run_analysis_sorts_by_severity() -> None:
    analyzer = StaticAccessibilityAnalyzer(_sample_hierarchy())
    results = analyzer.run_analysis()

    ranks = [r.type.rank for r in results]
    assert ranks == sorted(ranks)
    errors = [r for r in results if r.type == ResultType.ERROR]
    assert {r.check_name for r in errors} == {
        "TouchTargetSizeCheck", "TextContrastCheck", "SpeakableTextPresentCheck"}


def test_no_checks_gives_no_results() -> None:
    analyzer = StaticAccessibilityAnalyzer(_sample_hierarchy(),
                                           checks=get_checks_for_preset(AccessibilityCheckPreset.NO_CHECKS))
    assert analyzer.run_analysis() == []
    assert analyzer.generate_report()['total_results'] == 0


def test_generate_report() -> None:
    analyzer = StaticAccessibilityAnalyzer(_sample_hierarchy())
    analyzer.run_analysis()
    report = analyzer.generate_report()

    assert report['summary']['by_severity']['NOT_RUN'] == 0
    assert report['summary']['by_severity']['ERROR'] == 3
    assert report['total_results'] == len(report['findings'])
    touch = next(f for f in report['findings'] if f['check'] == "TouchTargetSizeCheck")
    assert touch['help_url'] == "https://support.google.com/accessibility/android/answer/7101858"
    assert touch['short_message']
    assert [s['attribute'] for s in touch['fix_suggestions'][0]['suggestions']] == [
        "android:minWidth", "android:minHeight"]
    json.dumps(report)

    with_not_run = analyzer.generate_report(include_not_run=True)
    assert with_not_run['summary']['by_severity']['NOT_RUN'] > 0


def test_failures_are_logged_and_raised(caplog) -> None:
    class BrokenCheck(TouchTargetSizeCheck):
        def run_check_on_hierarchy(self, hierarchy, from_root=None, parameters=None):
            raise RuntimeError("boom")

    analyzer = StaticAccessibilityAnalyzer(_sample_hierarchy(), checks=[BrokenCheck()])
    with caplog.at_level(logging.ERROR, logger="static_a11y_framework"):
        with pytest.raises(RuntimeError, match="boom"):
            analyzer.run_analysis()
    assert "Analysis failed: boom" in caplog.text


def test_mark_issues(tmp_path) -> None:
    parameters = Parameters(screen_capture=solid_capture())
    analyzer = StaticAccessibilityAnalyzer(_sample_hierarchy(), parameters=parameters)
    analyzer.run_analysis()

    marked = analyzer.mark_issues(output_dir=str(tmp_path), image_name="screen")
    assert marked.shape == (1920, 1080, 3)
    assert (tmp_path / "screen.png").exists()
    assert StaticAccessibilityAnalyzer(_sample_hierarchy()).mark_issues(str(tmp_path)) is None
