import logging
import os
from collections import Counter
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np

from accessibility_check import AccessibilityHierarchyCheck, Parameters
from check_results import CheckResult, ResultType, sort_results
from duplicate_speakable_text_check import DuplicateSpeakableTextCheck
from fix_suggestions import get_fix_suggestions
from image_contrast_check import ImageContrastCheck
from screen_capture import mark_results_on_capture
from speakable_text_present_check import SpeakableTextPresentCheck
from text_contrast_check import TextContrastCheck
from touch_target_size_check import TouchTargetSizeCheck
from view_hierarchy import AccessibilityHierarchy, UIElement


class AccessibilityCheckPreset(Enum):
    LATEST = "LATEST"
    NO_CHECKS = "NO_CHECKS"


_LATEST_CHECKS = (
    TouchTargetSizeCheck,
    TextContrastCheck,
    ImageContrastCheck,
    SpeakableTextPresentCheck,
    DuplicateSpeakableTextCheck,
)


def get_checks_for_preset(preset: AccessibilityCheckPreset) -> List[AccessibilityHierarchyCheck]:
    """Fresh check instances for a preset"""
    if preset == AccessibilityCheckPreset.NO_CHECKS:
        return []
    if preset == AccessibilityCheckPreset.LATEST:
        return [check_class() for check_class in _LATEST_CHECKS]
    raise ValueError(f"Unknown preset {preset}")


class StaticAccessibilityAnalyzer:
    def __init__(self, hierarchy: AccessibilityHierarchy, parameters: Optional[Parameters] = None,
                 checks: Optional[List[AccessibilityHierarchyCheck]] = None):
        """
        Initialize analyzer with a captured hierarchy

        Args:
            hierarchy: Snapshot of the screen to evaluate
            parameters: Screen capture and threshold overrides for the checks
            checks: Checks to run; the LATEST preset when omitted
        """
        self.logger = logging.getLogger(__name__)
        self.hierarchy = hierarchy
        self.parameters = parameters
        self.checks = checks if checks is not None else get_checks_for_preset(AccessibilityCheckPreset.LATEST)
        self.results: List[CheckResult] = []

    def run_analysis(self, from_root: Optional[UIElement] = None) -> List[CheckResult]:
        """Run all checks and return their results, most severe first"""
        try:
            results: List[CheckResult] = []
            for check in self.checks:
                check_results = check.run_check_on_hierarchy(self.hierarchy, from_root, self.parameters)
                self.logger.debug(f"{type(check).__name__} returned {len(check_results)} results")
                results.extend(check_results)
            self.results = sort_results(results)
            return self.results
        except Exception as e:
            self.logger.error(f"Analysis failed: {str(e)}")
            raise

    def mark_issues(self, output_dir: str = "./marked-output", image_name: str = "capture") -> Optional[np.ndarray]:
        """
        Draw the bounds of every ERROR and WARNING on the screen capture and save it.

        Returns:
            np.ndarray - the marked BGR image, or None without a screen capture
        """
        screen_capture = self.parameters.screen_capture if self.parameters is not None else None
        if screen_capture is None:
            self.logger.warning("No screen capture to mark results on")
            return None

        findings = [result for result in self.results
                    if result.type in (ResultType.ERROR, ResultType.WARNING)]
        return mark_results_on_capture(screen_capture, findings, os.path.join(output_dir, f"{image_name}.png"))

    def generate_report(self, include_not_run: bool = False, locale: Optional[str] = None) -> Dict[str, Any]:
        """Generate a JSON-ready report of the last run"""
        locale = locale or self.hierarchy.device_state.locale
        results = [result for result in self.results
                   if include_not_run or result.type != ResultType.NOT_RUN]

        findings = []
        for result in results:
            finding = result.to_dict()
            finding['message'] = result.get_message(locale)
            finding['short_message'] = result.get_short_message(locale)
            finding['help_url'] = result.check_class().help_url
            finding['fix_suggestions'] = [
                {'description': suggestion.get_description(locale), **suggestion.to_dict()}
                for suggestion in get_fix_suggestions(result, self.hierarchy, self.parameters)
            ]
            findings.append(finding)

        by_severity = Counter(result.type.name for result in results)
        by_check = Counter(result.check_name for result in results)
        return {
            'timestamp': datetime.now().isoformat(),
            'total_results': len(results),
            'summary': {
                'by_severity': {result_type.name: by_severity.get(result_type.name, 0)
                                for result_type in ResultType},
                'by_check': dict(by_check),
            },
            'findings': findings,
        }
