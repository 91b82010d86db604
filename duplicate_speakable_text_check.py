from collections import defaultdict
from typing import Dict, List, Optional

from accessibility_check import AccessibilityHierarchyCheck, Category, Parameters
from check_results import CheckResult, ResultType
from element_utils import get_speakable_text, should_focus_view
from result_metadata import ResultMetadata
from strings import get_string
from view_hierarchy import AccessibilityHierarchy, UIElement


class DuplicateSpeakableTextCheck(AccessibilityHierarchyCheck):
    """
    Finds focusable views that a screen reader would announce identically.

    One result is produced per duplicated text: a WARNING on the first clickable
    view carrying it, or an INFO on the first view when none is clickable. The
    other views only add to its conflicting view count.
    """
    RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT = 1
    RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT = 2
    RESULT_ID_CLICKABLE_SPEAKABLE_TEXT = 3
    RESULT_ID_NON_CLICKABLE_SPEAKABLE_TEXT = 4

    KEY_SPEAKABLE_TEXT = "KEY_SPEAKABLE_TEXT"
    KEY_CONFLICTING_VIEW_COUNT = "KEY_CONFLICTING_VIEW_COUNT"

    help_topic = "7102513"
    category = Category.CONTENT_LABELING

    def run_check_on_hierarchy(self, hierarchy: AccessibilityHierarchy,
                               from_root: Optional[UIElement] = None,
                               parameters: Optional[Parameters] = None) -> List[CheckResult]:
        results: List[CheckResult] = []

        # Duplicates are found across the whole window, reported only within from_root
        text_to_views = self._get_speakable_text_to_view_map(
            hierarchy.active_window.all_views, hierarchy.device_state.locale)
        views_to_evaluate = None
        if from_root is not None:
            views_to_evaluate = {id(view) for view in from_root.self_and_all_descendants()}

        for speakable_text, views in text_to_views.items():
            if len(views) < 2:
                continue

            clickable_views = []
            non_clickable_views = []
            for view in views:
                if views_to_evaluate is not None and id(view) not in views_to_evaluate:
                    continue
                if view.clickable is True:
                    clickable_views.append(view)
                else:
                    non_clickable_views.append(view)

            if clickable_views:
                result_type = ResultType.WARNING
                culprit = clickable_views[0]
                result_id = self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT
            elif non_clickable_views:
                result_type = ResultType.INFO
                culprit = non_clickable_views[0]
                result_id = self.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT
            else:
                continue

            metadata = ResultMetadata()
            metadata.put_string(self.KEY_SPEAKABLE_TEXT, speakable_text)
            metadata.put_int(self.KEY_CONFLICTING_VIEW_COUNT,
                             len(clickable_views) + len(non_clickable_views) - 1)
            results.append(self._result(result_type, culprit, result_id, metadata))

        self.logger.debug(f"Duplicate speakable text check produced {len(results)} results")
        return results

    @staticmethod
    def _get_speakable_text_to_view_map(all_views: List[UIElement],
                                        locale: str) -> Dict[str, List[UIElement]]:
        text_to_views: Dict[str, List[UIElement]] = defaultdict(list)
        for view in all_views:
            if not should_focus_view(view):
                continue
            speakable_text = get_speakable_text(view, locale).strip()
            if speakable_text:
                text_to_views[speakable_text].append(view)
        return text_to_views

    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        if result_id not in (self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT,
                             self.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT,
                             self.RESULT_ID_CLICKABLE_SPEAKABLE_TEXT,
                             self.RESULT_ID_NON_CLICKABLE_SPEAKABLE_TEXT):
            raise self._unsupported_result_id(result_id)
        if metadata is None:
            raise ValueError(f"Result id {result_id} requires metadata")

        clickable = get_string(locale, "clickable" if result_id in (
            self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT,
            self.RESULT_ID_CLICKABLE_SPEAKABLE_TEXT) else "non_clickable")
        if result_id in (self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT,
                         self.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT):
            return get_string(locale, "result_message_same_speakable_text") % (
                clickable,
                metadata.get_string(self.KEY_SPEAKABLE_TEXT),
                metadata.get_int(self.KEY_CONFLICTING_VIEW_COUNT))
        return get_string(locale, "result_message_speakable_text") % (
            clickable, metadata.get_string(self.KEY_SPEAKABLE_TEXT))

    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        if result_id in (self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT,
                         self.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT,
                         self.RESULT_ID_CLICKABLE_SPEAKABLE_TEXT,
                         self.RESULT_ID_NON_CLICKABLE_SPEAKABLE_TEXT):
            return get_string(locale, "result_message_brief_same_speakable_text")
        raise self._unsupported_result_id(result_id)

    def get_title_message(self, locale: str) -> str:
        return get_string(locale, "check_title_duplicate_speakable_text")

    def get_secondary_priority(self, result: CheckResult) -> Optional[float]:
        """More views sharing the text ranks higher"""
        if result.result_id in (self.RESULT_ID_CLICKABLE_SAME_SPEAKABLE_TEXT,
                                self.RESULT_ID_NON_CLICKABLE_SAME_SPEAKABLE_TEXT):
            return float(result.metadata.get_int(self.KEY_CONFLICTING_VIEW_COUNT, 0))
        return None
