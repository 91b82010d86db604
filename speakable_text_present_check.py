from typing import List, Optional

from accessibility_check import AccessibilityHierarchyCheck, Category, Parameters
from check_results import CheckResult, ResultType
from element_utils import WEB_VIEW_CLASS_NAME, get_speakable_text, should_focus_view
from result_metadata import ResultMetadata
from strings import get_string
from view_hierarchy import AccessibilityHierarchy, UIElement


class SpeakableTextPresentCheck(AccessibilityHierarchyCheck):
    """Flags views a screen reader would focus but has nothing to announce for"""
    RESULT_ID_NOT_VISIBLE = 1
    RESULT_ID_NOT_IMPORTANT_FOR_ACCESSIBILITY = 2
    RESULT_ID_SHOULD_NOT_FOCUS = 3
    RESULT_ID_MISSING_SPEAKABLE_TEXT = 4
    RESULT_ID_WEB_CONTENT = 5

    _MESSAGE_KEYS = {
        RESULT_ID_NOT_VISIBLE: "result_message_not_visible",
        RESULT_ID_NOT_IMPORTANT_FOR_ACCESSIBILITY: "result_message_not_important_for_accessibility",
        RESULT_ID_SHOULD_NOT_FOCUS: "result_message_should_not_focus",
        RESULT_ID_MISSING_SPEAKABLE_TEXT: "result_message_missing_speakable_text",
        RESULT_ID_WEB_CONTENT: "result_message_web_content",
    }

    help_topic = "7158690"
    category = Category.CONTENT_LABELING

    def run_check_on_hierarchy(self, hierarchy: AccessibilityHierarchy,
                               from_root: Optional[UIElement] = None,
                               parameters: Optional[Parameters] = None) -> List[CheckResult]:
        results: List[CheckResult] = []
        locale = hierarchy.device_state.locale
        for element in self.get_elements_to_evaluate(from_root, hierarchy):
            if element.visible_to_user is not True:
                results.append(self._result(ResultType.NOT_RUN, element, self.RESULT_ID_NOT_VISIBLE))
                continue
            if not element.important_for_accessibility:
                results.append(self._result(ResultType.NOT_RUN, element,
                                            self.RESULT_ID_NOT_IMPORTANT_FOR_ACCESSIBILITY))
                continue
            # An empty web view's content is not part of the hierarchy
            if element.check_instance_of(WEB_VIEW_CLASS_NAME) and element.child_count == 0:
                results.append(self._result(ResultType.NOT_RUN, element, self.RESULT_ID_WEB_CONTENT))
                continue
            if not should_focus_view(element):
                results.append(self._result(ResultType.NOT_RUN, element, self.RESULT_ID_SHOULD_NOT_FOCUS))
                continue
            if not get_speakable_text(element, locale):
                results.append(self._result(ResultType.ERROR, element,
                                            self.RESULT_ID_MISSING_SPEAKABLE_TEXT))

        self.logger.debug(f"Speakable text present check produced {len(results)} results")
        return results

    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        return self._generate_message_for_result_id(locale, result_id)

    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        return self._generate_message_for_result_id(locale, result_id)

    def get_title_message(self, locale: str) -> str:
        return get_string(locale, "check_title_speakable_text_present")

    def _generate_message_for_result_id(self, locale: str, result_id: int) -> str:
        key = self._MESSAGE_KEYS.get(result_id)
        if key is None:
            raise self._unsupported_result_id(result_id)
        return get_string(locale, key)
