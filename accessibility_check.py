import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from check_results import CheckResult, ResultType
from result_metadata import ResultMetadata
from screen_capture import ScreenCapture
from view_hierarchy import AccessibilityHierarchy, UIElement


class Category(Enum):
    CONTENT_LABELING = "Content labeling"
    TOUCH_TARGET_SIZE = "Touch target size"
    LOW_CONTRAST = "Low contrast"
    IMPLEMENTATION = "Implementation"


class Parameters(BaseModel):
    """Optional inputs and overrides for a check run"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    screen_capture: Optional[ScreenCapture] = None
    custom_text_contrast_ratio: Optional[float] = Field(default=None, gt=0)
    custom_image_contrast_ratio: Optional[float] = Field(default=None, gt=0)
    custom_touch_target_size: Optional[int] = Field(default=None, gt=0)  # dp
    enable_enhanced_contrast_evaluation: Optional[bool] = None
    save_view_images: Optional[bool] = None


class AccessibilityHierarchyCheck(ABC):
    """
    A rule evaluated against an AccessibilityHierarchy. Checks only read the
    hierarchy; each run returns a fresh list of results.
    """
    HELP_URL_TEMPLATE = "https://support.google.com/accessibility/android/answer/%s"

    help_topic: Optional[str] = None
    category: Category = Category.IMPLEMENTATION

    def __init__(self):
        self.logger = logging.getLogger(type(self).__module__)

    @abstractmethod
    def run_check_on_hierarchy(self, hierarchy: AccessibilityHierarchy,
                               from_root: Optional[UIElement] = None,
                               parameters: Optional[Parameters] = None) -> List[CheckResult]:
        """
        Evaluate the check.

        Args:
            hierarchy: Snapshot to evaluate
            from_root: Only report on this view and its descendants; None means the
                whole active window
            parameters: Screen capture and overrides for this run

        Returns:
            List[CheckResult] - possibly empty, in evaluation order
        """

    @abstractmethod
    def get_message_for_result_data(self, locale: str, result_id: int,
                                    metadata: Optional[ResultMetadata]) -> str:
        """Full human-readable message; raises ValueError for an unknown result id"""

    @abstractmethod
    def get_short_message_for_result_data(self, locale: str, result_id: int,
                                          metadata: Optional[ResultMetadata]) -> str:
        """Brief message; raises ValueError for an unknown result id"""

    @abstractmethod
    def get_title_message(self, locale: str) -> str:
        pass

    def get_secondary_priority(self, result: CheckResult) -> Optional[float]:
        """Rank among results of the same severity; higher is more important"""
        return None

    @property
    def help_url(self) -> Optional[str]:
        if self.help_topic is None:
            return None
        return self.HELP_URL_TEMPLATE % self.help_topic

    @staticmethod
    def get_elements_to_evaluate(from_root: Optional[UIElement],
                                 hierarchy: AccessibilityHierarchy) -> List[UIElement]:
        if from_root is not None:
            return from_root.self_and_all_descendants()
        return hierarchy.active_window.all_views

    def _result(self, result_type: ResultType, element: Optional[UIElement], result_id: int,
                metadata: Optional[ResultMetadata] = None) -> CheckResult:
        return CheckResult(type(self), result_type, element, result_id, metadata)

    @staticmethod
    def _unsupported_result_id(result_id: int) -> ValueError:
        return ValueError(f"Unsupported result id {result_id}")
