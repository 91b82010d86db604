from dataclasses import dataclass, field, replace
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type

import numpy as np

from result_metadata import ResultMetadata
from view_hierarchy import UIElement

if TYPE_CHECKING:
    from accessibility_check import AccessibilityHierarchyCheck


@total_ordering
class ResultType(Enum):
    """
    Severity of a result, most severe first. Declaration order is the sort order;
    the wire number is what gets persisted and never changes for a member.
    """
    ERROR = 1
    WARNING = 2
    INFO = 3
    RESOLVED = 4
    NOT_RUN = 5
    SUPPRESSED = 6

    @property
    def wire_number(self) -> int:
        return self.value

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    @classmethod
    def from_wire_number(cls, number: int) -> "ResultType":
        for member in cls:
            if member.wire_number == number:
                return member
        raise ValueError(f"Unknown result type wire number: {number}")

    def __lt__(self, other):
        if not isinstance(other, ResultType):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_ORDER = list(ResultType)


@dataclass(eq=False)
class CheckResult:
    """A single finding produced by a check against one hierarchy"""
    check_class: Type["AccessibilityHierarchyCheck"]
    type: ResultType
    element: Optional[UIElement]
    result_id: int
    metadata: Optional[ResultMetadata] = None
    # Cropped capture of the element, kept only when parameters ask for view images
    view_image: Optional[np.ndarray] = field(default=None, repr=False)

    @property
    def element_condensed_id(self) -> Optional[int]:
        return self.element.condensed_unique_id if self.element is not None else None

    @property
    def check_name(self) -> str:
        return self.check_class.__name__

    def get_message(self, locale: str = "en_US") -> str:
        return self.check_class().get_message_for_result_data(locale, self.result_id, self.metadata)

    def get_short_message(self, locale: str = "en_US") -> str:
        return self.check_class().get_short_message_for_result_data(
            locale, self.result_id, self.metadata)

    def get_secondary_priority(self) -> Optional[float]:
        return self.check_class().get_secondary_priority(self)

    def with_type(self, new_type: ResultType) -> "CheckResult":
        """Copy of this result with a different severity"""
        metadata = self.metadata.copy() if self.metadata is not None else None
        return replace(self, type=new_type, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        element = self.element
        return {
            'check': self.check_name,
            'type': self.type.name,
            'result_id': self.result_id,
            'element': None if element is None else {
                'condensed_id': element.condensed_unique_id,
                'class_name': element.class_name,
                'resource_name': element.resource_name,
                'bounds': element.bounds_in_screen.as_tuple(),
            },
            'metadata': self.metadata.to_dict() if self.metadata is not None else None,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, CheckResult):
            return NotImplemented
        return (self.check_class is other.check_class
                and self.type == other.type
                and self.element is other.element
                and self.result_id == other.result_id
                and self.metadata == other.metadata)

    __hash__ = None


def sort_results(results: List[CheckResult]) -> List[CheckResult]:
    """
    Most severe first. Within a severity, higher secondary priority comes first and
    results without a priority keep their original relative order after them.
    """
    def sort_key(indexed):
        index, result = indexed
        priority = result.get_secondary_priority()
        if priority is None:
            return (result.type.rank, 1, 0.0, index)
        return (result.type.rank, 0, -priority, index)

    return [result for _, result in sorted(enumerate(results), key=sort_key)]


def filter_results_by_type(results: List[CheckResult], *types: ResultType) -> List[CheckResult]:
    return [result for result in results if result.type in types]


def filter_results_for_element(results: List[CheckResult], element: UIElement) -> List[CheckResult]:
    return [result for result in results if result.element is element]


def filter_results_for_check(results: List[CheckResult],
                             check_class: Type["AccessibilityHierarchyCheck"]) -> List[CheckResult]:
    return [result for result in results if result.check_class is check_class]


def suppress_results(results: List[CheckResult],
                     matcher: Callable[[CheckResult], bool]) -> List[CheckResult]:
    """Return the results with every match retyped as SUPPRESSED; the inputs are left alone"""
    return [
        result.with_type(ResultType.SUPPRESSED) if matcher(result) else result
        for result in results
    ]
