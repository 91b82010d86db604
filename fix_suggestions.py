import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from scipy.spatial import KDTree

from accessibility_check import Parameters
from check_results import CheckResult
from color_contrast_analyzer import (
    BLACK,
    WHITE,
    calculate_contrast_ratio,
    color_difference,
    color_to_hex_string,
    rgb2lab,
)
from material_colors import MATERIAL_DESIGN_COLORS
from models import LayoutParams, round_half_up
from result_metadata import ResultMetadata
from strings import get_string
from text_contrast_check import TextContrastCheck
from touch_target_size_check import TouchTargetSizeCheck
from view_hierarchy import AccessibilityHierarchy, UIElement

logger = logging.getLogger(__name__)

NAMESPACE_ANDROID = "android"
LINE_SEPARATOR = "\n"


@dataclass(frozen=True)
class SetViewAttributeFixSuggestion:
    """Set one XML attribute of the culprit view to a new value"""
    view_attribute: str
    suggested_value: str
    namespace: str = NAMESPACE_ANDROID

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.namespace}:{self.view_attribute}"

    def get_description(self, locale: str = "en_US") -> str:
        if not self.suggested_value:
            return get_string(locale, "suggestion_set_view_attribute_with_an_non_empty_string") \
                % self.fully_qualified_name
        return get_string(locale, "suggestion_set_view_attribute") % (
            self.fully_qualified_name, self.suggested_value)

    def to_dict(self) -> dict:
        return {'attribute': self.fully_qualified_name, 'value': self.suggested_value}


class CompoundFixSuggestions:
    """Several suggestions that together fix one result"""

    def __init__(self, suggestions: List[SetViewAttributeFixSuggestion]):
        if len(suggestions) < 2:
            raise ValueError("The fix suggestion list must contain at least 2 fix suggestions")
        self.suggestions = list(suggestions)

    def get_description(self, locale: str = "en_US") -> str:
        return LINE_SEPARATOR.join(suggestion.get_description(locale) for suggestion in self.suggestions)

    def to_dict(self) -> dict:
        return {'suggestions': [suggestion.to_dict() for suggestion in self.suggestions]}

    def __eq__(self, other) -> bool:
        if not isinstance(other, CompoundFixSuggestions):
            return NotImplemented
        return self.suggestions == other.suggestions

    __hash__ = None


class MaterialColorIndex:
    """
    Nearest Material Design color family of an arbitrary color.

    A KDTree over the Lab values of the palette narrows the search to a few
    candidates; the closest of those by color_difference decides the family.
    """
    CANDIDATE_COUNT = 8

    def __init__(self):
        self._entries: List[Tuple[str, int]] = [
            (family, color)
            for family, shades in MATERIAL_DESIGN_COLORS.items()
            for color in shades.values()
        ]
        self._family_of_color = {}
        for family, color in self._entries:
            self._family_of_color.setdefault(color, family)
        self._tree = KDTree(np.array([rgb2lab(color) for _, color in self._entries]))

    def find_closest_family(self, color: int) -> str:
        rgb = color & 0xFFFFFF
        if rgb in self._family_of_color:
            return self._family_of_color[rgb]

        _, indices = self._tree.query(rgb2lab(rgb), k=min(self.CANDIDATE_COUNT, len(self._entries)))
        candidates = [self._entries[int(i)] for i in np.atleast_1d(indices)]
        family, _ = min(candidates, key=lambda entry: color_difference(entry[1], rgb))
        return family

    def similar_colors(self, color: int) -> List[int]:
        """White, every shade of the closest family, then black"""
        family = self.find_closest_family(color)
        colors = [WHITE]
        for shade in MATERIAL_DESIGN_COLORS[family].values():
            shade |= 0xFF000000
            if shade not in colors:
                colors.append(shade)
        if BLACK not in colors:
            colors.append(BLACK)
        return colors


_MATERIAL_COLOR_INDEX: Optional[MaterialColorIndex] = None


def get_material_color_index() -> MaterialColorIndex:
    global _MATERIAL_COLOR_INDEX
    if _MATERIAL_COLOR_INDEX is None:
        _MATERIAL_COLOR_INDEX = MaterialColorIndex()
    return _MATERIAL_COLOR_INDEX


class TextContrastFixSuggestionProducer(ABC):
    """Shared metadata handling for text contrast results"""

    def produce_fix_suggestion(self, result: CheckResult, hierarchy: AccessibilityHierarchy,
                               parameters: Optional[Parameters] = None):
        if result.check_class is not TextContrastCheck:
            return None
        metadata = result.metadata
        if metadata is None or result.element is None:
            return None
        # The measured colors may belong to whatever covers the view
        if metadata.get_boolean(TextContrastCheck.KEY_IS_POTENTIALLY_OBSCURED, False):
            return None
        return self._produce(result.result_id, result.element, metadata)

    @abstractmethod
    def _produce(self, result_id: int, element: UIElement, metadata: ResultMetadata):
        """Suggestion for one text contrast result, or None"""

    @staticmethod
    def get_text_color(metadata: ResultMetadata) -> int:
        if TextContrastCheck.KEY_TEXT_COLOR in metadata:
            return metadata.get_int(TextContrastCheck.KEY_TEXT_COLOR)
        return metadata.get_int(TextContrastCheck.KEY_FOREGROUND_COLOR)

    @staticmethod
    def get_required_contrast_ratio(metadata: ResultMetadata) -> float:
        if TextContrastCheck.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO in metadata:
            return metadata.get_double(TextContrastCheck.KEY_CUSTOMIZED_HEURISTIC_CONTRAST_RATIO)
        return metadata.get_double(TextContrastCheck.KEY_REQUIRED_CONTRAST_RATIO)


def _best_color_candidate(candidates: List[int], original_color: int, required_ratio: float,
                          other_color: int) -> Optional[int]:
    """The candidate closest to original_color whose contrast with other_color is enough"""
    best_color = None
    min_distance = float("inf")
    for color in candidates:
        if calculate_contrast_ratio(color, other_color) >= required_ratio:
            distance = color_difference(color, original_color)
            if distance < min_distance:
                min_distance = distance
                best_color = color
    return best_color


class TextColorFixSuggestionProducer(TextContrastFixSuggestionProducer):
    VIEW_ATTRIBUTE_TEXT_COLOR = "textColor"
    VIEW_ATTRIBUTE_HINT_TEXT_COLOR = "hintTextColor"

    RESULT_IDS = (
        TextContrastCheck.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT,
        TextContrastCheck.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
        TextContrastCheck.RESULT_ID_CUSTOMIZED_TEXTVIEW_HEURISTIC_CONTRAST_NOT_SUFFICIENT,
        TextContrastCheck.RESULT_ID_TEXTVIEW_HEURISTIC_CONTRAST_BORDERLINE,
    )

    def _produce(self, result_id: int, element: UIElement,
                 metadata: ResultMetadata) -> Optional[SetViewAttributeFixSuggestion]:
        if result_id not in self.RESULT_IDS:
            return None
        text_color = self.get_text_color(metadata)
        background_color = metadata.get_int(TextContrastCheck.KEY_BACKGROUND_COLOR)
        candidates = get_material_color_index().similar_colors(text_color)
        best_color = _best_color_candidate(
            candidates, text_color, self.get_required_contrast_ratio(metadata), background_color)
        if best_color is None:
            return None
        # With no text, the hint is what is drawn
        attribute = self.VIEW_ATTRIBUTE_HINT_TEXT_COLOR if not element.text else self.VIEW_ATTRIBUTE_TEXT_COLOR
        return SetViewAttributeFixSuggestion(attribute, color_to_hex_string(best_color))


class TextBackgroundColorFixSuggestionProducer(TextContrastFixSuggestionProducer):
    """Only for declared colors; an estimated background may belong to an ancestor"""
    VIEW_ATTRIBUTE_BACKGROUND = "background"

    def _produce(self, result_id: int, element: UIElement,
                 metadata: ResultMetadata) -> Optional[SetViewAttributeFixSuggestion]:
        if result_id != TextContrastCheck.RESULT_ID_TEXTVIEW_CONTRAST_NOT_SUFFICIENT:
            return None
        text_color = self.get_text_color(metadata)
        background_color = metadata.get_int(TextContrastCheck.KEY_BACKGROUND_COLOR)
        candidates = get_material_color_index().similar_colors(background_color)
        best_color = _best_color_candidate(
            candidates, background_color, self.get_required_contrast_ratio(metadata), text_color)
        if best_color is None:
            return None
        return SetViewAttributeFixSuggestion(self.VIEW_ATTRIBUTE_BACKGROUND, color_to_hex_string(best_color))


class ExpandViewSizeFixSuggestionProducer:
    """Suggests minimum or fixed layout sizes for small touch targets"""
    VIEW_ATTRIBUTE_MIN_WIDTH = "minWidth"
    VIEW_ATTRIBUTE_MIN_HEIGHT = "minHeight"
    VIEW_ATTRIBUTE_LAYOUT_WIDTH = "layout_width"
    VIEW_ATTRIBUTE_LAYOUT_HEIGHT = "layout_height"

    RESULT_IDS = (
        TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT,
        TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_HEIGHT,
        TouchTargetSizeCheck.RESULT_ID_SMALL_TOUCH_TARGET_WIDTH,
        TouchTargetSizeCheck.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH_AND_HEIGHT,
        TouchTargetSizeCheck.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_HEIGHT,
        TouchTargetSizeCheck.RESULT_ID_CUSTOMIZED_SMALL_TOUCH_TARGET_WIDTH,
    )

    def produce_fix_suggestion(self, result: CheckResult, hierarchy: AccessibilityHierarchy,
                               parameters: Optional[Parameters] = None):
        if result.check_class is not TouchTargetSizeCheck or result.result_id not in self.RESULT_IDS:
            return None
        element = result.element
        metadata = result.metadata
        if element is None or metadata is None:
            return None

        layout_params = element.layout_params
        if layout_params is None:
            return None
        # Delegated or clipped targets are not fixed by resizing the view itself
        if metadata.get_boolean(TouchTargetSizeCheck.KEY_HAS_TOUCH_DELEGATE, False) or \
                metadata.get_boolean(TouchTargetSizeCheck.KEY_HAS_TOUCH_DELEGATE_WITH_HIT_RECT, False):
            return None
        if metadata.get_boolean(TouchTargetSizeCheck.KEY_IS_CLIPPED_BY_ANCESTOR, False):
            return None
        if not self._is_parent_big_enough(hierarchy, element, metadata):
            return None
        return self._create_fix_suggestion(metadata, layout_params)

    def _create_fix_suggestion(self, metadata: ResultMetadata, layout_params: LayoutParams):
        required_width = self._required_width(metadata)
        required_height = self._required_height(metadata)
        suggestions = []
        # Minimum sizes keep wrapped text from being truncated at large font scales.
        # A zero layout size is set by constraints, so it gets no suggestion.
        if metadata.get_int(TouchTargetSizeCheck.KEY_WIDTH) < required_width:
            if layout_params.width == LayoutParams.WRAP_CONTENT:
                suggestions.append(SetViewAttributeFixSuggestion(
                    self.VIEW_ATTRIBUTE_MIN_WIDTH, f"{required_width}dp"))
            elif layout_params.width > 0:
                suggestions.append(SetViewAttributeFixSuggestion(
                    self.VIEW_ATTRIBUTE_LAYOUT_WIDTH, f"{required_width}dp"))
        if metadata.get_int(TouchTargetSizeCheck.KEY_HEIGHT) < required_height:
            if layout_params.height == LayoutParams.WRAP_CONTENT:
                suggestions.append(SetViewAttributeFixSuggestion(
                    self.VIEW_ATTRIBUTE_MIN_HEIGHT, f"{required_height}dp"))
            elif layout_params.height > 0:
                suggestions.append(SetViewAttributeFixSuggestion(
                    self.VIEW_ATTRIBUTE_LAYOUT_HEIGHT, f"{required_height}dp"))

        if not suggestions:
            return None
        if len(suggestions) == 1:
            return suggestions[0]
        return CompoundFixSuggestions(suggestions)

    def _is_parent_big_enough(self, hierarchy: AccessibilityHierarchy, element: UIElement,
                              metadata: ResultMetadata) -> bool:
        parent = element.parent
        if parent is None:
            return False
        density = hierarchy.device_state.default_display_info.metrics_without_decoration.density
        bounds = parent.bounds_in_screen
        return (round_half_up(bounds.width / density) >= self._required_width(metadata)
                and round_half_up(bounds.height / density) >= self._required_height(metadata))

    @staticmethod
    def _required_width(metadata: ResultMetadata) -> int:
        if TouchTargetSizeCheck.KEY_CUSTOMIZED_REQUIRED_WIDTH in metadata:
            return metadata.get_int(TouchTargetSizeCheck.KEY_CUSTOMIZED_REQUIRED_WIDTH)
        return metadata.get_int(TouchTargetSizeCheck.KEY_REQUIRED_WIDTH)

    @staticmethod
    def _required_height(metadata: ResultMetadata) -> int:
        if TouchTargetSizeCheck.KEY_CUSTOMIZED_REQUIRED_HEIGHT in metadata:
            return metadata.get_int(TouchTargetSizeCheck.KEY_CUSTOMIZED_REQUIRED_HEIGHT)
        return metadata.get_int(TouchTargetSizeCheck.KEY_REQUIRED_HEIGHT)


FIX_SUGGESTION_PRODUCERS = (
    TextColorFixSuggestionProducer(),
    TextBackgroundColorFixSuggestionProducer(),
    ExpandViewSizeFixSuggestionProducer(),
)


def get_fix_suggestions(result: CheckResult, hierarchy: AccessibilityHierarchy,
                        parameters: Optional[Parameters] = None) -> list:
    """
    Collect what every producer suggests for a result.

    Args:
        result: A result from one of the checks
        hierarchy: The hierarchy the result was computed against
        parameters: The parameters of that run

    Returns:
        list - SetViewAttributeFixSuggestion and CompoundFixSuggestions objects, possibly empty
    """
    suggestions = []
    for producer in FIX_SUGGESTION_PRODUCERS:
        suggestion = producer.produce_fix_suggestion(result, hierarchy, parameters)
        if suggestion is not None:
            suggestions.append(suggestion)
    logger.debug(f"{len(suggestions)} fix suggestions for {result.check_name} result {result.result_id}")
    return suggestions
