"""
Queries over UIElements that mirror how a screen reader treats a view: what it
would announce, whether it would stop on it, and whether it may be covered.
"""
from typing import Iterable, List, Optional

from models import SpannableString
from strings import get_string
from view_hierarchy import UIElement

ABS_LIST_VIEW_CLASS_NAME = "android.widget.AbsListView"
ADAPTER_VIEW_CLASS_NAME = "android.widget.AdapterView"
SCROLL_VIEW_CLASS_NAME = "android.widget.ScrollView"
HORIZONTAL_SCROLL_VIEW_CLASS_NAME = "android.widget.HorizontalScrollView"
SPINNER_CLASS_NAME = "android.widget.Spinner"
TEXT_VIEW_CLASS_NAME = "android.widget.TextView"
EDIT_TEXT_CLASS_NAME = "android.widget.EditText"
IMAGE_VIEW_CLASS_NAME = "android.widget.ImageView"
WEB_VIEW_CLASS_NAME = "android.webkit.WebView"
SWITCH_CLASS_NAME = "android.widget.Switch"
TOGGLE_BUTTON_CLASS_NAME = "android.widget.ToggleButton"
ANDROIDX_SCROLLING_VIEW_CLASS_NAME = "androidx.core.view.ScrollingView"

SCROLLABLE_CONTAINER_CLASS_NAMES = (
    ADAPTER_VIEW_CLASS_NAME,
    SCROLL_VIEW_CLASS_NAME,
    HORIZONTAL_SCROLL_VIEW_CLASS_NAME,
    ANDROIDX_SCROLLING_VIEW_CLASS_NAME,
)

SEPARATOR = ", "


def _has_content(value) -> bool:
    return value is not None and len(value) > 0


def _has_visible_content(value) -> bool:
    return _has_content(value) and len(str(value).strip()) > 0


def _join(pieces: Iterable) -> str:
    return SEPARATOR.join(str(piece) for piece in pieces if _has_content(piece))


def get_speakable_text(element: UIElement, locale: str = "en_US") -> SpannableString:
    """
    Text a screen reader would announce for the element: content description,
    otherwise its text, unfocusable children and hint, plus checked state and a
    label from a labeling view.
    """
    speakable_text = _get_speakable_text_from_subtree(element, locale)
    if element.important_for_accessibility and element.labeled_by is not None:
        label = _get_speakable_text_or_label(element.labeled_by)
        if _has_content(label):
            return SpannableString(
                get_string(locale, "template_labeled_item") % (speakable_text, label))
    return speakable_text


def _get_speakable_text_from_subtree(element: UIElement, locale: str) -> SpannableString:
    if element.check_instance_of(TOGGLE_BUTTON_CLASS_NAME) or element.check_instance_of(SWITCH_CLASS_NAME):
        return _rule_switch(element, locale)

    pieces: List = []
    spans = []
    if element.important_for_accessibility:
        pieces.append(_get_description_for_tree_status(element, locale))

        # Content descriptions override everything else, children included
        if _has_content(element.content_description):
            pieces.append(element.content_description)
            return SpannableString(_join(pieces), element.content_description.spans)

        if _has_visible_content(element.text):
            pieces.append(element.text)
            spans.extend(element.text.spans)

        if element.check_instance_of(ABS_LIST_VIEW_CLASS_NAME) and element.child_count == 0:
            pieces.append(get_string(locale, "template_containers_quantity_other")
                          % (get_string(locale, "value_listview"), 0))

    for child in element.children:
        if not is_focusable_or_clickable_for_accessibility(child):
            child_text = _get_speakable_text_from_subtree(child, locale)
            if _has_content(child_text):
                pieces.append(child_text)

    if element.important_for_accessibility and _has_visible_content(element.hint_text):
        pieces.append(element.hint_text)

    return SpannableString(_join(pieces), tuple(spans))


def _get_description_for_tree_status(element: UIElement, locale: str) -> Optional[str]:
    if element.state_description is not None:
        return str(element.state_description)
    if element.checkable:
        if element.checked is True:
            return get_string(locale, "value_checked")
        if element.checked is False:
            return get_string(locale, "value_not_checked")
    return None


def _rule_switch(element: UIElement, locale: str) -> SpannableString:
    if not element.important_for_accessibility:
        return SpannableString("")
    return _dedupe_join(_get_switch_state(element, locale), _get_switch_content(element))


def _get_switch_content(element: UIElement):
    if _has_content(element.content_description):
        return element.content_description
    if element.state_description is not None and _has_visible_content(element.text):
        return element.text
    return None


def _get_switch_state(element: UIElement, locale: str):
    if element.state_description is not None:
        return element.state_description
    if _has_visible_content(element.text):
        return element.text
    if element.checked is True:
        return get_string(locale, "value_on")
    if element.checked is False:
        return get_string(locale, "value_off")
    return None


def _get_speakable_text_or_label(element: UIElement):
    if element.important_for_accessibility:
        if _has_content(element.content_description):
            return element.content_description
        if _has_visible_content(element.text):
            return element.text
    return None


def _dedupe_join(*values) -> SpannableString:
    seen = set()
    pieces = []
    for value in values:
        if not _has_content(value):
            continue
        key = str(value).lower()
        if key in seen:
            continue
        seen.add(key)
        pieces.append(value)
    return SpannableString(_join(pieces))


def should_focus_view(view: UIElement) -> bool:
    """Whether a screen reader would place accessibility focus on this view"""
    if view.visible_to_user is not True:
        return False

    if is_accessibility_focusable(view):
        if not _has_any_important_descendant(view):
            # Actionable leaves gain focus even without anything to speak
            return True
        return is_speaking_view(view)

    return ((_has_text(view) or _has_content(view.state_description))
            and view.important_for_accessibility
            and not _has_focusable_ancestor(view))


def get_focusable_for_accessibility_ancestor(view: UIElement) -> Optional[UIElement]:
    """The view itself or its nearest ancestor that can take accessibility focus"""
    current = view
    while current is not None and not is_accessibility_focusable(current):
        current = current.parent
    return current


def is_accessibility_focusable(view: UIElement) -> bool:
    if view.visible_to_user is not True or not view.important_for_accessibility:
        return False
    if is_focusable_or_clickable_for_accessibility(view):
        return True
    return is_child_of_scrollable_container(view) and is_speaking_view(view)


def is_focusable_or_clickable_for_accessibility(view: UIElement) -> bool:
    return (view.visible_to_user is not False
            and view.important_for_accessibility
            and bool(view.screen_reader_focusable or view.clickable
                     or view.focusable or view.long_clickable))


def is_child_of_scrollable_container(view: UIElement) -> bool:
    parent = _get_important_for_accessibility_ancestor(view)
    if parent is None:
        return False
    if parent.scrollable:
        return True
    # Spinners are adapter views, but screen readers do not treat them as scrolling lists
    if parent.check_instance_of(SPINNER_CLASS_NAME):
        return False
    return parent.check_instance_of_any(SCROLLABLE_CONTAINER_CLASS_NAMES)


def is_speaking_view(view: UIElement) -> bool:
    """Whether the view, or its unfocusable children, has something to announce"""
    if view.important_for_accessibility:
        if _has_text(view):
            return True
        if view.checkable:
            return True
    return _has_non_focusable_speaking_children(view)


def _has_non_focusable_speaking_children(view: UIElement) -> bool:
    for child in view.children:
        if child.visible_to_user is not True or is_accessibility_focusable(child):
            continue
        if is_speaking_view(child):
            return True
    return False


def _has_text(view: UIElement) -> bool:
    return (_has_content(view.text)
            or _has_content(view.content_description)
            or _has_content(view.hint_text))


def _get_important_for_accessibility_ancestor(view: UIElement) -> Optional[UIElement]:
    for ancestor in view.ancestors():
        if ancestor.important_for_accessibility:
            return ancestor
    return None


def _has_focusable_ancestor(view: UIElement) -> bool:
    parent = _get_important_for_accessibility_ancestor(view)
    while parent is not None:
        if is_accessibility_focusable(parent):
            return True
        parent = _get_important_for_accessibility_ancestor(parent)
    return False


def _has_any_important_descendant(element: UIElement) -> bool:
    for child in element.children:
        if child.important_for_accessibility:
            return True
        if child.child_count > 0 and _has_any_important_descendant(child):
            return True
    return False


def is_intersected_by_overlay_window(element: UIElement) -> bool:
    """A window layered above the active one covers part of the element"""
    hierarchy = element.window.hierarchy
    active_layer = hierarchy.active_window.layer
    if active_layer is None:
        return False
    for window in hierarchy.all_windows:
        if window.layer is not None and window.layer > active_layer:
            if window.bounds_in_screen is not None and \
                    element.bounds_in_screen.intersects(window.bounds_in_screen):
                return True
    return False


def is_intersected_by_overlay_view(element: UIElement) -> bool:
    """A sibling drawn later, of the element or of any of its ancestors, covers part of it"""
    if element.drawing_order is None:
        return False
    root_view = element.window.hierarchy.active_window.root_view
    view = element
    while view is not root_view:
        parent = view.parent
        if parent is None:
            break
        for sibling in parent.children:
            if (sibling.drawing_order is not None and view.drawing_order is not None
                    and sibling.drawing_order > view.drawing_order
                    and element.bounds_in_screen.intersects(sibling.bounds_in_screen)):
                return True
        view = parent
    return False


def is_potentially_obscured(element: UIElement) -> bool:
    return is_intersected_by_overlay_window(element) or is_intersected_by_overlay_view(element)
