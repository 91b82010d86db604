import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from models import (
    AccessibilityAction,
    DeviceState,
    LayoutParams,
    Rect,
    SpannableString,
)

WINDOW_ID_SHIFT = 32
ELEMENT_ID_MASK = 0xFFFFFFFF


def condensed_unique_id(window_id: int, element_id: int) -> int:
    """Pack a window id (high 32 bits) and an element id (low 32 bits) into one key"""
    return (window_id << WINDOW_ID_SHIFT) | (element_id & ELEMENT_ID_MASK)


def window_id_of(condensed_id: int) -> int:
    return condensed_id >> WINDOW_ID_SHIFT


def element_id_of(condensed_id: int) -> int:
    return condensed_id & ELEMENT_ID_MASK


class InvalidHierarchyError(ValueError):
    """Raised when a hierarchy is inconsistent or an id does not resolve"""


class ClassNameTable:
    """Interns class names as small integers, in first-seen order"""

    def __init__(self, names: Iterable[str] = ()):
        self._ids: Dict[str, int] = {}
        self._names: List[str] = []
        for name in names:
            self.intern(name)

    def intern(self, name: str) -> int:
        class_id = self._ids.get(name)
        if class_id is None:
            class_id = len(self._names)
            self._ids[name] = class_id
            self._names.append(name)
        return class_id

    def get_id(self, name: str) -> Optional[int]:
        return self._ids.get(name)

    def get_name(self, class_id: int) -> str:
        return self._names[class_id]

    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._names)


@dataclass(eq=False)
class UIElement:
    """One on-screen view in a window's tree. Links to other views are by id."""
    id: int
    parent_id: Optional[int] = None
    child_ids: List[int] = field(default_factory=list)
    drawing_order: Optional[int] = None

    class_name: Optional[str] = None
    accessibility_class_name: Optional[str] = None
    package_name: Optional[str] = None
    resource_name: Optional[str] = None

    content_description: Optional[SpannableString] = None
    text: Optional[SpannableString] = None
    hint_text: Optional[SpannableString] = None
    state_description: Optional[SpannableString] = None

    important_for_accessibility: bool = True
    enabled: bool = True
    visible_to_user: Optional[bool] = None
    clickable: Optional[bool] = None
    long_clickable: Optional[bool] = None
    focusable: Optional[bool] = None
    editable: Optional[bool] = None
    scrollable: Optional[bool] = None
    can_scroll_forward: Optional[bool] = None
    can_scroll_backward: Optional[bool] = None
    checkable: Optional[bool] = None
    checked: Optional[bool] = None
    has_touch_delegate: Optional[bool] = None
    screen_reader_focusable: bool = False
    is_heading: Optional[bool] = None

    bounds_in_screen: Rect = Rect.EMPTY
    nonclipped_width: Optional[int] = None
    nonclipped_height: Optional[int] = None

    text_size: Optional[float] = None  # pixels
    text_size_unit: Optional[int] = None
    text_color: Optional[int] = None  # 0xAARRGGBB
    hint_text_color: Optional[int] = None
    background_drawable_color: Optional[int] = None
    typeface_style: Optional[int] = None

    superclass_ids: FrozenSet[int] = frozenset()
    actions: List[AccessibilityAction] = field(default_factory=list)
    touch_delegate_bounds: List[Rect] = field(default_factory=list)
    text_character_locations: List[Rect] = field(default_factory=list)
    layout_params: Optional[LayoutParams] = None

    window: Optional["UIWindow"] = field(default=None, repr=False)
    label_for: Optional["UIElement"] = field(default=None, repr=False)
    labeled_by: Optional["UIElement"] = field(default=None, repr=False)
    accessibility_traversal_before: Optional["UIElement"] = field(default=None, repr=False)
    accessibility_traversal_after: Optional["UIElement"] = field(default=None, repr=False)

    @property
    def condensed_unique_id(self) -> int:
        return condensed_unique_id(self.window.id, self.id)

    @property
    def parent(self) -> Optional["UIElement"]:
        if self.parent_id is None:
            return None
        return self.window.get_view(self.parent_id)

    @property
    def children(self) -> List["UIElement"]:
        return [self.window.get_view(child_id) for child_id in self.child_ids]

    @property
    def child_count(self) -> int:
        return len(self.child_ids)

    def get_child(self, index: int) -> "UIElement":
        return self.window.get_view(self.child_ids[index])

    def ancestors(self) -> Iterator["UIElement"]:
        """Parent, grandparent, ... up to the window's root"""
        view = self.parent
        while view is not None:
            yield view
            view = view.parent

    def self_and_all_descendants(self) -> List["UIElement"]:
        """This view and its whole subtree, in pre-order"""
        result = []
        stack = [self]
        while stack:
            view = stack.pop()
            result.append(view)
            stack.extend(reversed(view.children))
        return result

    def check_instance_of(self, class_name: str) -> bool:
        class_id = self.window.hierarchy.class_name_table.get_id(class_name)
        return class_id is not None and class_id in self.superclass_ids

    def check_instance_of_any(self, class_names: Iterable[str]) -> bool:
        return any(self.check_instance_of(name) for name in class_names)

    def is_against_scrollable_edge(self) -> bool:
        """
        True if a scrollable ancestor could still scroll content past the edge this
        view touches, so part of the view may be off screen.

        Only edges along the ancestor's scroll axis count: top and bottom for
        vertical containers, left and right for horizontal ones.
        """
        bounds = self.bounds_in_screen
        for ancestor in self.ancestors():
            if not ancestor.scrollable:
                continue
            container = ancestor.bounds_in_screen
            if container.is_empty():
                continue
            if ancestor.scrolls_horizontally():
                at_end = bounds.right >= container.right
                at_start = bounds.left <= container.left
            else:
                at_end = bounds.bottom >= container.bottom
                at_start = bounds.top <= container.top
            if (ancestor.can_scroll_forward and at_end) or (ancestor.can_scroll_backward and at_start):
                return True
        return False

    def scrolls_horizontally(self) -> bool:
        return self.check_instance_of_any(HORIZONTAL_SCROLLING_CLASSES)


@dataclass(eq=False)
class UIWindow:
    """A top-level surface and the arena of views it owns, indexed by view id"""
    id: int
    parent_id: Optional[int] = None
    child_ids: List[int] = field(default_factory=list)
    window_id: Optional[int] = None
    layer: Optional[int] = None
    type: Optional[int] = None
    focused: Optional[bool] = None
    accessibility_focused: Optional[bool] = None
    active: Optional[bool] = None
    bounds_in_screen: Optional[Rect] = None
    views: List[UIElement] = field(default_factory=list, repr=False)
    hierarchy: Optional["AccessibilityHierarchy"] = field(default=None, repr=False)

    @property
    def root_view(self) -> Optional[UIElement]:
        return self.views[0] if self.views else None

    @property
    def all_views(self) -> List[UIElement]:
        return list(self.views)

    def get_view(self, element_id: int) -> UIElement:
        if element_id < 0 or element_id >= len(self.views):
            raise InvalidHierarchyError(f"No view with id {element_id} in window {self.id}")
        return self.views[element_id]

    @property
    def parent(self) -> Optional["UIWindow"]:
        if self.parent_id is None:
            return None
        return self.hierarchy.get_window(self.parent_id)

    @property
    def children(self) -> List["UIWindow"]:
        return [self.hierarchy.get_window(child_id) for child_id in self.child_ids]


class AccessibilityHierarchy:
    """
    Immutable snapshot of every window on screen plus the device state. Exactly
    one window must be marked active.
    """

    def __init__(self, device_state: DeviceState, windows: List[UIWindow],
                 class_name_table: Optional[ClassNameTable] = None):
        self.device_state = device_state
        self.windows = list(windows)
        self.class_name_table = class_name_table or ClassNameTable()

        active_windows = [window for window in self.windows if window.active]
        if len(active_windows) > 1:
            raise InvalidHierarchyError("More than one active window detected.")
        if not active_windows:
            raise InvalidHierarchyError("No active windows detected.")
        self.active_window = active_windows[0]

        for window in self.windows:
            window.hierarchy = self

    @property
    def all_windows(self) -> List[UIWindow]:
        return list(self.windows)

    def get_window(self, window_id: int) -> UIWindow:
        if window_id < 0 or window_id >= len(self.windows):
            raise InvalidHierarchyError(f"No window with id {window_id}")
        return self.windows[window_id]

    def get_view(self, condensed_id: int) -> UIElement:
        return self.get_window(window_id_of(condensed_id)).get_view(element_id_of(condensed_id))

    def find_view(self, condensed_id: int) -> Optional[UIElement]:
        """Like get_view, but returns None for ids that do not resolve"""
        try:
            return self.get_view(condensed_id)
        except InvalidHierarchyError:
            return None


_VIEW = "android.view.View"
_VIEW_GROUP = "android.view.ViewGroup"
_FRAME_LAYOUT = "android.widget.FrameLayout"
_TEXT_VIEW = "android.widget.TextView"
_BUTTON = "android.widget.Button"
_COMPOUND_BUTTON = "android.widget.CompoundButton"
_IMAGE_VIEW = "android.widget.ImageView"
_ADAPTER_VIEW = "android.widget.AdapterView"
_ABS_LIST_VIEW = "android.widget.AbsListView"
_SCROLLING_VIEW = "androidx.core.view.ScrollingView"
_HORIZONTAL_SCROLL_VIEW = "android.widget.HorizontalScrollView"
_VIEW_PAGER = "androidx.viewpager.widget.ViewPager"

# Containers that scroll sideways; every other scrollable container scrolls vertically
HORIZONTAL_SCROLLING_CLASSES = (
    _HORIZONTAL_SCROLL_VIEW,
    _VIEW_PAGER,
    "android.support.v4.view.ViewPager",
)

# Ancestor classes of common widgets, used when a builder caller gives only a class name
KNOWN_SUPERCLASSES: Dict[str, List[str]] = {
    _VIEW_GROUP: [_VIEW],
    _FRAME_LAYOUT: [_VIEW_GROUP, _VIEW],
    "android.widget.LinearLayout": [_VIEW_GROUP, _VIEW],
    "android.widget.RelativeLayout": [_VIEW_GROUP, _VIEW],
    _TEXT_VIEW: [_VIEW],
    _BUTTON: [_TEXT_VIEW, _VIEW],
    "android.widget.EditText": [_TEXT_VIEW, _VIEW],
    _COMPOUND_BUTTON: [_BUTTON, _TEXT_VIEW, _VIEW],
    "android.widget.CheckBox": [_COMPOUND_BUTTON, _BUTTON, _TEXT_VIEW, _VIEW],
    "android.widget.RadioButton": [_COMPOUND_BUTTON, _BUTTON, _TEXT_VIEW, _VIEW],
    "android.widget.Switch": [_COMPOUND_BUTTON, _BUTTON, _TEXT_VIEW, _VIEW],
    "android.widget.ToggleButton": [_COMPOUND_BUTTON, _BUTTON, _TEXT_VIEW, _VIEW],
    _IMAGE_VIEW: [_VIEW],
    "android.widget.ImageButton": [_IMAGE_VIEW, _VIEW],
    "android.widget.ScrollView": [_FRAME_LAYOUT, _VIEW_GROUP, _VIEW],
    _HORIZONTAL_SCROLL_VIEW: [_FRAME_LAYOUT, _VIEW_GROUP, _VIEW],
    _VIEW_PAGER: [_VIEW_GROUP, _VIEW],
    _ADAPTER_VIEW: [_VIEW_GROUP, _VIEW],
    _ABS_LIST_VIEW: [_ADAPTER_VIEW, _VIEW_GROUP, _VIEW],
    "android.widget.ListView": [_ABS_LIST_VIEW, _ADAPTER_VIEW, _VIEW_GROUP, _VIEW],
    "android.widget.GridView": [_ABS_LIST_VIEW, _ADAPTER_VIEW, _VIEW_GROUP, _VIEW],
    "android.widget.Spinner": ["android.widget.AbsSpinner", _ADAPTER_VIEW, _VIEW_GROUP, _VIEW],
    "android.webkit.WebView": ["android.widget.AbsoluteLayout", _VIEW_GROUP, _VIEW],
    "androidx.recyclerview.widget.RecyclerView": [_VIEW_GROUP, _VIEW, _SCROLLING_VIEW],
    "androidx.core.widget.NestedScrollView": [_FRAME_LAYOUT, _VIEW_GROUP, _VIEW, _SCROLLING_VIEW],
}

_TEXT_ATTRIBUTES = ("content_description", "text", "hint_text", "state_description")

ViewReference = Union[UIElement, int]


class HierarchyBuilder:
    """
    Assembles windows and views, then builds an AccessibilityHierarchy.

    Relationships (label-for, traversal order) are recorded as condensed ids and
    resolved only in build(), after every view in every window has its id.
    """

    def __init__(self, device_state: DeviceState):
        self.logger = logging.getLogger(__name__)
        self.device_state = device_state
        self.class_name_table = ClassNameTable()
        self.windows: List[UIWindow] = []
        self._pending_relationships: List[tuple] = []
        self._built = False

    def add_window(self, parent: Optional[UIWindow] = None, **attributes) -> UIWindow:
        self._check_not_built()
        window = UIWindow(id=len(self.windows), **attributes)
        if parent is not None:
            window.parent_id = parent.id
            parent.child_ids.append(window.id)
        self.windows.append(window)
        return window

    def add_view(self, window: UIWindow, parent: Optional[UIElement] = None,
                 class_name: Optional[str] = None,
                 superclass_names: Optional[List[str]] = None,
                 label_for: Optional[ViewReference] = None,
                 traversal_before: Optional[ViewReference] = None,
                 traversal_after: Optional[ViewReference] = None,
                 **attributes) -> UIElement:
        """
        Append a view to a window and return it.

        Args:
            window: Window that owns the view
            parent: Parent view, or None for the window's root
            class_name: Fully qualified class of the view
            superclass_names: Ancestor classes; looked up in KNOWN_SUPERCLASSES if omitted
            label_for, traversal_before, traversal_after: Target view or its condensed id
            attributes: Any other UIElement field

        Returns:
            UIElement - the new view, with its id assigned
        """
        self._check_not_built()
        for name in _TEXT_ATTRIBUTES:
            if name in attributes:
                attributes[name] = SpannableString.of(attributes[name])

        view = UIElement(id=len(window.views), class_name=class_name, **attributes)
        view.window = window
        view.superclass_ids = self._intern_class_hierarchy(class_name, superclass_names)
        if parent is not None:
            view.parent_id = parent.id
            parent.child_ids.append(view.id)
        window.views.append(view)

        for attribute, target in (("label_for", label_for),
                                  ("accessibility_traversal_before", traversal_before),
                                  ("accessibility_traversal_after", traversal_after)):
            if target is not None:
                target_id = target.condensed_unique_id if isinstance(target, UIElement) else target
                self._pending_relationships.append((view, attribute, target_id))
        return view

    def build(self) -> AccessibilityHierarchy:
        self._check_not_built()
        hierarchy = AccessibilityHierarchy(self.device_state, self.windows, self.class_name_table)
        self._built = True
        self._resolve_relationships(hierarchy)
        return hierarchy

    def _resolve_relationships(self, hierarchy: AccessibilityHierarchy) -> None:
        for view, attribute, target_id in self._pending_relationships:
            target = hierarchy.find_view(target_id)
            if target is None:
                self.logger.warning(
                    f"Dropping {attribute} of view {view.condensed_unique_id}: "
                    f"no view with condensed id {target_id}"
                )
                continue
            setattr(view, attribute, target)
            if attribute == "label_for":
                target.labeled_by = view
        self._pending_relationships = []

    def _intern_class_hierarchy(self, class_name: Optional[str],
                                superclass_names: Optional[List[str]]) -> FrozenSet[int]:
        if class_name is None:
            return frozenset()
        if superclass_names is None:
            superclass_names = KNOWN_SUPERCLASSES.get(class_name)
            if superclass_names is None:
                self.logger.debug(f"No known superclasses for {class_name}")
                superclass_names = [_VIEW]
        names = [class_name] + [name for name in superclass_names if name != class_name]
        return frozenset(self.class_name_table.intern(name) for name in names)

    def _check_not_built(self) -> None:
        if self._built:
            raise RuntimeError("HierarchyBuilder has already built its hierarchy")
